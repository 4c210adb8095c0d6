"""CSV export of doctor records for the reports view."""
from collections.abc import Mapping
from typing import Any, Iterable, List, Sequence, Union

from careforme.models.doctor import DoctorRecord

CSV_COLUMNS: Sequence[str] = (
    "Name",
    "Specialty",
    "City",
    "Rating",
    "Reviews",
    "Available",
    "Suspended",
)

EXPORT_FILENAME = "doctors_report.csv"
EXPORT_MIMETYPE = "text/csv"

MISSING = "N/A"


def _quote(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _rating(value: Any) -> str:
    return f"{value:.1f}" if _is_number(value) else MISSING


def _reviews(value: Any) -> str:
    return str(int(value)) if _is_number(value) else MISSING


def _yes_no(value: Any) -> str:
    return "Yes" if value else "No"


def _flag(value: Any, default: bool) -> bool:
    # Same defaults as normalize_record: only real booleans count
    return value if isinstance(value, bool) else default


def _row(record: Union[DoctorRecord, Mapping]) -> List[str]:
    if isinstance(record, Mapping):
        return [
            _quote(record.get("name")),
            _quote(record.get("specialty")),
            _quote(record.get("city")),
            _rating(record.get("rating")),
            _reviews(record.get("reviewCount")),
            _yes_no(_flag(record.get("isAvailable"), True)),
            _yes_no(_flag(record.get("suspended"), False)),
        ]
    return [
        _quote(record.name),
        _quote(record.specialty),
        _quote(record.city),
        _rating(record.rating),
        _reviews(record.review_count),
        _yes_no(record.is_available),
        _yes_no(record.suspended),
    ]


def serialize_doctors(records: Iterable[Union[DoctorRecord, Mapping]]) -> str:
    """Serialize records to CSV text.

    Text columns are always double-quoted with embedded quotes doubled; the
    header comes first and rows are joined with ``\\n`` (no trailing newline).
    """
    lines = [",".join(CSV_COLUMNS)]
    lines.extend(",".join(_row(record)) for record in records)
    return "\n".join(lines)
