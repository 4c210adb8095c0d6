"""Turn raw store documents into fully populated doctor records.

Every "missing field -> default value" decision lives here. Two entry points
are exposed so storage defaults and UI placeholders never get mixed up:

* ``normalize_record`` applies storage defaults only.
* ``display_normalize`` applies storage defaults and then placeholder text
  for empty fields, for read-only views.

Both are total: any input produces a value for every field.
"""
import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from careforme.models.doctor import (
    DoctorRecord, FIELD_MAP, NUMERIC_FIELDS, TEXT_FIELDS, WEEKDAYS
)

PLACEHOLDER = "N/A"

_DISPLAY_TEXT_FIELDS = ("name", "specialty", "city", "address", "email", "phone", "bio")


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _to_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


def _to_count(value: Any) -> int:
    number = _to_float(value, default=0.0)
    return int(number) if number > 0 else 0


def _to_bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _to_weekdays(value: Any) -> List[str]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        return []
    wanted = {day for day in value if isinstance(day, str)}
    return [day for day in WEEKDAYS if day in wanted]


def _to_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return ""


def normalize_record(raw: Any, doc_id: Optional[str] = None) -> DoctorRecord:
    """Apply storage defaults to a raw document.

    Args:
        raw: Mapping of stored field name to value. Anything that is not a
            mapping is treated as an empty document.
        doc_id: Store-assigned document id; wins over an ``id`` key in ``raw``.

    Returns:
        A DoctorRecord with every field populated.
    """
    data: Mapping = raw if isinstance(raw, Mapping) else {}

    values: Dict[str, Any] = {}
    for store_key in TEXT_FIELDS:
        values[FIELD_MAP[store_key]] = _to_text(data.get(store_key))
    for store_key in NUMERIC_FIELDS:
        values[FIELD_MAP[store_key]] = _to_float(data.get(store_key))

    record_id = doc_id if doc_id is not None else data.get("id")

    return DoctorRecord(
        id=_to_text(record_id) or None,
        review_count=_to_count(data.get("reviewCount")),
        available_days=_to_weekdays(data.get("availableDays")),
        is_available=_to_bool(data.get("isAvailable"), True),
        suspended=_to_bool(data.get("suspended"), False),
        created_at=_to_timestamp(data.get("createdAt")),
        **values
    )


def format_member_since(created_at: str) -> Optional[str]:
    """Render a creation timestamp as "March 5, 2026", or None if unparsable."""
    if not created_at:
        return None
    try:
        parsed = date_parser.isoparse(created_at)
    except (ValueError, OverflowError):
        return None
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def display_normalize(
    raw: Union[DoctorRecord, Mapping, None],
    placeholder: str = PLACEHOLDER
) -> Dict[str, Any]:
    """Normalize for read-only display: defaults plus placeholder strings."""
    record = raw if isinstance(raw, DoctorRecord) else normalize_record(raw)

    data = record.to_api_dict()
    for store_key in _DISPLAY_TEXT_FIELDS:
        if not data[store_key].strip():
            data[store_key] = placeholder

    data["rating"] = round(record.rating, 1)
    data["memberSince"] = format_member_since(record.created_at) or placeholder
    return data
