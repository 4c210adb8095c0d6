"""Grouping, counting and summary statistics over doctor records."""
import calendar
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

import pytz
from dateutil import parser as date_parser

from careforme.models.analytics import DirectorySummary, GroupCount, MonthlyCount
from careforme.models.doctor import DoctorRecord, UNSPECIFIED

GROUP_KEYS = ("specialty", "city")

STATUS_LABELS = ("Active", "Unavailable", "Suspended")


def _group_key(record: DoctorRecord, key: str) -> str:
    value = getattr(record, key)
    return value if isinstance(value, str) and value.strip() else UNSPECIFIED


def group_counts(records: Iterable[DoctorRecord], key: str) -> List[GroupCount]:
    """Count records per value of ``key``.

    Groups are ordered by count descending; groups with equal counts keep
    the order in which they were first seen.
    """
    if key not in GROUP_KEYS:
        raise ValueError(f"Unsupported group key: {key}")

    counts: Dict[str, int] = {}
    for record in records:
        name = _group_key(record, key)
        counts[name] = counts.get(name, 0) + 1

    # sorted() is stable and dicts keep insertion order
    ordered = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [GroupCount(name=name, count=count) for name, count in ordered]


def top_groups(records: Iterable[DoctorRecord], key: str, limit: int = 5) -> List[GroupCount]:
    """The ``limit`` largest groups for ``key``."""
    return group_counts(records, key)[:limit]


def distinct_values(records: Iterable[DoctorRecord], key: str) -> List[str]:
    """Unique non-empty values of ``key`` in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        value = getattr(record, key)
        if value:
            seen.setdefault(value, None)
    return list(seen)


def average_rating(records: Sequence[DoctorRecord]) -> Optional[float]:
    """Mean rating, or None for an empty list."""
    if not records:
        return None
    return sum(record.rating for record in records) / len(records)


def top_rated(records: Iterable[DoctorRecord]) -> Optional[DoctorRecord]:
    """Record with the highest rating; the first one wins a tie."""
    best: Optional[DoctorRecord] = None
    for record in records:
        if best is None or record.rating > best.rating:
            best = record
    return best


def status_breakdown(records: Iterable[DoctorRecord]) -> List[GroupCount]:
    """Active / Unavailable / Suspended counts, always in that order."""
    counts = dict.fromkeys(STATUS_LABELS, 0)
    for record in records:
        if record.suspended:
            counts["Suspended"] += 1
        elif record.is_available:
            counts["Active"] += 1
        else:
            counts["Unavailable"] += 1
    return [GroupCount(name=label, count=counts[label]) for label in STATUS_LABELS]


def summarize(records: Sequence[DoctorRecord]) -> DirectorySummary:
    """Summary statistics over a full doctor list."""
    records = list(records)
    statuses = {item.name: item.count for item in status_breakdown(records)}

    return DirectorySummary(
        total=len(records),
        active=statuses["Active"],
        unavailable=statuses["Unavailable"],
        suspended=statuses["Suspended"],
        average_rating=average_rating(records),
        total_reviews=sum(record.review_count for record in records),
        specialty_count=len({_group_key(record, "specialty") for record in records}),
        city_count=len({_group_key(record, "city") for record in records}),
        top_rated=top_rated(records),
    )


def _parse_created_at(value: str, tz) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz)
    return parsed


def monthly_registrations(
    records: Iterable[DoctorRecord],
    year: Optional[int] = None,
    tz: Optional[str] = None
) -> List[MonthlyCount]:
    """Registrations per calendar month of ``year``.

    Args:
        records: Doctor records; those without a parsable ``created_at`` are
            skipped.
        year: Calendar year to report; defaults to the current year in ``tz``.
        tz: pytz timezone name used for "current year" and for converting
            timezone-aware timestamps. Defaults to UTC.

    Returns:
        Twelve MonthlyCount entries, January first, zero-filled.
    """
    zone = pytz.timezone(tz) if tz else pytz.UTC
    if year is None:
        year = datetime.now(zone).year

    counts = [0] * 12
    for record in records:
        created = _parse_created_at(record.created_at, zone)
        if created is not None and created.year == year:
            counts[created.month - 1] += 1

    return [
        MonthlyCount(month=calendar.month_abbr[index + 1], count=count)
        for index, count in enumerate(counts)
    ]
