"""Refill date inference from medication durations"""
import re
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional

DURATION_PATTERN = re.compile(r"([0-9]+)\s*(day|week|month)s?")

# Months are a fixed 30 days, not calendar months
UNIT_DAYS = {
    "day": 1,
    "week": 7,
    "month": 30,
}

# Unambiguous formats accepted before the day-first fallback
STANDARD_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%Y.%m.%d",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d-%b-%Y",
    "%d-%B-%Y",
)

DATE_SEPARATORS = re.compile(r"[/\-.]")
DAY_OR_MONTH = re.compile(r"[0-9]{1,2}")
FOUR_DIGIT_YEAR = re.compile(r"[0-9]{4}")


def _duration_text(medication: Any) -> str:
    if isinstance(medication, dict):
        value = medication.get("duration")
    else:
        value = getattr(medication, "duration", None)
    return value if isinstance(value, str) else ""


def duration_to_days(duration: str) -> int:
    """Day count for a duration like '5 days' or '2 weeks', 0 if unrecognised"""
    if not isinstance(duration, str):
        return 0
    match = DURATION_PATTERN.search(duration.lower())
    if not match:
        return 0
    try:
        count = int(match.group(1))
    except ValueError:
        # digit strings beyond the interpreter's int conversion limit
        return 0
    return count * UNIT_DAYS[match.group(2)]


def longest_course_days(medications: Optional[Iterable[Any]]) -> int:
    """Longest duration in days across medications, 0 if none is recognised"""
    if not medications:
        return 0
    return max((duration_to_days(_duration_text(med)) for med in medications), default=0)


def _parse_standard_date(text: str) -> Optional[date]:
    # ISO strings may carry a time part ('2024-03-10T08:00', '2024-03-10 08:00:00')
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass

    for fmt in STANDARD_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_prescription_date(prescription_date: str) -> Optional[date]:
    """
    Parse a loosely formatted prescription date

    Standard ISO and textual-month forms are tried first. Anything else that
    splits into three parts on '/', '-' or '.' is read as DAY/MONTH/YEAR,
    the usual order on Indian prescriptions. US-style MONTH/DAY/YEAR input
    is therefore misread or rejected.

    Args:
        prescription_date: Date as written on the prescription

    Returns:
        Parsed date, or None if the string cannot be interpreted
    """
    if not isinstance(prescription_date, str):
        return None
    text = prescription_date.strip()
    if not text:
        return None

    # strptime accepts any Unicode digit; only ASCII dates are recognised
    if any(ch.isdigit() and not ch.isascii() for ch in text):
        return None

    parsed = _parse_standard_date(text)
    if parsed:
        return parsed

    parts = [part.strip() for part in DATE_SEPARATORS.split(text)]
    if len(parts) != 3:
        return None
    day, month, year = parts
    if not (DAY_OR_MONTH.fullmatch(day) and DAY_OR_MONTH.fullmatch(month) and FOUR_DIGIT_YEAR.fullmatch(year)):
        return None
    try:
        return datetime.strptime(f"{year}-{month}-{day}", "%Y-%m-%d").date()
    except ValueError:
        return None


def resolve_refill_date(prescription_date: str, medications: Optional[Iterable[Any]]) -> Optional[str]:
    """
    Compute the refill due date for a whole prescription

    The longest course among the medications decides the date, which is set
    one day before that course runs out.

    Args:
        prescription_date: Prescription date as written
        medications: Medication models or mappings with a 'duration' key

    Returns:
        Refill date as YYYY-MM-DD, or None when no duration or date resolves
    """
    max_days = longest_course_days(medications)
    if max_days <= 0:
        return None

    start = parse_prescription_date(prescription_date)
    if start is None:
        return None

    try:
        refill = start + timedelta(days=max_days - 1)
    except OverflowError:
        return None
    return refill.isoformat()
