"""Pure calendar date arithmetic - no I/O dependencies.

Days are handled as ISO ``YYYY-MM-DD`` strings. Conversion always goes
through year/month/day components, never timestamps, so there is no
time-of-day or timezone to shift a date across midnight.
"""

from datetime import date, timedelta

UNSCHEDULED_LABEL = "Anytime"


def to_iso_date(value: date) -> str:
    """Format a calendar date as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def from_iso_date(iso: str) -> date:
    """
    Parse a ``YYYY-MM-DD`` string into a date.

    Raises ValueError if the string is not a valid calendar date.
    """
    parts = iso.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Not an ISO date: {iso!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)


def add_days(iso: str, amount: int) -> str:
    """Shift an ISO date by ``amount`` calendar days (may be negative)."""
    return to_iso_date(from_iso_date(iso) + timedelta(days=amount))


def start_of_week(iso: str) -> str:
    """Monday of the week containing ``iso``."""
    d = from_iso_date(iso)
    return to_iso_date(d - timedelta(days=d.weekday()))


def get_week_days(week_start: str) -> list[str]:
    """The seven consecutive days starting at ``week_start``."""
    return [add_days(week_start, offset) for offset in range(7)]


def is_within_week(iso: str, week_start: str) -> bool:
    """Check if ``iso`` falls in ``[week_start, week_start + 6]``."""
    # ISO strings of equal width compare in calendar order
    return week_start <= iso <= add_days(week_start, 6)


def _to_int(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def minutes_from_time(value: str) -> int:
    """
    Minutes since midnight for an ``HH:MM`` string.

    Missing or malformed components count as 0.
    """
    parts = (value or "").split(":")
    hours = _to_int(parts[0])
    minutes = _to_int(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def format_time(value: str) -> str:
    """Format an ``HH:MM`` string for display, e.g. ``9:05 AM``."""
    if not value:
        return UNSCHEDULED_LABEL
    hours, minutes = divmod(minutes_from_time(value) % (24 * 60), 60)
    suffix = "AM" if hours < 12 else "PM"
    return f"{hours % 12 or 12}:{minutes:02d} {suffix}"
