"""Date helpers for KOPIS date text and Korean calendar days."""

from datetime import date, datetime, timedelta, timezone

from playscout.models.show import LifecycleState


def today_at_offset(offset_hours: int = 9) -> date:
    """Return the current calendar date at a fixed UTC offset (KST by default)."""
    return datetime.now(timezone(timedelta(hours=offset_hours))).date()


def parse_kopis_date(text: str) -> date:
    """
    Parse a KOPIS date such as ``"2024.06.01"``.

    Raises:
        ValueError: If the text is not a dotted YYYY.MM.DD date
    """
    return datetime.strptime(text.strip(), "%Y.%m.%d").date()


def format_compact(day: date) -> str:
    """Format a date as ``YYYYMMDD`` for KOPIS query parameters."""
    return day.strftime("%Y%m%d")


def lifecycle_state_for(start_date: date, end_date: date, today: date) -> LifecycleState:
    """
    Derive a show's lifecycle state from its run dates.

    Both dates are inclusive calendar days.
    """
    if end_date < today:
        return LifecycleState.FINISHED
    if start_date <= today:
        return LifecycleState.RUNNING
    return LifecycleState.UPCOMING
