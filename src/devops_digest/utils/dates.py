"""Calendar helpers used when naming and dating a digest."""

import logging
from datetime import date, datetime, timedelta, timezone

logger = logging.getLogger(__name__)


def _today(today: date | None) -> date:
    return today if today is not None else date.today()


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _week_year(day: date) -> int:
    # Week 1 is the Monday-start week containing January 1st
    if day >= _week_start(date(day.year + 1, 1, 1)):
        return day.year + 1
    return day.year


def current_week(today: date | None = None) -> int:
    """Get the week number, counting the Monday-start week holding Jan 1 as week 1."""
    day = _today(today)
    first_week = _week_start(date(_week_year(day), 1, 1))
    return (_week_start(day) - first_week).days // 7 + 1


def current_year(today: date | None = None) -> int:
    """Get the year that the current week number belongs to.

    This is the calendar year except for the last days of December that
    already fall into week 1 of the following year.
    """
    return _week_year(_today(today))


def format_iso_date(value: date | None = None) -> str:
    """Format a date as YYYY-MM-DD, defaulting to today."""
    return _today(value).strftime("%Y-%m-%d")


def parse_date(value: str) -> datetime:
    """Parse an ISO 8601 timestamp or plain date into an aware datetime.

    Naive values are taken as UTC. Unparseable input falls back to the
    current time so a single bad timestamp does not sink the batch.
    """
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Invalid date string: {value}")
        return datetime.now(timezone.utc)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_display_date(value: datetime | str) -> str:
    """Format a timestamp for display, e.g. "Nov 16, 2025"."""
    moment = parse_date(value) if isinstance(value, str) else value
    return f"{moment:%b} {moment.day}, {moment.year}"


def is_within_last_days(
    value: datetime | str, days: int = 7, now: datetime | None = None
) -> bool:
    """Check whether a timestamp falls within the last ``days`` days."""
    moment = parse_date(value) if isinstance(value, str) else value
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)

    reference = now if now is not None else datetime.now(timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    return moment > reference - timedelta(days=days)
