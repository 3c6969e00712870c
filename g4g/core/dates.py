from datetime import date, datetime, timedelta, timezone
from typing import Tuple


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def today() -> date:
    return date.today()


def today_iso() -> str:
    return today().isoformat()


def week_window(start: date) -> Tuple[str, str]:
    """Inclusive 7-day window starting at start, as ISO strings"""
    return start.isoformat(), (start + timedelta(days=6)).isoformat()


def next_days_window(days: int = 7) -> Tuple[str, str]:
    """Today through today + days, as ISO strings"""
    start = today()
    return start.isoformat(), (start + timedelta(days=days)).isoformat()


def start_of_week(day: date) -> date:
    """Monday of the week containing day"""
    return day - timedelta(days=day.weekday())


def parse_timestamp(value) -> datetime:
    """Parse a Supabase timestamptz string; naive values are taken as UTC"""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
