"""Time helpers. Everything persisted is a naive datetime in UTC."""

from datetime import date, datetime, time, timezone
from typing import Optional

TIME_FORMATS = ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I:%M%p", "%I %p")


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    return utcnow() if now is None else to_naive_utc(now)


def parse_date(value: str) -> date:
    """Accept ``YYYY-MM-DD`` or a full ISO 8601 datetime; only the date part is kept."""
    raw = (value or "").strip()
    if not raw:
        raise ValueError("date is required")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValueError(f"Invalid date '{value}'. Use ISO 8601 (e.g. '2026-02-20')")
    return to_naive_utc(parsed).date()


def parse_time(value: str) -> time:
    raw = " ".join((value or "").strip().upper().split())
    if not raw:
        raise ValueError("time is required")
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(raw, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time '{value}'. Use HH:MM or H:MM AM/PM")


def combine_schedule(date_value: str, time_value: str) -> datetime:
    """Combine separate date and time inputs into a single ``scheduled_at``."""
    return datetime.combine(parse_date(date_value), parse_time(time_value)).replace(microsecond=0)
