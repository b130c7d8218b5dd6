import re
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^(?:UTC|GMT)?([+-])(\d{1,2})(?::?(\d{2}))?$")

DATE_FORMAT = "%m/%d/%Y"
TIME_FORMAT = "%I:%M:%S %p"


def resolve_timezone(name):
    """
    Accept an IANA zone name ("Asia/Dubai") or a fixed offset
    ("UTC+4", "+05:30").
    """
    if not name or name.upper() in ("UTC", "GMT", "Z"):
        return timezone.utc

    match = _OFFSET_RE.match(name.strip().upper())
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes or 0))
        return timezone(-delta if sign == "-" else delta)

    return ZoneInfo(name)


def utc_now():
    return datetime.now(timezone.utc)


def format_display(instant, tz):
    """Return the (date, time) display strings of `instant` in `tz`."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    local = instant.astimezone(tz)
    return local.strftime(DATE_FORMAT), local.strftime(TIME_FORMAT)
