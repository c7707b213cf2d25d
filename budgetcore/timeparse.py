from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%b %d %Y at %H:%M"  # e.g. "Oct 05 2025 at 12:30"


def now() -> datetime:
    return datetime.now().replace(second=0, microsecond=0)


def format_timestamp(ts: datetime) -> str:
    return ts.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: Optional[str]) -> Optional[datetime]:
    if text is None or not text.strip():
        return None
    try:
        return datetime.strptime(" ".join(text.split()), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def parse_or_default(text: Optional[str]) -> datetime:
    """Parse ``text`` or fall back to the current time (minute precision)."""
    parsed = parse_timestamp(text)
    return parsed if parsed is not None else now()
