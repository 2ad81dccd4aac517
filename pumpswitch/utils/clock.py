"""Wall clock helpers: absolute time for run-time arithmetic, local time for display."""
from datetime import datetime, timezone

DISPLAY_FORMAT = '%Y-%m-%d %H:%M:%S'


def utc_now() -> datetime:
    """Current time as an aware UTC datetime, unaffected by DST changes."""
    return datetime.now(timezone.utc)


def format_local(moment: datetime) -> str:
    """Format an aware datetime in the host's local time zone."""
    return moment.astimezone().strftime(DISPLAY_FORMAT)
