from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601, second precision (sorts lexically)."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")
