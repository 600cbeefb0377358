from datetime import datetime, timezone


def utc_now_iso() -> str:
    """ISO 8601 UTC timestamp with millisecond precision, e.g. 2024-01-01T10:00:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
