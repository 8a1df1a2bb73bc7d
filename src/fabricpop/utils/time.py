from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Get current UTC time in ISO format."""
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def short_date(iso: str) -> str:
    """Render an ISO timestamp as M/D/YYYY."""
    dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
    return f"{dt.month}/{dt.day}/{dt.year}"
