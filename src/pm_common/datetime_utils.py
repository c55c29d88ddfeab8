"""UTC datetime utilities."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Timezone-aware UTC now; pool ``created_at`` and response timestamps use it."""
    return datetime.now(UTC)
