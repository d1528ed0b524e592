"""타임스탬프 유틸리티.

Timestamp helpers. Services stamp created_at/updated_at explicitly
right before each persist instead of relying on ORM lifecycle hooks.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """현재 UTC 시각을 반환합니다 (Current timezone-aware UTC time)."""
    return datetime.now(timezone.utc)
