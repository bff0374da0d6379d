from __future__ import annotations

from datetime import datetime
from typing import Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for JSON responses."""
    if value is None:
        return None
    return value.isoformat()
