from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Timezone-aware 'now'; the default clock for every component."""
    return datetime.now(timezone.utc)
