from __future__ import annotations

import math
from datetime import datetime
from typing import Protocol

from domain.models import DocumentRecord
from domain.value_objects import Progress


class ProgressEstimator(Protocol):
    def estimate(self, record: DocumentRecord, now: datetime) -> Progress: ...


class ElapsedTimeProgress:
    """
    Simulated processing: progress grows linearly with wall-clock time since upload.
    Default rate is 20 points per minute, so a document completes after 5 minutes.
    """

    def __init__(self, rate_per_minute: float = 20.0):
        if rate_per_minute <= 0:
            raise ValueError("rate_per_minute must be positive")
        self.rate_per_minute = rate_per_minute

    def estimate(self, record: DocumentRecord, now: datetime) -> Progress:
        elapsed_min = (now - record.uploaded_at).total_seconds() / 60.0
        percent = min(math.floor(max(elapsed_min, 0.0) * self.rate_per_minute), 100)
        return Progress(percent=percent, completed=percent == 100)
