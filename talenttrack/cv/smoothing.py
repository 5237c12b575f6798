"""
Moving-average smoothing for per-frame scalar channels.

The pose model jitters frame to frame. The detectors only care about a
channel crossing a threshold, so a short arithmetic mean over the last N
samples is enough: it removes single-frame spikes and lags by at most a
few frames.

Window sizes per channel:
- elbow angle (push-up, pull-up): 3
- elbow angle (sit-up), hip height, shuttle x, reach distance: 5
"""

from collections import deque
from typing import Deque, Optional

import numpy as np


class MovingAverage:
    """
    Fixed-capacity FIFO buffer returning the mean of its contents.

    When not yet full, the mean covers only the samples present (no zero
    padding).
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._buffer: Deque[float] = deque(maxlen=capacity)

    def push(self, value: float) -> float:
        """Add a raw sample, evicting the oldest if full, and return the new mean."""
        self._buffer.append(float(value))
        return self.mean

    @property
    def mean(self) -> Optional[float]:
        if not self._buffer:
            return None
        return float(np.mean(self._buffer))

    @property
    def is_full(self) -> bool:
        return len(self._buffer) == self.capacity

    def values(self):
        """Buffer contents, oldest first."""
        return list(self._buffer)

    def reset(self):
        self._buffer.clear()

    def __len__(self) -> int:
        return len(self._buffer)
