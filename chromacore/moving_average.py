"""Integer moving average over a fixed window."""

from __future__ import annotations

from collections import deque
from typing import Deque


class MovingAverage:
    """Average of the most recent ``size`` integer values."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError("size must be positive")
        self.size = size
        self._values: Deque[int] = deque(maxlen=size)
        self._sum = 0

    def add_value(self, x: int) -> None:
        """Add a value, dropping the oldest one once the window is full."""
        if len(self._values) == self.size:
            self._sum -= self._values[0]
        self._values.append(int(x))
        self._sum += int(x)

    def average(self) -> int:
        """Return the average, truncated toward zero; 0 when empty."""
        count = len(self._values)
        if not count:
            return 0
        quotient = abs(self._sum) // count
        return quotient if self._sum >= 0 else -quotient