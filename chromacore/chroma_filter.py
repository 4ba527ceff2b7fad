"""FIR filtering of chroma feature vectors over time."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Sequence

from chromacore.chroma import NUM_BANDS, FeatureVectorConsumer

MAX_LENGTH = 8


class ChromaFilter:
    """Convolves consecutive feature vectors with a list of coefficients.

    A result is produced once as many vectors have arrived as there are
    coefficients; the oldest vector is weighted by the first coefficient.
    """

    def __init__(
        self, coefficients: Sequence[float], consumer: FeatureVectorConsumer
    ) -> None:
        if not 1 <= len(coefficients) <= MAX_LENGTH:
            raise ValueError(f"between 1 and {MAX_LENGTH} coefficients are required")
        self.coefficients = list(coefficients)
        self.consumer = consumer
        self._history: Deque[List[float]] = deque(maxlen=len(self.coefficients))

    def reset(self) -> None:
        """Forget all buffered vectors."""
        self._history.clear()

    def consume(self, features: Sequence[float]) -> None:
        """Add one feature vector and emit a filtered vector when possible."""
        self._history.append(list(features))
        if len(self._history) < len(self.coefficients):
            return
        result = [
            sum(row[band] * c for row, c in zip(self._history, self.coefficients))
            for band in range(NUM_BANDS)
        ]
        self.consumer.consume(result)