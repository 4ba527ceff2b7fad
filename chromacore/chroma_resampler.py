"""Average groups of consecutive chroma vectors."""

from __future__ import annotations

from typing import Sequence

from chromacore.chroma import NUM_BANDS, FeatureVectorConsumer


class ChromaResampler:
    """Emits the mean of every ``factor`` consecutive feature vectors."""

    def __init__(self, factor: int, consumer: FeatureVectorConsumer) -> None:
        if factor <= 0:
            raise ValueError("factor must be positive")
        self.factor = factor
        self.consumer = consumer
        self._sum = [0.0] * NUM_BANDS
        self._count = 0

    def reset(self) -> None:
        """Discard the partially accumulated group."""
        self._sum = [0.0] * NUM_BANDS
        self._count = 0

    def consume(self, features: Sequence[float]) -> None:
        """Accumulate one vector; emit the mean when a group is complete."""
        self._sum = [acc + features[band] for band, acc in enumerate(self._sum)]
        self._count += 1
        if self._count == self.factor:
            result = [acc / self.factor for acc in self._sum]
            self.reset()
            self.consumer.consume(result)