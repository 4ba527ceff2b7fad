"""Fold spectral frames into 12-band chroma feature vectors."""

from __future__ import annotations

import math
from typing import List, Protocol, Sequence, Tuple

NUM_BANDS = 12


class FeatureVectorConsumer(Protocol):
    def consume(self, features: List[float]) -> None:
        ...


def _freq_to_octave(freq: float, base: float = 440.0 / 16.0) -> float:
    return math.log(freq / base) / math.log(2.0)


def _freq_to_index(freq: float, frame_size: int, sample_rate: int) -> int:
    return int(math.floor(frame_size * freq / sample_rate + 0.5))


def _index_to_freq(index: int, frame_size: int, sample_rate: int) -> float:
    return float(index) * sample_rate / frame_size


class Chroma:
    """Maps FFT magnitude bins to musical pitch classes."""

    def __init__(
        self,
        min_freq: int,
        max_freq: int,
        frame_size: int,
        sample_rate: int,
        consumer: FeatureVectorConsumer,
    ) -> None:
        self.interpolate = False
        self.consumer = consumer
        self.min_index = max(1, _freq_to_index(min_freq, frame_size, sample_rate))
        self.max_index = min(
            frame_size // 2, _freq_to_index(max_freq, frame_size, sample_rate)
        )
        self._bins: List[Tuple[int, int, float]] = []
        for i in range(self.min_index, self.max_index):
            octave = _freq_to_octave(_index_to_freq(i, frame_size, sample_rate))
            note = NUM_BANDS * (octave - math.floor(octave))
            band = int(note)
            self._bins.append((i, band, note - band))
        self.features: List[float] = [0.0] * NUM_BANDS

    def reset(self) -> None:
        """Clear the most recently computed feature vector."""
        self.features = [0.0] * NUM_BANDS

    def consume(self, frame: Sequence[float]) -> None:
        """Compute the chroma vector of one frame and pass it to the consumer."""
        features = [0.0] * NUM_BANDS
        for i, note, frac in self._bins:
            energy = frame[i]
            if self.interpolate:
                note2 = note
                weight = 1.0
                if frac < 0.5:
                    note2 = (note + NUM_BANDS - 1) % NUM_BANDS
                    weight = 0.5 + frac
                if frac > 0.5:
                    note2 = (note + 1) % NUM_BANDS
                    weight = 1.5 - frac
                features[note] += energy * weight
                features[note2] += energy * (1.0 - weight)
            else:
                features[note] += energy
        self.features = features
        self.consumer.consume(list(features))