"""Downmix 16-bit audio to mono and convert it to a target sample rate."""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from chromacore.resample import Resampler

MIN_SAMPLE_RATE = 1000
MAX_BUFFER_SIZE = 1024 * 32

RESAMPLE_FILTER_LENGTH = 16
RESAMPLE_PHASE_SHIFT = 8
RESAMPLE_LINEAR = False
RESAMPLE_CUTOFF = 0.8


class AudioConsumer(Protocol):
    def consume(self, samples: List[int]) -> None:
        ...


def _trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


class AudioProcessor:
    """Buffers interleaved audio, mixes it to mono and resamples it.

    The processed mono samples are passed on in chunks to ``consumer``.
    """

    def __init__(self, sample_rate: int, consumer: AudioConsumer) -> None:
        self.target_sample_rate = sample_rate
        self.consumer = consumer
        self.num_channels: Optional[int] = None
        self._buffer: List[int] = []
        self._resampler: Optional[Resampler] = None

    def reset(self, sample_rate: int, num_channels: int) -> None:
        """Prepare for a new audio stream.

        Raises ValueError for a non-positive channel count or a sample rate
        not above the minimum.
        """
        if num_channels <= 0:
            raise ValueError("no audio channels")
        if sample_rate <= MIN_SAMPLE_RATE:
            raise ValueError(
                f"sample rate must be greater than {MIN_SAMPLE_RATE} ({sample_rate})"
            )
        self._buffer = []
        self._resampler = None
        if sample_rate != self.target_sample_rate:
            self._resampler = Resampler(
                self.target_sample_rate,
                sample_rate,
                RESAMPLE_FILTER_LENGTH,
                RESAMPLE_PHASE_SHIFT,
                RESAMPLE_LINEAR,
                RESAMPLE_CUTOFF,
            )
        self.num_channels = num_channels

    def _downmix(self, samples: Sequence[int]) -> List[int]:
        channels = self.num_channels
        if channels == 1:
            return [int(s) for s in samples]
        frames = zip(*[iter(samples)] * channels)
        return [_trunc_div(sum(frame), channels) for frame in frames]

    def _resample(self) -> None:
        if self._resampler is None:
            chunk, self._buffer = self._buffer, []
            self.consumer.consume(chunk)
            return
        out, consumed = self._resampler.resample(
            self._buffer, MAX_BUFFER_SIZE, True
        )
        self.consumer.consume(out[:MAX_BUFFER_SIZE])
        self._buffer = self._buffer[consumed:] if consumed < len(self._buffer) else []

    def consume(self, samples: Sequence[int]) -> None:
        """Process a chunk of interleaved samples from the audio stream."""
        if self.num_channels is None:
            raise RuntimeError("reset() must be called before consume()")
        channels = self.num_channels
        if len(samples) % channels:
            raise ValueError(
                f"sample count {len(samples)} is not a multiple of {channels} channels"
            )
        mono = self._downmix(samples)
        position = 0
        while position < len(mono):
            room = MAX_BUFFER_SIZE - len(self._buffer)
            self._buffer.extend(mono[position : position + room])
            position += room
            if len(self._buffer) == MAX_BUFFER_SIZE:
                self._resample()
                if len(self._buffer) == MAX_BUFFER_SIZE:
                    return

    def flush(self) -> None:
        """Process any buffered input and clear the buffer."""
        if self._buffer:
            self._resample()