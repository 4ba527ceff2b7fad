"""Polyphase windowed-sinc resampler for 16-bit integer audio."""

from __future__ import annotations

import math
import struct
from typing import List, Sequence, Tuple

FILTER_SHIFT = 15
FELEM_MIN = -32768
FELEM_MAX = 32767
WINDOW_TYPE = 9

_FLOAT_LIMIT = 2.0**62


def _c_div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _c_mod(a: int, b: int) -> int:
    """Remainder matching truncating division."""
    return a - b * _c_div(a, b)


def _clip(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _lrintf(value: float) -> int:
    """Round through single precision to the nearest integer, ties to even."""
    value = max(-_FLOAT_LIMIT, min(_FLOAT_LIMIT, value))
    single = struct.unpack("f", struct.pack("f", value))[0]
    return round(single)


def bessel(x: float) -> float:
    """Zeroth order modified Bessel function of the first kind."""
    value = 1.0
    last = 0.0
    term = 1.0
    x = x * x / 4
    i = 1
    while value != last:
        last = value
        term *= x / (i * i)
        value += term
        i += 1
    return value


def build_filter(
    factor: float,
    tap_count: int,
    phase_count: int,
    scale: int,
    window_type: int = WINDOW_TYPE,
) -> List[int]:
    """Build a polyphase filter bank of ``phase_count`` filters of ``tap_count`` taps.

    ``window_type`` 0 selects cubic interpolation, 1 a Blackman-Nuttall
    windowed sinc and any other value a Kaiser windowed sinc with that beta.
    Each filter's coefficients sum to about ``scale``.
    """
    if tap_count <= 0 or phase_count <= 0:
        raise ValueError("tap_count and phase_count must be positive")
    if factor <= 0:
        raise ValueError("factor must be positive")
    # Upsampling only needs interpolation, no low-pass.
    factor = min(factor, 1.0)
    center = (tap_count - 1) // 2
    bank: List[int] = []
    for phase in range(phase_count):
        taps = []
        for i in range(tap_count):
            offset = float(i - center) - phase / phase_count
            x = math.pi * offset * factor
            y = 1.0 if x == 0 else math.sin(x) / x
            if window_type == 0:
                d = -0.5
                x = abs(offset * factor)
                if x < 1.0:
                    y = 1 - 3 * x * x + 2 * x * x * x + d * (-x * x + x * x * x)
                else:
                    y = d * (-4 + 8 * x - 5 * x * x + x * x * x)
            elif window_type == 1:
                w = 2.0 * x / (factor * tap_count) + math.pi
                y *= (
                    0.3635819
                    - 0.4891775 * math.cos(w)
                    + 0.1365995 * math.cos(2 * w)
                    - 0.0106411 * math.cos(3 * w)
                )
            else:
                w = 2.0 * x / (factor * tap_count * math.pi)
                y *= bessel(window_type * math.sqrt(max(1 - w * w, 0)))
            taps.append(y)
        norm = sum(taps)
        bank.extend(
            _clip(_lrintf(tap * scale / norm), FELEM_MIN, FELEM_MAX) for tap in taps
        )
    return bank


class Resampler:
    """Stateful sample-rate converter for 16-bit signed samples."""

    def __init__(
        self,
        out_rate: int,
        in_rate: int,
        filter_size: int = 16,
        phase_shift: int = 8,
        linear: bool = False,
        cutoff: float = 0.8,
    ) -> None:
        if out_rate <= 0 or in_rate <= 0:
            raise ValueError("sample rates must be positive")
        if phase_shift < 0:
            raise ValueError("phase_shift must not be negative")
        factor = min(out_rate * cutoff / in_rate, 1.0)
        if factor <= 0:
            raise ValueError("cutoff must be positive")
        phase_count = 1 << phase_shift

        self.phase_shift = phase_shift
        self.phase_mask = phase_count - 1
        self.linear = bool(linear)
        self.filter_length = max(int(math.ceil(filter_size / factor)), 1)

        bank = build_filter(
            factor, self.filter_length, phase_count, 1 << FILTER_SHIFT, WINDOW_TYPE
        )
        # One extra phase so linear interpolation can read past the last filter.
        bank.append(bank[self.filter_length - 1])
        bank.extend(bank[: self.filter_length - 1])
        self.filter_bank = bank

        self.src_incr = out_rate
        self.ideal_dst_incr = in_rate * phase_count
        self.dst_incr = self.ideal_dst_incr
        self.index = -phase_count * ((self.filter_length - 1) // 2)
        self.frac = 0
        self.compensation_distance = 0

    def compensate(self, sample_delta: int, compensation_distance: int) -> None:
        """Stretch or squeeze the next ``compensation_distance`` outputs by ``sample_delta``."""
        if compensation_distance == 0:
            raise ValueError("compensation_distance must not be zero")
        self.compensation_distance = compensation_distance
        self.dst_incr = self.ideal_dst_incr - _c_div(
            self.ideal_dst_incr * sample_delta, compensation_distance
        )

    def resample(
        self, src: Sequence[int], dst_size: int, update_ctx: bool = True
    ) -> Tuple[List[int], int]:
        """Resample ``src`` into at most ``dst_size`` samples.

        Returns the produced samples and the number of input samples consumed.
        The resampler state advances only when ``update_ctx`` is true.
        """
        src_size = len(src)
        index = self.index
        frac = self.frac
        src_incr = self.src_incr
        dst_incr_frac = _c_mod(self.dst_incr, src_incr)
        dst_incr = _c_div(self.dst_incr, src_incr)
        compensation_distance = self.compensation_distance
        length = self.filter_length
        out: List[int] = []

        if compensation_distance == 0 and length == 1 and self.phase_shift == 0:
            position = index << 32
            incr = _c_div((1 << 32) * self.dst_incr, src_incr)
            limit = min(dst_size, _c_div((src_size - 1 - index) * src_incr, self.dst_incr))
            for _ in range(max(limit, 0)):
                out.append(src[position >> 32])
                position += incr
            produced = len(out)
            frac += produced * dst_incr_frac
            index += produced * dst_incr
            index += _c_div(frac, src_incr)
            frac = _c_mod(frac, src_incr)
        else:
            bank = self.filter_bank
            while len(out) < dst_size:
                dst_index = len(out)
                start = length * (index & self.phase_mask)
                taps = bank[start : start + length]
                sample_index = index >> self.phase_shift

                if sample_index < 0:
                    if not src:
                        break
                    val = sum(
                        src[abs(sample_index + i) % src_size] * tap
                        for i, tap in enumerate(taps)
                    )
                elif sample_index + length > src_size:
                    break
                else:
                    window = src[sample_index : sample_index + length]
                    val = sum(s * tap for s, tap in zip(window, taps))
                    if self.linear:
                        next_taps = bank[start + length : start + 2 * length]
                        v2 = sum(s * tap for s, tap in zip(window, next_taps))
                        val += _c_div((v2 - val) * frac, src_incr)

                val = (val + (1 << (FILTER_SHIFT - 1))) >> FILTER_SHIFT
                out.append(_clip(val, FELEM_MIN, FELEM_MAX))

                frac += dst_incr_frac
                index += dst_incr
                if frac >= src_incr:
                    frac -= src_incr
                    index += 1

                if dst_index + 1 == compensation_distance:
                    compensation_distance = 0
                    dst_incr_frac = _c_mod(self.ideal_dst_incr, src_incr)
                    dst_incr = _c_div(self.ideal_dst_incr, src_incr)

        produced = len(out)
        consumed = max(index, 0) >> self.phase_shift
        if index >= 0:
            index &= self.phase_mask
        if compensation_distance:
            compensation_distance -= produced

        if update_ctx:
            self.frac = frac
            self.index = index
            self.dst_incr = dst_incr_frac + src_incr * dst_incr
            self.compensation_distance = compensation_distance

        return out, consumed