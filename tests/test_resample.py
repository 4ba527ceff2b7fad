import pytest

from chromacore.resample import FELEM_MAX, FELEM_MIN, Resampler, bessel, build_filter


def test_bessel_at_zero_is_one():
    assert bessel(0.0) == 1.0


def test_bessel_is_even_and_increasing():
    assert bessel(2.5) == pytest.approx(bessel(-2.5))
    assert bessel(1.0) < bessel(2.0) < bessel(3.0)


@pytest.mark.parametrize("window_type", [0, 1, 9])
def test_build_filter_phase_sums_close_to_scale(window_type):
    tap_count, phase_count, scale = 24, 4, 1 << 15
    bank = build_filter(0.8, tap_count, phase_count, scale, window_type)
    assert len(bank) == tap_count * phase_count
    for phase in range(phase_count):
        taps = bank[phase * tap_count : (phase + 1) * tap_count]
        assert abs(sum(taps) - scale) <= tap_count
        assert all(FELEM_MIN <= tap <= FELEM_MAX for tap in taps)


def test_build_filter_upsampling_factor_is_capped():
    assert build_filter(2.0, 16, 2, 1 << 15) == build_filter(1.0, 16, 2, 1 << 15)


def test_build_filter_single_tap_is_clipped():
    assert build_filter(1.0, 1, 1, 1 << 15) == [FELEM_MAX]


def test_build_filter_rejects_bad_sizes():
    with pytest.raises(ValueError):
        build_filter(0.5, 0, 4, 1 << 15)


def test_filter_bank_has_extra_phase():
    r = Resampler(11025, 44100, 16, 8, False, 0.8)
    assert len(r.filter_bank) == r.filter_length * ((1 << 8) + 1)
    assert r.filter_bank[r.filter_length << 8] == r.filter_bank[r.filter_length - 1]


def test_identity_fast_path_copies_input():
    r = Resampler(8000, 8000, 1, 0, False, 1.0)
    src = [5, -7, 300, 42, 9]
    out, consumed = r.resample(src, 100)
    assert out == src[:-1]
    assert consumed == len(src) - 1


def test_decimation_fast_path_takes_every_other_sample():
    r = Resampler(4000, 8000, 1, 0, False, 2.0)
    src = list(range(100, 110))
    out, consumed = r.resample(src, 100)
    assert out == src[0:8:2]
    assert consumed == 8


def test_constant_signal_stays_constant():
    r = Resampler(11025, 44100, 16, 8, False, 0.8)
    src = [1000] * 4000
    out, consumed = r.resample(src, 32768)
    assert out
    assert all(abs(sample - 1000) <= 5 for sample in out)
    assert abs(len(out) - len(src) // 4) <= r.filter_length
    assert 0 < consumed <= len(src)


def test_output_is_clipped_to_int16():
    r = Resampler(11025, 44100, 16, 8, False, 0.8)
    src = [FELEM_MAX, FELEM_MIN] * 2000
    out, _ = r.resample(src, 32768)
    assert all(FELEM_MIN <= sample <= FELEM_MAX for sample in out)


def test_dst_size_limits_output():
    r = Resampler(11025, 44100, 16, 8, False, 0.8)
    out, _ = r.resample([0] * 4000, 10)
    assert len(out) == 10


def test_without_update_state_is_kept():
    r = Resampler(11025, 22050, 16, 8, True, 0.8)
    src = [(i * 37) % 2000 - 1000 for i in range(3000)]
    before = (r.index, r.frac, r.dst_incr)
    first = r.resample(src, 32768, update_ctx=False)
    second = r.resample(src, 32768, update_ctx=False)
    assert first == second
    assert (r.index, r.frac, r.dst_incr) == before


def test_update_moves_index_into_phase_range():
    r = Resampler(11025, 44100, 16, 8, False, 0.8)
    r.resample([0] * 4000, 32768)
    assert 0 <= r.index <= r.phase_mask


def test_compensation_is_undone_after_distance():
    r = Resampler(8000, 8000, 16, 8, False, 0.8)
    r.compensate(100, 1000)
    assert r.dst_incr < r.ideal_dst_incr
    out, _ = r.resample([0] * 2000, 1500)
    assert len(out) > 1000
    assert r.dst_incr == r.ideal_dst_incr
    assert r.compensation_distance == 0


def test_compensate_rejects_zero_distance():
    r = Resampler(8000, 8000)
    with pytest.raises(ValueError):
        r.compensate(10, 0)


@pytest.mark.parametrize("out_rate,in_rate", [(0, 8000), (8000, 0), (-1, 8000)])
def test_invalid_rates_raise(out_rate, in_rate):
    with pytest.raises(ValueError):
        Resampler(out_rate, in_rate)