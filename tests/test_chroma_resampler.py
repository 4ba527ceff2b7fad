import pytest

from chromacore.chroma_resampler import ChromaResampler


class Collector:
    def __init__(self):
        self.rows = []

    def consume(self, features):
        self.rows.append(list(features))


def frame(value):
    return [float(value)] * 12


def test_factor_one_passes_through():
    sink = Collector()
    r = ChromaResampler(1, sink)
    r.consume(frame(4))
    r.consume(frame(7))
    assert sink.rows == [frame(4), frame(7)]


def test_mean_of_group():
    sink = Collector()
    r = ChromaResampler(2, sink)
    r.consume(frame(2))
    assert sink.rows == []
    r.consume(frame(4))
    assert sink.rows == [frame(3)]


def test_identical_frames_keep_value():
    sink = Collector()
    r = ChromaResampler(3, sink)
    values = [float(band) for band in range(12)]
    for _ in range(6):
        r.consume(values)
    assert len(sink.rows) == 2
    for row in sink.rows:
        assert row == pytest.approx(values)


def test_number_of_outputs():
    sink = Collector()
    r = ChromaResampler(3, sink)
    for v in range(10):
        r.consume(frame(v))
    assert len(sink.rows) == 10 // 3


def test_reset_discards_partial_group():
    sink = Collector()
    r = ChromaResampler(2, sink)
    r.consume(frame(100))
    r.reset()
    r.consume(frame(5))
    r.consume(frame(5))
    assert sink.rows == [frame(5)]


def test_invalid_factor():
    with pytest.raises(ValueError):
        ChromaResampler(0, Collector())