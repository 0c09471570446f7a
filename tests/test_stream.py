import numpy as np
import pytest

from hearpro.stream import SegmentFeeder, dac_chunk_size


def test_dac_chunk_size_default_rate():
    assert dac_chunk_size(24000) == 3840


def test_dac_chunk_size_scales_with_wait():
    assert dac_chunk_size(24000, 20) * 2 == dac_chunk_size(24000, 40)


def test_dac_chunk_size_rejects_bad_rate():
    with pytest.raises(ValueError):
        dac_chunk_size(0)


def _identity(chunk):
    return chunk


def test_first_fill_wraps_around_input():
    iwav = np.arange(10, dtype=np.float32)
    feeder = SegmentFeeder(iwav, cs=4, nrep=3)
    out = feeder.fill(0, _identity)
    assert out.tolist() == [8.0, 9.0, 0.0, 1.0]


def test_outputs_follow_looped_input():
    iwav = np.arange(1, 11, dtype=np.float32)
    cs, nrep, mseg = 4, 3, 2
    feeder = SegmentFeeder(iwav, cs=cs, nrep=nrep, mseg=mseg)
    expected = np.concatenate((np.tile(iwav, nrep), np.zeros(4 * cs, dtype=np.float32)))
    for oseg in range(feeder.nseg):
        out = feeder.fill(oseg, _identity)
        start = (oseg + mseg) * cs
        np.testing.assert_array_equal(out, expected[start : start + cs])


def test_fill_waits_for_matching_segment():
    feeder = SegmentFeeder(np.ones(16), cs=4)
    assert feeder.fill(1, _identity) is None
    assert feeder.pseg == feeder.mseg


def test_processor_result_goes_into_buffer():
    feeder = SegmentFeeder(np.ones(16), cs=4)
    out = feeder.fill(0, lambda c: c * 2)
    np.testing.assert_array_equal(out, np.full(4, 2.0, dtype=np.float32))
    ow = (feeder.mseg % feeder.mseg) * feeder.cs
    np.testing.assert_array_equal(feeder.buffer[ow : ow + 4], out)
    assert feeder.pseg == feeder.mseg + 1


def test_past_end_gives_silence():
    feeder = SegmentFeeder(np.ones(4), cs=4, nrep=1)
    out = feeder.fill(0, _identity)
    assert not out.any()


def test_nseg_covers_input():
    feeder = SegmentFeeder(np.ones(10), cs=4, nrep=3)
    assert feeder.nseg * feeder.cs <= feeder.total < (feeder.nseg + 1) * feeder.cs
    assert feeder.active(feeder.nseg - 1)
    assert not feeder.active(feeder.nseg)


def test_wrong_output_length_raises():
    feeder = SegmentFeeder(np.ones(16), cs=4)
    with pytest.raises(ValueError):
        feeder.fill(0, lambda c: c[:2])


def test_empty_input_raises():
    with pytest.raises(ValueError):
        SegmentFeeder([], cs=4)


def test_bad_segment_size_raises():
    with pytest.raises(ValueError):
        SegmentFeeder(np.ones(8), cs=0)