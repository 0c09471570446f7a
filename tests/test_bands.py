import math

import numpy as np
import pytest

from hearpro import bands


def test_fir_cross_frequencies_start_and_order():
    cf = bands.fir_cross_frequencies(24000)
    assert cf[0] == pytest.approx(250.0)
    assert all(a < b for a, b in zip(cf, cf[1:]))
    assert cf[-1] < 24000 / 2


def test_fir_cross_frequencies_octave_spacing_above_1k():
    cf = bands.fir_cross_frequencies(24000)
    upper = [f for f in cf if f > 1000]
    ratios = [b / a for a, b in zip(upper, upper[1:])]
    assert ratios
    for r in ratios:
        assert r == pytest.approx(2 ** (1 / 3))
    assert len(cf) == 5 + len(upper)


def test_fir_cross_frequencies_more_bands_at_higher_rate():
    assert len(bands.fir_cross_frequencies(48000)) > len(
        bands.fir_cross_frequencies(24000)
    )


def test_fir_cross_frequencies_rejects_bad_rate():
    with pytest.raises(ValueError):
        bands.fir_cross_frequencies(0)


def test_gammatone_bands_layout():
    gb = bands.gammatone_bands(24000, 5, 3)
    assert gb.nc == len(gb.bw)
    assert gb.fc[4] == pytest.approx(1000.0)
    assert gb.target_delay == pytest.approx(2.0)
    for f, b in zip(gb.fc[:4], gb.bw[:4]):
        assert b == pytest.approx(gb.fc[0])
        assert f % gb.fc[0] == pytest.approx(0.0)
    assert all(a < b for a, b in zip(gb.fc, gb.fc[1:]))
    assert gb.fc[-1] < 12000


def test_gammatone_upper_bands_are_geometric():
    cpo = 3
    gb = bands.gammatone_bands(24000, 5, cpo)
    upper_fc = gb.fc[5:]
    upper_bw = gb.bw[5:]
    assert upper_fc
    for f, b in zip(upper_fc, upper_bw):
        assert b / f == pytest.approx(2 ** (0.5 / cpo) - 2 ** (-0.5 / cpo))


def test_gammatone_bands_rejects_bad_parameters():
    with pytest.raises(ValueError):
        bands.gammatone_bands(24000, 0, 3)
    with pytest.raises(ValueError):
        bands.gammatone_bands(24000, 5, 0)


def test_flat_compression_levels_and_gains():
    cc = bands.flat_compression(4, 20.0)
    assert cc.nc == 4
    assert cc.cm == 1
    assert cc.lcm == (50.0,) * 4
    assert cc.lmx == (120.0,) * 4
    assert cc.gcs == (20.0,) * 4
    assert cc.gcm == (10.0,) * 4
    assert cc.gmx == (90.0,) * 4
    assert cc.bw is None


def test_flat_compression_bandwidths_cover_spectrum():
    sr = 24000
    cf = bands.fir_cross_frequencies(sr)
    nc = len(cf) + 1
    cc = bands.flat_compression(nc, 20.0, cf, sr)
    assert len(cc.bw) == nc
    assert sum(cc.bw) == pytest.approx(sr / 2)
    assert cc.bw[0] == pytest.approx(cf[0])
    assert all(b > 0 for b in cc.bw)


def test_flat_compression_errors():
    with pytest.raises(ValueError):
        bands.flat_compression(4, 20.0, [100.0], 24000)
    with pytest.raises(ValueError):
        bands.flat_compression(4, 20.0, [100.0, 200.0, 300.0])
    with pytest.raises(ValueError):
        bands.flat_compression(0, 20.0)


def test_impulse_signal():
    x = bands.test_signal(24000)
    assert x.size == 24000
    assert x.dtype == np.float32
    assert x[0] == 1.0
    assert float(np.sum(x)) == 1.0


def test_tone_signal_period_and_amplitude():
    x = bands.test_signal(24000, True)
    assert x.size == 24000
    assert x[0] == 0.0
    assert float(np.max(np.abs(x))) == pytest.approx(1.0, abs=1e-3)
    # 1 kHz at 24 kHz repeats every 24 samples.
    assert np.allclose(x[:240], x[24:264], atol=1e-3)
    assert x[6] == pytest.approx(math.sin(math.pi / 2), abs=1e-4)


def test_signal_rejects_bad_rate():
    with pytest.raises(ValueError):
        bands.test_signal(-1)