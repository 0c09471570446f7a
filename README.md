# hearpro

Building blocks for hearing-aid signal processing in Python, built on NumPy.

## Modules

- **`hearpro.rfft`**: `fft_rc(x)` is a forward FFT of a real signal whose
  length is a power of two. It returns `len(x) + 2` interleaved `float32`
  values `[re0, im0, ..., re(n/2), im(n/2)]`. `fft_cr(spectrum, n)` is the
  inverse and is scaled by `1/n`, so a round trip gives back the input. Lengths
  that are not powers of two raise `ValueError`.
- **`hearpro.sha`**: a short-time spectral compressor. `ShaConfig` holds the
  chunk size, window size, sampling rate, maximum gain, maximum level,
  compression and expansion kneepoints, level reference, window type,
  expansion ratio and suppression half bandwidth. It can also hold per-bin
  gains (`g1`) and a suppressive-influence matrix (`supp`).
  `ShaProcessor(config).process(chunk)` handles one chunk with overlap-add.
  Chunks up to half a window wide gather input until a frame is due. Wider
  chunks are split into half-window frames. `sha_window(nw, wt, nsw)` builds
  the Hamming (`wt=0`) or Blackman analysis window, scaled so that its samples
  add up to `nw / nsw`.
- **`hearpro.bands`**: filterbank layouts and probe signals.
  - `fir_cross_frequencies(sr)` gives the FIR crossover frequencies: five
    below 1 kHz, then three per octave up to Nyquist.
  - `gammatone_bands(sr, nm, cpo)` returns a `GammatoneBands` holding centre
    frequencies, bandwidths and a suggested target delay.
  - `flat_compression(nc, gain, cross_freq, sr)` returns a
    `CompressionChannels` with a flat per-channel prescription. Its channel
    bandwidths come from the crossovers when they are given.
  - `test_signal(rate, tone)` returns one second of a unit impulse or of a
    1 kHz sine.
- **`hearpro.prescription`**: data and defaults for the filterbank.
  - `example_dsl()` returns the example eight-channel `DslPrescription`. The
    prescription checks its own consistency when it is built.
  - `example_wdrc(nz, td)` returns a `WdrcParams` for broadband compression.
  - `afc_defaults(afl, wfl, pfl, pup)` returns an `AfcParams` whose adaptation
    constants are chosen by the band-limit and whitening filter lengths in use.
- **`hearpro.levels`**: `set_spl(x, rms_lev, spl_ref)` returns a copy of `x`
  scaled to an RMS level in dB SPL, 65 dB re `1.1219e-6` by default.
  `is_mat_file(fn)` tells whether a file name ends in `mat`, ignoring case.
- **`hearpro.options`**: `parse_args(argv)` turns a simulation's command-line
  arguments into `NadOptions`. It takes the flags `-a`, `-d`, `-m`, `-nN`,
  `-pN`, `-P`, `-rN`, `-uN` and `-wN`, then an optional input file and output
  file. `-h` and `-v` print the usage text or the version and exit with
  status 0.
- **`hearpro.stream`**: `dac_chunk_size(rate, io_wait)` gives the segment size
  for device output, which is four polling intervals of samples.
  `SegmentFeeder(iwav, cs, nrep, mseg)` loops an input waveform through a ring
  of segments. `fill(oseg, process)` passes the next segment to a callback once
  the device has reached segment `oseg`.
- **`hearpro.afcopt`**: helpers for tuning the feedback canceller.
  - `parse_opt_args(argv)` returns `OptOptions`.
  - `max_error_db(qm, iqm, jqm)` gives the peak misalignment in dB after the
    settling time. This is the figure a tuner minimises.
  - `misalignment_summary(qm, iqm, jqm)` returns a `MisalignmentSummary` with
    the final error, the minimum, and the peak that follows it.
  - `format_parameters(par)` prints up to four tuned values (`rho`, `eps`,
    `mu`, `alf`) as assignment lines.

## Installation

Install with pip from a checkout of this project. It needs Python 3.10 or later
and NumPy.

## Examples

Round trip through the real FFT:

```python
import numpy as np
from hearpro.rfft import fft_rc, fft_cr

x = np.random.default_rng(0).standard_normal(64).astype(np.float32)
spectrum = fft_rc(x)          # 66 interleaved values
y = fft_cr(spectrum, 64)      # back to 64 samples
assert np.allclose(x, y, atol=1e-5)
```

Spectral compression of a chunked signal:

```python
import numpy as np
from hearpro.sha import ShaConfig, ShaProcessor

config = ShaConfig(cs=32, nw=256, sr=24000, gmax=40, lmax=110,
                   lckp=32, lekp=0, ref=1.1219e-6)
sha = ShaProcessor(config)
x = np.zeros(24000, dtype=np.float32)
x[0] = 1
y = np.concatenate([sha.process(x[i:i + 32]) for i in range(0, 24000, 32)])
```

Filterbank layouts at 24 kHz:

```python
from hearpro.bands import fir_cross_frequencies, gammatone_bands, flat_compression

crossovers = fir_cross_frequencies(24000)
bands = gammatone_bands(24000, 5, 3)   # 5 bands up to 1 kHz, 3 per octave above
cls = flat_compression(len(crossovers) + 1, 20, crossovers, 24000)
```

Example prescription and feedback-cancellation settings:

```python
from hearpro.prescription import example_dsl, example_wdrc, afc_defaults

dsl = example_dsl()
wdrc = example_wdrc(4, 2.5)            # 4 poles/zeros, 2.5 ms target delay
afc = afc_defaults()                   # built-in filter lengths
```

Calibrating a waveform to 65 dB SPL:

```python
import numpy as np
from hearpro.levels import set_spl

x = np.sin(np.arange(24000) * 2 * np.pi * 1000 / 24000)
calibrated = set_spl(x, 65, 1.1219e-6)
```

## What the package does not do

- It provides no command-line program. `parse_args` and `parse_opt_args` only
  parse arguments.
- It does not read or write WAV or MAT files.
- It does not open audio devices. `SegmentFeeder` prepares segments, and the
  caller has to poll the device and play them.
- It does not include the FIR, IIR or gammatone filterbank processing, the AGC
  compressor, the instantaneous compressor or the adaptive feedback canceller.
  The package gives their band layouts, prescriptions and parameters.
  `hearpro.sha` is the only complete signal processor in it.
- It does not run a parameter search for the feedback canceller. `afcopt`
  evaluates and formats results that come from elsewhere.

## Running the tests

Install the `test` extra, then run `pytest` from the project root.