# chromacore

Pure-Python stream processors for chroma-based audio fingerprinting. The
package uses only the standard library.

Each processor receives data through `consume(...)` and passes its results to
a downstream *consumer*. A consumer is any object with a `consume` method.

## Modules

- `chromacore.audio_processor.AudioProcessor(sample_rate, consumer)` takes
  interleaved signed 16-bit samples. Call `reset(sample_rate, num_channels)`
  before you feed a stream. `consume(samples)` downmixes the samples to mono
  by averaging the channels, truncating toward zero. The samples are buffered
  in blocks of up to 32768. If the input rate differs from the target rate,
  they are resampled, and each block is passed on as a list of ints.
  `flush()` processes whatever is still buffered.
  - `reset` raises `ValueError` when the channel count is not positive, or
    when the sample rate is 1000 Hz or less.
  - `consume` raises `RuntimeError` if `reset` has not been called. It raises
    `ValueError` if the sample count is not a multiple of the channel count.
- `chromacore.resample`:
  - `Resampler(out_rate, in_rate, filter_size=16, phase_shift=8, linear=False, cutoff=0.8)`
    is a stateful polyphase windowed-sinc resampler.
    `resample(src, dst_size, update_ctx=True)` returns
    `(output_samples, consumed_input_count)`. The resampler's state advances
    only when `update_ctx` is true. `compensate(sample_delta, compensation_distance)`
    stretches or squeezes the next outputs.
  - `build_filter(factor, tap_count, phase_count, scale, window_type=9)` builds
    the filter bank. Window type 0 is cubic, 1 is Blackman-Nuttall and any
    other value is a Kaiser window with that beta.
  - `bessel(x)` is the zeroth-order modified Bessel function.
- `chromacore.chroma.Chroma(min_freq, max_freq, frame_size, sample_rate, consumer)`
  folds FFT magnitude frames into 12 pitch-class bands, with band 0 = A.
  Setting `interpolate = True` spreads each bin's energy over neighbouring
  bands. The last vector is kept in `features`.
- `chromacore.chroma_filter.ChromaFilter(coefficients, consumer)` runs an FIR
  filter of 1 to 8 coefficients across consecutive chroma vectors. It emits
  a result once enough vectors have arrived. The oldest vector in the window
  is weighted by the first coefficient.
- `chromacore.chroma_resampler.ChromaResampler(factor, consumer)` emits the
  mean of every `factor` consecutive chroma vectors.
- `chromacore.moving_average.MovingAverage(size)` is an integer moving average
  over a fixed window. Use `add_value(x)` to add a value. `average()` truncates
  toward zero and returns 0 when the window is empty.

## Example

```python
from chromacore.audio_processor import AudioProcessor
from chromacore.chroma import Chroma
from chromacore.moving_average import MovingAverage


class Collect:
    def __init__(self):
        self.items = []

    def consume(self, data):
        self.items.append(list(data))


# Downmix stereo 44.1 kHz audio and resample it to 11025 Hz.
sink = Collect()
processor = AudioProcessor(11025, sink)
processor.reset(44100, 2)
processor.consume([0, 0] * 44100)
processor.flush()

# Fold an FFT frame into 12 chroma bands.
bands = Collect()
chroma = Chroma(10, 510, 256, 1000, bands)
frame = [0.0] * 128
frame[113] = 1.0
chroma.consume(frame)
print(bands.items[-1])   # energy lands in band 0 (A)

# Integer moving average over a window of two values.
avg = MovingAverage(2)
avg.add_value(100)
avg.add_value(50)
print(avg.average())     # 75
```

## What it does not do

The package provides the individual stages and nothing more:

- It has no FFT stage, so the frames that `Chroma` consumes must come from
  elsewhere.
- It does not normalise chroma vectors into images.
- It does not compute, compress or compare fingerprints.
- It does not decode audio files.
- It has no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```