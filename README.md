# mizu

Building blocks for a small 2D engine. The drawing code is not tied to any graphics
API. Shapes and textured quads are turned into flat lists of vertex floats. Those floats
are packed into fixed-size batches. Any object that implements the `Renderer` protocol
from `mizu.batcher` can then upload the batches and draw them.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `mizu.color`: the `Rgba` colour type. It has frozen 8-bit channels and rejects values
  outside 0..255. `gl_color()` returns the channels as floats in [0, 1].
  - Helpers: `rgb` (0xRRGGBB or three channels), `rgba` (0xRRGGBBAA or four channels),
    and `rgb_f` / `rgba_f` (float channels).
  - Shape records: `Point`, `Line`, `Triangle`, `Rectangle`.
- `mizu.averagers`: running averages with `update(v)` and `value()`.
  - `CMA`: cumulative moving average.
  - `EMA`: exponential moving average. Its `alpha` can be changed.
  - `SMA`: simple moving average over the last `sample_count` samples.
- `mizu.timing`: durations are integer nanoseconds. Every class takes a `clock` callable,
  `time.monotonic_ns` by default.
  - `Ticker`: counts whole intervals between ticks.
  - `FrameCounter`: estimates frames per second.
  - `MaxPeriod`: the largest value seen within a trailing window.
  - `IntermittentLambda`: calls a function at most once per interval and caches the
    result.
  - `as_secs_dt`: converts nanoseconds to seconds.
- `mizu.priority_queue`: `PriorityQueue`, a binary heap keyed by integer ids.
  - Methods: `push`, `update` (with `only_if_higher`), `push_or_update`,
    `get_priority`, `top`, `pop`, `pop_value`.
  - With the default `operator.lt` comparison, the greatest priority is on top.
- `mizu.rng`: `Pcg64`, a 128-bit state generator with 64-bit outputs.
  - Each thread gets its own generator from `generator()`. It is seeded from system
    entropy on first use.
  - Seeding: `seed`, `seed128`, `reseed`. `seed_info` returns the current seed.
    `debug_show_seed` logs and returns a statement that restores that seed.
  - Draws: `get_int`, `get_float`, `get_bool`. `base58` returns a random string.
- `mizu.buffer`: `StaticSizeBuffer`, a fixed-capacity buffer.
  - It fills either front to back or back to front (`FillMode`).
  - `sync(upload)` passes only the part written since the last sync to `upload`, as
    `(offset, items)`. The first sync passes the whole storage.
  - `BufferTarget` lists the buffer binding points.
- `mizu.gl_enums`: enums for OpenGL state (`ClearBit`, `Capability`, `BlendFunc`,
  `DepthFunc`, `ClipOrigin`, `ClipDepth`, `ContextFlags`) and `ContextVersion`.
  `ContextFlagsBuilder` accumulates context flags through chained calls.
- `mizu.fileio`:
  - `read_file(path)` returns a UTF-8 text file whole.
  - `read_image_data(path)` decodes a PNG with Pillow into 8-bit RGBA `PngData`. It
    raises `OSError` when the file cannot be read and `ValueError` when it is not a
    valid PNG.
- `mizu.texture`: `Texture` holds image data and a texture id.
  - `s(x)` and `t(y)` convert pixel positions to normalised coordinates.
  - `Texture.load` returns an empty texture when the file cannot be loaded.
- `mizu.batcher`: `Batcher` collects one frame of geometry in `OpaqueBatchList` and
  `TransBatchList`.
  - Opaque geometry is drawn newest first, relying on depth.
  - Translucent geometry is drawn afterwards in submission order, with blending.
  - `BatchType` gives, for each kind of geometry, the vertex layout, the batch capacity
    and the draw mode.
- `mizu.g2d`: `G2d` draws points, lines, triangles, rectangles and texture regions
  through a `Batcher`.
  - Each shape gets a fresh depth.
  - Shapes whose colour is not fully opaque take the translucent path.
  - `flush(projection)` draws the frame and then clears it.
- `mizu.code_page_437`: `CodePage437`, a monospaced bitmap font.
  - It reads a 16-glyphs-per-row sheet.
  - `calculate_size` measures text; `draw` emits one texture region per character.
- `mizu.input_mgr`: `InputMgr` tracks key and mouse-button state.
  - Events (`key_down`, `mouse_motion`, ...) are queued and applied by `update()`, once
    per frame.
  - Queries: `down`/`pressed`/`released` for keys and `button_*` for mouse buttons.
    Mouse position, motion and scroll are available per frame.
- `mizu.sysinfo`:
  - `memusage()` returns resident memory in MiB. It reads `/proc/self/statm` and returns
    0.0 where that file is not available.
  - `detected_platforms()` lists the detected platforms and `log_platform()` logs them.
- `mizu.gl_debug`: names OpenGL debug sources and types. It formats and logs debug
  messages at a level matching their severity.

## Example

```python
from mizu.averagers import EMA
from mizu.color import rgb

print(rgb(0xFF8000).gl_color())   # (1.0, 0.5019..., 0.0, 1.0)

avg = EMA(0.5)
for v in (10, 20, 30):
    avg.update(v)
print(avg.value())                # 21.25
```

Drawing with a renderer that only prints its draw calls:

```python
from mizu.batcher import Batcher
from mizu.color import rgb, rgba
from mizu.g2d import G2d


class PrintRenderer:
    def use_shader(self, batch_type): pass
    def set_projection(self, batch_type, projection): pass
    def upload(self, batch, offset, items): pass
    def draw_arrays(self, batch, mode, first, count):
        print(batch.batch_type.name, mode.name, first, count)
    def depth_mask(self, enabled): pass
    def enable(self, capability): pass
    def disable(self, capability): pass
    def blend_func(self, sfactor, dfactor): pass
    def bind_texture(self, texture_id): pass


g = G2d(Batcher(PrintRenderer()))
g.fill_rect((10, 10), (50, 20), rgb(0x3366FF))        # opaque
g.line((0, 0), (100, 100), rgba(0xFF000080))           # translucent
g.flush(projection=None)
```

## What it does not do

The package has no graphics backend of its own. It opens no window, creates no graphics
context, compiles no shaders and uploads no textures to a GPU. It also has no audio and
no event loop. To put anything on screen you supply a `Renderer`. Input events must be
fed to `InputMgr` from whatever windowing library you use.