# fontraster

A small library with no dependencies. It turns glyph outlines into anti-aliased
coverage bitmaps and provides the metrics that text layout needs. All arithmetic
is rounded to 32-bit float precision, so results are the same on every platform.

## Modules

- `fontraster.geometry`: builds outlines with `Geometry.move_to`, `line_to`,
  `quad_to`, `curve_to` and `close`. Curves are flattened to line segments at a
  fixed error threshold. `Geometry.finalize` returns a `GlyphOutline`, whose
  lines are moved so that the top-left corner of the bounding box is the
  origin. The module also defines `Point`, `Line` and `OutlineBounds`.
- `fontraster.raster`: `Raster(width, height)` accumulates signed-area deltas
  for an outline through `draw(outline, scale_x, scale_y, offset_x, offset_y)`.
  `Raster.bitmap()` returns the coverage bytes. `get_bitmap(deltas, length)`
  turns the deltas into coverage bytes from 0 to 255 and raises `ValueError`
  when `length` is greater than the number of deltas.
- `fontraster.font`:
  - `Font` provides `lookup_glyph_index`, `has_glyph`, `chars`,
    `glyph_count`, `scale_factor`, `metrics` / `metrics_indexed`,
    `horizontal_line_metrics` / `vertical_line_metrics`,
    `horizontal_kern` / `horizontal_kern_indexed`, and grayscale or subpixel
    rasterization: `rasterize`, `rasterize_indexed`, `rasterize_subpixel` and
    `rasterize_indexed_subpixel`.
  - The module also defines `Glyph`, `Metrics`, `LineMetrics` (with
    `from_units` and `scale`) and `FontSettings`.
  - `build_glyph(draw, settings, units_per_em, advance_width, advance_height)`
    builds a `Glyph` from a function that draws into a `Geometry`.
- `fontraster.kern`: `parse_kern(data)` reads the first horizontal subtable
  in format 0 or 3 of a `kern` table, in either the OpenType (version 0) or
  the Apple (version 1) layout. It returns a dict keyed by
  `kern_key(left, right)`. For a malformed table, an unknown version, or a
  table with no usable subtable, it returns `None`.
- `fontraster.text`:
  - `decode_utf16` decodes big-endian UTF-16, as used in name tables.
  - `Linebreak` holds the flags `NONE`, `SOFT` and `HARD`.
  - `linebreak_mask` builds a mask from those flags.
  - `CharacterData.classify` marks characters as whitespace, control or
    missing.
- `fontraster.stream`: `Stream` is a big-endian reader for table data. It
  raises `StreamError` when a read would run past the end of the data.
- `fontraster.fmath`: bit-exact single-precision helpers, including `f32`,
  `floor`, `ceil`, `trunc`, `fract`, `sqrt`, `atan`, `atan2f` and the fast
  `atan2` approximation.
- `fontraster.fxhash`: `fxhash(data)` computes the 64-bit Fx hash, used to
  fingerprint font data.

## Installing

```
pip install .
```

## Example

```python
from fontraster.font import Font, FontSettings, LineMetrics, build_glyph
from fontraster.fxhash import fxhash

def draw_square(geometry):
    geometry.move_to(100, 0)
    geometry.line_to(900, 0)
    geometry.line_to(900, 800)
    geometry.line_to(100, 800)
    geometry.close()

settings = FontSettings()
notdef = build_glyph(lambda g: None, settings, 1000.0, 500.0, 0.0)
square = build_glyph(draw_square, settings, 1000.0, 1000.0, 0.0)

font = Font(
    glyphs=[notdef, square],
    char_to_glyph={"A": 1},
    units_per_em=1000.0,
    settings=settings,
    name="Squares",
    horizontal_line_metrics=LineMetrics.from_units(800, -200, 0),
    vertical_line_metrics=None,
    horizontal_kern=None,
    file_hash=fxhash(b"squares"),
)

metrics, bitmap = font.rasterize("A", 20.0)
print(metrics.width, metrics.height, len(bitmap))
```

Coverage bitmaps start at the top-left corner, and a value of 255 means the
pixel is fully covered. `rasterize_subpixel` returns three bytes per pixel.
Characters that the font does not map use glyph 0. A size of zero or less
gives empty metrics and an empty bitmap.

## What it does not do

- It does not read font files. There is no parsing of `cmap`, `glyf`, `CFF`,
  `hhea` or `GSUB`. You supply the glyph outlines, the character mapping, the
  line metrics and the kerning pairs (for example from `parse_kern`), and
  pass them to `Font`.
- It has no text layout engine. It does not find Unicode line break
  opportunities for you: `Linebreak` and `linebreak_mask` only hold and
  combine the flags.
- It has no command-line interface.

## Running the tests

```
pip install ".[test]"
pytest
```