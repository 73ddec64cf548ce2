"""Scaled glyph metrics, kerning and rasterisation for a loaded font."""

from dataclasses import dataclass, field
from types import MappingProxyType

from .fmath import as_i32, ceil, f32, floor, fract, is_negative
from .geometry import Geometry, OutlineBounds
from .kern import kern_key
from .raster import Raster


@dataclass(frozen=True)
class Metrics:
    """Layout information for a glyph at a fixed size.

    ``xmin``/``ymin`` are whole-pixel offsets of the bitmap's lower-left
    corner, ``width``/``height`` its size in pixels, the advances are in
    subpixels and ``bounds`` is the scaled outline box.
    """

    xmin: int = 0
    ymin: int = 0
    width: int = 0
    height: int = 0
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass(frozen=True)
class LineMetrics:
    """Metrics for placing lines of text."""

    ascent: float
    descent: float
    line_gap: float
    new_line_size: float

    @classmethod
    def from_units(cls, ascent, descent, line_gap):
        """Build line metrics from integer font units."""
        ascent, descent, line_gap = int(ascent), int(descent), int(line_gap)
        return cls(
            ascent=f32(ascent),
            descent=f32(descent),
            line_gap=f32(line_gap),
            new_line_size=f32(ascent - descent + line_gap),
        )

    def scale(self, factor):
        """Return these metrics multiplied by factor."""
        return LineMetrics(
            ascent=f32(self.ascent * factor),
            descent=f32(self.descent * factor),
            line_gap=f32(self.line_gap * factor),
            new_line_size=f32(self.new_line_size * factor),
        )


@dataclass
class Glyph:
    """A glyph's flattened outline and its advances in font units."""

    v_lines: list = field(default_factory=list)
    m_lines: list = field(default_factory=list)
    advance_width: float = 0.0
    advance_height: float = 0.0
    bounds: OutlineBounds = field(default_factory=OutlineBounds)


@dataclass(frozen=True)
class FontSettings:
    """Settings that control how a font is loaded.

    ``scale`` is the pixel size the outline flattening is tuned for.
    """

    collection_index: int = 0
    scale: float = 40.0
    load_substitutions: bool = True


def build_glyph(draw, settings, units_per_em, advance_width=None, advance_height=None):
    """Build a Glyph from an outline.

    ``draw`` is called with a Geometry and should describe the outline in
    font units through its move_to/line_to/quad_to/curve_to/close methods.
    Missing advances count as zero.
    """
    geometry = Geometry(settings.scale, units_per_em)
    draw(geometry)
    outline = geometry.finalize()
    return Glyph(
        v_lines=outline.v_lines,
        m_lines=outline.m_lines,
        advance_width=f32(advance_width or 0.0),
        advance_height=f32(advance_height or 0.0),
        bounds=outline.bounds,
    )


class Font:
    """An immutable set of glyphs with character mapping, line metrics and kerning."""

    def __init__(
        self,
        glyphs,
        char_to_glyph,
        units_per_em,
        settings=None,
        name=None,
        horizontal_line_metrics=None,
        vertical_line_metrics=None,
        horizontal_kern=None,
        file_hash=0,
    ):
        self._glyphs = list(glyphs)
        if not self._glyphs:
            self._glyphs.append(Glyph())
        mapping = {}
        for character, index in dict(char_to_glyph).items():
            if index == 0:
                continue
            if not 0 < index < len(self._glyphs):
                raise ValueError("Attempted to map a codepoint out of bounds.")
            mapping[character] = index
        self._char_to_glyph = mapping
        self.units_per_em = f32(units_per_em)
        self.settings = settings if settings is not None else FontSettings()
        self.name = name
        self._horizontal_line_metrics = horizontal_line_metrics
        self._vertical_line_metrics = vertical_line_metrics
        self._horizontal_kern = dict(horizontal_kern) if horizontal_kern is not None else None
        self.file_hash = file_hash

    def __hash__(self):
        return hash(self.file_hash)

    def __repr__(self):
        return (
            f"Font(name={self.name!r}, settings={self.settings!r}, "
            f"units_per_em={self.units_per_em!r}, hash={self.file_hash!r})"
        )

    def chars(self):
        """Read-only mapping from character to its non-zero glyph index."""
        return MappingProxyType(self._char_to_glyph)

    def horizontal_line_metrics(self, px):
        """Line metrics for horizontal text scaled to px, or None."""
        if self._horizontal_line_metrics is None:
            return None
        return self._horizontal_line_metrics.scale(self.scale_factor(px))

    def vertical_line_metrics(self, px):
        """Line metrics for vertical text scaled to px, or None."""
        if self._vertical_line_metrics is None:
            return None
        return self._vertical_line_metrics.scale(self.scale_factor(px))

    def scale_factor(self, px):
        """Factor that converts font units to pixels at size px."""
        return f32(f32(px) / self.units_per_em)

    def horizontal_kern(self, left, right, px):
        """Scaled kerning between two characters, or None."""
        return self.horizontal_kern_indexed(
            self.lookup_glyph_index(left), self.lookup_glyph_index(right), px
        )

    def horizontal_kern_indexed(self, left, right, px):
        """Scaled kerning between two glyph indices, or None."""
        scale = self.scale_factor(px)
        if self._horizontal_kern is None:
            return None
        value = self._horizontal_kern.get(kern_key(left, right))
        if value is None:
            return None
        return f32(f32(value) * scale)

    def metrics(self, character, px):
        """Metrics of a character; the default glyph's if it is missing."""
        return self.metrics_indexed(self.lookup_glyph_index(character), px)

    def metrics_indexed(self, index, px):
        """Metrics of the glyph at index."""
        metrics, _, _ = self._metrics_raw(self.scale_factor(px), self._glyphs[index], 0.0)
        return metrics

    def _metrics_raw(self, scale, glyph, offset):
        bounds = glyph.bounds.scale(scale)
        offset_x = fract(f32(bounds.xmin + offset))
        offset_y = fract(f32(f32(1.0 - fract(bounds.height)) - fract(bounds.ymin)))
        if is_negative(offset_x):
            offset_x = f32(offset_x + 1.0)
        if is_negative(offset_y):
            offset_y = f32(offset_y + 1.0)
        metrics = Metrics(
            xmin=as_i32(floor(bounds.xmin)),
            ymin=as_i32(floor(bounds.ymin)),
            width=max(0, as_i32(ceil(f32(bounds.width + offset_x)))),
            height=max(0, as_i32(ceil(f32(bounds.height + offset_y)))),
            advance_width=f32(scale * glyph.advance_width),
            advance_height=f32(scale * glyph.advance_height),
            bounds=bounds,
        )
        return metrics, offset_x, offset_y

    def rasterize(self, character, px):
        """Metrics and coverage bitmap of a character."""
        return self.rasterize_indexed(self.lookup_glyph_index(character), px)

    def rasterize_subpixel(self, character, px):
        """Metrics and RGB subpixel coverage of a character."""
        return self.rasterize_indexed_subpixel(self.lookup_glyph_index(character), px)

    def rasterize_indexed(self, index, px):
        """Metrics and coverage bytes (0-255, top-left first) of the glyph at index."""
        if px <= 0.0:
            return Metrics(), b""
        glyph = self._glyphs[index]
        scale = self.scale_factor(px)
        metrics, offset_x, offset_y = self._metrics_raw(scale, glyph, 0.0)
        canvas = Raster(metrics.width, metrics.height)
        canvas.draw(glyph, scale, scale, offset_x, offset_y)
        return metrics, canvas.bitmap()

    def rasterize_indexed_subpixel(self, index, px):
        """Like rasterize_indexed, but three coverage bytes per pixel."""
        if px <= 0.0:
            return Metrics(), b""
        glyph = self._glyphs[index]
        scale = self.scale_factor(px)
        metrics, offset_x, offset_y = self._metrics_raw(scale, glyph, 0.0)
        canvas = Raster(metrics.width * 3, metrics.height)
        canvas.draw(glyph, f32(scale * 3.0), scale, offset_x, offset_y)
        return metrics, canvas.bitmap()

    def has_glyph(self, character):
        """True when the font maps the character to a glyph."""
        return self.lookup_glyph_index(character) != 0

    def lookup_glyph_index(self, character):
        """Glyph index of a character, 0 when it is missing."""
        return self._char_to_glyph.get(character, 0)

    def glyph_count(self):
        """Number of glyphs in the font."""
        return len(self._glyphs)