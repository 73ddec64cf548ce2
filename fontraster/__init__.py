"""Glyph outline flattening, coverage rasterization, kern table parsing and font metrics."""

__version__ = "0.9.3"

__all__ = ["fmath", "fxhash", "stream", "kern", "text", "geometry", "raster", "font"]