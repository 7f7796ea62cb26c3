"""Glyphbox: lay out styled text in a box, with cached glyph rasterization."""

# flake8: noqa

__version__ = "0.1.0"
version_info = tuple(map(int, __version__.split(".")))

__wgpu_version_range__ = "0.19.0", "1.0.0"


from . import utils
from .utils import logger, Color, enums
from .utils.enums import *

from .text import (
    Style,
    Run,
    Box,
    FontFace,
    find_font,
    WordBreakRules,
    is_word_break,
    HarfbuzzShaper,
    ArrayImageFactory,
    WgpuImageFactory,
    GlyphKey,
    GlyphCache,
    DrawCommand,
    LayoutContext,
    layout_context,
    layout_text,
    purge_glyph_cache,
    measure_runs,
    break_lines,
    shape_line,
)
