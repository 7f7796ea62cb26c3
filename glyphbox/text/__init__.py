"""
The stages of text layout:

* Measuring: each character is resolved to a font face and measured.
* Line breaking: the glyphs are split into lines, wrapping them to the box.
* Shaping (optional): each line is shaped with Harfbuzz.
* Assembly: the glyphs are positioned, rasterized (cached), and emitted as draw commands.

The layout context ties these together. This namespace exposes the
default context's layout() as layout_text().
"""

from ._style import Style, Run, Box  # noqa: F401
from ._fontface import FontFace, GlyphMetrics  # noqa: F401
from ._fontfinder import find_font, find_system_fonts  # noqa: F401
from ._measure import GlyphRecord, measure_runs  # noqa: F401
from ._wordbreak import WordBreakRules, default_word_break_rules, is_word_break  # noqa: F401
from ._wrap import Line, break_lines  # noqa: F401
from ._shaper import HarfbuzzShaper, ShapedGlyph, shape_line  # noqa: F401
from ._images import GlyphImage, ArrayImageFactory, WgpuImageFactory  # noqa: F401
from ._cache import GlyphKey, GlyphEntry, GlyphCache  # noqa: F401
from ._layout import DrawCommand, LayoutContext, layout_context  # noqa: F401


layout_text = layout_context.layout  # The whole pipeline
purge_glyph_cache = layout_context.purge
