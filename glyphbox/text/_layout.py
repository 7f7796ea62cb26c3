"""
The layout stage, where the text rendering comes together. The layout
context runs the stages (measuring, line breaking, shaping) and then walks
the lines to position each glyph, getting its image from the glyph cache.

The output is a generator of draw commands. It's lazy: glyphs are
rasterized as the commands are consumed, so a consumer that stops early
does not pay for the rest of the text.
"""

from ..utils import logger, assert_type
from ..utils.enums import WrapMode
from ._style import Box, as_runs
from ._measure import measure_runs
from ._wrap import break_lines, resolve_wrap_mode
from ._wordbreak import WordBreakRules, default_word_break_rules
from ._shaper import HarfbuzzShaper, shape_line
from ._cache import GlyphCache, GlyphKey
from ._images import ArrayImageFactory
from ._fontface import DEFAULT_LOAD_FLAGS, DEFAULT_RENDER_MODE


class DrawCommand:
    """An instruction to draw an image at a position, in a color.
    Behaves like an ``(image, position, color)`` tuple.
    """

    __slots__ = ["color", "image", "position"]

    def __init__(self, image, position, color):
        self.image = image
        self.position = position
        self.color = color

    def __repr__(self):
        x, y = self.position
        return f"<DrawCommand {self.image!r} at ({x:0.5g}, {y:0.5g})>"

    def __iter__(self):
        return iter((self.image, self.position, self.color))


class LayoutContext:
    """The object that owns everything a layout needs: the glyph cache, the
    shaper, the word-break rules, and the FreeType settings.

    Independent contexts share nothing, which is useful e.g. for tests or
    for using different image factories. There is a default instance at
    ``glyphbox.text.layout_context``.

    Parameters:
        image_factory (object): creates and disposes images. Default ArrayImageFactory.
        shaper (object): the shaper to use when shaping is enabled. Default HarfbuzzShaper.
        word_break_rules (WordBreakRules): the rules for the "break-word" wrap mode.
        load_flags (int): the FreeType load flags.
        render_mode (int): the FreeType render mode.
    """

    def __init__(
        self,
        *,
        image_factory=None,
        shaper=None,
        word_break_rules=None,
        load_flags=DEFAULT_LOAD_FLAGS,
        render_mode=DEFAULT_RENDER_MODE,
    ):
        self._cache = GlyphCache(image_factory, load_flags, render_mode)
        self.shaper = shaper or HarfbuzzShaper()
        self.word_break_rules = word_break_rules

    @property
    def cache(self):
        """The GlyphCache."""
        return self._cache

    @property
    def word_break_rules(self):
        """The WordBreakRules used by the "break-word" wrap mode."""
        return self._word_break_rules

    @word_break_rules.setter
    def word_break_rules(self, rules):
        assert_type("word_break_rules", rules, None, WordBreakRules)
        self._word_break_rules = rules or default_word_break_rules

    @property
    def image_factory(self):
        """The object that creates images from rasterized glyphs.
        Setting it purges the cache.
        """
        return self._cache.image_factory

    @image_factory.setter
    def image_factory(self, image_factory):
        self._cache.purge()
        self._cache.image_factory = image_factory or ArrayImageFactory()

    @property
    def load_flags(self):
        """The FreeType load flags used to measure and rasterize glyphs.
        Setting it purges the cache.
        """
        return self._cache.load_flags

    @load_flags.setter
    def load_flags(self, flags):
        self._cache.load_flags = int(flags)
        self._cache.purge()

    @property
    def render_mode(self):
        """The FreeType render mode used to rasterize glyphs. Setting it purges the cache."""
        return self._cache.render_mode

    @render_mode.setter
    def render_mode(self, mode):
        self._cache.render_mode = int(mode)
        self._cache.purge()

    def purge(self):
        """Purge the glyph cache."""
        self._cache.purge()

    def measure(self, runs):
        """Measure the glyphs of the given runs. Returns a list of GlyphRecord objects."""
        return measure_runs(runs, self.load_flags)

    def layout_lines(self, runs, box, wrap_mode=WrapMode.none, shaping=False):
        """Measure and wrap the given runs, without rasterizing anything.
        Returns a list of Line objects. If shaping is True, the lines are shaped too.
        """
        box = Box.from_any(box)
        lines = break_lines(
            self.measure(runs), box.width, wrap_mode, self.word_break_rules
        )
        if shaping:
            for line in lines:
                shape_line(line, self.shaper)
        return lines

    def layout(self, runs, box, wrap_mode=WrapMode.none, shaping=False):
        """Lay out the given runs in the given box.

        Parameters:
            runs (list): a list of Run objects or (text, style) tuples.
            box (Box, tuple): the box to lay the text out in, as (x, y, width, height).
            wrap_mode (str): how to wrap the text, see WrapMode.
            shaping (bool): whether to shape the text with the shaper. If False,
                each character is drawn with the glyph that its face maps it to.

        Returns a generator of DrawCommand objects, one for each visible glyph,
        from left to right and top to bottom. The glyphs are rasterized as
        the generator is consumed.
        """
        runs = as_runs(runs)
        box = Box.from_any(box)
        wrap_mode = resolve_wrap_mode(wrap_mode)
        return self._assemble(runs, box, wrap_mode, bool(shaping))

    def _assemble(self, runs, box, wrap_mode, shaping):
        with self._cache.layout_pass():
            lines = self.layout_lines(runs, box, wrap_mode)
            logger.debug(f"Assembling {len(lines)} lines, shaping={shaping}")
            get_or_rasterize = self._cache.get_or_rasterize

            pen_x = pen_y = 0.0
            for line in lines:
                baseline = line.line_height
                if shaping and line.glyphs:
                    shape_line(line, self.shaper)

                for i, glyph in enumerate(line.glyphs):
                    if shaping:
                        shaped = line.shaped[i]
                        glyph_id, advance = shaped.glyph_id, shaped.x_advance
                        key = GlyphKey(
                            glyph_id, glyph.face, glyph.size, glyph.color, True
                        )
                    else:
                        glyph_id, advance = glyph.codepoint, glyph.advance
                        key = GlyphKey(
                            glyph_id, glyph.face, glyph.size, glyph.color, False
                        )

                    # Glyph id zero is a placeholder, or merged into the previous glyph
                    if glyph_id and glyph.face is not None:
                        entry = get_or_rasterize(key)
                        if entry is not None:
                            x = box.x + pen_x + entry.left
                            if shaping:
                                y = box.y + pen_y + baseline - entry.top
                            else:
                                y = box.y + pen_y + baseline - glyph.metrics.bearing_y
                            yield DrawCommand(entry.image, (x, y), glyph.color)

                    pen_x += advance

                pen_x = 0.0
                pen_y += baseline


# Instantiate the global/default layout context
layout_context = LayoutContext()
