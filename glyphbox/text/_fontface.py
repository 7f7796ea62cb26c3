"""
The font face: the object that knows which characters a font supports, how
big their glyphs are, and how to rasterize them. This wraps a FreeType face.

Relevant links:
* https://freetype.org/freetype2/docs/glyphs/glyphs-3.html
* https://freetype-py.readthedocs.io

"""

import os
import threading

import numpy as np
import freetype


# FreeType's glyph metrics are in 26.6 fixed point once a pixel size is set.
FT_UNITS = 64.0

DEFAULT_LOAD_FLAGS = freetype.FT_LOAD_NO_AUTOHINT | freetype.FT_LOAD_TARGET_LIGHT
DEFAULT_RENDER_MODE = freetype.FT_RENDER_MODE_LIGHT


class GlyphMetrics:
    """The metrics of a glyph, in pixels."""

    __slots__ = ["advance", "bearing_x", "bearing_y", "height", "width"]

    def __init__(self, advance=0.0, bearing_x=0.0, bearing_y=0.0, width=0.0, height=0.0):
        self.advance = advance  # horizontal pen displacement
        self.bearing_x = bearing_x  # from pen to left of ink
        self.bearing_y = bearing_y  # from baseline to top of ink
        self.width = width  # ink width
        self.height = height  # ink height

    def __repr__(self):
        return (
            f"<GlyphMetrics advance={self.advance:0.5g} width={self.width:0.5g} "
            f"bearing=({self.bearing_x:0.5g}, {self.bearing_y:0.5g})>"
        )


ZERO_METRICS = GlyphMetrics()


class FontFace:
    """Object to represent a loaded font face.

    Note that a face holds mutable state (the selected pixel size and the
    currently loaded glyph). All such state changes happen while holding
    ``face.lock``.
    """

    def __init__(self, filename, index=0):
        assert isinstance(filename, str)
        self._filename = filename
        self._index = index
        self._face = None
        self._name = None
        self._codepoints = None
        self._current_size = None
        self.lock = threading.RLock()

    def __repr__(self):
        return f"<FontFace {self.name} at {hex(id(self))}>"

    def _get_face(self):
        # This was factored out so it can be overloaded in tests
        if self._face is None:
            self._face = freetype.Face(self._filename, self._index)
        return self._face

    @property
    def filename(self):
        """The path to the font file."""
        return self._filename

    @property
    def index(self):
        """The index of the face in the font file (for font collections)."""
        return self._index

    @property
    def family(self):
        """The family name of this font, e.g. 'Noto Sans' or 'Arial'."""
        family = self._get_face().family_name
        if family:
            return family.decode(errors="ignore")
        name = os.path.basename(self._filename).split(".")[0]
        return name.partition("-")[0] or "Unknown"

    @property
    def variant(self):
        """The variant name of this font, e.g. 'Regular' or 'Bold Italic'."""
        variant = self._get_face().style_name
        if variant:
            return variant.decode(errors="ignore")
        name = os.path.basename(self._filename).split(".")[0]
        return name.partition("-")[2] or "Regular"

    @property
    def name(self):
        """A normalized name that includes the family and variant."""
        if not self._name:
            family = "".join(x[0].upper() + x[1:] for x in self.family.split())
            style = "".join(x[0].upper() + x[1:] for x in self.variant.split())
            self._name = family + "-" + style
        return self._name

    @property
    def ft_face(self):
        """The underlying ``freetype.Face``."""
        return self._get_face()

    @property
    def codepoints(self):
        """A set of Unicode code points (ints) supported by this font.
        To test whether a certain codepoint is supported, use has_codepoint() instead.
        """
        if self._codepoints is None:
            with self.lock:
                face = self._get_face()
                self._codepoints = set(i for i, _ in face.get_chars())
        return self._codepoints

    def has_codepoint(self, codepoint):
        """Check whether a codepoint is supported by this font."""
        return codepoint in self.codepoints

    def _set_size(self, size):
        if size != self._current_size:
            self._get_face().set_pixel_sizes(0, size)
            self._current_size = size

    def measure(self, codepoint, size, load_flags=DEFAULT_LOAD_FLAGS):
        """Get the GlyphMetrics for the given codepoint at the given pixel size."""
        with self.lock:
            face = self._get_face()
            self._set_size(size)
            face.load_glyph(face.get_char_index(codepoint), load_flags)
            m = face.glyph.metrics
            return GlyphMetrics(
                m.horiAdvance / FT_UNITS,
                m.horiBearingX / FT_UNITS,
                m.horiBearingY / FT_UNITS,
                m.width / FT_UNITS,
                m.height / FT_UNITS,
            )

    def rasterize(
        self,
        index,
        size,
        by_index=False,
        load_flags=DEFAULT_LOAD_FLAGS,
        render_mode=DEFAULT_RENDER_MODE,
    ):
        """Rasterize a glyph into an 8-bit intensity bitmap.

        The index is a Unicode codepoint, or a glyph index in the font if
        ``by_index`` is True (e.g. as produced by a shaper).
        Returns (bitmap, left, top), with bitmap a uint8 array of shape (rows, width),
        and left/top the offset of the bitmap relative to the pen position on the baseline.
        """
        with self.lock:
            face = self._get_face()
            self._set_size(size)
            glyph_index = index if by_index else face.get_char_index(index)
            face.load_glyph(glyph_index, load_flags)
            face.glyph.render(render_mode)
            bitmap = face.glyph.bitmap
            rows, width, pitch = bitmap.rows, bitmap.width, abs(bitmap.pitch)
            if rows and width:
                array = np.array(bitmap.buffer, np.uint8).reshape(rows, pitch)
                array = array[:, :width].copy()
            else:
                array = np.zeros((rows, width), np.uint8)
            return array, face.glyph.bitmap_left, face.glyph.bitmap_top
