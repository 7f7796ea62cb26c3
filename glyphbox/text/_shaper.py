"""
Text shaping with Harfbuzz. Shaping is applied per line, after line breaking.
It resolves the characters to the glyphs that the font wants to use for them
(which can differ from the plain character-to-glyph mapping), with advances
that include kerning.

Relevant links:
* https://harfbuzz.github.io/
* https://harfbuzz.github.io/clusters.html

"""

import threading

import uharfbuzz


# Harfbuzz works in font units. We scale the font so that these are 26.6 pixels.
HB_UNITS = 64


class ShapedGlyph:
    """The shaping result for one glyph record."""

    __slots__ = ["glyph_id", "x_advance", "y_advance"]

    def __init__(self, glyph_id, x_advance, y_advance=0.0):
        self.glyph_id = glyph_id
        self.x_advance = x_advance
        self.y_advance = y_advance

    def __repr__(self):
        return f"<ShapedGlyph {self.glyph_id} advance={self.x_advance:0.5g}>"


class HarfbuzzShaper:
    """Shape text with Harfbuzz.

    A Harfbuzz font is created for each face the first time that it is used,
    and is kept for as long as the shaper lives.
    """

    def __init__(self, features=None):
        self.features = features
        self._lock = threading.Lock()
        self._hb_fonts = {}

    def __len__(self):
        return len(self._hb_fonts)

    def get_hb_font(self, face):
        """Get the Harfbuzz font for the given face."""
        with self._lock:
            try:
                return self._hb_fonts[face][2]
            except KeyError:
                pass
            blob = uharfbuzz.Blob.from_file_path(face.filename)
            hb_face = uharfbuzz.Face(blob, getattr(face, "index", 0))
            font = uharfbuzz.Font(hb_face)
            # Keep the blob and face alive too
            self._hb_fonts[face] = blob, hb_face, font
            return font

    def shape(self, face, size, codepoints):
        """Shape the given codepoints with the given face at the given pixel size.

        Returns a list of (glyph_id, x_advance, y_advance) tuples, one for each
        codepoint, with advances in pixels.

        Harfbuzz can merge characters into one glyph (ligatures) or split them
        into multiple. Each codepoint is fed with its index as cluster value, so
        the result can be aligned with the input: the first glyph of a cluster
        lands on the codepoint that started it, additional glyphs in the same
        cluster add to its advance, and codepoints that were merged into a
        preceding glyph get glyph id zero and no advance.
        """
        font = self.get_hb_font(face)

        buf = uharfbuzz.Buffer()
        buf.add_codepoints(list(codepoints))
        buf.guess_segment_properties()

        # The font (its scale) is shared, so shape while holding the face's lock
        with face.lock:
            font.scale = size * HB_UNITS, size * HB_UNITS
            uharfbuzz.shape(font, buf, self.features)

        result = [[0, 0.0, 0.0] for _ in range(len(codepoints))]
        seen = set()
        for info, pos in zip(buf.glyph_infos, buf.glyph_positions):
            item = result[info.cluster]
            if info.cluster not in seen:
                seen.add(info.cluster)
                item[0] = info.codepoint
            item[1] += pos.x_advance / HB_UNITS
            item[2] += pos.y_advance / HB_UNITS

        return [tuple(item) for item in result]


def group_glyphs(glyphs):
    """Split the glyphs into maximal groups of consecutive glyphs that have
    the same face and size. Returns a list of (face, size, glyphs) tuples.
    """
    groups = []
    for glyph in glyphs:
        if groups and groups[-1][0] is glyph.face and groups[-1][1] == glyph.size:
            groups[-1][2].append(glyph)
        else:
            groups.append((glyph.face, glyph.size, [glyph]))
    return groups


def shape_line(line, shaper):
    """Shape the glyphs of the given line, setting ``line.shaped``."""
    shaped = []
    for face, size, glyphs in group_glyphs(line.glyphs):
        if face is None:
            # Blank whitespace, not shaped
            shaped.extend(ShapedGlyph(0, g.advance) for g in glyphs)
            continue
        codepoints = [g.codepoint for g in glyphs]
        result = shaper.shape(face, size, codepoints)
        if len(result) != len(codepoints):
            raise RuntimeError(
                f"Shaper returned {len(result)} glyphs for {len(codepoints)} characters."
            )
        shaped.extend(ShapedGlyph(*item) for item in result)
    line.shaped = shaped
    return shaped
