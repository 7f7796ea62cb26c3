"""
The line breaking stage: split the measured glyphs into lines.
"""

from ..utils import logger
from ..utils.enums import WrapMode
from ._wordbreak import default_word_break_rules, is_word_break


class Line:
    """A line of glyph records. This is a low-level object, produced by break_lines().

    The width is the sum of the advances of the glyphs. It is kept up to date
    by append(), pop() and extend().
    """

    __slots__ = ["glyphs", "min_line_height", "shaped", "width"]

    def __init__(self, min_line_height=0.0):
        self.glyphs = []
        self.width = 0.0
        self.min_line_height = min_line_height  # Set from newlines, so empty lines have a height
        self.shaped = None  # Set by the shaping stage

    def __repr__(self):
        return f"<Line {self.text!r} width={self.width:0.5g}>"

    def __len__(self):
        return len(self.glyphs)

    @property
    def text(self):
        """The text on this line."""
        return "".join(g.char for g in self.glyphs)

    @property
    def line_height(self):
        """The height of this line: the largest line height of its glyphs."""
        return max([self.min_line_height] + [g.line_height for g in self.glyphs])

    def append(self, glyph):
        self.glyphs.append(glyph)
        self.width += glyph.advance

    def extend(self, glyphs):
        for glyph in glyphs:
            self.append(glyph)

    def pop(self):
        glyph = self.glyphs.pop()
        self.width -= glyph.advance
        return glyph


def resolve_wrap_mode(wrap_mode):
    """Get the WrapMode for the given value. Unknown values result in "none", with a warning."""
    if wrap_mode is None:
        return WrapMode.none
    if isinstance(wrap_mode, str):
        key = wrap_mode.lower().strip().replace("-", "_")
        if key in WrapMode.__fields__:
            return WrapMode[key]
    logger.warning(f"Not implemented wrap mode {wrap_mode!r}, treating as no wrap")
    return WrapMode.none


def break_lines(glyphs, width, wrap_mode=WrapMode.none, rules=None):
    """Break the given glyph records into a list of Line objects.

    Parameters:
        glyphs (list): the GlyphRecord objects, as produced by measure_runs().
        width (float): the width of the box to fit the text in.
        wrap_mode (str): see WrapMode.
        rules (WordBreakRules): the rules to find word boundaries with.

    There is always at least one line. Newlines in the text always start a new line.
    """
    wrap_mode = resolve_wrap_mode(wrap_mode)
    if rules is None:
        rules = default_word_break_rules

    lines = [Line()]

    for glyph in glyphs:
        if glyph.is_marker:
            if glyph.is_newline:
                line = lines[-1]
                line.min_line_height = max(line.min_line_height, glyph.line_height)
                lines.append(Line(glyph.line_height))
            elif not glyph.is_missing:
                logger.warning(
                    f"Not implemented control character 0x{glyph.codepoint:X}"
                )
            continue

        line = lines[-1]
        overflows = (
            glyph.ink_width > 0 and line.width + glyph.ink_width > width
        )

        if wrap_mode == WrapMode.none or not overflows:
            pass
        elif wrap_mode == WrapMode.break_character:
            if line.glyphs:
                line = Line()
                lines.append(line)
        elif wrap_mode == WrapMode.break_word:
            # Move the start of the current word to the next line
            word = []
            following = glyph
            while line.glyphs:
                tail = line.glyphs[-1]
                if is_word_break(following.codepoint, tail.codepoint, rules):
                    break
                word.append(line.pop())
                following = tail
            # If the word is the whole line, it's wider than the box. Keep it here.
            if line.glyphs:
                line = Line()
                lines.append(line)
            word.reverse()
            line.extend(word)

        line.append(glyph)

    return lines
