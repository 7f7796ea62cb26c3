"""
The measuring stage: resolve each character of the input runs to a font face
and get its metrics. The result is a flat list of glyph records; run
boundaries are not visible downstream.
"""

import unicodedata

from ..utils import logger
from ._fontface import DEFAULT_LOAD_FLAGS, ZERO_METRICS, GlyphMetrics
from ._style import as_runs


NEWLINE = 0x0A
SPACE = 0x20
MISSING_GLYPH = 0x00

# Marker kinds
MARKER_NEWLINE = "newline"
MARKER_CONTROL = "control"
MARKER_MISSING = "missing"


class GlyphRecord:
    """A measured glyph. This is a low-level object, produced by measure_runs().

    A record with a marker kind is a newline, a control character, or the
    placeholder for a character that no face supports. Markers have zero
    metrics, never enter a line, and are never rasterized.

    Whitespace that no face supports is not a marker: it has no face and
    no ink, but it takes space on the line.
    """

    __slots__ = [
        "codepoint",
        "color",
        "face",
        "line_height",
        "marker",
        "metrics",
        "size",
    ]

    def __init__(self, codepoint, metrics, face, size, line_height, color, marker=None):
        self.codepoint = codepoint
        self.metrics = metrics
        self.face = face
        self.size = size
        self.line_height = line_height
        self.color = color
        self.marker = marker

    def __repr__(self):
        char = chr(self.codepoint) if self.codepoint >= 0x20 else hex(self.codepoint)
        kind = f" {self.marker}" if self.marker else ""
        return f"<GlyphRecord {char!r}{kind} {self.size}px>"

    @property
    def char(self):
        """The character as a str."""
        return chr(self.codepoint)

    @property
    def advance(self):
        """The horizontal advance in pixels."""
        return self.metrics.advance

    @property
    def ink_width(self):
        """The width of the glyph's ink in pixels."""
        return self.metrics.width

    @property
    def is_marker(self):
        return self.marker is not None

    @property
    def is_newline(self):
        return self.marker == MARKER_NEWLINE

    @property
    def is_missing(self):
        return self.marker == MARKER_MISSING


def normalize_newlines(text):
    """Replace CRLF and CR with LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _marker(codepoint, style, kind):
    return GlyphRecord(
        codepoint, ZERO_METRICS, None, style.size, style.line_height, style.color, kind
    )


def _blank(codepoint, style, load_flags):
    # Whitespace without a glyph: as wide as a space, if any face has one
    metrics = ZERO_METRICS
    for face in style.faces:
        if face.has_codepoint(SPACE):
            space = face.measure(SPACE, style.size, load_flags)
            metrics = GlyphMetrics(space.advance)
            break
    return GlyphRecord(
        codepoint, metrics, None, style.size, style.line_height, style.color
    )


def measure_runs(runs, load_flags=DEFAULT_LOAD_FLAGS):
    """Measure the given runs, returning a list of GlyphRecord objects.

    Parameters:
        runs (list): a list of Run objects or (text, style) tuples.
        load_flags (int): the FreeType load flags to measure with.

    A character that is not supported by any of the style's faces is
    replaced by a placeholder, and a warning is logged (once per character
    per call). Whitespace (e.g. tabs) that no face supports becomes a blank
    glyph instead, so it still separates words.
    """
    warned_codepoints = set()

    glyphs = []
    for run in as_runs(runs):
        style = run.style
        for c in normalize_newlines(run.text):
            codepoint = ord(c)
            if codepoint == NEWLINE:
                glyphs.append(_marker(NEWLINE, style, MARKER_NEWLINE))
                continue
            is_space = c.isspace()
            if not is_space and unicodedata.category(c) == "Cc":
                glyphs.append(_marker(codepoint, style, MARKER_CONTROL))
                continue
            # Select the first face that supports this character
            for face in style.faces:
                if face.has_codepoint(codepoint):
                    break
            else:
                if is_space:
                    glyphs.append(_blank(codepoint, style, load_flags))
                    continue
                if codepoint not in warned_codepoints:
                    warned_codepoints.add(codepoint)
                    names = ", ".join(
                        f'"{getattr(f, "name", f)}"' for f in style.faces
                    )
                    logger.warning(
                        f"No available font face for character 0x{codepoint:X}; "
                        f"candidates are {names or 'none'}"
                    )
                glyphs.append(_marker(MISSING_GLYPH, style, MARKER_MISSING))
                continue
            metrics = face.measure(codepoint, style.size, load_flags)
            glyphs.append(
                GlyphRecord(
                    codepoint, metrics, face, style.size, style.line_height, style.color
                )
            )
    return glyphs
