import logging

from glyphbox import Style, WrapMode
from glyphbox.text import measure_runs, break_lines
from glyphbox.text._wrap import resolve_wrap_mode

from fakes import FakeFace


def measure(text, size=10, line_height=None):
    return measure_runs([(text, Style(FakeFace(), size, line_height))])


def line_texts(lines):
    return [line.text for line in lines]


def test_wrap_mode_resolve(caplog):
    assert resolve_wrap_mode(None) == WrapMode.none
    assert resolve_wrap_mode("none") == WrapMode.none
    assert resolve_wrap_mode("break-word") == WrapMode.break_word
    assert resolve_wrap_mode("Break_Character") == WrapMode.break_character
    assert resolve_wrap_mode(WrapMode.break_word) == WrapMode.break_word
    assert not caplog.records

    with caplog.at_level(logging.WARNING, logger="glyphbox"):
        assert resolve_wrap_mode("zigzag") == WrapMode.none
        assert resolve_wrap_mode(3) == WrapMode.none
    assert len(caplog.records) == 2
    assert "zigzag" in caplog.records[0].getMessage()


def test_no_wrap():
    glyphs = measure("Hello World")
    lines = break_lines(glyphs, 35, "none")
    assert line_texts(lines) == ["Hello World"]
    assert lines[0].width == 110

    # Only newlines start a new line
    lines = break_lines(measure("A\nB\n\nC"), 35, "none")
    assert line_texts(lines) == ["A", "B", "", "C"]
    assert len(lines) == "A\nB\n\nC".count("\n") + 1

    # Always at least one line
    lines = break_lines([], 100)
    assert len(lines) == 1
    assert lines[0].text == ""


def test_break_character():
    lines = break_lines(measure("Hello World"), 35, "break-character")
    assert line_texts(lines) == ["Hel", "lo ", "Wor", "ld"]

    # Each line's ink fits the box, counting the last glyph's ink only
    for line in lines:
        if len(line.glyphs) > 1:
            last = line.glyphs[-1]
            assert line.width - last.advance + last.ink_width <= 35

    # A glyph wider than the box does not produce empty lines
    lines = break_lines(measure("abc"), 5, "break-character")
    assert line_texts(lines) == ["a", "b", "c"]


def test_break_word():
    lines = break_lines(measure("Hello World"), 75, "break-word")
    assert line_texts(lines) == ["Hello ", "World"]
    assert lines[0].width == 60
    assert lines[1].width == 50

    lines = break_lines(measure("aa bb cc dd"), 55, "break-word")
    assert line_texts(lines) == ["aa bb ", "cc dd"]

    # Breaks after hyphens
    lines = break_lines(measure("well-known"), 75, "break-word")
    assert line_texts(lines) == ["well-", "known"]


def test_break_word_long_word():
    # A word that is wider than the box stays on its line
    lines = break_lines(measure("Supercalifragilistic"), 35, "break-word")
    assert line_texts(lines) == ["Supercalifragilistic"]

    lines = break_lines(measure("a Supercalifragilistic b"), 35, "break-word")
    assert line_texts(lines) == ["a ", "Supercalifragilistic ", "b"]


def test_break_word_keeps_punctuation():
    # The comma cannot start a line, so it moves along with its word
    lines = break_lines(measure("aaa bbb,"), 75, "break-word")
    assert line_texts(lines) == ["aaa ", "bbb,"]


def test_newlines_and_line_height():
    glyphs = measure_runs(
        [
            ("small\n", Style(FakeFace(), 10)),
            ("\n", Style(FakeFace(), 10, 30)),
            ("big", Style(FakeFace(), 20)),
        ]
    )
    lines = break_lines(glyphs, 1000)
    assert line_texts(lines) == ["small", "", "big"]
    assert lines[0].line_height == 12
    assert lines[1].line_height == 30  # An empty line gets its height from the newline
    assert lines[2].line_height == 30  # The newline also sets a minimum for the next line
    assert lines[2].width == 60


def test_markers_are_skipped(caplog):
    face = FakeFace(codepoints=[ord("a"), ord("b")])
    with caplog.at_level(logging.WARNING, logger="glyphbox"):
        glyphs = measure_runs([("a?\x07b", Style(face, 10))])
        caplog.clear()
        lines = break_lines(glyphs, 1000)

    assert line_texts(lines) == ["ab"]
    # The missing glyph is skipped silently, the control character with a warning
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 1
    assert "0x7" in messages[0]


def test_nul_is_reported(caplog):
    glyphs = measure("a\x00b")
    with caplog.at_level(logging.WARNING, logger="glyphbox"):
        lines = break_lines(glyphs, 1000)
    assert line_texts(lines) == ["ab"]
    messages = [r.getMessage() for r in caplog.records]
    assert len(messages) == 1
    assert "control character 0x0" in messages[0]


def test_break_word_at_tabs():
    lines = break_lines(measure("aaa\tbbb"), 45, "break-word")
    assert line_texts(lines) == ["aaa\t", "bbb"]

    # Also when no face has a glyph for the tab
    face = FakeFace(codepoints=[ord("a"), ord("b"), ord(" ")])
    glyphs = measure_runs([("aaa\tbbb", Style(face, 10))])
    lines = break_lines(glyphs, 45, "break-word")
    assert line_texts(lines) == ["aaa\t", "bbb"]
    assert lines[0].width == 40


def test_line_width_after_pop():
    lines = break_lines(measure("ab cd", line_height=15), 1000)
    line = lines[0]
    assert line.width == 50
    glyph = line.pop()
    assert glyph.char == "d"
    assert line.width == 40
    line.extend([glyph])
    assert line.width == 50
    assert line.line_height == 15


if __name__ == "__main__":
    test_no_wrap()
    test_break_character()
    test_break_word()
    test_break_word_long_word()
    test_break_word_keeps_punctuation()
    test_newlines_and_line_height()
    test_break_word_at_tabs()
    test_line_width_after_pop()
