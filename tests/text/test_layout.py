from pytest import raises, skip

from glyphbox import Style, Color, LayoutContext, DrawCommand, layout_text

from fakes import FakeFace, FakeShaper, find_latin_font


def make_context():
    return LayoutContext(shaper=FakeShaper())


def test_layout_hello_world():
    context = make_context()
    face = FakeFace()
    style = Style(face, 10, color="red")

    commands = list(context.layout([("Hello World", style)], (0, 0, 1000, 100)))

    # The space has no image
    assert len(commands) == 10
    assert all(isinstance(c, DrawCommand) for c in commands)
    assert all(c.color == Color("red") for c in commands)

    xs = [c.position[0] for c in commands]
    assert xs == [1, 11, 21, 31, 41, 61, 71, 81, 91, 101]

    # Baseline at the line height, minus the bearing
    ys = {c.position[1] for c in commands}
    assert ys == {12 - 7}

    # Commands unpack like a tuple
    image, (x, y), color = commands[0]
    assert image.data.shape == (10, 8, 4)
    assert (x, y) == (1, 5)


def test_layout_box_offset():
    context = make_context()
    style = Style(FakeFace(), 10)
    commands = list(context.layout([("ab", style)], (100, 50, 1000, 100)))
    assert [c.position for c in commands] == [(101, 55), (111, 55)]


def test_layout_newlines():
    context = make_context()
    style = Style(FakeFace(), 10)
    commands = list(context.layout([("A\nB", style)], (0, 0, 1000, 100)))
    assert [c.position for c in commands] == [(1, 5), (1, 17)]

    # Empty lines take space too
    commands = list(context.layout([("A\n\nB", style)], (0, 0, 1000, 100)))
    assert [c.position for c in commands] == [(1, 5), (1, 29)]


def test_layout_wrapping():
    context = make_context()
    style = Style(FakeFace(), 10)
    runs = [("Hello World", style)]

    commands = list(context.layout(runs, (0, 0, 75, 100), "break-word"))
    assert len(commands) == 10
    positions = [c.position for c in commands]
    assert positions[:5] == [(1, 5), (11, 5), (21, 5), (31, 5), (41, 5)]
    assert positions[5:] == [(1, 17), (11, 17), (21, 17), (31, 17), (41, 17)]

    commands = list(context.layout(runs, (0, 0, 1, 100), "break-character"))
    assert len({c.position[1] for c in commands}) == 10

    commands = list(context.layout(runs, (0, 0, 1, 100), "none"))
    assert len({c.position[1] for c in commands}) == 1


def test_layout_mixed_line_heights():
    context = make_context()
    small = Style(FakeFace(), 10)
    big = Style(FakeFace(), 20)
    commands = list(context.layout([("a", small), ("b", big)], (0, 0, 1000, 100)))
    # Both glyphs share the baseline of the tallest glyph on the line
    assert [c.position for c in commands] == [(1, 24 - 7), (11, 24 - 7)]


def test_layout_shaping():
    context = make_context()
    face = FakeFace()
    style = Style(face, 10)

    commands = list(context.layout([("fix", style)], (0, 0, 1000, 100), shaping=True))

    # The ligature replaces two glyphs
    assert len(commands) == 2
    # Advances come from the shaper, the vertical offset from the bitmap
    assert [c.position for c in commands] == [(1, 12 - 8), (12, 12 - 8)]
    assert face.rasterize_calls == [(0xFB01, 10, True), (ord("x"), 10, True)]


def test_layout_is_lazy():
    context = make_context()
    face = FakeFace()
    style = Style(face, 10)

    gen = context.layout([("abcdef", style)], (0, 0, 1000, 100))
    assert not face.rasterize_calls
    next(gen)
    next(gen)
    assert len(face.rasterize_calls) == 2

    # Stopping early ends the layout pass
    gen.close()
    assert not context.cache._active_passes


def test_layout_uses_cache():
    context = make_context()
    face = FakeFace()
    style = Style(face, 10)
    runs = [("abab", style)]

    commands1 = list(context.layout(runs, (0, 0, 1000, 100)))
    commands2 = list(context.layout(runs, (0, 0, 1000, 100)))
    assert len(face.rasterize_calls) == 2
    assert [c.image for c in commands1] == [c.image for c in commands2]
    assert commands1[0].image is commands1[2].image

    # Purging means rasterizing again
    context.purge()
    assert commands1[0].image.disposed
    list(context.layout(runs, (0, 0, 1000, 100)))
    assert len(face.rasterize_calls) == 4


def test_layout_purge_while_consuming():
    context = make_context()
    style = Style(FakeFace(), 10)

    gen = context.layout([("abc", style)], (0, 0, 1000, 100))
    first = next(gen)
    context.purge()
    # The images of the in-flight layout remain valid
    assert not first.image.disposed
    rest = list(gen)
    assert len(rest) == 2
    assert first.image.disposed


def test_layout_missing_glyphs():
    context = make_context()
    face = FakeFace(codepoints=[ord("a")])
    style = Style(face, 10)
    commands = list(context.layout([("a?a", style)], (0, 0, 1000, 100)))
    # The missing glyph takes no space
    assert [c.position[0] for c in commands] == [1, 11]


def test_layout_tabs():
    context = make_context()
    face = FakeFace(codepoints=[ord("a"), ord("b"), ord(" ")])
    style = Style(face, 10)

    commands = list(context.layout([("a\tb", style)], (0, 0, 1000, 100)))
    assert [c.position[0] for c in commands] == [1, 21]

    commands = list(context.layout([("a\tb", style)], (0, 0, 1000, 100), shaping=True))
    assert [c.position[0] for c in commands] == [1, 22]

    # The tab is never rasterized
    assert all(index != ord("\t") for index, _, _ in face.rasterize_calls)


def test_layout_input_validation():
    context = make_context()
    style = Style(FakeFace(), 10)

    # Errors are raised at call time, not when consuming
    with raises(TypeError):
        context.layout("text", (0, 0, 100, 100))
    with raises(TypeError):
        context.layout([("text", style)], None)
    with raises(TypeError):
        context.layout([("text", "style")], (0, 0, 100, 100))
    with raises(TypeError):
        LayoutContext(word_break_rules=" -")


def test_layout_empty():
    context = make_context()
    style = Style(FakeFace(), 10)
    assert list(context.layout([], (0, 0, 100, 100))) == []
    assert list(context.layout([("", style)], (0, 0, 100, 100))) == []
    assert list(context.layout([("   \n ", style)], (0, 0, 100, 100))) == []


def test_layout_lines():
    context = make_context()
    style = Style(FakeFace(), 10)
    lines = context.layout_lines([("aa bb", style)], (0, 0, 35, 100), "break-word")
    assert [line.text for line in lines] == ["aa ", "bb"]
    assert all(line.shaped is None for line in lines)

    lines = context.layout_lines([("aa", style)], (0, 0, 35, 100), shaping=True)
    assert [s.x_advance for s in lines[0].shaped] == [11, 11]


def test_context_settings_purge():
    context = make_context()
    style = Style(FakeFace(), 10)
    list(context.layout([("a", style)], (0, 0, 100, 100)))
    assert len(context.cache) == 1

    context.load_flags = context.load_flags
    assert len(context.cache) == 0
    assert context.cache.generation == 1

    list(context.layout([("a", style)], (0, 0, 100, 100)))
    context.render_mode = context.render_mode
    assert len(context.cache) == 0


def test_contexts_are_independent():
    context1 = make_context()
    context2 = make_context()
    face = FakeFace()
    style = Style(face, 10)
    list(context1.layout([("a", style)], (0, 0, 100, 100)))
    list(context2.layout([("a", style)], (0, 0, 100, 100)))
    assert len(face.rasterize_calls) == 2


def test_layout_with_real_font():
    face = find_latin_font()
    if face is None:
        skip("No fonts available on this system")

    style = Style(face, 16)
    runs = [("Hello world", style)]
    commands = list(layout_text(runs, (10, 10, 1000, 100)))
    assert len(commands) == 10
    xs = [c.position[0] for c in commands]
    assert xs == sorted(xs)
    for c in commands:
        assert c.image.width > 0
        assert c.image.height > 0
        assert c.image.data.max() > 0

    shaped = list(layout_text(runs, (10, 10, 1000, 100), shaping=True))
    assert len(shaped) == 10


if __name__ == "__main__":
    test_layout_hello_world()
    test_layout_box_offset()
    test_layout_newlines()
    test_layout_wrapping()
    test_layout_mixed_line_heights()
    test_layout_shaping()
    test_layout_is_lazy()
    test_layout_uses_cache()
    test_layout_purge_while_consuming()
    test_layout_missing_glyphs()
    test_layout_tabs()
    test_layout_input_validation()
    test_layout_empty()
    test_layout_lines()
    test_context_settings_purge()
    test_contexts_are_independent()
    test_layout_with_real_font()
