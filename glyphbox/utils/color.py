"""Provides a simple color class, used for text colors."""


def _parse_hex(hexdigits):
    n = len(hexdigits)
    if n in (3, 4):
        return [int(c, 16) / 15 for c in hexdigits]
    elif n in (6, 8):
        return [int(hexdigits[i : i + 2], 16) / 255 for i in range(0, n, 2)]
    raise ValueError(f"Expecting 3, 4, 6, or 8 hex digits, got {n}.")


def _parse_css_function(color):
    # E.g. "rgb(255, 0, 0)" or "rgba(100%, 0%, 0%, 0.5)"
    name, _, args = color.partition("(")
    parts = args.rstrip(")").split(",")
    if len(parts) not in (3, 4):
        raise ValueError(f"CSS color {name}(..) must have 3 or 4 elements, not {len(parts)}")
    values = []
    for i, part in enumerate(parts):
        part = part.strip()
        if part.endswith("%"):
            values.append(float(part[:-1]) / 100)
        elif i < 3:
            values.append(float(part) / 255)  # rgb in 0..255, alpha in 0..1
        else:
            values.append(float(part))
    return values


class Color:
    """A representation of a text color (in the sRGB colorspace).

    The color is stored as a tuple of 4 floats (rgba), which makes it hashable,
    so that it can be part of a glyph cache key. It can be instantiated in a
    variety of ways:

        * `Color(r, g, b, a)` providing rgba values between 0 and 1.
        * `Color(r, g, b)` providing rgb, alpha is 1.
        * `Color(gray)` grayscale intensity.
        * `Color((r, g, b, a))` any of the above as a tuple or list.
        * `Color("red")` a few named colors.
        * `Color("#ff0000")`, `Color("#ff0000ff")`, `Color("#f00")`, `Color("#f00f")`.
        * `Color("rgb(255, 0, 0)")` or `Color("rgba(100%, 0%, 0%, 0.5)")`.

    """

    __slots__ = ["_val"]

    def __init__(self, *args):
        if len(args) == 1 and isinstance(args[0], Color):
            self._val = args[0]._val
        elif len(args) == 1 and isinstance(args[0], str):
            self._val = self._from_values(self._parse_str(args[0]))
        elif len(args) == 1 and not isinstance(args[0], (int, float)):
            # Assume it's an iterable, may raise TypeError
            self._val = self._from_values(args[0])
        else:
            self._val = self._from_values(args)

    def __repr__(self):
        f = lambda v: f"{v:0.4f}".rstrip("0").ljust(3, "0")  # noqa: E731
        return f"Color({', '.join(f(v) for v in self._val)})"

    def __len__(self):
        return 4

    def __getitem__(self, index):
        return self._val[index]

    def __iter__(self):
        return iter(self._val)

    def __eq__(self, other):
        if not isinstance(other, Color):
            try:
                other = Color(other)
            except (TypeError, ValueError):
                return False
        return self._val == other._val

    def __hash__(self):
        return hash(self._val)

    @staticmethod
    def _from_values(values):
        values = [float(v) for v in values]
        if len(values) == 1:
            values = values * 3
        if len(values) == 3:
            values.append(1.0)
        if len(values) != 4:
            raise ValueError(f"Cannot parse color tuple with {len(values)} values")
        r, g, b, a = values
        return (r, g, b, max(0.0, min(1.0, a)))

    @staticmethod
    def _parse_str(color):
        color = color.lower().strip()
        if color.startswith("#"):
            return _parse_hex(color[1:])
        elif color.startswith(("rgb(", "rgba(")):
            return _parse_css_function(color)
        try:
            return _parse_hex(NAMED_COLORS[color][1:])
        except KeyError:
            raise ValueError(f"Unknown color: '{color}'") from None

    @property
    def rgba(self):
        """The RGBA tuple (values between 0 and 1)."""
        return self._val

    r = property(lambda self: self._val[0], doc="The red value.")
    g = property(lambda self: self._val[1], doc="The green value.")
    b = property(lambda self: self._val[2], doc="The blue value.")
    a = property(lambda self: self._val[3], doc="The alpha value, between 0 and 1.")

    @property
    def hexa(self):
        """The hex string including alpha, e.g. "#00ff00ff". Values are clipped."""
        ints = [round(max(0.0, min(1.0, v)) * 255) for v in self._val]
        return "#" + "".join(f"{i:02x}" for i in ints)


NAMED_COLORS = {
    "transparent": "#00000000",
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "lime": "#00FF00",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "cyan": "#00FFFF",
    "magenta": "#FF00FF",
    "gray": "#808080",
    "grey": "#808080",
    "orange": "#FFA500",
    "purple": "#800080",
    "cornflowerblue": "#6495ED",
}
