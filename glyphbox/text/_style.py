from ..utils import Color


class Style:
    """
    An object that specifies how a run of text looks. Immutable.

    Parameters:
        faces (FontFace, tuple): A font face, or a list of font faces in
            decreasing order of priority. For each character, the first face
            that has a glyph for it is used.
        size (int): The font size in pixels.
        line_height (float): The height of a line in pixels. Default 1.2 times the size.
        color (Color, str, tuple): The text color (including alpha). Default white.
    """

    __slots__ = ["_color", "_faces", "_hash", "_line_height", "_size"]

    def __init__(self, faces, size, line_height=None, color="white"):
        # Check faces
        if isinstance(faces, (tuple, list)):
            faces = tuple(faces)
        else:
            faces = (faces,)
        for face in faces:
            if not hasattr(face, "has_codepoint"):
                cls = type(face).__name__
                raise TypeError(f"Style faces must be font faces, not '{cls}'")

        # Check size
        if isinstance(size, bool) or not isinstance(size, int):
            cls = type(size).__name__
            raise TypeError(f"Style size must be an int, not '{cls}'")
        if size <= 0:
            raise ValueError(f"Style size must be positive, got {size}")

        # Check line height
        if line_height is None:
            line_height = 1.2 * size
        elif not isinstance(line_height, (int, float)) or isinstance(
            line_height, bool
        ):
            cls = type(line_height).__name__
            raise TypeError(f"Style line_height must be a number, not '{cls}'")
        if line_height < 0:
            raise ValueError(f"Style line_height cannot be negative, got {line_height}")

        self._faces = faces
        self._size = size
        self._line_height = float(line_height)
        self._color = Color(color)
        self._hash = hash((faces, size, self._line_height, self._color))

    def __repr__(self):
        faces = ", ".join(repr(getattr(f, "name", f)) for f in self._faces)
        return f"<Style {faces} {self._size}px at {hex(id(self))}>"

    def __eq__(self, other):
        if not isinstance(other, Style):
            return NotImplemented
        return (
            self._faces == other._faces
            and self._size == other._size
            and self._line_height == other._line_height
            and self._color == other._color
        )

    def __hash__(self):
        return self._hash

    def copy(self, **kwargs):
        """Make a copy of the style, with given kwargs replaced."""
        d = {
            "faces": self._faces,
            "size": self._size,
            "line_height": self._line_height,
            "color": self._color,
        }
        for k, v in kwargs.items():
            if v is not None:
                d[k] = v
        return self.__class__(**d)

    @property
    def faces(self):
        """The tuple of font face candidates, in decreasing order of priority."""
        return self._faces

    @property
    def size(self):
        """The font size in pixels."""
        return self._size

    @property
    def line_height(self):
        """The line height in pixels."""
        return self._line_height

    @property
    def color(self):
        """The text color."""
        return self._color


class Run:
    """A piece of text with a single style. Behaves like a ``(text, style)`` tuple."""

    __slots__ = ["style", "text"]

    def __init__(self, text, style):
        if not isinstance(text, str):
            raise TypeError(f"Run text must be str, not '{type(text).__name__}'")
        if not isinstance(style, Style):
            raise TypeError(f"Run style must be Style, not '{type(style).__name__}'")
        self.text = text
        self.style = style

    def __repr__(self):
        return f"<Run {self.text!r} {self.style!r}>"

    def __iter__(self):
        return iter((self.text, self.style))


def as_runs(runs):
    """Convert an iterable of Run objects or (text, style) tuples to a list of Run objects."""
    if isinstance(runs, (str, Run)):
        raise TypeError("Expected a list of runs, not a single run or str.")
    result = []
    for run in runs:
        if isinstance(run, Run):
            result.append(run)
        else:
            try:
                text, style = run
            except (TypeError, ValueError):
                cls = type(run).__name__
                raise TypeError(
                    f"A run must be a (text, style) tuple, not '{cls}'"
                ) from None
            result.append(Run(text, style))
    return result


class Box:
    """The destination rectangle for a layout."""

    __slots__ = ["height", "width", "x", "y"]

    def __init__(self, x=0.0, y=0.0, width=0.0, height=0.0):
        self.x = float(x)
        self.y = float(y)
        self.width = float(width)
        self.height = float(height)

    def __repr__(self):
        return f"<Box({self.x:0.5g}, {self.y:0.5g}, {self.width:0.5g}, {self.height:0.5g})>"

    def __iter__(self):
        return iter((self.x, self.y, self.width, self.height))

    @classmethod
    def from_any(cls, box):
        """Get a Box from a Box or an (x, y, width, height) tuple."""
        if isinstance(box, Box):
            return box
        try:
            x, y, w, h = box
        except (TypeError, ValueError):
            cls_name = type(box).__name__
            raise TypeError(
                f"Box must be a Box or (x, y, width, height) tuple, not '{cls_name}'"
            ) from None
        return cls(x, y, w, h)
