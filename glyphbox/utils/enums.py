"""
The enums used in glyphbox. The enums are available from the root ``glyphbox`` namespace.

.. currentmodule:: glyphbox.utils.enums

.. autosummary::
    :toctree: utils/enums

    WrapMode

"""

from wgpu.utils import BaseEnum


__all__ = ["WrapMode"]


class Enum(BaseEnum):
    """Enum base class for glyphbox."""


class WrapMode(Enum):
    """How text is wrapped when it does not fit the width of the box."""

    none = None  #: Never wrap. Lines only end at explicit line breaks.
    break_character = "break-character"  #: Wrap before any glyph that would overflow the box.
    break_word = "break-word"  #: Wrap at word boundaries. A word wider than the box overflows it.


# NOTE: Don't forget to add new enums to the toctree and __all__
