"""
Utility functions for glyphbox.

.. currentmodule:: glyphbox.utils

.. autosummary::
    :toctree: utils/

    Color
    enums

"""

import os
import logging

from .color import Color  # noqa: F401
from . import enums  # noqa: F401


logger = logging.getLogger("glyphbox")


def _set_log_level():
    # Warnings by default, or the level from the environment (name or number)
    level = os.getenv("GLYPHBOX_LOG_LEVEL", "").strip()
    logger.setLevel(logging.WARNING)
    if not level:
        return
    try:
        logger.setLevel(int(level) if level.isdigit() else level.upper())
    except (TypeError, ValueError):
        logger.warning(f"Invalid glyphbox log level: {level}")


_set_log_level()


def assert_type(name, value, *classes):
    """Raise a TypeError if value is not an instance of the given classes.
    If the first class is None, None is allowed too.
    """
    allow_none = classes[0] is None
    if allow_none:
        classes = classes[1:]
        if value is None:
            return
    if isinstance(value, classes):
        return
    expected = " | ".join(cls.__name__ for cls in classes)
    if allow_none:
        expected += " or None"
    subject = f" '{name}' to be" if name else ""
    raise TypeError(
        f"Expected{subject} an instance of {expected}, "
        f"but got {type(value).__name__} object."
    )
