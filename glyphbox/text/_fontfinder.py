"""
Find font files on the system, by scanning the directories where each OS
keeps its fonts. We don't ask the OS (registry, fontconfig) which fonts are
installed, so we may find a few more fonts than it would report.
"""

import os
import sys

from ..utils import logger
from ._fontface import FontFace


FONT_EXTENSIONS = ".ttf", ".otf"


def system_fonts_disabled():
    """Whether system fonts are disabled via ``GLYPHBOX_DISABLE_SYSTEM_FONTS``.
    Useful in tests, to get the same results on every machine.
    """
    value = os.getenv("GLYPHBOX_DISABLE_SYSTEM_FONTS", "").strip().lower()
    return value in ("1", "true", "yes")


def get_system_font_directories():
    """Get the set of existing font directories for the current platform."""
    home = os.path.expanduser("~")
    if sys.platform.startswith("win"):
        candidates = [
            os.path.join(os.getenv("WINDIR", "C:/Windows"), "Fonts"),
            os.path.join(os.getenv("LOCALAPPDATA", ""), "Microsoft/Windows/Fonts"),
        ]
    else:
        data_home = os.getenv("XDG_DATA_HOME") or os.path.join(home, ".local/share")
        candidates = [
            "/usr/share/fonts",
            "/usr/local/share/fonts",
            os.path.join(data_home, "fonts"),
            os.path.join(home, ".fonts"),
        ]
        if sys.platform.startswith("darwin"):
            candidates += [
                "/Library/Fonts",
                "/System/Library/Fonts",
                os.path.join(home, "Library/Fonts"),
            ]
    return {os.path.abspath(d) for d in candidates if os.path.isdir(d)}


def find_fonts_paths(directory, recursive):
    """Scan a directory for font files.

    Returns two sets (dir_paths, file_paths): the scanned directories, and
    the paths of the .ttf and .otf files found in them.
    """
    directory = str(directory)
    if not os.path.isdir(directory):
        raise OSError(f"Not a directory: {directory}")
    if recursive:
        walker = os.walk(directory)
    else:
        walker = [(directory, None, os.listdir(directory))]
    dir_paths, file_paths = set(), set()
    for dirpath, _, filenames in walker:
        dir_paths.add(dirpath)
        file_paths.update(
            os.path.join(dirpath, fname)
            for fname in filenames
            if fname.lower().endswith(FONT_EXTENSIONS)
        )
    return dir_paths, file_paths


def find_system_fonts():
    """Get a sorted list of the paths of all font files on the system."""
    if system_fonts_disabled():
        return []
    paths = set()
    for directory in get_system_font_directories():
        paths.update(find_fonts_paths(directory, True)[1])
    return sorted(paths)


def find_font(name=None):
    """Find a system font and return it as a FontFace, or None if there is no match.

    The name is matched (case insensitive) against the file name, e.g.
    "DejaVuSans" or "Arial". An exact match of the file's base name is
    preferred over a partial one. If name is None, the first usable font is returned.
    """
    paths = find_system_fonts()
    if name:
        name = name.lower()
        stems = [os.path.splitext(os.path.basename(p))[0].lower() for p in paths]
        exact = [p for p, stem in zip(paths, stems) if stem == name]
        partial = [p for p, stem in zip(paths, stems) if name in stem and stem != name]
        paths = exact + partial
    for path in paths:
        face = FontFace(path)
        try:
            face.name  # This makes FreeType open the file
        except Exception as err:
            logger.debug(f"Skipping unusable font {path}: {err}")
            continue
        return face
    return None
