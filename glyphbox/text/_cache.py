import threading
import contextlib
from collections import namedtuple

import numpy as np

from ..utils import logger
from ._fontface import DEFAULT_LOAD_FLAGS, DEFAULT_RENDER_MODE
from ._images import ArrayImageFactory


GlyphKey = namedtuple("GlyphKey", ["glyph", "face", "size", "color", "shaped"])
GlyphKey.__doc__ = """The key for a rasterized glyph.

The glyph is a Unicode codepoint if shaped is False, and a glyph index in the
face if shaped is True. The shaped flag keeps these two apart.
"""


class GlyphEntry:
    """A rasterized glyph in the cache."""

    __slots__ = ["generation", "height", "image", "left", "top", "width"]

    def __init__(self, image, left, top, width, height, generation):
        self.image = image
        self.left = left  # bitmap offset from the pen position
        self.top = top  # bitmap offset from the baseline (up is positive)
        self.width = width
        self.height = height
        self.generation = generation  # the cache generation it was created in

    def __repr__(self):
        return f"<GlyphEntry {self.width}x{self.height} gen {self.generation}>"


class GlyphCache:
    """A cache for rasterized glyphs (thread-safe).

    Glyphs are rasterized on first use, and the resulting images are
    shared by all later layout passes. For a given key, the face's rasterizer
    is called at most once, until the cache is purged.

    Purging can be done at any time. Layout passes register themselves via
    ``layout_pass()``, and images that such a pass may still be using are
    disposed only after the pass has ended.
    """

    def __init__(
        self,
        image_factory=None,
        load_flags=DEFAULT_LOAD_FLAGS,
        render_mode=DEFAULT_RENDER_MODE,
    ):
        self._lock = threading.RLock()

        self.image_factory = image_factory or ArrayImageFactory()
        self.load_flags = load_flags
        self.render_mode = render_mode

        # key -> GlyphEntry, or None for blank glyphs (e.g. space)
        self._entries = {}

        # The generation is incremented on each purge
        self._generation = 0
        self._active_passes = {}  # generation -> count
        self._retired = []  # list of (generation, image_factory, entries)

        # Stats
        self._hits = 0
        self._misses = 0

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries

    @property
    def generation(self):
        """The current generation. Incremented with each purge."""
        return self._generation

    @property
    def image_count(self):
        """The number of images in the cache (excluding blank glyphs)."""
        with self._lock:
            return sum(1 for entry in self._entries.values() if entry is not None)

    @property
    def retired_count(self):
        """The number of purged images whose disposal waits for a layout pass to end."""
        with self._lock:
            return sum(len(entries) for _, _, entries in self._retired)

    @property
    def stats(self):
        """A dict with the number of hits and misses (i.e. rasterizations)."""
        with self._lock:
            return {"hits": self._hits, "misses": self._misses}

    def get_or_rasterize(self, key):
        """Get the GlyphEntry for the given GlyphKey, rasterizing the glyph if needed.

        Returns None if the glyph is blank (its bitmap has no width).
        Errors from the rasterizer or the image factory propagate.
        """
        with self._lock:
            try:
                entry = self._entries[key]
            except KeyError:
                pass
            else:
                self._hits += 1
                return entry

            self._misses += 1
            bitmap, left, top = key.face.rasterize(
                key.glyph, key.size, key.shaped, self.load_flags, self.render_mode
            )
            h, w = bitmap.shape[0], bitmap.shape[1]
            if w == 0 or h == 0:
                entry = None
            else:
                # Put the intensity in all four channels
                rgba = np.repeat(np.asarray(bitmap, np.uint8)[:, :, np.newaxis], 4, axis=2)
                image = self.image_factory.create(rgba)
                entry = GlyphEntry(image, left, top, w, h, self._generation)
            self._entries[key] = entry
            return entry

    @contextlib.contextmanager
    def layout_pass(self):
        """Context manager to mark a layout pass as in-flight. Yields the generation."""
        with self._lock:
            generation = self._generation
            self._active_passes[generation] = self._active_passes.get(generation, 0) + 1
        try:
            yield generation
        finally:
            with self._lock:
                self._active_passes[generation] -= 1
                if not self._active_passes[generation]:
                    del self._active_passes[generation]
                self._dispose_retired()

    def purge(self):
        """Remove all glyphs from the cache, and dispose their images.

        Images of glyphs that may still be used by an in-flight layout pass
        are disposed when that pass ends.
        """
        with self._lock:
            entries = [entry for entry in self._entries.values() if entry is not None]
            self._entries.clear()
            self._retired.append((self._generation, self.image_factory, entries))
            self._generation += 1
            logger.debug(f"Purged {len(entries)} glyphs from the glyph cache.")
            self._dispose_retired()

    def _dispose_retired(self):
        # A pass that started at generation g may use the entries retired at
        # generation g or later.
        oldest_pass = min(self._active_passes) if self._active_passes else None
        keep = []
        for item in self._retired:
            generation, image_factory, entries = item
            if oldest_pass is not None and oldest_pass <= generation:
                keep.append(item)
            else:
                for entry in entries:
                    image_factory.dispose(entry.image)
        self._retired = keep
