"""
Image factories turn a rasterized glyph (an RGBA array) into an image that
can be displayed, and dispose of such images when the glyph cache is purged.
"""

import numpy as np
import wgpu


class GlyphImage:
    """A simple image that holds its pixels in a numpy array of shape (h, w, 4)."""

    __slots__ = ["_data"]

    def __init__(self, data):
        self._data = data

    def __repr__(self):
        state = "disposed" if self._data is None else f"{self.width}x{self.height}"
        return f"<GlyphImage {state} at {hex(id(self))}>"

    @property
    def data(self):
        """The RGBA pixel array, or None if the image is disposed."""
        return self._data

    @property
    def width(self):
        return 0 if self._data is None else self._data.shape[1]

    @property
    def height(self):
        return 0 if self._data is None else self._data.shape[0]

    @property
    def disposed(self):
        return self._data is None

    def dispose(self):
        self._data = None


class ArrayImageFactory:
    """Image factory that creates GlyphImage objects. This is the default."""

    def create(self, rgba):
        """Create an image from an RGBA uint8 array of shape (h, w, 4)."""
        return GlyphImage(np.ascontiguousarray(rgba, np.uint8))

    def dispose(self, image):
        """Release the given image."""
        image.dispose()


class WgpuImageFactory:
    """Image factory that uploads glyphs to wgpu textures.

    The textures have format rgba8unorm-srgb, and can be bound for sampling.
    """

    def __init__(self, device):
        self._device = device

    @property
    def device(self):
        """The wgpu device that the textures are created on."""
        return self._device

    def create(self, rgba):
        """Create a wgpu texture from an RGBA uint8 array of shape (h, w, 4)."""
        rgba = np.ascontiguousarray(rgba, np.uint8)
        h, w = rgba.shape[0], rgba.shape[1]
        size = (w, h, 1)
        texture = self._device.create_texture(
            size=size,
            format=wgpu.TextureFormat.rgba8unorm_srgb,
            usage=wgpu.TextureUsage.COPY_DST | wgpu.TextureUsage.TEXTURE_BINDING,
            sample_count=1,
            mip_level_count=1,
            dimension=wgpu.TextureDimension.d2,
        )
        self._device.queue.write_texture(
            {"texture": texture, "origin": (0, 0, 0), "mip_level": 0},
            rgba,
            {"bytes_per_row": w * 4, "rows_per_image": h},
            size,
        )
        return texture

    def dispose(self, texture):
        """Destroy the given texture."""
        texture.destroy()
