"""RGBA frame buffer used as the render target."""

from __future__ import annotations

from collections.abc import Sequence
from os import PathLike

import numpy as np

Rgba = tuple[int, int, int, int]


class FrameBuffer:
    """An RGBA image of fixed size, four bytes per pixel, rows top to bottom."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 4), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"FrameBuffer(width={self.width}, height={self.height})"

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def clear(self, color: Sequence[int]) -> None:
        """Fill every pixel with one colour."""
        self.pixels[:, :] = np.asarray(color, dtype=np.uint8)

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        """Set one pixel; coordinates outside the buffer are ignored."""
        if self._contains(x, y):
            self.pixels[y, x] = np.asarray(color, dtype=np.uint8)

    def get_pixel(self, x: int, y: int) -> Rgba | None:
        """Return the pixel's RGBA value, or None outside the buffer."""
        if not self._contains(x, y):
            return None
        r, g, b, a = self.pixels[y, x].tolist()
        return (r, g, b, a)

    def blend_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        """Alpha-blend a colour over the pixel; the result is always opaque."""
        background = self.get_pixel(x, y)
        if background is None:
            return
        alpha = np.float32(color[3]) / np.float32(255.0)
        inverse = np.float32(1.0) - alpha
        foreground = np.asarray(color[:3], dtype=np.float32)
        behind = np.asarray(background[:3], dtype=np.float32)
        blended = (foreground * alpha + behind * inverse).astype(np.uint8).tolist()
        self.set_pixel(x, y, (*blended, 255))

    def dimensions(self) -> tuple[int, int]:
        return (self.width, self.height)

    def as_bytes(self) -> bytes:
        """Return the raw RGBA bytes."""
        return self.pixels.tobytes()

    def copy_from(self, data: bytes | bytearray | memoryview) -> None:
        """Replace the whole buffer with raw RGBA bytes of exactly the same size."""
        incoming = np.frombuffer(bytes(data), dtype=np.uint8)
        if incoming.size != self.pixels.size:
            raise ValueError(
                f"expected {self.pixels.size} bytes of pixel data, got {incoming.size}"
            )
        self.pixels[...] = incoming.reshape(self.pixels.shape)

    def save_ppm(self, path: str | PathLike[str]) -> None:
        """Write the buffer as a binary PPM (P6), dropping the alpha channel."""
        header = f"P6\n{self.width} {self.height}\n255\n".encode("ascii")
        with open(path, "wb") as handle:
            handle.write(header)
            handle.write(self.pixels[:, :, :3].tobytes())