"""Drawing primitives that place layers onto a frame buffer."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .frame_buffer import FrameBuffer
from .script import Transform

GLYPH_WIDTH = 8
TEXT_HEIGHT = 16
MAX_TEXT_WIDTH = 200


def fill_rect(
    buffer: FrameBuffer, x: int, y: int, width: int, height: int, color: Sequence[int]
) -> None:
    """Fill a rectangle, clipped to the buffer."""
    buf_width, buf_height = buffer.dimensions()
    left, top = max(x, 0), max(y, 0)
    right, bottom = min(x + width, buf_width), min(y + height, buf_height)
    if left < right and top < bottom:
        buffer.pixels[top:bottom, left:right] = np.asarray(color, dtype=np.uint8)


def draw_text_placeholder(
    buffer: FrameBuffer, text: str, x: int, y: int, color: Sequence[int]
) -> None:
    """Stand in for rendered text with a block sized by the text's byte length."""
    width = min(len(text.encode("utf-8")) * GLYPH_WIDTH, MAX_TEXT_WIDTH)
    fill_rect(buffer, x, y, width, TEXT_HEIGHT, color)


def apply_transform(x: int, y: int, transform: Transform) -> tuple[int, int]:
    """Offset coordinates by the transform's position."""
    return (x + transform.position.x, y + transform.position.y)