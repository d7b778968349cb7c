"""
Carrier abstractions exposing an image's color bytes to the codec
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Tuple

import numpy as np
from PIL import Image


COLOR_CHANNELS = 3


class Carrier(ABC):
    """Ordered, mutable view of a carrier's red, green and blue bytes.

    Bytes are laid out pixel-major, channel-minor. Alpha and any other
    channel never appear in the sequence.
    """

    @abstractmethod
    def color_bytes(self) -> bytearray:
        """Return the mutable color-byte buffer (the same object on every call)."""
        pass

    @abstractmethod
    def dimensions(self) -> Tuple[int, int]:
        """Return (width, height) in pixels."""
        pass

    def capacity_bits(self) -> int:
        return len(self.color_bytes())


class BufferCarrier(Carrier):
    """Carrier over a plain byte buffer, with no image behind it."""

    def __init__(self, color_bytes: bytearray, width: Optional[int] = None, height: Optional[int] = None):
        self._color = color_bytes
        if width is None or height is None:
            width, height = len(color_bytes) // COLOR_CHANNELS, 1
        self._size = (width, height)

    def color_bytes(self) -> bytearray:
        return self._color

    def dimensions(self) -> Tuple[int, int]:
        return self._size


def _normalize_mode(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA"):
        return image
    if image.mode in ("LA", "PA") or (image.mode == "P" and "transparency" in image.info):
        return image.convert("RGBA")
    return image.convert("RGB")


class ImageCarrier(Carrier):
    """
    Pillow-backed carrier

    The pixels are copied on construction, so encoding never mutates the
    source image. Alpha bytes are kept aside and restored verbatim by
    :meth:`to_image`.
    """

    def __init__(self, width: int, height: int, color_bytes: bytearray, alpha: Optional[bytes] = None):
        pixels = width * height
        if len(color_bytes) != pixels * COLOR_CHANNELS:
            raise ValueError(
                f"Expected {pixels * COLOR_CHANNELS} color bytes for {width}x{height}, got {len(color_bytes)}"
            )
        if alpha is not None and len(alpha) != pixels:
            raise ValueError(f"Expected {pixels} alpha bytes for {width}x{height}, got {len(alpha)}")
        self._width = width
        self._height = height
        self._color = color_bytes
        self._alpha = alpha

    @classmethod
    def from_image(cls, image: Image.Image) -> "ImageCarrier":
        """
        Build a carrier from any Pillow image

        Args:
            image: Source image; RGB and RGBA are used as-is, other modes are converted

        Returns:
            ImageCarrier holding a private copy of the pixels
        """
        normalized = _normalize_mode(image)
        arr = np.array(normalized, dtype=np.uint8)
        height, width = arr.shape[0], arr.shape[1]
        color = bytearray(arr[:, :, :COLOR_CHANNELS].tobytes())
        alpha = arr[:, :, 3].tobytes() if arr.shape[2] == 4 else None
        return cls(width, height, color, alpha)

    @classmethod
    def from_color_bytes(
        cls, width: int, height: int, color_bytes: bytes, alpha: Optional[bytes] = None
    ) -> "ImageCarrier":
        return cls(width, height, bytearray(color_bytes), bytes(alpha) if alpha is not None else None)

    @property
    def has_alpha(self) -> bool:
        return self._alpha is not None

    def color_bytes(self) -> bytearray:
        return self._color

    def alpha_bytes(self) -> Optional[bytes]:
        return self._alpha

    def dimensions(self) -> Tuple[int, int]:
        return self._width, self._height

    def capacity_bits(self) -> int:
        return self._width * self._height * COLOR_CHANNELS

    def to_image(self) -> Image.Image:
        """Rebuild a Pillow image (RGB, or RGBA when the source had alpha)."""
        rgb = np.frombuffer(bytes(self._color), dtype=np.uint8).reshape(self._height, self._width, COLOR_CHANNELS)
        if self._alpha is None:
            return Image.fromarray(rgb)
        alpha = np.frombuffer(self._alpha, dtype=np.uint8).reshape(self._height, self._width, 1)
        return Image.fromarray(np.concatenate([rgb, alpha], axis=2))
