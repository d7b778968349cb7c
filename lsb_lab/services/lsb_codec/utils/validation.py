"""
Validation utilities for LSB codec operations
"""

from ..core.errors import CapacityExceeded
from ..models.codec_models import StegoLimits


def validate_limits(limits: StegoLimits, image_pixel_count: int, payload_size: int) -> None:
    """
    Validate configured service limits

    Args:
        limits: StegoLimits object containing constraints
        image_pixel_count: Total pixels in cover image
        payload_size: Size of payload in bytes

    Raises:
        ValueError: If any limits are exceeded
    """
    if limits.max_cover_pixels and image_pixel_count > limits.max_cover_pixels:
        raise ValueError(f"Cover image exceeds allowed pixel count: {image_pixel_count} > {limits.max_cover_pixels}")

    if limits.max_payload_bytes and payload_size > limits.max_payload_bytes:
        raise ValueError(f"Payload exceeds allowed bytes: {payload_size} > {limits.max_payload_bytes}")


def validate_payload_fits(payload_bits: int, available_bits: int) -> None:
    """
    Validate that a frame fits in available capacity

    Args:
        payload_bits: Required bits for the whole frame
        available_bits: Available bits in image

    Raises:
        CapacityExceeded: If the frame doesn't fit
    """
    if payload_bits > available_bits:
        raise CapacityExceeded(payload_bits, available_bits)
