"""
Main service class for LSB codec operations
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image

from ..models.codec_models import (
    DEFAULT_RECOVERED_FILENAME,
    DEFAULT_TEXT_FILENAME,
    CapacityResult,
    HideResult,
    RevealResult,
    StegoLimits,
    StegoPayload,
    StegoPayloadKind,
)
from .carrier import ImageCarrier
from .errors import FilenameTooLong
from .frame_codec import MAX_FILENAME_BYTES, decode, encode, lossy_utf8, required_bits
from ..utils.image_utils import calculate_pixel_count, ensure_png_path
from ..utils.validation import validate_limits, validate_payload_fits


logger = logging.getLogger(__name__)


def resolve_payload(argument: str) -> StegoPayload:
    """
    Interpret a payload argument as a file path or as literal text

    Args:
        argument: Path to an existing readable file, or the text to hide

    Returns:
        StegoPayload carrying the file's base name and bytes, or the text
        under the default text filename
    """
    path = Path(argument)
    try:
        data = path.read_bytes()
    except (OSError, ValueError):
        return text_payload(argument)
    name = lossy_utf8(os.fsencode(path.name)).decode("utf-8")
    return StegoPayload(kind=StegoPayloadKind.file, filename=name, data=data)


def text_payload(text: str, filename: str = DEFAULT_TEXT_FILENAME) -> StegoPayload:
    return StegoPayload(kind=StegoPayloadKind.text, filename=filename, data=text.encode("utf-8", errors="surrogateescape"))


def safe_output_name(stored_name: str) -> str:
    """Reduce a stored filename to a bare name that cannot leave the target directory."""
    name = Path(stored_name.replace("\\", "/")).name
    if name in ("", ".", ".."):
        return DEFAULT_RECOVERED_FILENAME
    return name


class LsbCodecService:
    """
    Main service class for LSB codec operations

    Wraps the frame codec with image handling, service limits and logging.
    The codec itself is stateless; this class only holds configuration.
    """

    def __init__(self, limits: Optional[StegoLimits] = None):
        self.limits = limits or StegoLimits()

    def capacity(self, image: Image.Image, filename: str = "") -> CapacityResult:
        """
        Calculate how much payload an image can carry

        Args:
            image: Input image
            filename: Filename that will be stored with the payload

        Returns:
            CapacityResult with capacity information
        """
        width, height = image.size
        capacity_bits = width * height * 3
        header_bits = required_bits(len(lossy_utf8(filename)), 0)
        return CapacityResult(
            width=width,
            height=height,
            capacity_bits=capacity_bits,
            header_bits=header_bits,
            max_payload_bytes=max(0, (capacity_bits - header_bits) // 8),
        )

    def hide(self, cover: Image.Image, payload: StegoPayload) -> Tuple[Image.Image, HideResult]:
        """
        Hide a payload in a cover image

        Args:
            cover: Cover image, left untouched
            payload: Payload and the filename stored with it

        Returns:
            Tuple of (stego_image, result_metadata)

        Raises:
            ValueError: If limits are exceeded
            CapacityExceeded: If the cover is too small
            FilenameTooLong: If the filename does not fit the header
        """
        validate_limits(self.limits, calculate_pixel_count(cover), len(payload.data))

        carrier = ImageCarrier.from_image(cover)
        filename_bytes = lossy_utf8(payload.filename)
        if len(filename_bytes) > MAX_FILENAME_BYTES:
            raise FilenameTooLong(len(filename_bytes), MAX_FILENAME_BYTES)
        needed = required_bits(len(filename_bytes), len(payload.data))
        validate_payload_fits(needed, carrier.capacity_bits())

        encode(carrier, payload.filename, payload.data)
        logger.info(
            f"Encoded {payload.kind.value} payload: filename={payload.filename!r}, "
            f"bytes={len(payload.data)}, bits={needed}/{carrier.capacity_bits()}"
        )

        result = HideResult(
            filename=filename_bytes.decode("utf-8"),
            payload_size_bytes=len(payload.data),
            used_capacity_bits=needed,
            capacity_bits=carrier.capacity_bits(),
            header_bits=required_bits(len(filename_bytes), 0),
        )
        return carrier.to_image(), result

    def hide_text(
        self, cover: Image.Image, text: str, filename: str = DEFAULT_TEXT_FILENAME
    ) -> Tuple[Image.Image, HideResult]:
        return self.hide(cover, text_payload(text, filename))

    def hide_file(self, cover: Image.Image, filename: str, data: bytes) -> Tuple[Image.Image, HideResult]:
        return self.hide(cover, StegoPayload(kind=StegoPayloadKind.file, filename=filename, data=data))

    def reveal(self, stego_image: Image.Image) -> RevealResult:
        """
        Reveal the filename and payload hidden in an image

        Args:
            stego_image: Image produced by :meth:`hide`

        Returns:
            RevealResult with the stored filename and payload

        Raises:
            TruncatedCarrier: If the image is too small for the frame it declares
        """
        filename, payload = decode(ImageCarrier.from_image(stego_image))
        logger.info(f"Decoded payload: filename={filename!r}, bytes={len(payload)}")
        return RevealResult(filename=filename, payload=payload, size_bytes=len(payload))

    def reveal_to_directory(
        self,
        stego_image: Image.Image,
        output_dir: Union[str, Path],
        output_name: Optional[str] = None,
    ) -> RevealResult:
        """
        Reveal the hidden payload and write it to disk

        Args:
            stego_image: Image with hidden payload
            output_dir: Directory to write into (created if missing)
            output_name: Name to use instead of the stored one; the stored
                name's extension is appended to it

        Returns:
            RevealResult with output_path set
        """
        result = self.reveal(stego_image)
        stored = safe_output_name(result.filename)
        if output_name:
            name = output_name + Path(stored).suffix
        else:
            name = stored

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        out_path = output_dir / name
        out_path.write_bytes(result.payload)
        logger.info(f"Wrote decoded payload to {out_path}")

        result.output_path = out_path
        return result

    def save_png(self, image: Image.Image, path: Union[str, Path]) -> Path:
        """
        Save an encoded image losslessly

        Args:
            image: Image to save
            path: Target path; ".png" is appended when missing

        Returns:
            The path actually written
        """
        out_path = ensure_png_path(path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(out_path, format="PNG")
        return out_path
