"""
Image utility functions for the LSB codec
"""

import httpx
from io import BytesIO
from pathlib import Path
from typing import Optional, Union
from PIL import Image


def load_image_from_input(
    file: Optional[BytesIO] = None,
    url: Optional[str] = None,
    path: Optional[Union[str, Path]] = None,
) -> Image.Image:
    """
    Load an image from a file object, a URL or a path on disk

    Args:
        file: BytesIO object containing image data
        url: URL to fetch image from
        path: Path to an image file

    Returns:
        PIL Image object with its pixel data loaded

    Raises:
        ValueError: If no source is provided or the data is not an image
    """
    try:
        if file is not None:
            image = Image.open(file)
        elif url is not None:
            with httpx.Client(timeout=30) as client:
                resp = client.get(url)
                resp.raise_for_status()
                image = Image.open(BytesIO(resp.content))
        elif path is not None:
            image = Image.open(str(path))
        else:
            raise ValueError("Provide file, url or path")
        image.load()
    except (OSError, Image.DecompressionBombError) as exc:
        source = path or url or "upload"
        raise ValueError(f"'{source}' is not an image or has the wrong format: {exc}") from exc
    return image


def get_image_dimensions(image: Image.Image) -> tuple[int, int]:
    """
    Get image dimensions

    Args:
        image: PIL Image object

    Returns:
        Tuple of (width, height)
    """
    return image.size


def calculate_pixel_count(image: Image.Image) -> int:
    width, height = get_image_dimensions(image)
    return width * height


def ensure_png_path(path: Union[str, Path]) -> Path:
    """Append a .png suffix unless the path already ends with one."""
    path = Path(path)
    if path.suffix.lower() == ".png":
        return path
    return path.with_name(path.name + ".png")

