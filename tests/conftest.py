# LSB Lab Test Configuration
# Shared fixtures for codec, service, API and CLI tests

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    """Deterministic random generator so failures are reproducible."""
    return np.random.default_rng(1234)


@pytest.fixture
def cover_image(rng):
    """Create a noisy 40x30 RGB cover image (3600 color bytes)."""
    img_array = rng.integers(0, 256, size=(30, 40, 3), dtype=np.uint8)
    return Image.fromarray(img_array)


@pytest.fixture
def rgba_cover_image(rng):
    """Create a noisy RGBA cover image with a varied alpha channel."""
    img_array = rng.integers(0, 256, size=(30, 40, 4), dtype=np.uint8)
    return Image.fromarray(img_array)


@pytest.fixture
def cover_path(cover_image, tmp_path):
    """Write the cover image to disk as PNG."""
    path = tmp_path / "cover.png"
    cover_image.save(path, format="PNG")
    return path


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point output directories at the temp dir and clear service limits."""
    output_dir = tmp_path / "stego"
    recovered_dir = tmp_path / "stego_recovered"
    monkeypatch.setenv("LSB_OUTPUT_DIR", str(output_dir))
    monkeypatch.setenv("LSB_RECOVERED_DIR", str(recovered_dir))
    monkeypatch.delenv("LSB_MAX_COVER_PIXELS", raising=False)
    monkeypatch.delenv("LSB_MAX_PAYLOAD_BYTES", raising=False)
    monkeypatch.delenv("LSB_LOG_LEVEL", raising=False)
    return {"output_dir": output_dir, "recovered_dir": recovered_dir}
