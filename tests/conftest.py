"""Pytest fixtures for imgconv tests."""

import os
import sys
from pathlib import Path
from typing import Callable, List

import pytest

# Set test environment variables BEFORE any imports
os.environ["IMGCONV_LANGUAGE"] = "ja"
os.environ["IMGCONV_LOG_LEVEL"] = "WARNING"
os.environ["IMGCONV_LOGGING_ENABLED"] = "false"

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from helpers.image_helpers import BLUE, GREEN, RED, write_image  # noqa: E402

from imgconv.models.conversion import ConversionSettings  # noqa: E402
from imgconv.utils.logging import setup_logging  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Keep log output on stderr and quiet."""
    setup_logging(log_level="WARNING", json_logs=False, enable_file_logging=False)


@pytest.fixture
def make_image() -> Callable[..., Path]:
    """Factory writing real images to disk."""
    return write_image


@pytest.fixture
def status_lines() -> List[str]:
    """Collects the status lines reported by a converter."""
    return []


@pytest.fixture
def conversion_settings() -> ConversionSettings:
    return ConversionSettings(jpeg_quality=95)


@pytest.fixture
def mixed_tree(tmp_path) -> Path:
    """
    A directory with a misnamed GIF, a PNG, a text file and nested images.

        a.png           PNG content
        b.txt           text
        c.jpg           GIF content
        sub/d.gif       GIF content
        sub/e.jpeg      JPEG content
        sub/deeper/f    GIF content, no extension
    """
    write_image(tmp_path / "a.png", "png", GREEN)
    (tmp_path / "b.txt").write_text("not an image\n", encoding="utf-8")
    write_image(tmp_path / "c.jpg", "gif", RED)
    write_image(tmp_path / "sub" / "d.gif", "gif", BLUE)
    write_image(tmp_path / "sub" / "e.jpeg", "jpeg", GREEN)
    write_image(tmp_path / "sub" / "deeper" / "f", "gif", GREEN)
    return tmp_path
