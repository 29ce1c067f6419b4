"""
Format Detection Service - detects the real image format of a file from its content.
The file extension is never consulted.
"""

import os
from typing import Tuple, Union

from PIL import Image

from imgconv.core.conversion.registry import FormatRegistry, format_registry
from imgconv.core.exceptions import DecodeError, ImageIOError
from imgconv.utils.logging import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


class FormatDetectionService:
    """Service for detecting image formats from file content."""

    def __init__(self, registry: FormatRegistry = format_registry) -> None:
        self.registry = registry

    def probe(self, path: PathLike) -> str:
        """
        Detect the format of an image file.

        The file is fully decoded so that truncated or corrupt files are
        rejected, then closed again.

        Args:
            path: File to inspect

        Returns:
            The detected format token (e.g. 'gif', 'jpeg', 'png')

        Raises:
            ImageIOError: If the file cannot be opened or read
            DecodeError: If the content is not a supported, intact image
        """
        _, token = self._decode(path)
        logger.debug("Format detected", path=str(path), format=token)
        return token

    def load_image(self, path: PathLike) -> Tuple[Image.Image, str]:
        """
        Decode an image file into memory.

        Returns:
            Tuple of (image, format token). The image no longer references
            the file, which is closed before returning.
        """
        return self._decode(path, keep=True)

    def _decode(self, path: PathLike, keep: bool = False):
        try:
            fp = open(path, "rb")
        except OSError as e:
            raise ImageIOError(
                f"Cannot open file: {path}",
                details={"path": str(path), "operation": "open", "error": str(e)},
            ) from e

        with fp:
            try:
                # Only the registered decoders are tried
                with Image.open(fp, formats=self.registry.pil_formats()) as img:
                    img.load()
                    pil_format = img.format
                    image = img.copy() if keep else None
            except (
                Image.DecompressionBombError,
                EOFError,
                OSError,
                SyntaxError,
                ValueError,
            ) as e:
                # UnidentifiedImageError and truncated data are OSErrors
                raise DecodeError(
                    f"Failed to decode image: {path}",
                    details={"path": str(path), "error": str(e)},
                ) from e

        token = self.registry.token_for_pil_format(pil_format)
        if token is None:
            raise DecodeError(
                f"Unsupported image format in {path}",
                details={"path": str(path), "detected_format": str(pil_format)},
            )

        return image, token


format_detection_service = FormatDetectionService()


def probe(path: PathLike) -> str:
    """Detect the format of ``path`` with the default service."""
    return format_detection_service.probe(path)
