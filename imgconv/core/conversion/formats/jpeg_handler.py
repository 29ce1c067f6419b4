"""JPEG format handler."""

from typing import Any, Dict

from PIL import Image

from imgconv.core.constants import FORMAT_JPEG
from imgconv.core.conversion.formats.base import BaseFormatHandler
from imgconv.models.conversion import ConversionSettings


class JPEGHandler(BaseFormatHandler):
    """Handler for JPEG format."""

    token = FORMAT_JPEG
    pil_format = "JPEG"

    def get_save_params(
        self, image: Image.Image, settings: ConversionSettings
    ) -> Dict[str, Any]:
        """Get JPEG-specific encoder parameters."""
        params: Dict[str, Any] = {
            "quality": settings.jpeg_quality,
            # 4:4:4 for high quality
            "subsampling": 0 if settings.jpeg_quality > 90 else 2,
        }
        if settings.optimize:
            params["optimize"] = True
        return params

    def _supports_mode(self, mode: str) -> bool:
        """Check if JPEG supports the given color mode."""
        return mode in ("RGB", "L", "CMYK")
