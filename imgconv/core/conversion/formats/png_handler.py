"""PNG format handler."""

from typing import Any, Dict

from PIL import Image

from imgconv.core.constants import FORMAT_PNG
from imgconv.core.conversion.formats.base import BaseFormatHandler
from imgconv.models.conversion import ConversionSettings


class PNGHandler(BaseFormatHandler):
    """Handler for PNG format."""

    token = FORMAT_PNG
    pil_format = "PNG"

    def get_save_params(
        self, image: Image.Image, settings: ConversionSettings
    ) -> Dict[str, Any]:
        """Get PNG-specific encoder parameters."""
        params: Dict[str, Any] = {"compress_level": settings.png_compress_level}
        if settings.optimize:
            params["optimize"] = True
        if image.mode == "P" and "transparency" in image.info:
            params["transparency"] = image.info["transparency"]
        return params

    def _supports_transparency(self) -> bool:
        """PNG supports transparency."""
        return True

    def _supports_mode(self, mode: str) -> bool:
        """Check if PNG supports the given color mode."""
        return mode in ("RGB", "RGBA", "L", "LA", "P", "1", "I", "I;16")
