"""Base format handler interface."""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Dict, Optional

from PIL import Image

from imgconv.models.conversion import ConversionSettings


class BaseFormatHandler(ABC):
    """Abstract base class for format handlers.

    A handler ties a format token to the Pillow codec that decodes and
    encodes it. The token doubles as the canonical file extension.
    """

    #: format token, e.g. ``"png"``
    token: str = ""
    #: Pillow format name, e.g. ``"PNG"``
    pil_format: str = ""

    @property
    def extension(self) -> str:
        """Canonical file extension, without the dot."""
        return self.token

    def save_image(
        self, image: Image.Image, output: BinaryIO, settings: ConversionSettings
    ) -> None:
        """Encode ``image`` into ``output``."""
        image = self.prepare_image(image, settings)
        params = self.get_save_params(image, settings)
        image.save(output, format=self.pil_format, **params)

    @abstractmethod
    def get_save_params(
        self, image: Image.Image, settings: ConversionSettings
    ) -> Dict[str, Any]:
        """Get format-specific encoder parameters."""

    def prepare_image(
        self, image: Image.Image, settings: Optional[ConversionSettings] = None
    ) -> Image.Image:
        """Prepare image for encoding (e.g., convert color mode if needed)."""
        # Flatten transparency onto white for formats without alpha
        if image.mode in ("RGBA", "LA", "PA") and not self._supports_transparency():
            rgba = image.convert("RGBA")
            background = Image.new("RGB", image.size, (255, 255, 255))
            background.paste(rgba, mask=rgba.split()[3])
            return background

        if image.mode == "P" and "transparency" in image.info:
            if self._supports_transparency():
                return image if self._supports_mode("P") else image.convert("RGBA")
            return self.prepare_image(image.convert("RGBA"), settings)

        if not self._supports_mode(image.mode):
            return image.convert("RGB")

        return image

    def _supports_transparency(self) -> bool:
        """Check if format supports transparency."""
        return False

    def _supports_mode(self, mode: str) -> bool:
        """Check if format supports the given color mode."""
        return mode in ("RGB", "RGBA")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(token={self.token!r})"
