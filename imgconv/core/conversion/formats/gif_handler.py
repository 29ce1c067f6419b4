"""GIF format handler."""

from typing import Any, Dict, Optional

from PIL import Image

from imgconv.core.constants import DEFAULT_GIF_COLORS, FORMAT_GIF
from imgconv.core.conversion.formats.base import BaseFormatHandler
from imgconv.models.conversion import ConversionSettings


class GifHandler(BaseFormatHandler):
    """Handler for GIF format (single frame)."""

    token = FORMAT_GIF
    pil_format = "GIF"

    def prepare_image(
        self, image: Image.Image, settings: Optional[ConversionSettings] = None
    ) -> Image.Image:
        """Quantize to a palette, keeping one index for transparency."""
        colors = settings.gif_colors if settings else DEFAULT_GIF_COLORS

        if image.mode in ("P", "L"):
            return image

        if image.mode in ("RGBA", "LA", "PA"):
            rgba = image.convert("RGBA")
            alpha = rgba.split()[3]

            # Index 255 is reserved for fully transparent pixels
            paletted = rgba.convert("RGB").quantize(colors=min(colors, 255))
            palette = paletted.getpalette()
            palette += [0] * (768 - len(palette))

            result = Image.new("P", paletted.size, 255)
            result.putpalette(palette)
            result.paste(
                paletted, mask=Image.eval(alpha, lambda a: 255 if a >= 128 else 0)
            )
            result.info["transparency"] = 255
            return result

        return image.convert("RGB").convert(
            "P", palette=Image.Palette.ADAPTIVE, colors=colors
        )

    def get_save_params(
        self, image: Image.Image, settings: ConversionSettings
    ) -> Dict[str, Any]:
        """Get GIF-specific encoder parameters."""
        # GIF has no quality setting; the palette size is applied in prepare_image
        params: Dict[str, Any] = {}
        if settings.optimize:
            params["optimize"] = True
        if "transparency" in image.info:
            params["transparency"] = image.info["transparency"]
        return params

    def _supports_transparency(self) -> bool:
        """GIF supports single-color transparency."""
        return True
