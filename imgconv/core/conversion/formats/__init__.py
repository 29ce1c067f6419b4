from imgconv.core.conversion.formats.base import BaseFormatHandler
from imgconv.core.conversion.formats.gif_handler import GifHandler
from imgconv.core.conversion.formats.jpeg_handler import JPEGHandler
from imgconv.core.conversion.formats.png_handler import PNGHandler

__all__ = ["BaseFormatHandler", "GifHandler", "JPEGHandler", "PNGHandler"]
