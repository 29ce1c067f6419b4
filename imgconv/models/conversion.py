"""Encoder settings passed to the format handlers."""

from pydantic import BaseModel, ConfigDict, Field

from imgconv.core.constants import (
    DEFAULT_GIF_COLORS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_PNG_COMPRESS_LEVEL,
    MAX_PNG_COMPRESS_LEVEL,
    MAX_QUALITY,
    MIN_GIF_COLORS,
    MIN_QUALITY,
)


class ConversionSettings(BaseModel):
    """Settings for encoding one image."""

    model_config = ConfigDict(frozen=True)

    jpeg_quality: int = Field(
        default=DEFAULT_JPEG_QUALITY, ge=MIN_QUALITY, le=MAX_QUALITY
    )
    png_compress_level: int = Field(
        default=DEFAULT_PNG_COMPRESS_LEVEL, ge=0, le=MAX_PNG_COMPRESS_LEVEL
    )
    gif_colors: int = Field(
        default=DEFAULT_GIF_COLORS, ge=MIN_GIF_COLORS, le=DEFAULT_GIF_COLORS
    )
    optimize: bool = Field(default=False, description="Extra optimization pass")

    @classmethod
    def from_settings(cls, app_settings=None) -> "ConversionSettings":
        """Build encoder settings from the application settings."""
        if app_settings is None:
            from imgconv.config import settings as app_settings

        return cls(
            jpeg_quality=app_settings.jpeg_quality,
            png_compress_level=app_settings.png_compress_level,
            gif_colors=app_settings.gif_colors,
            optimize=app_settings.optimize,
        )
