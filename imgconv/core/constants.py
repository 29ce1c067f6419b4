"""Constants and configuration values for the image converter."""

# Supported Image Formats (token doubles as the file extension)
FORMAT_GIF = "gif"
FORMAT_JPEG = "jpeg"
FORMAT_PNG = "png"

SUPPORTED_FORMATS = (FORMAT_GIF, FORMAT_JPEG, FORMAT_PNG)

# CLI defaults (format before / after conversion)
DEFAULT_SOURCE_FORMAT = FORMAT_JPEG
DEFAULT_TARGET_FORMAT = FORMAT_PNG

# Encoder defaults
DEFAULT_JPEG_QUALITY = 75
MIN_QUALITY = 1
MAX_QUALITY = 100
DEFAULT_PNG_COMPRESS_LEVEL = 6
MAX_PNG_COMPRESS_LEVEL = 9
DEFAULT_GIF_COLORS = 256
MIN_GIF_COLORS = 2

# Status line languages
SUPPORTED_LANGUAGES = ("ja", "en")
DEFAULT_LANGUAGE = "ja"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
