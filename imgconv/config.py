from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from imgconv.core.constants import (
    DEFAULT_GIF_COLORS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_LANGUAGE,
    DEFAULT_PNG_COMPRESS_LEVEL,
    DEFAULT_SOURCE_FORMAT,
    DEFAULT_TARGET_FORMAT,
    LOG_LEVELS,
    MAX_PNG_COMPRESS_LEVEL,
    MAX_QUALITY,
    MIN_GIF_COLORS,
    MIN_QUALITY,
    SUPPORTED_FORMATS,
    SUPPORTED_LANGUAGES,
)


class Settings(BaseSettings):
    # Application
    log_level: str = Field(default="WARNING", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    # Status messages
    language: str = Field(
        default=DEFAULT_LANGUAGE, description="Language of status lines (ja, en)"
    )

    # CLI defaults
    default_source_format: str = Field(
        default=DEFAULT_SOURCE_FORMAT, description="Format to search for"
    )
    default_target_format: str = Field(
        default=DEFAULT_TARGET_FORMAT, description="Format to convert into"
    )

    # Encoders
    jpeg_quality: int = Field(
        default=DEFAULT_JPEG_QUALITY,
        ge=MIN_QUALITY,
        le=MAX_QUALITY,
        description="JPEG encoder quality",
    )
    png_compress_level: int = Field(
        default=DEFAULT_PNG_COMPRESS_LEVEL,
        ge=0,
        le=MAX_PNG_COMPRESS_LEVEL,
        description="zlib compression level for PNG",
    )
    gif_colors: int = Field(
        default=DEFAULT_GIF_COLORS,
        ge=MIN_GIF_COLORS,
        le=DEFAULT_GIF_COLORS,
        description="Palette size for GIF",
    )
    optimize: bool = Field(
        default=False, description="Ask encoders for an extra optimization pass"
    )

    # Logging Configuration
    logging_enabled: bool = Field(
        default=False, description="Enable file logging in addition to stderr"
    )
    log_dir: str = Field(default="./logs", description="Directory for log files")
    max_log_size_mb: int = Field(
        default=10, description="Maximum size of each log file in MB"
    )
    log_backup_count: int = Field(
        default=3, description="Number of backup log files to keep"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}")
        return v.upper()

    @field_validator("language")
    @classmethod
    def validate_language(cls, v):
        if v not in SUPPORTED_LANGUAGES:
            raise ValueError(f"language must be one of {list(SUPPORTED_LANGUAGES)}")
        return v

    @field_validator("default_source_format", "default_target_format")
    @classmethod
    def validate_format(cls, v):
        if v not in SUPPORTED_FORMATS:
            raise ValueError(f"format must be one of {list(SUPPORTED_FORMATS)}")
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="IMGCONV_",
        extra="ignore",
    )


settings = Settings()
