from typing import Any, Dict, List, Optional, TypedDict, Union


class ConversionDetails(TypedDict, total=False):
    """Type-safe details for conversion errors."""

    source_path: str
    target_path: str
    source_format: str
    target_format: str
    error: str


class ValidationDetails(TypedDict, total=False):
    """Type-safe details for validation errors."""

    field_name: str
    field_value: str
    expected_values: List[str]


class FormatDetails(TypedDict, total=False):
    """Type-safe details for format errors."""

    requested_format: str
    supported_formats: List[str]
    detected_format: str
    path: str
    error: str


class FileDetails(TypedDict, total=False):
    """Type-safe details for filesystem errors."""

    path: str
    new_path: str
    operation: str
    error: str


ErrorDetails = Union[
    ConversionDetails,
    ValidationDetails,
    FormatDetails,
    FileDetails,
    Dict[str, Union[str, int, List[str]]],
]


class ImageConverterError(Exception):
    """Base exception for all imgconv errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[ErrorDetails] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        # Partial batch result, attached by the batch service on failure
        self.result: Optional[Any] = None


class InvalidArgumentError(ImageConverterError):
    """Raised when batch parameters are empty or invalid."""

    def __init__(self, message: str, details: Optional[ValidationDetails] = None):
        super().__init__(message=message, error_code="CONV002", details=details)


class ImageIOError(ImageConverterError):
    """Raised when opening, creating, reading, writing or deleting a file fails."""

    def __init__(
        self,
        message: str,
        details: Optional[FileDetails] = None,
        handle: Optional[Any] = None,
    ):
        super().__init__(message=message, error_code="CONV004", details=details)
        # Set when the converted file exists but the original could not be removed
        self.handle = handle


class DecodeError(ImageConverterError):
    """Raised when a file cannot be parsed as a supported image."""

    def __init__(self, message: str, details: Optional[FormatDetails] = None):
        super().__init__(message=message, error_code="CONV101", details=details)


class UnsupportedFormatError(ImageConverterError):
    """Raised when a format token is not in the registry."""

    def __init__(self, message: str, details: Optional[FormatDetails] = None):
        super().__init__(message=message, error_code="CONV102", details=details)


class ConversionFailedError(ImageConverterError):
    """Raised when encoding an image into the target format fails."""

    def __init__(self, message: str, details: Optional[ConversionDetails] = None):
        super().__init__(message=message, error_code="CONV103", details=details)
