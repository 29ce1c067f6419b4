"""Registry of the supported image formats.

The registry is a fixed table from format token to the handler that
encodes it. Nothing registers formats at runtime.
"""

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from imgconv.core.conversion.formats import (
    BaseFormatHandler,
    GifHandler,
    JPEGHandler,
    PNGHandler,
)
from imgconv.core.exceptions import UnsupportedFormatError


class FormatRegistry:
    """Lookup of format handlers by token."""

    def __init__(self, handlers: Mapping[str, BaseFormatHandler]) -> None:
        self._handlers = MappingProxyType(dict(handlers))
        self._pil_formats = MappingProxyType(
            {handler.pil_format: token for token, handler in self._handlers.items()}
        )

    def is_supported(self, token: Optional[str]) -> bool:
        return isinstance(token, str) and token in self._handlers

    def supported_formats(self) -> Tuple[str, ...]:
        return tuple(self._handlers)

    def pil_formats(self) -> Tuple[str, ...]:
        """Pillow decoder names, used to restrict what Image.open accepts."""
        return tuple(self._pil_formats)

    def get_handler(self, token: str) -> BaseFormatHandler:
        """Get the handler for a format token.

        Raises:
            UnsupportedFormatError: If the token is not registered
        """
        if not self.is_supported(token):
            raise UnsupportedFormatError(
                f"Unsupported image format: {token!r}",
                details={
                    "requested_format": str(token),
                    "supported_formats": list(self.supported_formats()),
                },
            )
        return self._handlers[token]

    def extension_for(self, token: str) -> str:
        return self.get_handler(token).extension

    def token_for_pil_format(self, pil_format: Optional[str]) -> Optional[str]:
        """Map a Pillow format name (``"JPEG"``) to a token (``"jpeg"``)."""
        if not pil_format:
            return None
        return self._pil_formats.get(pil_format.upper())

    def __contains__(self, token: object) -> bool:
        return self.is_supported(token)

    def __iter__(self):
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)


_HANDLER_CLASSES = (GifHandler, JPEGHandler, PNGHandler)

DEFAULT_HANDLERS: Mapping[str, BaseFormatHandler] = MappingProxyType(
    {cls.token: cls() for cls in _HANDLER_CLASSES}
)

format_registry = FormatRegistry(DEFAULT_HANDLERS)


def is_supported(token: Optional[str]) -> bool:
    """Check a format token against the default registry."""
    return format_registry.is_supported(token)
