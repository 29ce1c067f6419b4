"""Format converter: re-encode one image and replace the original file."""

import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from imgconv.config import settings as app_settings
from imgconv.core.conversion.registry import FormatRegistry, format_registry
from imgconv.core.exceptions import ConversionFailedError, ImageIOError
from imgconv.core.messages import conversion_status
from imgconv.models.conversion import ConversionSettings
from imgconv.models.image import ImageHandle
from imgconv.utils.logging import ensure_logging, get_logger

logger = get_logger(__name__)

Reporter = Callable[[str], None]


def target_path(path: Path, extension: str) -> Path:
    """Same directory and base name as ``path``, with a new extension."""
    base, _ = os.path.splitext(str(path))
    return Path(f"{base}.{extension}")


class FormatConverter:
    """Converts image handles into another format on disk."""

    def __init__(
        self,
        registry: FormatRegistry = format_registry,
        settings: Optional[ConversionSettings] = None,
        reporter: Optional[Reporter] = None,
        language: Optional[str] = None,
    ) -> None:
        self.registry = registry
        self.settings = settings
        self.reporter = reporter or print
        self.language = language

    def convert(self, handle: ImageHandle, target_format: str) -> ImageHandle:
        """
        Write ``handle`` in ``target_format`` next to it and delete the original.

        When the new path is the current one, the image is encoded into a
        temporary file that then replaces the original.

        Args:
            handle: Image to convert
            target_format: Format token to encode into

        Returns:
            A new handle pointing at the converted file

        Raises:
            UnsupportedFormatError: If target_format is unknown (nothing is touched)
            ImageIOError: If the new file cannot be written, or the original
                cannot be deleted (the converted file then stays on disk and
                the error carries the new handle)
            ConversionFailedError: If the encoder fails (original untouched)
        """
        handler = self.registry.get_handler(target_format)
        settings = self.settings or ConversionSettings.from_settings()

        old_path = handle.path
        new_path = target_path(old_path, handler.extension)

        log = logger.bind(
            path=str(old_path), new_path=str(new_path), target_format=target_format
        )

        in_place = new_path == old_path
        try:
            if in_place:
                # The original stays intact until the new encoding is complete
                output = tempfile.NamedTemporaryFile(
                    dir=new_path.parent,
                    prefix=f".{new_path.name}.",
                    suffix=".tmp",
                    delete=False,
                )
            else:
                # Truncates an existing file at new_path
                output = open(new_path, "wb")
        except OSError as e:
            log.error("Cannot create converted image", error=str(e))
            raise ImageIOError(
                f"Cannot create {new_path}: {e}",
                details=_file_details(old_path, new_path, "create", e),
            ) from e

        try:
            with output:
                self._encode(handle, handler, output, new_path, target_format, settings)
            if in_place:
                try:
                    os.replace(output.name, new_path)
                except OSError as e:
                    log.error("Cannot replace image", error=str(e))
                    raise ImageIOError(
                        f"Cannot replace {new_path}: {e}",
                        details=_file_details(old_path, new_path, "replace", e),
                    ) from e
        except Exception:
            if in_place:
                _discard(output.name)
            raise

        converted = handle.converted_to(new_path, target_format)

        if not in_place:
            try:
                os.remove(old_path)
            except OSError as e:
                log.error("Cannot remove original image", error=str(e))
                raise ImageIOError(
                    f"Cannot remove {old_path}: {e}",
                    details=_file_details(old_path, new_path, "remove", e),
                    handle=converted,
                ) from e

        log.info("Image converted", source_format=handle.format)
        self.reporter(
            conversion_status(old_path, target_format, new_path, self._language())
        )
        return converted

    def _encode(
        self,
        handle: ImageHandle,
        handler,
        output: BinaryIO,
        new_path: Path,
        target_format: str,
        settings: ConversionSettings,
    ) -> None:
        try:
            handler.save_image(handle.image, output, settings)
        except OSError as e:
            if e.errno is not None:
                logger.error(
                    "Cannot write converted image", path=str(new_path), error=str(e)
                )
                raise ImageIOError(
                    f"Cannot write {new_path}: {e}",
                    details=_file_details(handle.path, new_path, "write", e),
                ) from e
            # Pillow reports encoder failures as OSError without errno
            raise self._encoder_error(handle, new_path, target_format, e) from e
        except (ValueError, TypeError, KeyError) as e:
            raise self._encoder_error(handle, new_path, target_format, e) from e

    def _encoder_error(
        self, handle: ImageHandle, new_path: Path, target_format: str, error: Exception
    ) -> ConversionFailedError:
        logger.error("Encoder failed", path=str(handle.path), error=str(error))
        return ConversionFailedError(
            f"Failed to save image as {target_format}: {error}",
            details={
                "source_path": str(handle.path),
                "target_path": str(new_path),
                "source_format": handle.format,
                "target_format": target_format,
                "error": str(error),
            },
        )

    def _language(self) -> str:
        return self.language or app_settings.language


def _file_details(path: Path, new_path: Path, operation: str, error: OSError):
    return {
        "path": str(path),
        "new_path": str(new_path),
        "operation": operation,
        "error": str(error),
    }


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Cannot remove temporary file", path=path, error=str(e))


format_converter = FormatConverter()


def convert(handle: ImageHandle, target_format: str) -> ImageHandle:
    """Convert ``handle`` with the default converter."""
    ensure_logging()
    return format_converter.convert(handle, target_format)
