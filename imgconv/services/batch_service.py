"""
Batch Service - converts every image of one format below a directory.

A run moves through validating -> scanning -> converting -> done. The first
error stops the run; files converted before it stay converted.
"""

import os
from pathlib import Path
from typing import Optional, Union

from imgconv.core.batch.scanner import DirectoryScanner
from imgconv.core.conversion.converter import FormatConverter
from imgconv.core.conversion.registry import FormatRegistry, format_registry
from imgconv.core.exceptions import ImageConverterError, InvalidArgumentError
from imgconv.models.batch import BatchRequest, BatchResult, BatchStatus
from imgconv.utils.logging import (
    LoggingContext,
    ensure_logging,
    get_logger,
    new_batch_id,
)

logger = get_logger(__name__)


class BatchService:
    """Drives the scanner and the converter over one directory tree."""

    def __init__(
        self,
        scanner: Optional[DirectoryScanner] = None,
        converter: Optional[FormatConverter] = None,
        registry: FormatRegistry = format_registry,
    ) -> None:
        self.registry = registry
        self.scanner = scanner or DirectoryScanner()
        self.converter = converter or FormatConverter(registry=registry)

    def validate(
        self,
        directory: Union[str, os.PathLike, None],
        source_format: Optional[str],
        target_format: Optional[str],
    ) -> BatchRequest:
        """
        Check the batch parameters without touching the filesystem.

        Raises:
            InvalidArgumentError: If a parameter is empty or a format is unknown
        """
        if directory is None or str(directory) == "":
            raise InvalidArgumentError(
                "No directory given", details={"field_name": "directory"}
            )
        for field_name, value in (
            ("source_format", source_format),
            ("target_format", target_format),
        ):
            if not value:
                raise InvalidArgumentError(
                    f"No {field_name.replace('_', ' ')} given",
                    details={"field_name": field_name},
                )
            if not self.registry.is_supported(value):
                raise InvalidArgumentError(
                    f"Unsupported {field_name.replace('_', ' ')}: {value!r}",
                    details={
                        "field_name": field_name,
                        "field_value": str(value),
                        "expected_values": list(self.registry.supported_formats()),
                    },
                )

        return BatchRequest(
            directory=Path(directory),
            source_format=source_format,
            target_format=target_format,
        )

    def run(
        self,
        directory: Union[str, os.PathLike, None],
        source_format: Optional[str],
        target_format: Optional[str],
    ) -> BatchResult:
        """
        Convert every ``source_format`` image under ``directory`` to ``target_format``.

        Args:
            directory: Root of the tree to convert
            source_format: Format token to search for
            target_format: Format token to convert into

        Returns:
            The completed BatchResult

        Raises:
            ImageConverterError: The first error of the run. The partial
                BatchResult is attached as ``error.result``.
        """
        ensure_logging()
        result = BatchResult()

        with LoggingContext(batch_id=new_batch_id()):
            try:
                result.request = self.validate(directory, source_format, target_format)

                result.status = BatchStatus.SCANNING
                result.scanned = self.scanner.scan(
                    result.request.directory, result.request.source_format
                )

                result.status = BatchStatus.CONVERTING
                for handle in result.scanned:
                    result.converted.append(
                        self.converter.convert(handle, result.request.target_format)
                    )
            except ImageConverterError as e:
                failed_in = result.status
                result.status = BatchStatus.FAILED
                result.error = e
                e.result = result
                logger.error(
                    "Batch failed",
                    stage=failed_in.value,
                    error_code=e.error_code,
                    error=e.message,
                    converted=result.converted_count,
                )
                raise

            result.status = BatchStatus.DONE
            logger.info(
                "Batch completed",
                directory=str(result.request.directory),
                source_format=result.request.source_format,
                target_format=result.request.target_format,
                converted=result.converted_count,
            )
        return result


batch_service = BatchService()


def convert_directory(
    directory: Union[str, os.PathLike],
    source_format: str,
    target_format: str,
) -> BatchResult:
    """Run one batch with the default service."""
    return batch_service.run(directory, source_format, target_format)
