"""Directory scanner collecting the images of one format under a directory tree."""

import os
from pathlib import Path
from typing import Iterator, List, Optional, Union

from imgconv.core.exceptions import DecodeError, ImageIOError
from imgconv.models.image import ImageHandle
from imgconv.services.format_detection_service import (
    FormatDetectionService,
    format_detection_service,
)
from imgconv.utils.logging import ensure_logging, get_logger

logger = get_logger(__name__)


def walk_files(root: Union[str, os.PathLike]) -> Iterator[Path]:
    """Yield the regular files under ``root`` in lexical pre-order.

    Entries of each directory are visited sorted by name; a sub-directory
    is descended into at its position in that order. Symbolic links to
    directories are not followed.

    Raises:
        ImageIOError: If a directory cannot be listed
    """
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise ImageIOError(
            f"Cannot read directory: {root}",
            details={"path": str(root), "operation": "scandir", "error": str(e)},
        ) from e

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                yield from walk_files(entry.path)
            elif entry.is_file():
                yield Path(entry.path)
        except OSError as e:
            raise ImageIOError(
                f"Cannot stat file: {entry.path}",
                details={"path": entry.path, "operation": "stat", "error": str(e)},
            ) from e


class DirectoryScanner:
    """Finds and decodes every image of a given format below a directory."""

    def __init__(self, detector: Optional[FormatDetectionService] = None) -> None:
        self.detector = detector or format_detection_service

    def scan(
        self, root_dir: Union[str, os.PathLike], source_format: str
    ) -> List[ImageHandle]:
        """
        Collect the images whose content is encoded in ``source_format``.

        Files that are not images, or are images of another format, are
        skipped. The whole sequence is built before it is returned.

        Args:
            root_dir: Directory to walk recursively
            source_format: Format token to look for

        Returns:
            Decoded handles in traversal order (empty when nothing matches)

        Raises:
            ImageIOError: If the tree cannot be walked, or a matching file
                cannot be read again for decoding
            DecodeError: If a file that passed the probe fails to decode
        """
        root = Path(root_dir)
        if not root.is_dir():
            raise ImageIOError(
                f"Not a directory: {root}",
                details={"path": str(root), "operation": "scan"},
            )

        handles: List[ImageHandle] = []
        for path in walk_files(root):
            if not self._matches(path, source_format):
                continue

            image, detected = self.detector.load_image(path)
            if detected != source_format:
                # The file changed between probe and decode
                raise DecodeError(
                    f"Format of {path} changed during scan",
                    details={
                        "path": str(path),
                        "requested_format": source_format,
                        "detected_format": detected,
                    },
                )
            handles.append(ImageHandle(path=path, image=image, format=detected))

        logger.info(
            "Directory scanned",
            directory=str(root),
            source_format=source_format,
            candidates=len(handles),
        )
        return handles

    def _matches(self, path: Path, source_format: str) -> bool:
        try:
            detected = self.detector.probe(path)
        except (DecodeError, ImageIOError) as e:
            logger.debug("Skipping file", path=str(path), reason=e.message)
            return False
        return detected == source_format


directory_scanner = DirectoryScanner()


def scan(root_dir: Union[str, os.PathLike], source_format: str) -> List[ImageHandle]:
    """Scan ``root_dir`` with the default scanner."""
    ensure_logging()
    return directory_scanner.scan(root_dir, source_format)
