"""In-memory record of one image discovered during a batch run."""

from pathlib import Path
from typing import Any, Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ImageHandle(BaseModel):
    """A decoded image together with the file it currently lives in.

    Handles are immutable. Converting an image produces a new handle
    (see :meth:`converted_to`) instead of changing this one, so a handle
    that has not been converted always refers to the original file.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    path: Path = Field(..., description="Current location of the image file")
    image: Image.Image = Field(..., description="Decoded pixel data")
    format: str = Field(..., description="Format token of the file at path")
    original_path: Optional[Path] = Field(
        None, description="Location the image was discovered at"
    )
    is_converted: bool = Field(
        False, description="Whether the file at path was written by a conversion"
    )

    @model_validator(mode="before")
    @classmethod
    def _default_original_path(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("original_path") is None:
            data = {**data, "original_path": data.get("path")}
        return data

    def open(self, mode: str = "rb"):
        """Reopen the underlying file."""
        return open(self.path, mode)

    def converted_to(self, new_path: Path, new_format: str) -> "ImageHandle":
        """Return the handle describing the image after conversion."""
        return self.model_copy(
            update={"path": Path(new_path), "format": new_format, "is_converted": True}
        )

    def __repr__(self) -> str:
        return (
            f"ImageHandle(path={str(self.path)!r}, format={self.format!r}, "
            f"size={self.image.size})"
        )
