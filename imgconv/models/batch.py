"""Data models for batch conversion runs."""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from imgconv.models.image import ImageHandle


class BatchStatus(str, Enum):
    """Status of a batch run."""

    VALIDATING = "validating"
    SCANNING = "scanning"
    CONVERTING = "converting"
    DONE = "done"
    FAILED = "failed"


class BatchRequest(BaseModel):
    """The validated parameters of one batch run."""

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(..., description="Root directory to scan")
    source_format: str = Field(..., description="Format to search for")
    target_format: str = Field(..., description="Format to convert into")


class BatchResult(BaseModel):
    """Outcome of a batch run, complete or partial."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    request: Optional[BatchRequest] = None
    status: BatchStatus = Field(default=BatchStatus.VALIDATING)
    scanned: List[ImageHandle] = Field(
        default_factory=list, description="Candidates found by the scanner"
    )
    converted: List[ImageHandle] = Field(
        default_factory=list, description="Handles after conversion, in order"
    )
    error: Optional[Exception] = None

    @property
    def converted_count(self) -> int:
        return len(self.converted)

    @property
    def pending(self) -> List[ImageHandle]:
        """Candidates that were never converted."""
        return self.scanned[len(self.converted) :]
