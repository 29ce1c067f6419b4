from imgconv.models.batch import BatchRequest, BatchResult, BatchStatus
from imgconv.models.conversion import ConversionSettings
from imgconv.models.image import ImageHandle

__all__ = [
    "BatchRequest",
    "BatchResult",
    "BatchStatus",
    "ConversionSettings",
    "ImageHandle",
]
