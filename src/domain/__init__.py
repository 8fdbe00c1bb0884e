"""Domain layer: errors and schemas."""

from .errors import ErrorCodes, GalleryError
from .schemas import (
    CacheEntry,
    ImageDescriptor,
    ScanResult,
    ScanSkip,
    SkipReason,
)

__all__ = [
    "ErrorCodes",
    "GalleryError",
    "CacheEntry",
    "ImageDescriptor",
    "ScanResult",
    "ScanSkip",
    "SkipReason",
]
