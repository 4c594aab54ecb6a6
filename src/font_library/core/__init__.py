"""Core components for the font library."""

from .config import FontLibraryConfig
from .exceptions import (
    AssetDeleteFailedError,
    AssetDownloadFailedError,
    AssetMimeRejectedError,
    ConfigurationError,
    FontLibraryError,
    FontValidationError,
    RecordDeleteFailedError,
    RecordNotFoundError,
    RecordPersistFailedError,
    StorageError,
)
from .models import (
    FontFace,
    FontFaceRequest,
    FontFamily,
    FontFamilyRequest,
    FontRecord,
    LocalSource,
    RemoteSource,
    UploadedFile,
)

__all__ = [
    "AssetDeleteFailedError",
    "AssetDownloadFailedError",
    "AssetMimeRejectedError",
    "ConfigurationError",
    "FontFace",
    "FontFaceRequest",
    "FontFamily",
    "FontFamilyRequest",
    "FontLibraryConfig",
    "FontLibraryError",
    "FontRecord",
    "FontValidationError",
    "LocalSource",
    "RecordDeleteFailedError",
    "RecordNotFoundError",
    "RecordPersistFailedError",
    "RemoteSource",
    "StorageError",
    "UploadedFile",
]
