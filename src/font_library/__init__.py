"""Font Library
============

Installs font families (theme.json ``fontFamilies`` definitions) together with
the font face files they reference, merges re-installs into the stored family
and uninstalls families with their files.
"""

__version__ = "1.0.0"

from .core.config import FontLibraryConfig
from .core.exceptions import FontLibraryError
from .core.models import FontFace, FontFamily, LocalSource, RemoteSource, UploadedFile
from .library import FontLibrary, InMemoryRecordStore, JsonFileRecordStore

__all__ = [
    "FontFace",
    "FontFamily",
    "FontLibrary",
    "FontLibraryConfig",
    "FontLibraryError",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "LocalSource",
    "RemoteSource",
    "UploadedFile",
]
