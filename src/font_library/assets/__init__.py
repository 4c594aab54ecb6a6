"""Font Asset Handling
===================

Naming, type checking and acquisition of font face asset files kept in the
managed fonts directory.
"""

from .acquirer import AssetAcquirer, PlannedSource
from .mime import ALLOWED_FONT_MIME_TYPES, font_mime_type, is_allowed_font_file
from .naming import FilenamePlanner, filename_for_face, sanitize_title

__all__ = [
    "ALLOWED_FONT_MIME_TYPES",
    "AssetAcquirer",
    "FilenamePlanner",
    "PlannedSource",
    "filename_for_face",
    "font_mime_type",
    "is_allowed_font_file",
    "sanitize_title",
]
