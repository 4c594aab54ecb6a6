"""Font family lifecycle: sanitizing, merging, persisting and uninstalling."""

from .manager import FontLibrary
from .merge import merge_font_families, unique_font_faces
from .sanitizer import sanitize_font_family
from .store import InMemoryRecordStore, JsonFileRecordStore, RecordStore

__all__ = [
    "FontLibrary",
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "RecordStore",
    "merge_font_families",
    "sanitize_font_family",
    "unique_font_faces",
]
