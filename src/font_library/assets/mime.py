"""Allow-list of font file types accepted into the managed fonts directory."""

from pathlib import Path

ALLOWED_FONT_MIME_TYPES = {
    "otf": "font/otf",
    "ttf": "font/ttf",
    "woff": "font/woff",
    "woff2": "font/woff2",
}


def font_mime_type(path: str | Path) -> str | None:
    """Font MIME type for a path, or None when the extension is not allowed."""
    extension = Path(path).suffix.lstrip(".").lower()
    return ALLOWED_FONT_MIME_TYPES.get(extension)


def is_allowed_font_file(path: str | Path) -> bool:
    """Whether the given (target) filename has a font MIME type."""
    return font_mime_type(path) is not None
