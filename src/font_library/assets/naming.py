"""
Asset Naming
============

Deterministic filenames for font face assets, derived from the face's family,
style and weight plus the extension of the original source.
"""

import re
import unicodedata
from collections.abc import Callable, Mapping
from pathlib import PurePosixPath
from urllib.parse import urlparse

from src.font_library.core.models import FontFaceDescriptor

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def sanitize_title(value: str) -> str:
    """Lower-case ASCII slug: accents stripped, other characters collapsed to '-'."""
    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM.sub("-", text).strip("-")


def extension_from_locator(locator: str) -> str:
    """Extension of a URL or file name, lower-cased, without the dot."""
    path = urlparse(locator).path if "://" in locator else locator
    return PurePosixPath(path).suffix.lstrip(".").lower()


def face_file_stem(face: FontFaceDescriptor) -> str:
    family = sanitize_title(face.font_family)
    style = sanitize_title(face.font_style)
    weight = sanitize_title(face.font_weight)
    return f"{family}_{style}_{weight}"


def filename_for_face(face: FontFaceDescriptor, locator: str, counter: int = 1) -> str:
    """
    Generate a filename for a font face asset.

    Args:
        face: Font face providing fontFamily, fontStyle and fontWeight
        locator: Source URL or original file name, used for the extension
        counter: Disambiguation counter, appended only when greater than 1

    Returns:
        Filename such as ``open-sans_italic_700_2.woff2``
    """
    filename = face_file_stem(face)
    if counter > 1:
        filename = f"{filename}_{counter}"
    extension = extension_from_locator(locator)
    return f"{filename}.{extension}" if extension else filename


class FilenamePlanner:
    """
    Hands out collision-free filenames for one install, in request order.

    Each source gets the lowest counter whose filename is not already planned
    in this install and does not belong to someone else. A filename owned by
    an installed face with the same descriptors is handed out again, so a
    re-installed face keeps its file and src. Filenames owned by a different
    face, or present on disk without an owner, are skipped.

    Args:
        owners: Descriptor key of the installed face owning each filename
        is_taken: Whether a filename is already present in the fonts directory
    """

    def __init__(
        self,
        owners: Mapping[str, str] | None = None,
        is_taken: Callable[[str], bool] | None = None,
    ):
        self._owners = dict(owners or {})
        self._is_taken = is_taken or (lambda filename: False)
        self._planned: set[str] = set()

    def _available(self, filename: str, descriptor_key: str) -> bool:
        if filename in self._planned:
            return False
        owner = self._owners.get(filename)
        if owner is not None:
            return owner == descriptor_key
        return not self._is_taken(filename)

    def next_filename(self, face: FontFaceDescriptor, locator: str) -> str:
        descriptor_key = face.descriptor_key()
        counter = 1
        while not self._available(filename_for_face(face, locator, counter), descriptor_key):
            counter += 1
        filename = filename_for_face(face, locator, counter)
        self._planned.add(filename)
        return filename
