"""
Font Family Sanitizer
=====================

Validates and normalizes a raw font family definition (a dict in theme.json
``fontFamilies`` format, or its JSON text) into a FontFamilyRequest.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from src.font_library.assets.naming import sanitize_title
from src.font_library.core.exceptions import FontValidationError
from src.font_library.core.models import FontFamilyRequest

logger = logging.getLogger(__name__)


def _strip_strings(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value.strip() if isinstance(value, str) else value for key, value in data.items()}


def _sanitize_face(face: Any, index: int, family_name: str) -> dict[str, Any]:
    if not isinstance(face, Mapping):
        raise FontValidationError(f"fontFace[{index}] must be an object", {"index": index})

    face = _strip_strings(face)
    if not face.get("fontFamily"):
        face["fontFamily"] = family_name

    # An uploaded file reference selects local acquisition for this face
    upload_key = face.pop("file", None)
    if upload_key and not face.get("src"):
        face["src"] = {"kind": "local", "upload_key": upload_key}

    return face


def sanitize_font_family(raw: Mapping[str, Any] | str | bytes | FontFamilyRequest) -> FontFamilyRequest:
    """
    Sanitize a raw font family definition.

    The slug is normalized to a URL-safe value (derived from the name when
    missing); name and fontFamily fall back to each other, and faces without a
    fontFamily inherit the family name.

    Raises:
        FontValidationError: If the definition cannot be turned into a valid family
    """
    if isinstance(raw, FontFamilyRequest):
        return raw

    if isinstance(raw, str | bytes):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FontValidationError(f"Font family is not valid JSON: {e}") from e

    if not isinstance(raw, Mapping):
        raise FontValidationError("Font family definition must be an object")

    data = _strip_strings(raw)
    slug = sanitize_title(data.get("slug") or data.get("name") or "")
    if not slug:
        raise FontValidationError("Font family needs a slug or a name")

    data["slug"] = slug
    data["name"] = data.get("name") or slug
    data["fontFamily"] = data.get("fontFamily") or data["name"]

    faces = data.get("fontFace") or []
    if not isinstance(faces, list):
        raise FontValidationError("fontFace must be a list")
    data["fontFace"] = [_sanitize_face(face, i, data["name"]) for i, face in enumerate(faces)]

    try:
        family = FontFamilyRequest.model_validate(data)
    except ValidationError as e:
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise FontValidationError(f"Invalid font family definition: {slug}", errors) from e

    logger.debug(f"Sanitized font family {family.slug} with {len(family.font_face)} faces")
    return family
