"""Merging of an installed font family with a newly submitted one."""

from src.font_library.core.models import FontFace, FontFamily


def unique_font_faces(faces: list[FontFace]) -> list[FontFace]:
    """Drop structurally identical faces, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for face in faces:
        key = face.canonical_key()
        if key not in seen:
            seen.add(key)
            unique.append(face)
    return unique


def merge_font_families(existing: FontFamily, incoming: FontFamily) -> FontFamily:
    """
    Merge two font families and their font faces.

    Top-level fields of the incoming family win. Font faces are concatenated
    (existing first) and de-duplicated by full value equality.

    Args:
        existing: The family already stored
        incoming: The family being installed

    Returns:
        A new merged FontFamily; neither argument is modified
    """
    merged = {
        **existing.model_dump(by_alias=True, exclude={"font_face"}),
        **incoming.model_dump(by_alias=True, exclude={"font_face"}),
    }
    merged["fontFace"] = unique_font_faces([*existing.font_face, *incoming.font_face])
    return FontFamily.model_validate(merged)
