"""Tests for merging a stored font family with a re-installed one."""

from src.font_library.core.models import FontFace, FontFamily
from src.font_library.library.merge import merge_font_families, unique_font_faces


def make_face(weight="400", src=None, **extra) -> FontFace:
    return FontFace.model_validate(
        {
            "fontFamily": "Acme",
            "fontStyle": "normal",
            "fontWeight": weight,
            "src": src or f"/fonts/acme_normal_{weight}.woff2",
            **extra,
        }
    )


def make_family(faces, **fields) -> FontFamily:
    data = {"name": "Acme", "slug": "acme", "fontFamily": "Acme", "fontFace": faces}
    data.update(fields)
    return FontFamily.model_validate(data)


class TestUniqueFontFaces:
    """Test structural de-duplication of font faces."""

    def test_keeps_first_occurrence(self):
        first = make_face("400")
        duplicate = make_face("400")
        other = make_face("700")

        unique = unique_font_faces([first, other, duplicate])

        assert unique == [first, other]
        assert unique[0] is first

    def test_key_order_does_not_matter(self):
        a = FontFace.model_validate(
            {"fontFamily": "Acme", "fontWeight": "400", "src": "/fonts/a.ttf", "fontDisplay": "swap"}
        )
        b = FontFace.model_validate(
            {"fontDisplay": "swap", "src": "/fonts/a.ttf", "fontWeight": "400", "fontFamily": "Acme"}
        )

        assert len(unique_font_faces([a, b])) == 1

    def test_extra_descriptor_makes_faces_distinct(self):
        plain = make_face("400")
        swapped = make_face("400", fontDisplay="swap")

        assert len(unique_font_faces([plain, swapped])) == 2

    def test_empty(self):
        assert unique_font_faces([]) == []


class TestMergeFontFamilies:
    """Test merging of top-level fields and font faces."""

    def test_overlapping_faces_are_deduplicated(self):
        existing = make_family([make_face("400"), make_face("700")])
        incoming = make_family([make_face("700"), make_face("900")])

        merged = merge_font_families(existing, incoming)

        assert [face.font_weight for face in merged.font_face] == ["400", "700", "900"]

    def test_incoming_fields_win(self):
        existing = make_family([make_face("400")], name="Acme Old", category="serif")
        incoming = make_family([make_face("400")], name="Acme New")

        merged = merge_font_families(existing, incoming)

        assert merged.name == "Acme New"
        assert merged.to_dict()["category"] == "serif"
        assert len(merged.font_face) == 1

    def test_inputs_are_not_modified(self):
        existing = make_family([make_face("400")])
        incoming = make_family([make_face("700")], name="Other")
        existing_before = existing.to_dict()
        incoming_before = incoming.to_dict()

        merge_font_families(existing, incoming)

        assert existing.to_dict() == existing_before
        assert incoming.to_dict() == incoming_before

    def test_merge_with_empty_incoming(self):
        existing = make_family([make_face("400")])
        incoming = make_family([])

        merged = merge_font_families(existing, incoming)

        assert merged.font_face == existing.font_face

    def test_merge_survives_serialization(self):
        existing = FontFamily.from_json(make_family([make_face("400")]).to_json())
        incoming = make_family([make_face("400")])

        assert len(merge_font_families(existing, incoming).font_face) == 1
