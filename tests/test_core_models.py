"""Unit tests for core font library models and exceptions."""

import pytest
from pydantic import ValidationError

from src.font_library.core.exceptions import (
    AssetMimeRejectedError,
    FontLibraryError,
    NoFontFacesAcquiredError,
    StorageError,
)
from src.font_library.core.models import (
    FontFace,
    FontFaceRequest,
    FontFamily,
    FontRecord,
    LocalSource,
    RemoteSource,
    UploadedFile,
)


class TestFontFaceRequest:
    """Test incoming font face parsing."""

    def test_scalar_src(self):
        face = FontFaceRequest.model_validate({"fontFamily": "Acme", "src": "https://x/a.ttf"})
        assert face.sources == [RemoteSource(url="https://x/a.ttf")]

    def test_missing_src(self):
        face = FontFaceRequest.model_validate({"fontFamily": "Acme"})
        assert face.sources == []

    def test_tagged_sources(self):
        face = FontFaceRequest.model_validate(
            {
                "fontFamily": "Acme",
                "src": [
                    {"kind": "remote", "url": "https://x/a.woff2"},
                    {"kind": "local", "uploadKey": "files0"},
                ],
            }
        )
        assert isinstance(face.sources[0], RemoteSource)
        assert isinstance(face.sources[1], LocalSource)
        assert face.sources[1].upload_key == "files0"

    def test_empty_url_rejected(self):
        with pytest.raises(ValidationError):
            FontFaceRequest.model_validate({"fontFamily": "Acme", "src": ""})

    def test_font_family_required(self):
        with pytest.raises(ValidationError):
            FontFaceRequest.model_validate({"src": "https://x/a.ttf"})

    def test_descriptors_keep_extras(self):
        face = FontFaceRequest.model_validate(
            {
                "fontFamily": "Acme",
                "fontWeight": 400.0,
                "unicodeRange": "U+0000-00FF",
                "src": "https://x/a.ttf",
            }
        )

        assert face.descriptors() == {
            "fontFamily": "Acme",
            "fontStyle": "normal",
            "fontWeight": "400",
            "unicodeRange": "U+0000-00FF",
        }


class TestFontFace:
    """Test installed font faces."""

    def test_sources(self):
        assert FontFace(fontFamily="Acme", src="/fonts/a.ttf").sources == ["/fonts/a.ttf"]
        assert FontFace(fontFamily="Acme", src=["/fonts/a.woff2", "/fonts/a.ttf"]).sources == [
            "/fonts/a.woff2",
            "/fonts/a.ttf",
        ]
        assert FontFace(fontFamily="Acme").sources == []

    def test_has_src(self):
        assert FontFace(fontFamily="Acme", src="/fonts/a.ttf").has_src is True
        assert FontFace(fontFamily="Acme", src=[]).has_src is False

    def test_canonical_key_ignores_order(self):
        a = FontFace.model_validate({"fontFamily": "Acme", "src": "/a", "fontDisplay": "swap"})
        b = FontFace.model_validate({"fontDisplay": "swap", "src": "/a", "fontFamily": "Acme"})
        assert a.canonical_key() == b.canonical_key()


class TestFontFamily:
    """Test font family serialization."""

    def test_json_round_trip_keeps_extras(self):
        family = FontFamily.model_validate(
            {
                "name": "Acme",
                "slug": "acme",
                "fontFamily": "Acme, serif",
                "preview": "https://x/preview.svg",
                "fontFace": [{"fontFamily": "Acme", "src": "/fonts/acme_normal_400.ttf"}],
            }
        )

        restored = FontFamily.from_json(family.to_json())

        assert restored == family
        assert restored.to_dict()["preview"] == "https://x/preview.svg"
        assert restored.has_font_faces is True

    def test_to_dict_omits_missing_src(self):
        family = FontFamily(name="Acme", slug="acme", fontFamily="Acme")
        assert family.to_dict() == {
            "name": "Acme",
            "slug": "acme",
            "fontFamily": "Acme",
            "fontFace": [],
        }


class TestFontRecord:
    """Test stored records."""

    def test_family(self):
        content = '{"name": "Acme", "slug": "acme", "fontFamily": "Acme"}'
        record = FontRecord(id=1, title="Acme", key="acme", content=content)
        assert record.family().slug == "acme"

    def test_invalid_content(self):
        record = FontRecord(id=1, title="Acme", key="acme", content='{"name": "Acme"}')

        with pytest.raises(StorageError) as exc_info:
            record.family()
        assert exc_info.value.details["key"] == "acme"


class TestUploadedFile:
    def test_from_path(self, temp_dir):
        upload = UploadedFile.from_path(temp_dir / "Acme.woff2")
        assert upload.filename == "Acme.woff2"
        assert upload.path == temp_dir / "Acme.woff2"


class TestExceptions:
    """Test the font library exception hierarchy."""

    def test_to_dict(self):
        error = AssetMimeRejectedError("acme_normal_400.svg")

        assert isinstance(error, FontLibraryError)
        assert error.to_dict() == {
            "code": "asset_mime_rejected",
            "message": "File type not allowed for font asset: acme_normal_400.svg",
            "details": {"filename": "acme_normal_400.svg"},
        }

    def test_to_dict_without_details(self):
        assert StorageError("broken").to_dict() == {"code": "storage_error", "message": "broken"}

    def test_subclass_keeps_code(self):
        assert NoFontFacesAcquiredError("acme").code == "asset_download_failed"
