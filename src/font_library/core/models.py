"""Pydantic models for font families, font faces and their asset sources."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import StorageError


class RemoteSource(BaseModel):
    """Font asset to be downloaded from a URL."""

    kind: Literal["remote"] = "remote"
    url: str = Field(..., min_length=1)


class LocalSource(BaseModel):
    """Font asset already uploaded to a temporary file, referenced by upload key."""

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["local"] = "local"
    upload_key: str = Field(..., min_length=1, alias="uploadKey")


AssetRef = Annotated[RemoteSource | LocalSource, Field(discriminator="kind")]


@dataclass(frozen=True)
class UploadedFile:
    """A temporary upload handed over by the caller."""

    path: Path
    filename: str

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        path = Path(path)
        return cls(path=path, filename=path.name)


def _coerce_asset_ref(value: Any) -> Any:
    if isinstance(value, str):
        return {"kind": "remote", "url": value}
    if isinstance(value, dict) and "kind" not in value:
        if "url" in value:
            return {"kind": "remote", **value}
        if "uploadKey" in value or "upload_key" in value:
            return {"kind": "local", **value}
    return value


class FontFaceDescriptor(BaseModel):
    """CSS descriptors shared by incoming and installed font faces."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    font_family: str = Field(..., min_length=1, alias="fontFamily")
    font_style: str = Field("normal", min_length=1, alias="fontStyle")
    font_weight: str = Field("400", min_length=1, alias="fontWeight")

    @field_validator("font_weight", mode="before")
    @classmethod
    def weight_as_string(cls, v: Any) -> Any:
        if isinstance(v, int | float) and not isinstance(v, bool):
            return str(int(v)) if float(v).is_integer() else str(v)
        return v

    def descriptor_key(self) -> str:
        """Serialization of the CSS descriptors alone, ignoring sources."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        data.pop("src", None)
        return json.dumps(data, sort_keys=True)


class FontFaceRequest(FontFaceDescriptor):
    """A font face as submitted for installation, before its assets are acquired."""

    sources: list[AssetRef] = Field(default_factory=list, alias="src")

    @field_validator("sources", mode="before")
    @classmethod
    def normalize_sources(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            v = [v]
        return [_coerce_asset_ref(item) for item in v]

    def descriptors(self) -> dict[str, Any]:
        """Wire-format descriptors (including extra CSS descriptors), without sources."""
        return self.model_dump(by_alias=True, exclude={"sources"})


class FontFace(FontFaceDescriptor):
    """An installed font face whose src points at files in the managed directory."""

    src: str | list[str] | None = None

    @property
    def sources(self) -> list[str]:
        if not self.src:
            return []
        if isinstance(self.src, str):
            return [self.src]
        return list(self.src)

    @property
    def has_src(self) -> bool:
        return bool(self.sources)

    def canonical_key(self) -> str:
        """Order-independent serialization used for structural equality."""
        return json.dumps(self.model_dump(by_alias=True, exclude_none=True), sort_keys=True)


class _FamilyBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    font_family: str = Field(..., min_length=1, alias="fontFamily")


class FontFamilyRequest(_FamilyBase):
    """A sanitized font family definition awaiting installation."""

    font_face: list[FontFaceRequest] = Field(default_factory=list, alias="fontFace")

    @property
    def has_font_faces(self) -> bool:
        return bool(self.font_face)

    def family_fields(self) -> dict[str, Any]:
        """Top-level wire fields (including extras), without font faces."""
        return self.model_dump(by_alias=True, exclude={"font_face"})


class FontFamily(_FamilyBase):
    """An installed font family in theme.json fontFamilies format."""

    font_face: list[FontFace] = Field(default_factory=list, alias="fontFace")

    @property
    def has_font_faces(self) -> bool:
        return bool(self.font_face)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, content: str) -> "FontFamily":
        return cls.model_validate_json(content)


class FontRecord(BaseModel):
    """A stored font family: title, unique key (slug) and serialized content."""

    id: int
    title: str
    key: str
    content: str

    def family(self) -> FontFamily:
        """Decode the stored content."""
        try:
            return FontFamily.from_json(self.content)
        except ValidationError as e:
            raise StorageError(
                f"Stored font family content is invalid for key: {self.key}",
                {"key": self.key, "errors": [err["msg"] for err in e.errors()]},
            ) from e
