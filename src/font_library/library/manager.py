"""Font Library
============

High-level interface for installing and uninstalling font families together
with the font face assets they reference.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from src.font_library.assets.acquirer import AssetAcquirer
from src.font_library.core.config import FontLibraryConfig
from src.font_library.core.exceptions import (
    AssetDeleteFailedError,
    NoFontFacesAcquiredError,
    RecordDeleteFailedError,
    RecordNotFoundError,
    RecordPersistFailedError,
    StorageError,
)
from src.font_library.core.models import (
    FontFamily,
    FontFamilyRequest,
    FontRecord,
    UploadedFile,
)

from .merge import merge_font_families
from .sanitizer import sanitize_font_family
from .store import JsonFileRecordStore, RecordStore

logger = logging.getLogger(__name__)

Sanitizer = Callable[[Any], FontFamilyRequest]


class FontLibrary:
    """High-level interface for the installed font families.

    Install: sanitize, look up the stored family, acquire assets without
    overwriting files the stored faces still use, merge or pass through,
    persist. Uninstall: look up, delete assets, delete record.
    Assets are always written before and removed before the record that
    references them.
    """

    def __init__(
        self,
        config: FontLibraryConfig | None = None,
        store: RecordStore | None = None,
        acquirer: AssetAcquirer | None = None,
        sanitizer: Sanitizer = sanitize_font_family,
    ):
        self.config = config or FontLibraryConfig()
        self.config.ensure_directories()

        self.store = store if store is not None else JsonFileRecordStore(self.config.records_path)
        self.acquirer = acquirer or AssetAcquirer(self.config)
        self.sanitizer = sanitizer

        logger.info(f"FontLibrary initialized with fonts directory: {self.config.assets_dir}")

    def install(
        self,
        raw_family: Any,
        uploads: Mapping[str, UploadedFile] | None = None,
    ) -> FontFamily:
        """Install a font family into the library.

        Args:
            raw_family: Font family definition (dict, JSON text or FontFamilyRequest)
            uploads: Uploaded temporary files by upload key, for local sources

        Returns:
            The canonical font family as stored

        Raises:
            FontValidationError: If the definition is rejected by the sanitizer
            AssetDownloadFailedError: If no font face could be acquired
            RecordPersistFailedError: If the record could not be stored
        """
        request = self.sanitizer(raw_family)
        logger.info(f"Installing font family: {request.slug}")

        record = self._lookup_for_install(request.slug)
        existing = record.family() if record is not None else None

        family = self._acquire_assets(request, uploads or {}, existing)
        if existing is not None:
            family = merge_font_families(existing, family)

        self._persist(family, record)
        logger.info(
            f"Installed font family {family.slug} with {len(family.font_face)} font faces"
        )
        return family

    def _acquire_assets(
        self,
        request: FontFamilyRequest,
        uploads: Mapping[str, UploadedFile],
        existing: FontFamily | None = None,
    ) -> FontFamily:
        fields = request.family_fields()
        if not request.has_font_faces:
            return FontFamily.model_validate({**fields, "fontFace": []})

        installed = existing.font_face if existing is not None else []
        faces = self.acquirer.acquire_faces(request.font_face, uploads, installed)
        kept = [face for face in faces if face.has_src]

        dropped = len(faces) - len(kept)
        if dropped:
            logger.warning(f"Dropped {dropped} font faces of {request.slug} without assets")
        if not kept:
            raise NoFontFacesAcquiredError(request.slug)

        return FontFamily.model_validate({**fields, "fontFace": kept})

    def _lookup_for_install(self, slug: str) -> FontRecord | None:
        try:
            return self.store.get_by_key(slug)
        except StorageError as e:
            raise RecordPersistFailedError(
                f"Font family record lookup failed: {e}", {"slug": slug}
            ) from e

    def _persist(self, family: FontFamily, record: FontRecord | None) -> int:
        try:
            if record is None:
                return self.store.create(title=family.name, key=family.slug, content=family.to_json())
            return self.store.update(record.id, content=family.to_json())
        except StorageError as e:
            logger.exception(f"Failed to persist font family: {family.slug}")
            raise RecordPersistFailedError(
                f"Font family record could not be saved: {e}", {"slug": family.slug}
            ) from e

    def uninstall(self, slug: str) -> None:
        """Remove a font family and delete its assets.

        Assets are deleted first; the first one that cannot be deleted aborts
        the uninstall and the record is kept so the call can be retried.

        Raises:
            RecordNotFoundError: If no family is stored under the slug
            AssetDeleteFailedError: If an asset file could not be deleted
            RecordDeleteFailedError: If the record could not be deleted
        """
        record = self.store.get_by_key(slug)
        if record is None:
            raise RecordNotFoundError(slug)

        family = record.family()
        srcs = dict.fromkeys(src for face in family.font_face for src in face.sources)
        for src in srcs:
            if not self.acquirer.delete_asset(src):
                logger.error(f"Aborting uninstall of {slug}: could not delete {src}")
                raise AssetDeleteFailedError(src)

        try:
            self.store.delete(record.id)
        except StorageError as e:
            logger.exception(f"Font assets of {slug} were deleted but its record was not")
            raise RecordDeleteFailedError(
                f"The font family could not be deleted: {e}", {"slug": slug}
            ) from e

        logger.info(f"Uninstalled font family: {slug}")

    def get_family(self, slug: str) -> FontFamily:
        """Get an installed font family by slug."""
        record = self.store.get_by_key(slug)
        if record is None:
            raise RecordNotFoundError(slug)
        return record.family()

    def list_families(self) -> list[FontFamily]:
        """List installed font families in installation order."""
        return [record.family() for record in self.store.list_records()]

    def close(self) -> None:
        self.acquirer.cleanup()
