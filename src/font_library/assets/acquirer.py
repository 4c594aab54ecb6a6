"""
Asset Acquirer
==============

Brings font face assets into the managed fonts directory, either by
downloading them or by moving an uploaded temporary file into place.
"""

import logging
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from urllib.parse import urlparse

import requests

from src.font_library.core.config import FontLibraryConfig
from src.font_library.core.exceptions import (
    AssetDownloadFailedError,
    AssetError,
    AssetMimeRejectedError,
    UploadNotFoundError,
)
from src.font_library.core.models import (
    FontFace,
    FontFaceRequest,
    LocalSource,
    RemoteSource,
    UploadedFile,
)

from .mime import is_allowed_font_file
from .naming import FilenamePlanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedSource:
    """One source of one face, with the filename reserved for it."""

    face_index: int
    source_index: int
    source: RemoteSource | LocalSource
    filename: str


class AssetAcquirer:
    """
    Downloads or relocates font assets into the managed fonts directory.

    Every source of a face is acquired independently; a failed source is
    skipped and only a face left with no source at all loses its src.
    """

    def __init__(self, config: FontLibraryConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.verify = self.config.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    @property
    def assets_dir(self) -> Path:
        return self.config.assets_dir

    def asset_path(self, filename: str) -> Path:
        return self.assets_dir / filename

    def asset_src(self, filename: str) -> str:
        """Public src value written into the font face for an asset file."""
        return f"{self.config.assets_url_prefix}{filename}"

    def acquire_remote(self, url: str, filename: str) -> str:
        """
        Download a font asset and save it to the fonts directory.

        Args:
            url: Source URL of the font asset
            filename: Target filename inside the fonts directory

        Returns:
            The src referencing the downloaded asset
        """
        target_path = self.asset_path(filename)
        if not is_allowed_font_file(target_path):
            raise AssetMimeRejectedError(filename)

        temp_path = None
        downloaded_size = 0
        try:
            self.assets_dir.mkdir(parents=True, exist_ok=True)
            self.config.download_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=self.config.download_dir, delete=False, prefix=".", suffix=".part"
            ) as temp_file:
                temp_path = Path(temp_file.name)

            logger.debug(f"Downloading {url} to temporary file: {temp_path}")
            with self.session.get(
                url, stream=True, timeout=self.config.timeout_seconds
            ) as response:
                response.raise_for_status()

                with temp_path.open("wb") as f:
                    for chunk in response.iter_content(chunk_size=self.config.chunk_size):
                        if chunk:
                            f.write(chunk)
                            downloaded_size += len(chunk)

            shutil.move(str(temp_path), str(target_path))
        except (requests.RequestException, OSError) as e:
            raise AssetDownloadFailedError(
                f"Failed to download font asset from {url}: {e}",
                {"url": url, "filename": filename},
            ) from e
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        logger.info(f"Downloaded font asset {filename} ({downloaded_size} bytes)")
        return self.asset_src(filename)

    def acquire_local(self, upload: UploadedFile, filename: str) -> str:
        """
        Move an uploaded font asset from its temporary location into the fonts directory.

        Args:
            upload: Uploaded temporary file
            filename: Target filename inside the fonts directory

        Returns:
            The src referencing the moved asset
        """
        target_path = self.asset_path(filename)
        if not is_allowed_font_file(target_path):
            raise AssetMimeRejectedError(filename)

        if not upload.path.is_file():
            raise AssetDownloadFailedError(
                f"Uploaded font file not found: {upload.path}",
                {"upload": str(upload.path), "filename": filename},
            )

        try:
            self.assets_dir.mkdir(parents=True, exist_ok=True)
            shutil.move(str(upload.path), str(target_path))
        except OSError as e:
            raise AssetDownloadFailedError(
                f"Failed to move uploaded font {upload.filename}: {e}",
                {"upload": str(upload.path), "filename": filename},
            ) from e

        logger.info(f"Moved uploaded font asset {upload.filename} to {filename}")
        return self.asset_src(filename)

    @staticmethod
    def asset_filename(src: str) -> str:
        """Fonts directory filename a src points at."""
        return PurePosixPath(urlparse(src).path).name

    def file_owners(self, installed: Sequence[FontFace]) -> dict[str, str]:
        """Descriptor key of the installed face owning each asset filename."""
        owners = {}
        for face in installed:
            for src in face.sources:
                owners.setdefault(self.asset_filename(src), face.descriptor_key())
        return owners

    def plan_sources(
        self,
        faces: list[FontFaceRequest],
        uploads: Mapping[str, UploadedFile],
        installed: Sequence[FontFace] = (),
    ) -> list[PlannedSource]:
        """
        Reserve a target filename for every source of every face, in request order.

        Files of the already installed faces are only handed out again to a face
        with the same descriptors. A source whose locator cannot be parsed is
        logged and left unplanned, so it is never acquired.
        """
        planner = FilenamePlanner(
            owners=self.file_owners(installed),
            is_taken=lambda filename: self.asset_path(filename).exists(),
        )
        planned = []
        for face_index, face in enumerate(faces):
            for source_index, source in enumerate(face.sources):
                locator = self._locator(source, uploads)
                try:
                    filename = planner.next_filename(face, locator)
                except ValueError as e:
                    logger.warning(f"Skipping font asset with invalid locator {locator!r}: {e}")
                    continue
                planned.append(
                    PlannedSource(
                        face_index=face_index,
                        source_index=source_index,
                        source=source,
                        filename=filename,
                    )
                )
        return planned

    def _locator(self, source: RemoteSource | LocalSource, uploads: Mapping[str, UploadedFile]) -> str:
        if isinstance(source, RemoteSource):
            return source.url
        upload = uploads.get(source.upload_key)
        return upload.filename if upload else source.upload_key

    def acquire_source(self, planned: PlannedSource, uploads: Mapping[str, UploadedFile]) -> str:
        source = planned.source
        if isinstance(source, RemoteSource):
            return self.acquire_remote(source.url, planned.filename)
        upload = uploads.get(source.upload_key)
        if upload is None:
            raise UploadNotFoundError(source.upload_key)
        return self.acquire_local(upload, planned.filename)

    def _try_acquire_source(
        self, planned: PlannedSource, uploads: Mapping[str, UploadedFile]
    ) -> str | None:
        try:
            return self.acquire_source(planned, uploads)
        except AssetError as e:
            logger.warning(f"Skipping font asset {planned.filename}: {e}")
            return None

    @staticmethod
    def build_face(face: FontFaceRequest, srcs: list[str]) -> FontFace:
        """Installed face for the acquired srcs; without src when nothing was acquired."""
        data = face.descriptors()
        if len(srcs) == 1:
            data["src"] = srcs[0]
        elif srcs:
            data["src"] = srcs
        return FontFace.model_validate(data)

    def acquire_face(
        self,
        face: FontFaceRequest,
        uploads: Mapping[str, UploadedFile] | None = None,
        installed: Sequence[FontFace] = (),
    ) -> FontFace:
        """Acquire every source of a single face, one after the other."""
        uploads = uploads or {}
        srcs = []
        for planned in self.plan_sources([face], uploads, installed):
            src = self._try_acquire_source(planned, uploads)
            if src:
                srcs.append(src)
        return self.build_face(face, srcs)

    def acquire_faces(
        self,
        faces: list[FontFaceRequest],
        uploads: Mapping[str, UploadedFile] | None = None,
        installed: Sequence[FontFace] = (),
    ) -> list[FontFace]:
        """
        Acquire all sources of all faces concurrently.

        Waits for every acquisition to settle and returns the faces in their
        original order; faces whose sources all failed come back without src.
        """
        uploads = uploads or {}
        planned = self.plan_sources(faces, uploads, installed)
        results: dict[tuple[int, int], str | None] = {}

        if planned:
            workers = min(self.config.max_workers, len(planned))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                future_to_source = {
                    executor.submit(self._try_acquire_source, item, uploads): item
                    for item in planned
                }
                for future in as_completed(future_to_source):
                    item = future_to_source[future]
                    results[(item.face_index, item.source_index)] = future.result()

        acquired = []
        for face_index, face in enumerate(faces):
            srcs = [
                results[(face_index, source_index)]
                for source_index in range(len(face.sources))
                if results.get((face_index, source_index))
            ]
            acquired.append(self.build_face(face, srcs))
        return acquired

    def delete_asset(self, src: str) -> bool:
        """
        Delete the fonts directory file a src points at.

        Returns:
            True if the file was deleted, False if it was missing or is still there
        """
        filename = self.asset_filename(src)
        if not filename:
            return False
        file_path = self.asset_path(filename)

        if not file_path.exists():
            logger.warning(f"Font asset not found for deletion: {file_path}")
            return False

        try:
            file_path.unlink()
        except OSError as e:
            logger.warning(f"Failed to delete font asset {file_path}: {e}")

        if file_path.exists():
            return False

        logger.debug(f"Deleted font asset: {file_path}")
        return True

    def cleanup(self):
        """Cleanup acquirer resources."""
        if hasattr(self, "session"):
            self.session.close()
