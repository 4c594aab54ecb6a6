"""Custom exceptions for the font library."""

from typing import Any


class FontLibraryError(Exception):
    """Base exception for all font library errors."""

    code = "font_library_error"

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        """Structured form used by the CLI and by callers rendering failures."""
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


class FontValidationError(FontLibraryError):
    """Exception raised when a font family definition has an invalid shape."""

    code = "validation_error"


class ConfigurationError(FontLibraryError):
    """Exception raised for configuration errors."""

    code = "configuration_error"


class StorageError(FontLibraryError):
    """Exception raised by record stores."""

    code = "storage_error"


class AssetError(FontLibraryError):
    """Base exception for per-source asset failures."""

    code = "asset_error"


class AssetMimeRejectedError(AssetError):
    """Exception raised when a target filename is not an allowed font type."""

    code = "asset_mime_rejected"

    def __init__(self, filename: str):
        super().__init__(f"File type not allowed for font asset: {filename}", {"filename": filename})


class AssetDownloadFailedError(AssetError):
    """Exception raised when a font asset could not be written to the fonts directory."""

    code = "asset_download_failed"


class AssetDeleteFailedError(AssetError):
    """Exception raised when an installed font asset could not be removed."""

    code = "asset_delete_failed"

    def __init__(self, src: str):
        super().__init__(f"Font asset could not be deleted: {src}", {"src": src})


class RecordNotFoundError(FontLibraryError):
    """Exception raised when no font family is stored under a slug."""

    code = "record_not_found"

    def __init__(self, slug: str):
        super().__init__(f"The font family could not be found: {slug}", {"slug": slug})


class RecordPersistFailedError(FontLibraryError):
    """Exception raised when a font family record could not be created or updated."""

    code = "record_persist_failed"


class RecordDeleteFailedError(FontLibraryError):
    """Exception raised when a font family record could not be deleted."""

    code = "record_delete_failed"


# Specific exception classes for TRY003 compliance
class NoFontFacesAcquiredError(AssetDownloadFailedError):
    """Exception raised when every font face of a family failed acquisition."""

    def __init__(self, slug: str):
        super().__init__("The font face assets could not be written.", {"slug": slug})


class UploadNotFoundError(AssetDownloadFailedError):
    """Exception raised when a local source names an upload the caller did not supply."""

    def __init__(self, upload_key: str):
        super().__init__(f"Uploaded file not provided: {upload_key}", {"upload_key": upload_key})


class MaxWorkersPositiveError(ValueError):
    """Exception raised when max_workers is not positive."""

    def __init__(self):
        super().__init__("max_workers must be positive")


class TimeoutSecondsPositiveError(ValueError):
    """Exception raised when timeout_seconds is not positive."""

    def __init__(self):
        super().__init__("timeout_seconds must be positive")


class ChunkSizePositiveError(ValueError):
    """Exception raised when chunk_size is not positive."""

    def __init__(self):
        super().__init__("chunk_size must be positive")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised when YAML is invalid."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class RecordsFileCorruptError(StorageError):
    """Exception raised when the records file cannot be parsed."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Font records file is corrupt: {path}: {error}")


class DuplicateRecordKeyError(StorageError):
    """Exception raised when creating a record whose key already exists."""

    def __init__(self, key: str):
        super().__init__(f"A font record already exists for key: {key}")


class RecordIdNotFoundError(StorageError):
    """Exception raised when updating or deleting an unknown record id."""

    def __init__(self, record_id: int):
        super().__init__(f"No font record with id: {record_id}")
