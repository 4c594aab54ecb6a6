"""Configuration management for the font library."""

from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ChunkSizePositiveError,
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
    MaxWorkersPositiveError,
    TimeoutSecondsPositiveError,
)


class FontLibraryConfig(BaseSettings):
    """Settings for the font library, read from FONTS_* variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="FONTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage settings
    assets_dir: Path = Field(Path("./fonts"), description="Managed font assets directory")
    assets_url_prefix: str = Field(
        "/fonts/", description="Prefix written in front of asset filenames in font face src"
    )
    records_path: Path = Field(
        Path("./data/font_library.json"), description="JSON file holding font family records"
    )
    temp_dir: Path | None = Field(
        None, description="Directory for in-flight downloads (defaults to the assets directory)"
    )

    # Download settings
    timeout_seconds: int = Field(30, description="HTTP timeout for asset downloads")
    chunk_size: int = Field(8192, description="Download chunk size in bytes")
    max_workers: int = Field(4, description="Concurrent asset acquisitions per install")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
    user_agent: str = Field("font-library/1.0.0", description="User agent for downloads")

    log_level: str = Field("INFO", description="Application log level")

    @field_validator("assets_url_prefix")
    @classmethod
    def validate_assets_url_prefix(cls, v: str) -> str:
        if v and not v.endswith("/"):
            return f"{v}/"
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if v <= 0:
            raise MaxWorkersPositiveError()
        return v

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout_seconds(cls, v: int) -> int:
        if v <= 0:
            raise TimeoutSecondsPositiveError()
        return v

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        if v <= 0:
            raise ChunkSizePositiveError()
        return v

    @property
    def download_dir(self) -> Path:
        """Directory where downloads are staged before being moved into place."""
        return self.temp_dir or self.assets_dir

    def ensure_directories(self) -> None:
        """Create the managed directories if they do not exist yet."""
        for directory in [self.assets_dir, self.download_dir, self.records_path.parent]:
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "FontLibraryConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path, cls)

    @classmethod
    def from_env_and_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str = ".env"
    ) -> "FontLibraryConfig":
        """Load configuration from environment variables and optionally override with YAML."""
        if yaml_path and Path(yaml_path).exists():
            return cls.from_yaml(yaml_path)
        return cls(_env_file=env_file if Path(env_file).exists() else None)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        # YAML values win over .env for this instance
        class YamlConfig(config_class):
            model_config = SettingsConfigDict(
                env_prefix=config_class.model_config.get("env_prefix", ""),
                env_file=None,
                case_sensitive=False,
                extra="ignore",
            )

        return YamlConfig(**config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
