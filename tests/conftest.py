"""
Pytest configuration and fixtures for font library tests.
"""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock, Mock

import pytest
import requests

from src.font_library.assets.acquirer import AssetAcquirer
from src.font_library.core.config import FontLibraryConfig
from src.font_library.library.manager import FontLibrary
from src.font_library.library.store import InMemoryRecordStore


def make_response(content: bytes = b"wOF2", status_code: int = 200) -> Mock:
    """Fake streaming requests response, usable as a context manager."""
    response = MagicMock()
    response.__enter__.return_value = response
    response.status_code = status_code
    response.iter_content.return_value = [content[: len(content) // 2], content[len(content) // 2 :]]
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Client Error")
    return response


def fake_get(url: str, **kwargs) -> Mock:
    """Serve font bytes for any URL; URLs mentioning 'missing' 404, 'offline' fail to connect."""
    if "offline" in url:
        raise requests.ConnectionError(f"Failed to connect to {url}")
    if "missing" in url:
        return make_response(status_code=404)
    return make_response(f"font:{url}".encode())


@pytest.fixture
def temp_dir():
    """Create temporary working directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def font_config(temp_dir):
    """Font library configuration rooted in the temporary directory."""
    return FontLibraryConfig(
        _env_file=None,
        assets_dir=temp_dir / "fonts",
        records_path=temp_dir / "data" / "font_library.json",
        max_workers=4,
    )


@pytest.fixture
def download_session():
    """Mock HTTP session serving fake font files."""
    session = Mock(spec=requests.Session)
    session.get.side_effect = fake_get
    return session


@pytest.fixture
def acquirer(font_config, download_session):
    return AssetAcquirer(font_config, session=download_session)


@pytest.fixture
def record_store():
    return InMemoryRecordStore()


@pytest.fixture
def font_library(font_config, record_store, acquirer):
    """Font library wired to the temporary fonts directory and an in-memory store."""
    return FontLibrary(config=font_config, store=record_store, acquirer=acquirer)


@pytest.fixture
def upload_dir(temp_dir):
    path = temp_dir / "uploads"
    path.mkdir()
    return path
