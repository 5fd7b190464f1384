"""Shared fixtures for filedrop tests."""

import os
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from filedrop.api.routes.files import get_store
from filedrop.core.config import settings
from filedrop.main import app
from filedrop.services import naming
from filedrop.services.filestore import FileStore

BASE_TIME = 1_700_000_000


@pytest.fixture
def store(tmp_path):
    """Empty store rooted in a temporary directory.

    Returns:
        FileStore instance.
    """
    directory = tmp_path / "files"
    directory.mkdir()
    return FileStore(directory)


@pytest.fixture
def cfg():
    """Settings with small limits for upload tests.

    Returns:
        Settings copy with MAX_FILES=3 and MAX_FILE_SIZE=100.
    """
    return replace(settings, MAX_FILES=3, MAX_FILE_SIZE=100, SEARCH_WORKERS=2)


@pytest.fixture
def put_file(store):
    """Write a file straight into the store under an encoded name.

    Returns:
        Callable(original_name, content) -> identifier. Each call gets a
        later modification time than the previous one.
    """
    counter = {"n": 0}

    def _put(original_name, content=b""):
        identifier = naming.new_identifier()
        path = store.directory / naming.encode(original_name, identifier)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
        stamp = BASE_TIME + counter["n"]
        counter["n"] += 1
        os.utime(path, (stamp, stamp))
        return identifier

    return _put


@pytest.fixture
def client(store):
    """API client whose routes use the temporary store.

    Yields:
        fastapi TestClient.
    """
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
