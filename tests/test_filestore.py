"""Tests for the filename-as-database store."""

from io import BytesIO

import pytest

from filedrop.core.errors import ErrorCode, FiledropError
from filedrop.services import naming

VALID_ID = "0542f4c4-192b-4eaa-9857-91e276088878"


def test_enumerate_decodes_entries(store, put_file):
    """Every stored file is projected from its name and stat."""
    identifier = put_file("notes.md", "# notes")

    entries = list(store.enumerate())

    assert len(entries) == 1
    entry = entries[0]
    assert entry.identifier == identifier
    assert entry.original_base_name == "notes"
    assert entry.extension == "md"
    assert entry.size_bytes == 7
    assert entry.display_name == "notes.md"
    assert entry.storage_path.parent == store.directory


def test_enumerate_skips_malformed_and_directories(store, put_file):
    """Foreign names and subdirectories do not break enumeration."""
    put_file("kept.txt", "ok")
    (store.directory / "short.txt").write_text("no id here")
    (store.directory / ".gitkeep").write_text("")
    (store.directory / f"nested{VALID_ID}").mkdir()

    names = [e.original_base_name for e in store.enumerate()]

    assert names == ["kept"]


def test_write_new_encodes_name(store):
    """Written files land under an encoded name with the full payload."""
    identifier, stored_name, written = store.write_new("a.txt", BytesIO(b"hello"))

    assert stored_name == f"a{identifier}.txt"
    assert written == 5
    assert (store.directory / stored_name).read_bytes() == b"hello"


def test_write_new_over_limit_leaves_nothing(store):
    """A stream longer than max_bytes is rejected and removed."""
    with pytest.raises(FiledropError) as exc_info:
        store.write_new("big.bin", BytesIO(b"x" * 11), max_bytes=10)

    assert exc_info.value.code == ErrorCode.FILE_TOO_LARGE
    assert list(store.directory.iterdir()) == []


@pytest.mark.parametrize("bad_id", ["", "invalid-uuid", VALID_ID + "0"])
def test_resolve_invalid_id(store, bad_id):
    """Identifiers must be exactly 36 characters."""
    with pytest.raises(FiledropError) as exc_info:
        store.resolve(bad_id)

    assert exc_info.value.code == ErrorCode.INVALID_ID


def test_resolve_not_found(store, put_file):
    """Unknown identifiers are reported as missing."""
    put_file("other.txt", "x")

    with pytest.raises(FiledropError) as exc_info:
        store.resolve(VALID_ID)

    assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


def test_resolve_ignores_malformed_names(store):
    """Short names in the directory are skipped during lookup."""
    (store.directory / "x.txt").write_text("junk")
    (store.directory / f"test{VALID_ID}.txt").write_text("hit")

    assert store.resolve(VALID_ID) == f"test{VALID_ID}.txt"


def test_read_by_identifier(store, put_file):
    """Reading returns the bytes and the original file name."""
    identifier = put_file("my.report.pdf", b"%PDF-fake")

    stream, download_name = store.read_by_identifier(identifier)
    with stream:
        data = stream.read()

    assert data == b"%PDF-fake"
    assert download_name == "my.report.pdf"


def test_read_vanished_file(store, monkeypatch):
    """A file removed after resolution is reported as not found."""
    monkeypatch.setattr(store, "resolve", lambda identifier: f"gone{VALID_ID}.txt")

    with pytest.raises(FiledropError) as exc_info:
        store.read_by_identifier(VALID_ID)

    assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


def test_delete_by_identifier(store):
    """Delete removes the file and reports what was removed."""
    path = store.directory / f"test{VALID_ID}.txt"
    path.write_text("This is a test file for deletion")

    receipt = store.delete_by_identifier(VALID_ID)

    assert receipt == {
        "id": VALID_ID,
        "name": "test.txt",
        "size": 32,
        "sizeFormatted": "32.00 B",
    }
    assert not path.exists()


def test_delete_twice(store, put_file):
    """Once deleted, the identifier no longer resolves."""
    identifier = put_file("a.txt", "a")
    store.delete_by_identifier(identifier)

    with pytest.raises(FiledropError) as exc_info:
        store.delete_by_identifier(identifier)

    assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


def test_delete_vanished_file(store, monkeypatch):
    """A concurrent delete between lookup and unlink is not a crash."""
    monkeypatch.setattr(store, "resolve", lambda identifier: f"gone{VALID_ID}.txt")

    with pytest.raises(FiledropError) as exc_info:
        store.delete_by_identifier(VALID_ID)

    assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND
    assert exc_info.value.status_code == 404


def test_delete_without_extension(store):
    """Names without an extension are rebuilt as base plus a bare dot."""
    (store.directory / naming.encode("README", VALID_ID)).write_text("readme")

    assert store.delete_by_identifier(VALID_ID)["name"] == "README."


@pytest.mark.parametrize("name", ["sub.d/../../escape.txt", "../escape.txt", "..\\escape.txt"])
def test_write_new_keeps_files_in_store(store, name):
    """Path components in a client name never leave the store directory."""
    identifier, stored_name, _ = store.write_new(name, BytesIO(b"x"))

    assert stored_name == f"escape{identifier}.txt"
    assert [p.name for p in store.directory.iterdir()] == [stored_name]
    assert sorted(p.name for p in store.directory.parent.iterdir()) == ["files"]


def test_write_new_nested_name(store):
    """A name with a missing subdirectory is stored flat, not failed."""
    identifier, stored_name, _ = store.write_new("a/b.txt", BytesIO(b"x"))

    assert stored_name == f"b{identifier}.txt"
    assert (store.directory / stored_name).is_file()


def test_write_new_dot_dot_uses_placeholder(store):
    """A name that is only a parent reference gets the placeholder base."""
    identifier, stored_name, _ = store.write_new("..", BytesIO(b"x"))

    assert stored_name == f"file_{identifier}"


def test_resolve_skips_directories(store):
    """A subdirectory carrying the identifier is not a stored file."""
    (store.directory / f"nested{VALID_ID}").mkdir()

    with pytest.raises(FiledropError) as exc_info:
        store.read_by_identifier(VALID_ID)

    assert exc_info.value.code == ErrorCode.FILE_NOT_FOUND


def test_list_without_extension_display_name(store):
    """Entries without an extension display as base plus a bare dot."""
    (store.directory / naming.encode("README", VALID_ID)).write_text("readme")

    entry = next(store.enumerate())

    assert entry.display_name == "README."
