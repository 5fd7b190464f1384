# filedrop/services/filestore.py
"""
Filename-as-database store.

Every file lives flat in one directory under the name produced by
naming.encode(); there is no index, so enumeration and identifier lookup
are directory scans. All filesystem access goes through FileStore.
"""
import os
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Dict, Iterator, Optional, Tuple, Union

from filedrop.core.errors import ErrorCode, FiledropError
from filedrop.services import naming

_CHUNK = 64 * 1024


@dataclass(frozen=True)
class StoredEntry:
    identifier: str
    original_base_name: str
    extension: str
    size_bytes: int
    created_at: datetime
    storage_path: Path

    @property
    def stored_name(self) -> str:
        return self.storage_path.name

    @property
    def display_name(self) -> str:
        return naming.reconstruct_name(self.original_base_name, self.extension)


class FileStore:
    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory).resolve()

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def _entry(self, stored_name: str) -> StoredEntry:
        decoded = naming.decode(stored_name)
        path = self.directory / stored_name
        st = path.stat()
        return StoredEntry(
            identifier=decoded.identifier,
            original_base_name=decoded.base,
            extension=decoded.extension,
            size_bytes=st.st_size,
            # stored files are never rewritten, so mtime is the write time
            created_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            storage_path=path,
        )

    def enumerate(self) -> Iterator[StoredEntry]:
        """
        Yield every decodable file in the store. Names that do not carry an
        identifier and files removed mid-scan are skipped, not raised.
        """
        with os.scandir(self.directory) as it:
            for dirent in it:
                try:
                    if not dirent.is_file():
                        continue
                    yield self._entry(dirent.name)
                except FiledropError as e:
                    logging.warning(f"Skipping store entry {dirent.name!r}: {e.message}")
                except FileNotFoundError:
                    logging.debug(f"{dirent.name!r} disappeared during scan")

    def write_new(
        self,
        original_name: Optional[str],
        stream: BinaryIO,
        max_bytes: Optional[int] = None,
    ) -> Tuple[str, str, int]:
        """
        Persist `stream` under a freshly encoded name.

        Returns (identifier, stored_name, bytes_written). When more than
        `max_bytes` arrive the partial file is removed and FILE_TOO_LARGE
        is raised.
        """
        identifier = naming.new_identifier()
        stored_name = naming.encode(naming.safe_upload_name(original_name), identifier)
        path = self.directory / stored_name
        if path.parent != self.directory:
            raise FiledropError(ErrorCode.PROCESSING_ERROR, f"Refusing to store {original_name!r} outside the store")
        written = 0
        try:
            with open(path, "xb") as out:
                while True:
                    chunk = stream.read(_CHUNK)
                    if not chunk:
                        break
                    written += len(chunk)
                    if max_bytes is not None and written > max_bytes:
                        raise FiledropError(ErrorCode.FILE_TOO_LARGE)
                    out.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise
        return identifier, stored_name, written

    def remove_stored(self, stored_name: str) -> None:
        (self.directory / stored_name).unlink(missing_ok=True)

    def resolve(self, identifier: str) -> str:
        """Stored name of the file carrying `identifier` (first match wins)."""
        if not identifier or len(identifier) != naming.ID_LENGTH:
            raise FiledropError(ErrorCode.INVALID_ID)
        with os.scandir(self.directory) as it:
            for dirent in it:
                try:
                    decoded = naming.decode(dirent.name)
                except FiledropError:
                    continue
                if decoded.identifier == identifier and dirent.is_file():
                    return dirent.name
        raise FiledropError(ErrorCode.FILE_NOT_FOUND)

    def read_by_identifier(self, identifier: str) -> Tuple[BinaryIO, str]:
        """Open the file for reading; returns (stream, download name)."""
        stored_name = self.resolve(identifier)
        decoded = naming.decode(stored_name)
        try:
            stream = open(self.directory / stored_name, "rb")
        except FileNotFoundError:
            raise FiledropError(ErrorCode.FILE_NOT_FOUND)
        return stream, naming.reconstruct_name(decoded.base, decoded.extension)

    def delete_by_identifier(self, identifier: str) -> Dict:
        stored_name = self.resolve(identifier)
        decoded = naming.decode(stored_name)
        path = self.directory / stored_name
        try:
            size = path.stat().st_size
            path.unlink()
        except FileNotFoundError:
            raise FiledropError(ErrorCode.FILE_NOT_FOUND)
        logging.info(f"Deleted {stored_name} ({size} bytes)")
        return {
            "id": identifier,
            "name": naming.reconstruct_name(decoded.base, decoded.extension),
            "size": size,
            "sizeFormatted": naming.format_file_size(size),
        }


def iter_chunks(stream: BinaryIO, chunk_size: int = _CHUNK) -> Iterator[bytes]:
    """Read `stream` to the end in chunks, closing it afterwards."""
    with stream:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                break
            yield chunk
