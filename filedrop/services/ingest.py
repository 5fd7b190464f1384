# filedrop/services/ingest.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import BinaryIO, Dict, List, Optional, Sequence

from filedrop.core.config import Settings, settings as default_settings
from filedrop.core.errors import ErrorCode, FiledropError
from filedrop.services.filestore import FileStore
from filedrop.services.naming import format_file_size

import logging

@dataclass
class UploadItem:
    name: Optional[str]
    size: Optional[int]  # declared size; None when the client did not send one
    stream: BinaryIO
    mime_type: Optional[str] = None

def validate_batch(items: Sequence[UploadItem], cfg: Settings) -> None:
    """
    Whole-batch checks, run before anything touches the disk:
    count first, then every declared size.
    """
    if not items:
        raise FiledropError(ErrorCode.NO_FILES)
    if len(items) > cfg.MAX_FILES:
        raise FiledropError(
            ErrorCode.TOO_MANY_FILES,
            f"Maximum {cfg.MAX_FILES} files allowed per upload",
        )
    for item in items:
        if item.size is not None and item.size > cfg.MAX_FILE_SIZE:
            raise FiledropError(
                ErrorCode.FILE_TOO_LARGE,
                f"{item.name or 'file'}: file size exceeds {format_file_size(cfg.MAX_FILE_SIZE)} limit",
            )

def ingest_batch(
    store: FileStore,
    items: Sequence[UploadItem],
    cfg: Optional[Settings] = None,
) -> List[Dict]:
    """
    Validate then write `items` in input order and return the manifest.
    A failure part-way through removes the files this batch already wrote.
    """
    cfg = cfg or default_settings
    validate_batch(items, cfg)

    manifest: List[Dict] = []
    try:
        for item in items:
            identifier, stored_name, written = store.write_new(
                item.name, item.stream, max_bytes=cfg.MAX_FILE_SIZE
            )
            size = item.size if item.size is not None else written
            manifest.append({
                "id": identifier,
                "originalName": item.name or "file",
                "filename": stored_name,
                "size": size,
                "sizeFormatted": format_file_size(size),
                "mimeType": item.mime_type or "",
                "uploadedAt": datetime.now(timezone.utc).isoformat(),
                "url": f"{cfg.FILES_URL_PREFIX}/{identifier}",
            })
    except Exception:
        for record in manifest:
            store.remove_stored(record["filename"])
        if manifest:
            logging.warning(f"Upload batch failed; rolled back {len(manifest)} written file(s)")
        raise

    logging.info(f"Stored {len(manifest)} file(s): " + ", ".join(r["filename"] for r in manifest))
    return manifest
