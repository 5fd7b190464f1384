# filedrop/services/listing.py
"""
Listing over the store: project every entry, filter by name or content,
aggregate, paginate. Nothing is cached; each call rescans the directory.
"""
from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass
from typing import Dict, List, Optional

from filedrop.core.config import Settings, settings as default_settings
from filedrop.services.filestore import FileStore, StoredEntry
from filedrop.services.naming import format_file_size
from filedrop.services.text_extractors import extract_text, is_searchable

@dataclass
class ListingQuery:
    text_search: str = ""
    content: bool = False
    limit: int = 20
    offset: int = 0

    @property
    def has_filters(self) -> bool:
        return bool(self.text_search and self.text_search.strip()) or self.content

def project(entry: StoredEntry, url_prefix: str) -> Dict:
    return {
        "id": entry.identifier,
        "name": entry.original_base_name,
        "displayName": entry.display_name,
        "size": entry.size_bytes,
        "sizeFormatted": format_file_size(entry.size_bytes),
        "createdAt": entry.created_at.isoformat(),
        "extension": entry.extension,
        "url": f"{url_prefix}/{entry.identifier}",
    }

def scan(store: FileStore) -> List[StoredEntry]:
    """All entries, newest first; equal timestamps fall back to stored name."""
    entries = sorted(store.enumerate(), key=lambda e: e.stored_name)
    entries.sort(key=lambda e: e.created_at, reverse=True)
    return entries

def _content_matches(
    entries: List[StoredEntry], term: str, workers: int
) -> List[StoredEntry]:
    term = term.lower()
    if not entries:
        return []
    with concurrent.futures.ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        # map() yields in submission order, so the scan order survives
        texts = executor.map(
            lambda e: extract_text(e.storage_path, e.extension), entries
        )
        return [e for e, text in zip(entries, texts) if term in text.lower()]

def filter_entries(
    entries: List[StoredEntry], query: ListingQuery, workers: int = 1
) -> List[StoredEntry]:
    term = query.text_search or ""
    searching = bool(term.strip())
    if query.content:
        candidates = [e for e in entries if is_searchable(e.extension)]
        if searching:
            return _content_matches(candidates, term, workers)
        return candidates
    if searching:
        needle = term.lower()
        return [e for e in entries if needle in e.original_base_name.lower()]
    return list(entries)

def list_files(
    store: FileStore,
    query: Optional[ListingQuery] = None,
    cfg: Optional[Settings] = None,
) -> Dict:
    cfg = cfg or default_settings
    query = query or ListingQuery(limit=cfg.DEFAULT_LIMIT, offset=cfg.DEFAULT_OFFSET)
    limit = max(0, query.limit)
    offset = max(0, query.offset)

    entries = scan(store)
    total_size = sum(e.size_bytes for e in entries)
    filtered = filter_entries(entries, query, workers=cfg.SEARCH_WORKERS)

    filtered_count = filtered_size = None
    if query.has_filters:
        filtered_count = len(filtered)
        filtered_size = sum(e.size_bytes for e in filtered)

    page = filtered[offset:offset + limit]
    return {
        "files": [project(e, cfg.FILES_URL_PREFIX) for e in page],
        "metadata": {
            "total": len(entries),
            "totalSize": total_size,
            "totalSizeFormatted": format_file_size(total_size),
            "filteredFiles": filtered_count,
            "filteredSize": filtered_size,
            "filteredSizeFormatted": format_file_size(filtered_size) if filtered_size is not None else None,
            "limit": limit,
            "offset": offset,
        },
    }
