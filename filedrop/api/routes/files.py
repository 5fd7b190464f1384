import logging
import mimetypes
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import StreamingResponse

from filedrop.api.schemas import DeleteFileResponse, ErrorResponse, ListFilesResponse, UploadResponse
from filedrop.core.config import settings
from filedrop.core.errors import ErrorCode, FiledropError
from filedrop.services.filestore import FileStore, iter_chunks
from filedrop.services.ingest import UploadItem, ingest_batch
from filedrop.services.listing import ListingQuery, list_files

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    413: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

def get_store() -> FileStore:
    store = FileStore(settings.UPLOAD_DIR)
    store.ensure_directory()
    return store

def content_disposition(filename: str) -> str:
    quoted = quote(filename)
    if quoted != filename:
        return f"attachment; filename*=utf-8''{quoted}"
    return f'attachment; filename="{filename}"'

@router.post("/upload", response_model=UploadResponse, responses=_ERRORS)
def upload(
    files: Optional[List[UploadFile]] = File(None),
    store: FileStore = Depends(get_store),
):
    items = [
        UploadItem(name=f.filename, size=f.size, stream=f.file, mime_type=f.content_type)
        for f in (files or [])
    ]
    try:
        manifest = ingest_batch(store, items, settings)
    except FiledropError:
        raise
    except Exception:
        logging.exception("Upload failed")
        raise FiledropError(ErrorCode.PROCESSING_ERROR)
    return UploadResponse(files=manifest)

@router.get("/files", response_model=ListFilesResponse, responses=_ERRORS)
def list_stored_files(
    text_search: str = Query("", alias="textSearch", description="Search term for filename or content"),
    content: bool = Query(False, description="Search file contents of pdf/docx/txt/md files only"),
    limit: int = Query(settings.DEFAULT_LIMIT, ge=0, description="Number of files to return per page"),
    offset: int = Query(settings.DEFAULT_OFFSET, ge=0, description="Number of files to skip"),
    store: FileStore = Depends(get_store),
):
    query = ListingQuery(text_search=text_search, content=content, limit=limit, offset=offset)
    try:
        result = list_files(store, query, settings)
    except Exception:
        logging.exception("List files failed")
        raise FiledropError(ErrorCode.LIST_ERROR)
    return ListFilesResponse(**result)

@router.get("/files/{file_id}", response_class=StreamingResponse, responses=_ERRORS)
def download(file_id: str, store: FileStore = Depends(get_store)):
    try:
        stream, download_name = store.read_by_identifier(file_id)
    except FiledropError:
        raise
    except Exception:
        logging.exception(f"Get file {file_id} failed")
        raise FiledropError(ErrorCode.PROCESSING_ERROR, "Failed to retrieve file")
    media_type = mimetypes.guess_type(download_name)[0] or "application/octet-stream"
    headers = {"Content-Disposition": content_disposition(download_name)}
    return StreamingResponse(iter_chunks(stream), media_type=media_type, headers=headers)

@router.delete("/files/{file_id}", response_model=DeleteFileResponse, responses=_ERRORS)
def delete(file_id: str, store: FileStore = Depends(get_store)):
    try:
        receipt = store.delete_by_identifier(file_id)
    except FiledropError:
        raise
    except Exception:
        logging.exception(f"Delete file {file_id} failed")
        raise FiledropError(ErrorCode.PROCESSING_ERROR, "Failed to delete file")
    return DeleteFileResponse(deletedFile=receipt)
