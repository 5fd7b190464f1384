from typing import List, Optional
from pydantic import BaseModel


class UploadedFile(BaseModel):
    id: str
    originalName: str
    filename: str
    size: int
    sizeFormatted: str
    mimeType: str
    uploadedAt: str
    url: str

class UploadResponse(BaseModel):
    success: bool = True
    message: str = "Files uploaded successfully"
    files: List[UploadedFile]


class FileItem(BaseModel):
    id: str
    name: str
    displayName: str
    size: int
    sizeFormatted: str
    createdAt: str
    extension: str
    url: str

class ListingMetadata(BaseModel):
    total: int
    totalSize: int
    totalSizeFormatted: str
    filteredFiles: Optional[int] = None
    filteredSize: Optional[int] = None
    filteredSizeFormatted: Optional[str] = None
    limit: int
    offset: int

class ListFilesResponse(BaseModel):
    success: bool = True
    files: List[FileItem]
    metadata: ListingMetadata


class DeletedFile(BaseModel):
    id: str
    name: str
    size: int
    sizeFormatted: str

class DeleteFileResponse(BaseModel):
    success: bool = True
    message: str = "File deleted successfully"
    deletedFile: DeletedFile


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    code: str
