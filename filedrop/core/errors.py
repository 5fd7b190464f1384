# filedrop/core/errors.py
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    NO_FILES = "NO_FILES"
    TOO_MANY_FILES = "TOO_MANY_FILES"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    INVALID_ID = "INVALID_ID"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    MALFORMED_ENTRY = "MALFORMED_ENTRY"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    LIST_ERROR = "LIST_ERROR"


_STATUS = {
    ErrorCode.NO_FILES: 400,
    ErrorCode.TOO_MANY_FILES: 400,
    ErrorCode.INVALID_ID: 400,
    ErrorCode.FILE_TOO_LARGE: 413,
    ErrorCode.FILE_NOT_FOUND: 404,
}

_MESSAGES = {
    ErrorCode.NO_FILES: "No files provided",
    ErrorCode.FILE_TOO_LARGE: "File size exceeds the upload limit",
    ErrorCode.INVALID_ID: "Invalid file ID format",
    ErrorCode.FILE_NOT_FOUND: "File not found",
    ErrorCode.MALFORMED_ENTRY: "Stored file name does not contain an identifier",
    ErrorCode.PROCESSING_ERROR: "Failed to process file",
    ErrorCode.LIST_ERROR: "Failed to list files",
}


class FiledropError(Exception):
    """
    Error raised by the store services. `code` is one of ErrorCode and maps
    to the HTTP status the API answers with (500 for anything unmapped).
    """

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = ErrorCode(code)
        self.message = message or _MESSAGES.get(self.code, self.code.value)
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return _STATUS.get(self.code, 500)

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message, "code": self.code.value}
