# filedrop/services/naming.py
"""
Filename codec for the store directory.

A stored name carries all the metadata of the file it names:

    <original base><36-char identifier>[.<extension>]

e.g. "report.pdf" uploaded with id 0542f4c4-192b-4eaa-9857-91e276088878 is
stored as "report0542f4c4-192b-4eaa-9857-91e276088878.pdf".
"""
import uuid
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

from filedrop.core.errors import ErrorCode, FiledropError

ID_LENGTH = 36
PLACEHOLDER_BASE = "file_"

_UNITS = ["B", "KB", "MB", "GB"]


@dataclass(frozen=True)
class DecodedName:
    identifier: str
    base: str
    extension: str


def new_identifier() -> str:
    return str(uuid.uuid4())


def encode(original_name: Optional[str], identifier: str) -> str:
    if not original_name or not original_name.strip():
        return f"{PLACEHOLDER_BASE}{identifier}"
    base, dot, ext = original_name.rpartition(".")
    if not dot:
        return f"{original_name}{identifier}"
    return f"{base}{identifier}.{ext}"


def get_extension(stored_name: str) -> str:
    # "" when there is no dot or the dot is the last character
    _, dot, ext = stored_name.rpartition(".")
    return ext if dot else ""


def decode(stored_name: str) -> DecodedName:
    extension = get_extension(stored_name)
    if "." in stored_name:
        without_ext = stored_name[: stored_name.rindex(".")]
    else:
        without_ext = stored_name
    if len(without_ext) < ID_LENGTH:
        raise FiledropError(
            ErrorCode.MALFORMED_ENTRY,
            f"{stored_name!r} is too short to contain an identifier",
        )
    return DecodedName(
        identifier=without_ext[-ID_LENGTH:],
        base=without_ext[:-ID_LENGTH],
        extension=extension,
    )


def reconstruct_name(base: str, extension: str) -> str:
    """Display/download name: base + "." + extension, even when the extension is empty."""
    return f"{base}.{extension}"


def safe_upload_name(name: Optional[str]) -> str:
    """
    Last path component of a client-supplied name, so a stored file can
    never land outside the flat store directory. "" means "no usable name".
    """
    if not name:
        return ""
    leaf = PurePosixPath(name.replace("\\", "/")).name
    return "" if leaf in (".", "..") else leaf


def format_file_size(size: float) -> str:
    unit = 0
    while size >= 1024 and unit < len(_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.2f} {_UNITS[unit]}"
