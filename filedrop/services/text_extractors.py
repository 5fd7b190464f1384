# filedrop/services/text_extractors.py
from pathlib import Path
from typing import Callable, Dict, Union

from docx import Document

from filedrop.services.pdf_utils import extract_text_from_pdf

import logging

SEARCHABLE_EXTENSIONS = ("pdf", "docx", "txt", "md")

def _read_docx_text(path: Path) -> str:
    doc = Document(str(path))
    return "\n".join(p.text for p in doc.paragraphs if p.text)

def _read_plain_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="ignore")

_EXTRACTORS: Dict[str, Callable[[Path], str]] = {
    "pdf": extract_text_from_pdf,
    "docx": _read_docx_text,
    "txt": _read_plain_text,
    "md": _read_plain_text,
}

def is_searchable(extension: str) -> bool:
    return extension.lower() in SEARCHABLE_EXTENSIONS

def extract_text(path: Union[str, Path], extension: str) -> str:
    """
    Searchable text of a stored file, picked by its (case-insensitive)
    extension. Unknown extensions and any read/parse failure give "".
    """
    extractor = _EXTRACTORS.get(extension.lower())
    if extractor is None:
        return ""
    try:
        return extractor(Path(path)) or ""
    except Exception as e:
        logging.warning(f"{path}: text extraction failed: {e}")
        return ""
