
from io import BytesIO
from pathlib import Path
from typing import Union
import pdfplumber
import logging

def extract_text_from_pdf(source: Union[str, Path, bytes]) -> str:
    """
    Extract text from a PDF file path (or raw PDF bytes) using pdfplumber.
    """
    if isinstance(source, bytes):
        source = BytesIO(source)
    try:
        text_all = []
        with pdfplumber.open(source) as pdf:
            for pg in pdf.pages:
                t = pg.extract_text() or ""
                if t:
                    text_all.append(t)
        return "\n".join(text_all)
    except Exception as e:
        logging.error(f"PDF extraction failed: {e}")
        return ""
