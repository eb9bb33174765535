from pathlib import Path
from typing import Union

import pdfplumber

from slipscan.logging_setup import get_logger

logger = get_logger(__name__)

TEXT_SUFFIXES = {".txt"}
PDF_SUFFIXES = {".pdf"}


def validate_source(filepath: Union[str, Path]) -> Path:
    """
    Check that a document exists and has a supported format.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the suffix is not .txt or .pdf
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    suffix = path.suffix.lower()
    if suffix not in TEXT_SUFFIXES | PDF_SUFFIXES:
        raise ValueError(f"File must be .txt or .pdf, got: {path.suffix or '(none)'}")

    return path


def load_text(filepath: Union[str, Path]) -> str:
    """
    Load the text of a document for scanning.

    - .txt: text already produced by an OCR engine, read as UTF-8
    - .pdf: text-based statements, every page's text joined by newlines

    Args:
        filepath: Path to the document

    Returns:
        The document text (possibly empty for image-only PDFs)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the format is unsupported or the PDF can't be read
    """
    path = validate_source(filepath)

    if path.suffix.lower() in TEXT_SUFFIXES:
        return path.read_text(encoding="utf-8")

    pages = []
    try:
        with pdfplumber.open(path) as pdf:
            for page_num, page in enumerate(pdf.pages):
                text = page.extract_text()
                if not text:
                    logger.warning("No text extracted from page %d of %s", page_num + 1, path)
                    continue
                pages.append(text)
    except Exception as e:
        raise ValueError(f"Error reading PDF: {e}")

    return "\n".join(pages)
