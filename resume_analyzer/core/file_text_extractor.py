"""
Best-effort text extraction from résumé files.

extract_text() never raises: every failure is logged and degrades, first to a
raw UTF-8 read of the file bytes and finally to "".

- PDF: pdfplumber word-level extraction, words grouped into lines by vertical
  position (avoids the glued/over-spaced words of layout extraction)
- DOCX: python-docx paragraph text
- DOC: legacy binary format python-docx cannot open; raw read only
- TXT/MD/RTF and unknown extensions: UTF-8 read
"""

import logging
import os
from io import BytesIO
from itertools import groupby
from typing import Any, Dict, List

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = {"pdf"}
DOCX_EXTENSIONS = {"docx"}
LEGACY_WORD_EXTENSIONS = {"doc"}
TEXT_EXTENSIONS = {"txt", "md", "rtf"}

# Below this a PDF is probably scanned (image only)
MIN_PDF_TEXT_CHARS = 50

# Words whose tops round to the same multiple of this share a line
LINE_HEIGHT = 3


def _line_bucket(word: Dict[str, Any], line_height: float) -> int:
    return round(word["top"] / line_height)


def _words_to_text(page: Any, line_height: float = LINE_HEIGHT) -> str:
    """One line per vertical bucket of pdfplumber words, words ordered by x0."""
    words = page.extract_words(x_tolerance=2, keep_blank_chars=False, use_text_flow=True)
    words.sort(key=lambda w: (_line_bucket(w, line_height), w["x0"]))
    lines = [
        " ".join(w["text"] for w in bucket)
        for _, bucket in groupby(words, key=lambda w: _line_bucket(w, line_height))
    ]
    return "\n".join(lines)


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """Text of every page, pages separated by a newline. Raises on unreadable PDFs."""
    pages: List[str] = []
    with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
        for page in pdf.pages:
            text = _words_to_text(page)
            if text:
                pages.append(text)
    return "\n".join(pages)


def extract_docx_text(docx_bytes: bytes) -> str:
    """Non-empty paragraph text, one paragraph per line. Raises on non-DOCX input."""
    doc = Document(BytesIO(docx_bytes))
    lines: List[str] = []
    for p in doc.paragraphs:
        t = (p.text or "").strip()
        if t:
            lines.append(t)
    # Tables often hold the contact block in template résumés
    for table in doc.tables:
        for row in table.rows:
            cells = [c.text.strip() for c in row.cells if c.text and c.text.strip()]
            if cells:
                lines.append(" | ".join(dict.fromkeys(cells)))
    return "\n".join(lines)


def _read_raw(file_path: str) -> str:
    """Bytes decoded as UTF-8 with replacement; garbage for binaries but never a decode error."""
    with open(file_path, "rb") as f:
        return f.read().decode("utf-8", errors="replace")


def _read_raw_or_empty(file_path: str, what: str) -> str:
    try:
        return _read_raw(file_path)
    except OSError as e:
        logger.error(f"Raw read of {what} failed: {e}")
        return ""


def file_extension(file_path: str) -> str:
    return os.path.splitext(file_path)[1].lower().lstrip(".")


def extract_text(file_path: str) -> str:
    """
    Extract raw text from a résumé file.

    Args:
        file_path: Path to a PDF, DOCX, DOC, TXT, MD or RTF file

    Returns:
        The extracted text, or "" when the file is missing, empty or unreadable.
    """
    try:
        file_path = os.fspath(file_path)
        logger.info(f"Extracting text from file: {file_path}")

        if not os.path.isfile(file_path):
            logger.error(f"File does not exist: {file_path}")
            return ""

        size = os.path.getsize(file_path)
        logger.debug(f"File size: {round(size / 1024)} KB")
        if size == 0:
            logger.error(f"File is empty: {file_path}")
            return ""

        extension = file_extension(file_path)
        logger.debug(f"File extension detected: {extension or '<none>'}")

        if extension in PDF_EXTENSIONS:
            text = _extract_pdf_file(file_path)
        elif extension in DOCX_EXTENSIONS:
            text = _extract_docx_file(file_path)
        elif extension in LEGACY_WORD_EXTENSIONS:
            logger.info("Legacy Word document; reading raw bytes as text")
            text = _read_raw_or_empty(file_path, "Word document")
        elif extension in TEXT_EXTENSIONS:
            text = _read_raw(file_path)
        else:
            logger.warning(f"Unknown file extension: {extension or '<none>'}, trying to read as text")
            text = _read_raw_or_empty(file_path, "unknown file type")

        if text:
            logger.debug(f"Text extraction preview: {text[:100]!r}")
            logger.info(f"Extracted {len(text)} characters from {os.path.basename(file_path)}")
        else:
            logger.warning(f"No text was extracted from {file_path}")
        return text
    except Exception:
        logger.exception(f"Error extracting text from file: {file_path}")
        return ""


def _extract_pdf_file(file_path: str) -> str:
    try:
        with open(file_path, "rb") as f:
            text = extract_pdf_text(f.read())
        if len(text) < MIN_PDF_TEXT_CHARS:
            logger.warning(f"PDF extraction returned very little text ({len(text)} chars); it may be a scanned image")
        return text
    except Exception as e:
        logger.error(f"pdfplumber failed on {file_path}: {e}")
        logger.info("Falling back to raw text read for PDF")
        return _read_raw_or_empty(file_path, "PDF")


def _extract_docx_file(file_path: str) -> str:
    try:
        with open(file_path, "rb") as f:
            return extract_docx_text(f.read())
    except Exception as e:
        logger.error(f"python-docx failed on {file_path}: {e}")
        logger.info("Falling back to raw text read for Word document")
        return _read_raw_or_empty(file_path, "Word document")
