"""Upload text extraction.

PDF text comes from PyPDF2, Word text from python-docx. No OCR: scanned
documents come back empty and the caller rejects them as unreadable.
"""
from __future__ import annotations

import io
import re
from typing import List, Optional, Tuple

import PyPDF2
from docx import Document as DocxDocument
from flask import current_app

PDF_PARSE_ERROR = "Unable to parse PDF. If it's password-protected, export an unlocked copy and re-upload."
WORD_PARSE_ERROR = "Unable to read Word file. Try saving as DOCX or PDF and re-upload."

ALLOWED_NAME_RE = re.compile(r"\.(pdf|docx?|rtf)$", re.IGNORECASE)


def looks_like_pdf(filename: Optional[str], mime: Optional[str]) -> bool:
    return "pdf" in (mime or "") or (filename or "").lower().endswith(".pdf")


def looks_like_docx(filename: Optional[str], mime: Optional[str]) -> bool:
    name = (filename or "").lower()
    return "word" in (mime or "") or name.endswith(".docx") or name.endswith(".doc")


def allowed_filename(filename: Optional[str]) -> bool:
    return bool(ALLOWED_NAME_RE.search(filename or ""))


def extract_pdf_text(data: bytes) -> str:
    reader = PyPDF2.PdfReader(io.BytesIO(data))
    parts: List[str] = []
    for page in reader.pages:
        parts.append(page.extract_text() or "")
    return "\n".join(parts).strip()


def extract_docx_text(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    parts: List[str] = []
    for para in doc.paragraphs:
        if para.text.strip():
            parts.append(para.text)

    for table in doc.tables:
        for row in table.rows:
            row_text = " ".join(cell.text.strip() for cell in row.cells)
            if row_text.strip():
                parts.append(row_text)

    return "\n".join(parts).strip()


def extract_text_from_upload(data: bytes, filename: Optional[str], mime: Optional[str]) -> Tuple[str, str]:
    """Return ``(text, error)``. ``error`` is a user-facing message or ``""``."""
    log = current_app.logger

    if looks_like_pdf(filename, mime):
        log.debug("Extracting %s as PDF", filename)
        try:
            return extract_pdf_text(data), ""
        except Exception as e:
            log.warning("PDF extraction failed for %s: %s: %s", filename, type(e).__name__, e)
            return "", PDF_PARSE_ERROR

    if looks_like_docx(filename, mime):
        log.debug("Extracting %s as Word", filename)
        try:
            return extract_docx_text(data), ""
        except Exception as e:
            log.warning("Word extraction failed for %s: %s: %s", filename, type(e).__name__, e)
            return "", WORD_PARSE_ERROR

    # Ambiguous type: try both, quietly.
    log.debug("Type of %s is ambiguous (mime=%s), trying PDF then Word", filename, mime)
    text = ""
    try:
        text = extract_pdf_text(data)
    except Exception as e:
        log.debug("PDF fallback failed: %s", e)
    if not text:
        try:
            text = extract_docx_text(data)
        except Exception as e:
            log.debug("Word fallback failed: %s", e)
    return text, ""


def text_is_readable(text: str, min_chars: int) -> bool:
    return len((text or "").strip()) >= min_chars


def clamp_text(s: str, limit: int) -> str:
    return (s or "")[:limit]
