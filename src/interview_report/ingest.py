"""Upload validation and plain-text extraction for source documents.

Usage:
    from interview_report.ingest import extract, is_acceptable_upload

    if is_acceptable_upload(name, size):
        doc = extract(Path(saved_path))
        doc.text, doc.page_count, doc.file_size

PDF text comes from pypdf, Word ``.docx`` text from python-docx.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePath
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.oxml.ns import qn
from docx.text.paragraph import Paragraph
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from interview_report.errors import ExtractionError, UnsupportedDocumentError

log = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".pdf", ".doc", ".docx"}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MB


@dataclass
class ExtractedDocument:
    text: str
    file_size: int
    page_count: int | None = None   # only known for PDFs


def is_acceptable_upload(filename: str, size: int) -> bool:
    """True if the upload has an allowed extension and fits the size limit."""
    ext = PurePath(filename).suffix.lower()
    return ext in ALLOWED_EXTENSIONS and size <= MAX_UPLOAD_BYTES


def extract(path: Path) -> ExtractedDocument:
    """Extract plain text from a PDF or Word document."""
    ext = path.suffix.lower()
    if ext == ".pdf":
        doc = _extract_pdf(path)
    elif ext in (".docx", ".doc"):
        doc = _extract_word(path)
    else:
        raise UnsupportedDocumentError(
            f"Unsupported file type: {ext or '(none)'}. Only PDF and Word documents are supported."
        )
    log.info("Extracted %d chars from %s", len(doc.text), path.name)
    return doc


def _extract_pdf(path: Path) -> ExtractedDocument:
    try:
        reader = PdfReader(path)
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except (PdfReadError, OSError) as e:
        raise ExtractionError(f"Failed to parse PDF document: {e}") from e
    return ExtractedDocument(
        text="\n\n".join(p for p in pages if p),
        file_size=path.stat().st_size,
        page_count=len(pages),
    )


def _extract_word(path: Path) -> ExtractedDocument:
    # Legacy binary .doc files are not OOXML packages and fail here.
    try:
        document = Document(str(path))
    # lxml parse errors derive from SyntaxError.
    except (PackageNotFoundError, BadZipFile, KeyError, ValueError, SyntaxError, OSError) as e:
        raise ExtractionError(f"Failed to parse Word document: {e}") from e

    # Every w:p in document order, including those in table cells and text
    # boxes. A Paragraph reads only its own runs, so nested text appears once.
    paragraphs = [
        Paragraph(p, document).text
        for p in document.element.body.iter(qn("w:p"))
    ]
    return ExtractedDocument(text="\n".join(paragraphs).strip(), file_size=path.stat().st_size)
