"""Exceptions raised at the document-ingest boundary."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for errors surfaced to callers of interview_report."""


class UnsupportedDocumentError(ReportError):
    """The uploaded file is not a format we can extract text from."""


class ExtractionError(ReportError):
    """The document has a supported extension but could not be read."""
