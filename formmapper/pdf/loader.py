"""PDF loading helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import fitz

from formmapper.model.document import FormDocument

logger = logging.getLogger(__name__)


class PdfLoadError(RuntimeError):
    """Raised when a PDF cannot be opened."""


def open_form(path: str | Path) -> FormDocument:
    source_path = Path(path)
    if not source_path.exists():
        raise PdfLoadError(f"File not found: {source_path}")

    try:
        handle = fitz.open(source_path)
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        raise PdfLoadError(f"Failed to open PDF: {source_path}") from exc

    if handle.page_count == 0:
        handle.close()
        raise PdfLoadError(f"PDF has no pages: {source_path}")

    logger.info("Opened %s (%d page(s))", source_path, handle.page_count)
    return FormDocument(path=source_path, handle=handle)
