"""Page rendering for the overlay canvas using PyMuPDF."""

from __future__ import annotations

import fitz
from PySide6.QtGui import QImage

from formmapper import config


class PdfRenderError(RuntimeError):
    """Raised when a page cannot be rendered."""


def render_page_image(document: fitz.Document, page_index: int, zoom: float = config.ZOOM) -> QImage:
    if page_index < 0 or page_index >= document.page_count:
        raise PdfRenderError(f"Page index out of range: {page_index}")

    try:
        page = document.load_page(page_index)
        pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False, annots=False)
    except Exception as exc:  # pragma: no cover - defensive for PyMuPDF errors
        raise PdfRenderError(f"Failed to render page {page_index + 1}") from exc

    image = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
    # The pixmap buffer is released with ``pix``; keep a deep copy.
    return image.copy()
