"""Import AcroForm widgets from a fillable PDF as field-mapping records."""

from __future__ import annotations

import logging
from pathlib import Path

from pypdf import PdfReader

from formmapper.model.field import FieldType
from formmapper.model.mapping import FieldMappingRecord

logger = logging.getLogger(__name__)

_WIDGET_TYPES = {
    "/Tx": FieldType.INPUT,
    "/Btn": FieldType.CHECKBOX,
    "/Sig": FieldType.SIGNATURE,
}


class PdfImportError(RuntimeError):
    """Raised when existing form fields cannot be imported."""


def import_widget_records(source_path: str | Path) -> list[FieldMappingRecord]:
    """Read widget annotations and express their boxes as page percentages.

    PDF rectangles use a bottom-left origin in points; records use a top-left
    origin as a percentage of the page's media box.
    """
    source = Path(source_path)
    imported: list[FieldMappingRecord] = []
    seen: set[str] = set()

    try:
        reader = PdfReader(str(source))
        for page_index, page in enumerate(reader.pages):
            box = page.mediabox
            page_left = float(box.left)
            page_top = float(box.top)
            page_w = float(box.width)
            page_h = float(box.height)
            if page_w <= 0 or page_h <= 0:
                continue

            for annot_ref in page.get("/Annots") or []:
                annot = annot_ref.get_object()
                if annot.get("/Subtype") != "/Widget":
                    continue

                parent = annot.get("/Parent")
                parent_obj = parent.get_object() if parent is not None else None

                pdf_type = annot.get("/FT") or (parent_obj.get("/FT") if parent_obj else None)
                rect = annot.get("/Rect")
                name = str(annot.get("/T") or (parent_obj.get("/T") if parent_obj else "") or "")
                if pdf_type not in _WIDGET_TYPES or rect is None or not name:
                    continue
                if name in seen:
                    logger.debug("Skipping repeated widget for %s on page %d", name, page_index + 1)
                    continue
                seen.add(name)

                llx, lly, urx, ury = (float(value) for value in rect)
                x1, x2 = sorted((llx, urx))
                y1, y2 = sorted((lly, ury))
                tooltip = annot.get("/TU") or (parent_obj.get("/TU") if parent_obj else None)

                imported.append(
                    FieldMappingRecord(
                        name=name,
                        label=str(tooltip or name),
                        field_type=_WIDGET_TYPES[pdf_type],
                        page=page_index + 1,
                        position_top=(page_top - y2) / page_h * 100,
                        position_left=(x1 - page_left) / page_w * 100,
                        width=(x2 - x1) / page_w * 100,
                        height=(y2 - y1) / page_h * 100,
                    )
                )
    except Exception as exc:
        raise PdfImportError(f"Failed to import form fields from: {source}") from exc

    logger.info("Imported %d widget field(s) from %s", len(imported), source)
    return imported
