"""Main application window for mapping overlay fields onto scanned forms."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QInputDialog,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from formmapper import config
from formmapper.model.document import FormDocument
from formmapper.model.field import DrawnRect, FieldType, InvalidFieldError, NewFieldPayload
from formmapper.model.mapping import MappingLoadError, MappingSaveError, load_mapping_file, save_mapping_file
from formmapper.pdf.importer import PdfImportError, import_widget_records
from formmapper.pdf.loader import PdfLoadError, open_form
from formmapper.pdf.renderer import PdfRenderError, render_page_image
from formmapper.state.positions import Axis, HorizontalAlignment, VerticalAlignment
from formmapper.state.session import FormSession
from formmapper.viewer.canvas import FormCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("Form Field Mapper")
        self.resize(1300, 850)

        self._document: FormDocument | None = None
        self._session = self._new_session()
        self._current_page_index = 0
        self._unsaved: list[NewFieldPayload] = []
        self._layout_names: list[str] = []

        self.page_list = QListWidget()
        self.page_list.currentRowChanged.connect(self._on_page_selected)

        self.search_box = QLineEdit()
        self.search_box.setPlaceholderText("Search fields")
        self.search_box.textChanged.connect(self._populate_field_list)

        self.field_list = QListWidget()
        self.field_list.itemClicked.connect(self._on_field_clicked)
        self.field_list.itemChanged.connect(self._on_field_checked)

        side_panel = QWidget()
        side_layout = QVBoxLayout(side_panel)
        side_layout.setContentsMargins(0, 0, 0, 0)
        side_layout.addWidget(self.page_list, 1)
        side_layout.addWidget(self.search_box)
        side_layout.addWidget(self.field_list, 3)

        self.canvas = FormCanvas(self._session)
        self.canvas.field_selected.connect(self._on_field_selected)
        self.canvas.positions_changed.connect(self._show_current_position)
        self.canvas.field_drawn.connect(self._on_field_drawn)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)

        splitter = QSplitter()
        splitter.addWidget(side_panel)
        splitter.addWidget(self.scroll_area)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        self._build_toolbar()
        self._populate_field_list()
        self.statusBar().showMessage("Ready")

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        open_action = QAction("Open PDF", self)
        open_action.triggered.connect(self.open_pdf)
        toolbar.addAction(open_action)

        load_action = QAction("Load Mapping", self)
        load_action.triggered.connect(self.load_mapping)
        toolbar.addAction(load_action)

        import_action = QAction("Import PDF Fields", self)
        import_action.triggered.connect(self.import_pdf_fields)
        toolbar.addAction(import_action)

        save_action = QAction("Save Mapping", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.save_mapping)
        toolbar.addAction(save_action)

        toolbar.addSeparator()

        prev_page_action = QAction("Previous Page", self)
        prev_page_action.triggered.connect(self.show_previous_page)
        toolbar.addAction(prev_page_action)

        next_page_action = QAction("Next Page", self)
        next_page_action.triggered.connect(self.show_next_page)
        toolbar.addAction(next_page_action)

        toolbar.addSeparator()

        prev_field_action = QAction("Previous Field", self)
        prev_field_action.triggered.connect(self.show_previous_field)
        toolbar.addAction(prev_field_action)

        next_field_action = QAction("Next Field", self)
        next_field_action.triggered.connect(self.show_next_field)
        toolbar.addAction(next_field_action)

        toolbar.addSeparator()

        self._edit_action = QAction("Edit Mode", self)
        self._edit_action.setCheckable(True)
        self._edit_action.setShortcut("Ctrl+E")
        self._edit_action.toggled.connect(self._set_edit_mode)
        toolbar.addAction(self._edit_action)

        self._build_layout_menu()

    def _build_layout_menu(self) -> None:
        menu = self.menuBar().addMenu("Layout")

        snap_action = QAction("Snap to Grid", self)
        snap_action.triggered.connect(self.snap_to_grid)
        menu.addAction(snap_action)

        menu.addSeparator()
        for alignment in (*HorizontalAlignment, *VerticalAlignment):
            action = QAction(f"Align {alignment.value.title()}", self)
            action.triggered.connect(lambda _checked=False, value=alignment: self.align_selected(value))
            menu.addAction(action)

        menu.addSeparator()
        for axis in Axis:
            action = QAction(f"Distribute {axis.value.title()}ly", self)
            action.triggered.connect(lambda _checked=False, value=axis: self.distribute_selected(value))
            menu.addAction(action)

        menu.addSeparator()
        select_page_action = QAction("Select Page Fields", self)
        select_page_action.triggered.connect(self.select_page_fields)
        menu.addAction(select_page_action)

        clear_action = QAction("Clear Selection", self)
        clear_action.triggered.connect(self.clear_selection)
        menu.addAction(clear_action)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if self._unsaved:
            logger.warning("Closing with %d unsaved new field(s)", len(self._unsaved))
        self._close_document()
        super().closeEvent(event)

    def open_pdf(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Open PDF",
            str(Path.home()),
            "PDF Files (*.pdf)",
        )
        if not file_path:
            return

        self._close_document()
        try:
            self._document = open_form(file_path)
        except PdfLoadError as exc:
            QMessageBox.critical(self, "Open Failed", str(exc))
            return

        self._current_page_index = 0
        self._populate_page_list()
        self._render_current_page()
        self.statusBar().showMessage(f"Loaded: {file_path}")

    def load_mapping(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Load Field Mapping",
            str(Path.home()),
            "Field Mapping (*.json)",
        )
        if not file_path:
            return

        try:
            form_number, records = load_mapping_file(file_path)
        except MappingLoadError as exc:
            QMessageBox.critical(self, "Load Failed", str(exc))
            return

        if form_number:
            self._session.form_number = form_number
        self._session.load_records(records)
        self._populate_field_list()
        self.canvas.update()
        self.statusBar().showMessage(f"Loaded {len(records)} field mapping(s) for {self._session.form_number}")

    def import_pdf_fields(self) -> None:
        if self._document is None:
            QMessageBox.information(self, "No Document", "Open a PDF first.")
            return

        try:
            records = import_widget_records(self._document.path)
        except PdfImportError as exc:
            QMessageBox.warning(self, "Field Import Warning", str(exc))
            return

        if not records:
            self.statusBar().showMessage("No fillable fields found in this PDF.")
            return
        self._session.load_records(records)
        self._populate_field_list()
        self.canvas.update()
        self.statusBar().showMessage(f"Imported {len(records)} field(s) from PDF")

    def save_mapping(self) -> None:
        default_name = f"{self._session.form_number}_fields.json"
        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Field Mapping",
            str(Path.home() / default_name),
            "Field Mapping (*.json)",
        )
        if not output_path:
            return

        try:
            save_mapping_file(output_path, self._session.records(), form_number=self._session.form_number)
        except MappingSaveError as exc:
            QMessageBox.critical(self, "Save Failed", str(exc))
            return

        self._unsaved.clear()
        self.statusBar().showMessage(f"Saved: {output_path}")

    def show_previous_page(self) -> None:
        if self._document is None or self._current_page_index <= 0:
            return
        self._current_page_index -= 1
        self.page_list.setCurrentRow(self._current_page_index)

    def show_next_page(self) -> None:
        if self._document is None:
            return
        if self._current_page_index >= self._document.page_count - 1:
            return
        self._current_page_index += 1
        self.page_list.setCurrentRow(self._current_page_index)

    def show_previous_field(self) -> None:
        self._session.cursor.prev()
        self._on_field_selected(self._session.cursor.current_name)

    def show_next_field(self) -> None:
        self._session.cursor.next()
        self._on_field_selected(self._session.cursor.current_name)

    def snap_to_grid(self) -> None:
        names = self._layout_targets() or self._page_field_names()
        changed = self._session.snap_fields(names)
        self._after_layout(changed, f"Snapped {len(names)} field(s) to {config.GRID_SIZE:g}% grid")

    def align_selected(self, alignment: HorizontalAlignment | VerticalAlignment) -> None:
        names = self._layout_targets()
        if len(names) < 2:
            self.statusBar().showMessage("Check at least two fields to align")
            return
        changed = self._session.align_fields(names, alignment)
        self._after_layout(changed, f"Aligned {len(names)} field(s) {alignment.value}")

    def distribute_selected(self, axis: Axis) -> None:
        names = self._layout_targets()
        if len(names) < 3:
            self.statusBar().showMessage("Check at least three fields to distribute")
            return
        changed = self._session.distribute_fields(names, axis)
        self._after_layout(changed, f"Distributed {len(names)} field(s) {axis.value}ly")

    def select_page_fields(self) -> None:
        self._layout_names = self._page_field_names()
        self._populate_field_list()

    def clear_selection(self) -> None:
        self._layout_names = []
        self._populate_field_list()

    def _layout_targets(self) -> list[str]:
        return [name for name in self._layout_names if self._session.descriptor(name) is not None]

    def _page_field_names(self) -> list[str]:
        return [descriptor.name for descriptor in self._session.page_fields(self._current_page_index + 1)]

    def _after_layout(self, changed: bool, message: str) -> None:
        if not changed:
            self.statusBar().showMessage("Nothing to change")
            return
        self.canvas.update()
        self.statusBar().showMessage(message)

    def _set_edit_mode(self, enabled: bool) -> None:
        self.canvas.set_edit_mode(enabled)
        self.canvas.setFocus()
        label = "Edit mode: drag to draw a field, arrows move the selected field" if enabled else "Fill mode"
        self.statusBar().showMessage(label)

    def _populate_page_list(self) -> None:
        self.page_list.clear()
        if self._document is None:
            return

        for page_number in range(1, self._document.page_count + 1):
            self.page_list.addItem(QListWidgetItem(f"Page {page_number}"))

        self.page_list.setCurrentRow(0)

    def _populate_field_list(self, *_: object) -> None:
        self.field_list.clear()
        current = self._session.cursor.current_name
        for descriptor in self._session.cursor.search(self.search_box.text()):
            item = QListWidgetItem(f"{descriptor.label}  (p{descriptor.page})")
            item.setData(Qt.ItemDataRole.UserRole, descriptor.name)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            checked = descriptor.name in self._layout_names
            item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
            self.field_list.addItem(item)
            if descriptor.name == current:
                self.field_list.setCurrentItem(item)

    def _on_page_selected(self, row: int) -> None:
        if self._document is None or row < 0:
            return

        self._current_page_index = row
        self._render_current_page()

    def _on_field_clicked(self, item: QListWidgetItem) -> None:
        name = item.data(Qt.ItemDataRole.UserRole)
        if self._session.cursor.go_to_name(name):
            self._on_field_selected(name)
        self.canvas.setFocus()

    def _on_field_checked(self, item: QListWidgetItem) -> None:
        name = item.data(Qt.ItemDataRole.UserRole)
        checked = item.checkState() == Qt.CheckState.Checked
        if checked and name not in self._layout_names:
            self._layout_names.append(name)
        elif not checked and name in self._layout_names:
            self._layout_names.remove(name)

    def _on_field_selected(self, name: str) -> None:
        descriptor = self._session.descriptor(name) if name else None
        if descriptor is not None and self._document is not None:
            page_index = descriptor.page - 1
            if page_index != self._current_page_index and 0 <= page_index < self._document.page_count:
                self.page_list.setCurrentRow(page_index)
        self._populate_field_list()
        self.canvas.update()
        self._show_current_position()

    def _show_current_position(self) -> None:
        position = self._session.current_position()
        self.statusBar().showMessage(
            f"{self._session.cursor.position_label()} | top {position.top:.2f}%, left {position.left:.2f}%"
        )

    def _on_field_drawn(self, rect: DrawnRect) -> None:
        page = self._current_page_index + 1
        name, accepted = QInputDialog.getText(
            self,
            f"Create New Field (Page {page})",
            f"Field name\nTop {rect.top:.2f}%, Left {rect.left:.2f}%, Size {rect.width:.2f}% x {rect.height:.2f}%",
        )
        if not accepted:
            return

        types = [field_type.value for field_type in FieldType]
        field_type, accepted = QInputDialog.getItem(self, "Field Type", "Type", types, 0, False)
        if not accepted:
            return

        try:
            payload = self._session.create_field(name, field_type, rect, page)
        except InvalidFieldError as exc:
            QMessageBox.warning(self, "Invalid Field", str(exc))
            return

        self._populate_field_list()
        self.canvas.update()
        self.statusBar().showMessage(f"Created {payload.name} on page {payload.page}")

    def _on_field_saved(self, payload: NewFieldPayload) -> None:
        self._unsaved.append(payload)
        logger.info("New field pending save: %s", payload.to_dict())

    def _new_session(self) -> FormSession:
        session = FormSession(form_number=config.FORM_NUMBER)
        session.save_handler = self._on_field_saved
        return session

    def _render_current_page(self) -> None:
        if self._document is None:
            self.canvas.clear_page()
            return

        try:
            image = render_page_image(self._document.handle, self._current_page_index, zoom=config.ZOOM)
        except PdfRenderError as exc:
            QMessageBox.critical(self, "Render Failed", str(exc))
            return

        self.canvas.set_page(pixmap=QPixmap.fromImage(image), page=self._current_page_index + 1)
        self.statusBar().showMessage(f"Page {self._current_page_index + 1}/{self._document.page_count}")

    def _close_document(self) -> None:
        if self._document is not None:
            self._document.close()
            self._document = None
        self.page_list.clear()
        self.canvas.clear_page()
