import json
import logging

import pytest

from formmapper.model.field import FieldPosition, FieldType
from formmapper.model.mapping import (
    FieldMappingRecord,
    MappingLoadError,
    load_mapping_file,
    record_from_row,
    records_from_rows,
    save_mapping_file,
)

DB_ROW = {
    "id": "row-1",
    "form_field_name": "email",
    "page_number": 1,
    "position_top": 29.2,
    "position_left": 5,
    "field_width": 40,
    "field_height": None,
    "placeholder_text": "Email Address",
    "canonical_field": {
        "field_key": "email",
        "field_label": "Email",
        "field_type": "input",
    },
}


def test_database_row_shape():
    record = record_from_row(DB_ROW)

    assert record.name == "email"
    assert record.label == "Email"
    assert record.field_type is FieldType.INPUT
    assert record.position() == FieldPosition(top=29.2, left=5, width="40%", height=None)


def test_flat_row_shape():
    record = record_from_row(
        {"name": "facts", "label": "Facts", "type": "textarea", "page": "3", "position_top": "54", "position_left": 5}
    )

    assert record.page == 3
    assert record.field_type is FieldType.TEXTAREA
    assert record.position() == FieldPosition(top=54, left=5)


def test_unknown_type_falls_back_to_input():
    record = record_from_row({"name": "x", "type": "radio"})

    assert record.field_type is FieldType.INPUT
    assert record.position() is None


def test_nested_canonical_list_is_unwrapped():
    row = dict(DB_ROW, canonical_field=None, canonical_fields=[{"field_label": "E-mail", "field_type": "input"}])

    assert record_from_row(row).label == "E-mail"


def test_row_without_name_is_rejected():
    with pytest.raises(MappingLoadError):
        record_from_row({"label": "Nameless"})
    with pytest.raises(MappingLoadError):
        record_from_row({"name": "bad", "position_top": "high"})


def test_records_from_rows_skips_bad_rows(caplog):
    with caplog.at_level(logging.WARNING, logger="formmapper.model.mapping"):
        records = records_from_rows([DB_ROW, {"label": "no name"}, "junk"])

    assert [r.name for r in records] == ["email"]
    assert caplog.text.count("Skipping field mapping row") == 2


def test_records_from_rows_tolerates_non_list():
    assert records_from_rows(None) == []
    assert records_from_rows({"fields": []}) == []


def test_position_is_clamped():
    record = FieldMappingRecord(name="x", label="x", field_type=FieldType.INPUT, position_top=104, position_left=-1)

    assert record.position() == FieldPosition(top=100, left=0)


def test_save_then_load(tmp_path):
    path = tmp_path / "fl320.json"
    records = [
        FieldMappingRecord(name="a", label="A", field_type=FieldType.CHECKBOX, page=2, position_top=1.5, position_left=2),
    ]

    save_mapping_file(path, records, form_number="FL-320")
    form_number, loaded = load_mapping_file(path)

    assert form_number == "FL-320"
    assert loaded == records
    assert json.loads(path.read_text())["fields"][0]["type"] == "checkbox"


def test_load_accepts_bare_list(tmp_path):
    path = tmp_path / "rows.json"
    path.write_text(json.dumps([DB_ROW]))

    form_number, records = load_mapping_file(path)

    assert form_number is None
    assert records[0].name == "email"


def test_load_errors(tmp_path):
    with pytest.raises(MappingLoadError):
        load_mapping_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(MappingLoadError):
        load_mapping_file(broken)

    scalar = tmp_path / "scalar.json"
    scalar.write_text("3")
    with pytest.raises(MappingLoadError):
        load_mapping_file(scalar)
