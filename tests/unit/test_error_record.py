from __future__ import annotations

import json

from inventory_compliance.models.error_record import FILE_LEVEL, ErrorRecord

"""Unit tests for the ErrorRecord model."""


def test_create_stamps_utc_timestamp():
    rec = ErrorRecord.create("inv.xlsx", "Hoja1", 5, "processor", "CLASSIFICATION_ERROR", "boom")
    assert rec.timestamp.endswith("Z")
    assert "+00:00" not in rec.timestamp


def test_json_line_fields():
    rec = ErrorRecord.create(
        file="inv.xlsx",
        sheet="Hoja1",
        row=5,
        component="storage",
        error_type="CLASSIFICATION_ERROR",
        message="ValueError: bad",
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "inv.xlsx"
    assert data["sheet"] == "Hoja1"
    assert data["row"] == 5
    assert data["component"] == "storage"
    assert data["error_type"] == "CLASSIFICATION_ERROR"
    assert data["message"] == "ValueError: bad"


def test_file_level_record():
    rec = ErrorRecord.create("inv.xlsx", FILE_LEVEL, -1, FILE_LEVEL, "SHEETHEADERERROR", "no header")
    data = json.loads(rec.to_json_line())
    assert data["row"] == -1
    assert data["component"] == "<FILE_LEVEL>"


def test_non_ascii_message_kept_verbatim():
    rec = ErrorRecord.create("inventario.xlsx", "Hoja1", 2, "memory", "CLASSIFICATION_ERROR", "línea inválida")
    assert "línea inválida" in rec.to_json_line()
