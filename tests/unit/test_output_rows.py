from __future__ import annotations

import pytest

from inventory_compliance.services.ingestion import ingest_rows
from inventory_compliance.services.output_rows import HEADERS, build_output_row, build_output_rows


def test_original_fields_come_first(rules, inventory_rows):
    _, records = ingest_rows(inventory_rows, rules)
    row = build_output_row(records[0])
    keys = list(row)
    assert keys[:4] == ["Hostname", "Procesador (marca y modelo)", "Memoria RAM", "Disco Duro"]
    assert keys[4:] == list(HEADERS["es"].values())


def test_spanish_values(rules, inventory_rows):
    _, records = ingest_rows(inventory_rows, rules)
    first, second, _ = build_output_rows(records)
    assert first["Procesador Normalizado"] == "Intel Core i5 8500 8th Gen @ 3.0 GHz"
    assert first["Marca Procesador"] == "Intel"
    assert first["Generación"] == "8th Gen"
    assert first["Velocidad"] == "3.0 GHz"
    assert first["Capacidad RAM"] == "16 GB"
    assert first["Capacidad Almacenamiento"] == "500 GB"
    assert first["Tipo Almacenamiento"] == "SSD"
    assert first["Cumple Requisitos"] == "Sí"
    assert first["Motivo Incumplimiento"] == ""
    assert second["Velocidad"] == "N/A"
    assert second["Cumple Requisitos"] == "No"
    assert second["Motivo Incumplimiento"].startswith("Insufficient speed")


def test_english_headers(rules, inventory_rows):
    _, records = ingest_rows(inventory_rows, rules)
    row = build_output_row(records[0], "en")
    assert row["Processor Normalized"] == "Intel Core i5 8500 8th Gen @ 3.0 GHz"
    assert row["Meets Requirements"] == "Yes"
    assert "Cumple Requisitos" not in row


def test_missing_columns_are_not_appended(rules):
    _, records = ingest_rows([{"CPU": "AMD Ryzen 7 5800X"}], rules)
    row = build_output_row(records[0], "en")
    assert "RAM Normalized" not in row
    assert "Storage Normalized" not in row
    assert row["Meets Requirements"] == "Yes"
    assert row["Speed"] == "N/A"


def test_unknown_language(rules, inventory_rows):
    _, records = ingest_rows(inventory_rows, rules)
    with pytest.raises(ValueError, match="unsupported header language"):
        build_output_row(records[0], "fr")


def test_header_sets_cover_the_same_fields():
    assert set(HEADERS["es"]) == set(HEADERS["en"])
    assert len(set(HEADERS["es"].values())) == len(HEADERS["es"])
