from __future__ import annotations

from inventory_compliance.services.output_rows import HEADERS

"""Appended output column names; export collaborators key on these strings."""

SPANISH = [
    "Procesador Normalizado",
    "Marca Procesador",
    "Modelo Procesador",
    "Generación",
    "Velocidad",
    "Cumple Requisitos Procesador",
    "Motivo Incumplimiento Procesador",
    "RAM Normalizada",
    "Capacidad RAM",
    "Tipo RAM",
    "Cumple Requisitos RAM",
    "Motivo Incumplimiento RAM",
    "Almacenamiento Normalizado",
    "Capacidad Almacenamiento",
    "Tipo Almacenamiento",
    "Cumple Requisitos Almacenamiento",
    "Motivo Incumplimiento Almacenamiento",
    "Cumple Requisitos",
    "Motivo Incumplimiento",
]

ENGLISH = [
    "Processor Normalized",
    "Processor Brand",
    "Processor Model",
    "Generation",
    "Speed",
    "Processor Meets Requirements",
    "Processor Failure Reason",
    "RAM Normalized",
    "RAM Capacity",
    "RAM Type",
    "RAM Meets Requirements",
    "RAM Failure Reason",
    "Storage Normalized",
    "Storage Capacity",
    "Storage Type",
    "Storage Meets Requirements",
    "Storage Failure Reason",
    "Meets Requirements",
    "Failure Reason",
]


def test_spanish_headers():
    assert list(HEADERS["es"].values()) == SPANISH


def test_english_headers():
    assert list(HEADERS["en"].values()) == ENGLISH


def test_supported_languages():
    assert set(HEADERS) == {"es", "en"}
