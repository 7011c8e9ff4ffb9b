from __future__ import annotations

from dataclasses import dataclass

"""Application configuration dataclasses.

Built by inventory_compliance.config.loader from config/inventory.yml after
schema validation. The validation policy itself lives in a separate RuleSet
(see models.rule_set); `rules_file` only points at it.
"""

__all__ = [
    "AppConfig",
    "HEADER_LANGUAGES",
]

HEADER_LANGUAGES = ("es", "en")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for a directory analysis run."""
    source_directory: str  # Directory scanned for .xlsx workbooks
    rules_file: str | None = None  # RuleSet JSON; None -> default policy
    sheet_name: str | None = None  # None -> first sheet of each workbook
    header_row: int = 1  # 1-based worksheet row holding column names
    output_directory: str | None = None  # Where results-<workbook>.json files go
    header_language: str = "es"  # Output row column names: "es" | "en"
