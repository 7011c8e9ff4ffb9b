from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import asdict, replace
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from inventory_compliance.classifiers.memory import classify_memory
from inventory_compliance.classifiers.processor import classify_processor
from inventory_compliance.classifiers.storage import classify_storage
from inventory_compliance.config.loader import DEFAULT_CONFIG_PATH, RULES_FILE_ENV, ConfigError, load_config
from inventory_compliance.config.rules import default_rule_set, load_rule_set
from inventory_compliance.logging.init import log_summary, set_debug, setup_logging
from inventory_compliance.models.config_models import HEADER_LANGUAGES, AppConfig
from inventory_compliance.models.rule_set import RuleSet
from inventory_compliance.services.compliance import evaluate_memory, evaluate_storage
from inventory_compliance.services.orchestrator import ProcessingError, process_all
from inventory_compliance.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (config/inventory.yml by default)
- Resolve the RuleSet: --rules, INVENTORY_RULES_FILE / rules_file, or the default policy
- Analyse every workbook of the source directory and print the SUMMARY line

Exit codes: 0 all workbooks analysed, 2 at least one workbook failed,
1 fatal (bad config or rules, missing directory).

--classify analyses a single text instead and prints the classification as
JSON; --inspect-data prints each workbook's header and first rows.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; .env values win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="inventory-compliance",
        description="Classify hardware inventory spreadsheets and check them against minimum specifications",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument("--rules", type=Path, default=None, help="Rules JSON (overrides config and environment)")
    p.add_argument("--lang", choices=HEADER_LANGUAGES, default=None, help="Output column language")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    p.add_argument(
        "--classify",
        nargs=2,
        metavar=("COMPONENT", "TEXT"),
        help="Classify a single text (COMPONENT: processor, memory or storage) and exit",
    )
    return p.parse_args(argv)


def _resolve_rules(args: argparse.Namespace, cfg: AppConfig | None) -> RuleSet:
    if args.rules is not None:
        return load_rule_set(args.rules)
    rules_file = cfg.rules_file if cfg is not None else os.getenv(RULES_FILE_ENV)
    if rules_file:
        return load_rule_set(Path(rules_file))
    return default_rule_set()


def _jsonable(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def _classify_text(component: str, text: str, rules: RuleSet) -> dict[str, Any]:
    if component == "processor":
        result = classify_processor(text, rules)
        classified: Any = result.classified
        verdict = result.verdict
    elif component == "memory":
        classified = classify_memory(text)
        verdict = evaluate_memory(classified, rules)
    elif component == "storage":
        classified = classify_storage(text)
        verdict = evaluate_storage(classified, rules)
    else:
        raise ValueError(f"unknown component: {component} (expected processor, memory or storage)")
    return {
        "classified": _jsonable(asdict(classified)),
        "passes": verdict.passes,
        "reason": verdict.reason,
    }


def _inspect_data(cfg: AppConfig) -> int:
    from inventory_compliance.excel.reader import read_excel_file, sheet_to_rows
    from inventory_compliance.services.ingestion import IngestionError, discover_columns

    directory = Path(cfg.source_directory)
    if not directory.exists():
        print(f"inspect: directory not found: {directory}")
        return EXIT_FATAL
    excel_files = sorted(p for p in directory.iterdir() if p.suffix == ".xlsx")
    if not excel_files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in excel_files:
        print(f"FILE: {f.name}")
        try:
            sheet, df = read_excel_file(f, cfg.sheet_name)
            data = sheet_to_rows(df, sheet, header_row=cfg.header_row)
        except Exception as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEET: {sheet} cols={data.columns}")
        if data.rows:
            try:
                mapping = discover_columns(data.rows[0].values)
                print(f"  columns: processor={mapping.processor} memory={mapping.memory} storage={mapping.storage}")
            except IngestionError as e:
                print(f"  columns: {e}")
        sample = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.values.items()}
            for row in data.rows[:INSPECT_SAMPLE_ROWS]
        ]
        print("    sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    if args.classify:
        component, text = args.classify
        try:
            rules = _resolve_rules(args, None)
            print(json.dumps(_classify_text(component, text, rules), ensure_ascii=False, indent=2))
        except (ConfigError, ValueError) as e:
            logger.error(f"classify: {e}")
            return EXIT_FATAL
        return EXIT_SUCCESS_ALL

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.lang:
        cfg = replace(cfg, header_language=args.lang)

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        rules = _resolve_rules(args, cfg)
    except ConfigError as e:
        logger.error(f"rules: {e}")
        return EXIT_FATAL

    logger.info(f"Analysing workbooks in: {directory}")
    try:
        result = process_all(cfg, rules)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
