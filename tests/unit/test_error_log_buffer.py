from __future__ import annotations
import json
import re
from pathlib import Path
from inventory_compliance.logging.error_log import ErrorRecord, ErrorLogBuffer

KEYS = {"timestamp", "file", "sheet", "row", "component", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("f1.xlsx", "Hoja1", 3, "memory", "CLASSIFICATION_ERROR", "boom"))
    buf.append(ErrorRecord.create("f1.xlsx", "Hoja1", -1, "<FILE_LEVEL>", "INGESTIONERROR", "no processor column"))
    path = buf.flush()
    assert path.exists()
    assert path.parent == Path("logs")
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    # buffer is cleared after flush
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("f.xlsx", "S", 1, "processor", "CLASSIFICATION_ERROR", "x"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("f.xlsx", "S", 2, "storage", "CLASSIFICATION_ERROR", "y"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_empty_flush_writes_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_records_returns_a_copy(tmp_path: Path):
    buf = ErrorLogBuffer(tmp_path)
    buf.append(ErrorRecord.create("f.xlsx", "S", 1, "processor", "CLASSIFICATION_ERROR", "x"))
    buf.records.clear()
    assert len(buf) == 1
