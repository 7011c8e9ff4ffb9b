from __future__ import annotations

import re

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=(\d+)/(\1)\s+success=\d+\s+failed=\d+\s+rows=\d+\s+"
    r"passing=\d+\s+failing=\d+\s+compliance_rate=[0-9.]+\s+elapsed_sec=[0-9.]+$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=2/2 success=2 failed=0 rows=120 passing=90 failing=30 "
        "compliance_rate=75 elapsed_sec=0.84"
    )
    assert SUMMARY_PATTERN.match(line), "SUMMARY line should match contract regex"


def test_summary_pattern_rejects_mismatched_file_counts():
    line = (
        "SUMMARY files=2/3 success=2 failed=0 rows=120 passing=90 failing=30 "
        "compliance_rate=75 elapsed_sec=0.84"
    )
    assert SUMMARY_PATTERN.match(line) is None
