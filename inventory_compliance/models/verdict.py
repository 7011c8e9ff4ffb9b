from __future__ import annotations

from dataclasses import dataclass

"""Compliance verdict models (per component and per record)."""

__all__ = [
    "ComplianceVerdict",
    "RecordVerdict",
]


@dataclass(frozen=True)
class ComplianceVerdict:
    """Pass/fail outcome for one component. `reason` is empty iff `passes`."""
    passes: bool
    reason: str = ""

    def __post_init__(self) -> None:
        if self.passes and self.reason:
            raise ValueError("a passing verdict cannot carry a failure reason")
        if not self.passes and not self.reason:
            raise ValueError("a failing verdict requires a reason")

    @staticmethod
    def ok() -> ComplianceVerdict:
        return ComplianceVerdict(passes=True)

    @staticmethod
    def fail(reason: str) -> ComplianceVerdict:
        return ComplianceVerdict(passes=False, reason=reason)

    @staticmethod
    def not_applicable() -> ComplianceVerdict:
        """Verdict for a component whose column is missing from the dataset."""
        return ComplianceVerdict(passes=True)


@dataclass(frozen=True)
class RecordVerdict:
    overall_passes: bool
    overall_reason: str = ""
