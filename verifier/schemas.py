"""
Pydantic schemas for verifier results.
The report is passed explicitly through every check instead of a shared flag.
"""
from typing import List

from pydantic import BaseModel, Field

from verifier.enums import FailureKind


# ============================================================
# Scratch data
# ============================================================

class ScratchRow(BaseModel):
    """A sample row for the scratch vector table."""
    content: str
    embedding: List[float] = Field(..., min_length=3, max_length=3)


class SimilarityHit(BaseModel):
    """One row of the nearest-neighbour query."""
    rank: int = Field(..., ge=1)
    content: str
    distance: float


# ============================================================
# Report
# ============================================================

class CheckFailure(BaseModel):
    kind: FailureKind
    detail: str


class VerificationReport(BaseModel):
    """Accumulates failures for a single run. Never reset."""
    failures: List[CheckFailure] = Field(default_factory=list)

    def record(self, kind: FailureKind, detail: str) -> None:
        self.failures.append(CheckFailure(kind=kind, detail=detail))

    def has(self, kind: FailureKind) -> bool:
        return any(f.kind == kind for f in self.failures)

    @property
    def passed(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
