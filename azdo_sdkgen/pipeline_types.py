"""
pipeline_types.py

Value objects passed between the pipeline stages. None of them is mutated after
creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

OK = "ok"
SKIPPED = "skipped"
FAILED = "failed"


@dataclass(frozen=True)
class ResolvedSpec:
    api: str
    version: str
    ref: str
    file: str
    url: str


@dataclass(frozen=True)
class GeneratedPackage:
    directory: Path
    name: str
    version: str


@dataclass(frozen=True)
class ApiOutcome:
    """Result of processing one API in bulk mode."""

    api: str
    status: str  # OK | SKIPPED | FAILED
    version: str | None = None
    package: GeneratedPackage | None = None
    error_kind: str | None = None
    message: str = ""


@dataclass
class BulkReport:
    outcomes: list[ApiOutcome] = field(default_factory=list)

    def add(self, outcome: ApiOutcome) -> None:
        self.outcomes.append(outcome)

    def _with_status(self, status: str) -> list[ApiOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def succeeded(self) -> list[ApiOutcome]:
        return self._with_status(OK)

    @property
    def skipped(self) -> list[ApiOutcome]:
        return self._with_status(SKIPPED)

    @property
    def failed(self) -> list[ApiOutcome]:
        return self._with_status(FAILED)
