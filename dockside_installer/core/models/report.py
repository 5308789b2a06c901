"""
Report models — verification outcome and the whole-run summary.

Warnings never abort the run; they are accumulated here and printed in the
final summary. Only these models drive the user-facing end-of-run message.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from dockside_installer.core.models.dependency import DependencyOutcome
from dockside_installer.core.models.platform import PlatformTarget
from dockside_installer.core.models.release import InstalledArtifact
from dockside_installer.core.models.runtime import RuntimeOutcome


class VerificationResult(BaseModel):
    """Readiness and smoke-test results.

    Optional fields are ``None`` when that step did not run (orchestration
    not requested, or an earlier readiness check failed).
    """

    daemon_ready: bool = False
    smoke_test_passed: bool | None = None
    orchestration_ready: bool | None = None
    nodes_ready: bool | None = None
    orchestration_smoke_passed: bool | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def healthy(self) -> bool:
        checks = [
            self.daemon_ready,
            self.smoke_test_passed,
            self.orchestration_ready,
            self.nodes_ready,
            self.orchestration_smoke_passed,
        ]
        return all(c is not False for c in checks)


class PipelineReport(BaseModel):
    """Accumulated state of one pipeline run."""

    target: PlatformTarget | None = None
    dependencies: list[DependencyOutcome] = Field(default_factory=list)
    orchestration_requested: bool = False
    runtime: RuntimeOutcome | None = None
    verification: VerificationResult | None = None
    installed: InstalledArtifact | None = None
    path_updated: bool = False
    shell_rc: str | None = None
    skipped_stages: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def skip(self, stage: str) -> None:
        self.skipped_stages.append(stage)

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json")
        if self.target is not None:
            data["target"]["triple"] = self.target.triple
        return data
