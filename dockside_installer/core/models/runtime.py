"""
Runtime models — the resource profile handed to the VM controller and
what the controller reports back.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RuntimeProfile(BaseModel):
    """Resources and features requested for the container runtime VM."""

    cpu: int = Field(default=4, gt=0)
    memory_gib: int = Field(default=8, gt=0)
    disk_gib: int = Field(default=60, gt=0)
    orchestration_enabled: bool = False


class RuntimeStatus(BaseModel):
    """Observed runtime state.

    ``orchestration_enabled`` is ``None`` when the VM is not running or the
    status output did not say.
    """

    running: bool = False
    orchestration_enabled: bool | None = None


class RuntimeOutcome(BaseModel):
    """What ``ensure_running`` did."""

    state: Literal["started", "already_running"]
    orchestration_mismatch: bool = False
