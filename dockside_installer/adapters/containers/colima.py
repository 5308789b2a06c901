"""
Colima adapter — the VM that hosts the docker daemon (and optionally k3s).

Uses the colima CLI only. ``colima status`` exits non-zero when the VM is
stopped or was never created; that is a normal "not running" answer.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from dockside_installer.adapters.base import RuntimeController
from dockside_installer.adapters.shell.command import run_command
from dockside_installer.core.models.runtime import RuntimeProfile, RuntimeStatus

logger = logging.getLogger(__name__)

_K8S_ENABLED_RE = re.compile(r"kubernetes.*enabled", re.IGNORECASE)

# First boot downloads the VM image; give it time
_START_TIMEOUT = 900


class ColimaController(RuntimeController):
    """Observe and start a colima profile."""

    def __init__(self, profile_name: str | None = None):
        self._profile_name = profile_name

    @property
    def name(self) -> str:
        return "colima"

    def _profile_args(self) -> list[str]:
        if self._profile_name and self._profile_name != "default":
            return ["--profile", self._profile_name]
        return []

    def status(self) -> RuntimeStatus:
        result = run_command(
            ["colima", "status", "--json", *self._profile_args()],
            timeout=30,
        )
        if not result["ok"]:
            logger.debug("colima status: %s", result.get("stderr") or result.get("error"))
            return RuntimeStatus(running=False)
        return parse_status_output(result.get("stdout", ""), result.get("stderr", ""))

    def start_command(self, profile: RuntimeProfile) -> list[str]:
        cmd = [
            "colima", "start", *self._profile_args(),
            "--cpu", str(profile.cpu),
            "--memory", str(profile.memory_gib),
            "--disk", str(profile.disk_gib),
        ]
        if profile.orchestration_enabled:
            cmd.append("--kubernetes")
        return cmd

    def start(self, profile: RuntimeProfile) -> dict[str, Any]:
        return run_command(self.start_command(profile), timeout=_START_TIMEOUT)


def parse_status_output(stdout: str, stderr: str = "") -> RuntimeStatus:
    """Interpret the output of a successful ``colima status``.

    Newer colima prints JSON with a boolean ``kubernetes`` key. Older
    releases print a human log (often on stderr) where a line such as
    ``kubernetes: enabled`` signals the feature.
    """
    try:
        data = json.loads(stdout)
    except (ValueError, TypeError):
        data = None

    if isinstance(data, dict):
        k8s = data.get("kubernetes")
        return RuntimeStatus(
            running=True,
            orchestration_enabled=bool(k8s) if k8s is not None else False,
        )

    text = f"{stdout}\n{stderr}"
    return RuntimeStatus(
        running=True,
        orchestration_enabled=bool(_K8S_ENABLED_RE.search(text)),
    )
