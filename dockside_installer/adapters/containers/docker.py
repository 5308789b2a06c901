"""
Docker adapter — daemon readiness and disposable smoke containers.

Uses the docker CLI, never the Docker API directly.
"""

from __future__ import annotations

from typing import Any

from dockside_installer.adapters.base import ContainerEngine
from dockside_installer.adapters.shell.command import run_command


class DockerEngine(ContainerEngine):

    @property
    def name(self) -> str:
        return "docker"

    def info(self) -> bool:
        return run_command(["docker", "info"], timeout=20)["ok"]

    def run_smoke(self, image: str) -> dict[str, Any]:
        # Image pull on first run dominates the time
        return run_command(["docker", "run", "--rm", image], timeout=300)
