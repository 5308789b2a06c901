"""
System package host — real probes and package-manager commands.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Any

from dockside_installer.adapters.base import PackageHost
from dockside_installer.adapters.shell.command import run_command

logger = logging.getLogger(__name__)


class SystemPackageHost(PackageHost):
    """Probe and install on the machine we are running on."""

    @property
    def name(self) -> str:
        return "packages"

    def which(self, binary: str, search_paths: list[str] | None = None) -> str | None:
        found = shutil.which(binary)
        if found:
            return found
        for directory in search_paths or []:
            candidate = Path(directory).expanduser() / binary
            if candidate.is_file() and os.access(candidate, os.X_OK):
                return str(candidate)
        return None

    def run(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        env: dict[str, str] | None = None,
        timeout: int = 1800,
        interactive: bool = False,
    ) -> dict[str, Any]:
        return run_command(
            cmd,
            needs_sudo=needs_sudo,
            env_overrides=env,
            timeout=timeout,
            capture=not interactive,
        )

    def add_to_path(self, directory: str) -> None:
        entries = os.environ.get("PATH", "").split(os.pathsep)
        if directory in entries:
            return
        os.environ["PATH"] = os.pathsep.join([directory, *filter(None, entries)])
        logger.info("Added %s to PATH for this session", directory)
