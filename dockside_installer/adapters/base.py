"""
Adapter base — narrow capability interfaces for host-owned resources.

The package manager, the runtime VM, the docker daemon, the cluster, and the
release server all belong to the host (or the network), not to the
installer. Services only reach them through these interfaces, so every
stage can run against a simulated host in tests.

Adapters NEVER raise for tool failures. They return ``{"ok": False, ...}``
dicts (or plain booleans for probes). Services decide what is fatal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from dockside_installer.core.models.runtime import RuntimeProfile, RuntimeStatus


class Adapter(ABC):
    """Common identity for all adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'packages', 'colima')."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class PackageHost(Adapter):
    """Presence probes and package-manager commands on the host."""

    @abstractmethod
    def which(self, binary: str, search_paths: list[str] | None = None) -> str | None:
        """Locate an executable on PATH or in one of ``search_paths``."""

    @abstractmethod
    def run(
        self,
        cmd: list[str],
        *,
        needs_sudo: bool = False,
        env: dict[str, str] | None = None,
        timeout: int = 1800,
        interactive: bool = False,
    ) -> dict[str, Any]:
        """Run an install / refresh command.

        ``interactive`` attaches the command to the terminal instead of
        capturing its output.
        """

    @abstractmethod
    def add_to_path(self, directory: str) -> None:
        """Make ``directory`` visible to later probes in this process."""


class RuntimeController(Adapter):
    """The virtualization-backed container runtime (colima)."""

    @abstractmethod
    def status(self) -> RuntimeStatus:
        """Current VM state. A stopped or missing VM is ``running=False``."""

    @abstractmethod
    def start_command(self, profile: RuntimeProfile) -> list[str]:
        """The exact command ``start`` would run, for hints."""

    @abstractmethod
    def start(self, profile: RuntimeProfile) -> dict[str, Any]:
        """Start the VM with the given profile."""


class ContainerEngine(Adapter):
    """The container daemon client (docker)."""

    @abstractmethod
    def info(self) -> bool:
        """True when the daemon answers."""

    @abstractmethod
    def run_smoke(self, image: str) -> dict[str, Any]:
        """Run a disposable container (``--rm``)."""


class ClusterClient(Adapter):
    """The orchestration CLI (kubectl)."""

    @abstractmethod
    def cluster_info(self) -> bool:
        """True when the control plane answers."""

    @abstractmethod
    def wait_nodes_ready(self, timeout: int) -> bool:
        """Block (bounded) until nodes report Ready."""

    @abstractmethod
    def run_pod(self, name: str, image: str, command: list[str]) -> dict[str, Any]:
        """Run a disposable pod to completion."""

    @abstractmethod
    def delete_pod(self, name: str) -> dict[str, Any]:
        """Delete a pod; missing pods are not an error."""


class ReleaseSource(Adapter):
    """Release metadata and artifact downloads."""

    @abstractmethod
    def latest_tag(self) -> dict[str, Any]:
        """``{"ok": True, "tag": "v1.2.3"}`` or an error dict."""

    @abstractmethod
    def download(self, url: str, dest: Path) -> dict[str, Any]:
        """Download ``url`` to ``dest``."""
