"""Adapters — bindings to host tools and remote services.

``HostAdapters`` bundles one adapter per capability. The CLI builds the
real set with ``HostAdapters.system(config)``; tests build simulated ones.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from dockside_installer.adapters.base import (
    Adapter,
    ClusterClient,
    ContainerEngine,
    PackageHost,
    ReleaseSource,
    RuntimeController,
)
from dockside_installer.adapters.terminal import open_controlling_terminal
from dockside_installer.core.models.config import InstallerConfig


@dataclass
class HostAdapters:
    """Everything the pipeline may touch outside the process."""

    packages: PackageHost
    runtime: RuntimeController
    containers: ContainerEngine
    cluster: ClusterClient
    releases: ReleaseSource
    open_tty: Callable[[], TextIO | None] = field(default=open_controlling_terminal)

    @classmethod
    def system(cls, config: InstallerConfig) -> HostAdapters:
        from dockside_installer.adapters.containers.colima import ColimaController
        from dockside_installer.adapters.containers.docker import DockerEngine
        from dockside_installer.adapters.containers.kubectl import KubectlClient
        from dockside_installer.adapters.packages import SystemPackageHost
        from dockside_installer.adapters.releases import GitHubReleases

        return cls(
            packages=SystemPackageHost(),
            runtime=ColimaController(),
            containers=DockerEngine(),
            cluster=KubectlClient(),
            releases=GitHubReleases(
                config.repo,
                api_base=config.api_base,
                timeout=config.http_timeout,
                token=os.environ.get("GITHUB_TOKEN") or None,
            ),
        )


__all__ = [
    "Adapter",
    "ClusterClient",
    "ContainerEngine",
    "HostAdapters",
    "PackageHost",
    "ReleaseSource",
    "RuntimeController",
]
