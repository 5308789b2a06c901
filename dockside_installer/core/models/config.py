"""
Installer configuration model.

Every field has a default, so an empty (or absent) config file yields a
working cross-platform CLI installer. The macOS app-bundle variant is just
configuration::

    artifact_kind: app_bundle
    supported_platforms:
      macos: [arm64]
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from dockside_installer.core.models.platform import Arch, OSFamily, PlatformTarget
from dockside_installer.core.models.release import LATEST, ArtifactKind
from dockside_installer.core.models.runtime import RuntimeProfile

_RELEASE_PATH = "{download_base}/{repo}/releases/download/{version}"

DEFAULT_URL_TEMPLATES: dict[ArtifactKind, str] = {
    ArtifactKind.ARCHIVE: _RELEASE_PATH + "/{binary}-{version}-{target}.tar.gz",
    ArtifactKind.RAW_BINARY: _RELEASE_PATH + "/{binary}-{version}-{target}",
    ArtifactKind.APP_BUNDLE: _RELEASE_PATH + "/{app}-{version}-{slug}.zip",
}

APPLICATIONS_DIR = "/Applications"
USER_BIN_DIR = "~/.local/bin"


def _default_platforms() -> dict[OSFamily, list[Arch]]:
    return {
        OSFamily.MACOS: [Arch.ARM64, Arch.X86_64],
        OSFamily.LINUX: [Arch.ARM64, Arch.X86_64],
    }


class VerificationSettings(BaseModel):
    """Polling bounds and smoke-test workloads."""

    daemon_attempts: int = Field(default=15, gt=0)
    daemon_delay: float = Field(default=1.0, ge=0)
    orchestration_attempts: int = Field(default=30, gt=0)
    orchestration_delay: float = Field(default=2.0, ge=0)
    node_ready_timeout: int = Field(default=60, gt=0)
    smoke_image: str = "hello-world"
    pod_image: str = "busybox"
    pod_name: str = "dockside-smoke-test"


class InstallerConfig(BaseModel):
    """Validated installer settings (file + environment + CLI)."""

    repo: str = "salamaashoush/dockside"
    binary_name: str = "dockside"
    app_name: str = "Dockside"
    artifact_kind: ArtifactKind = ArtifactKind.ARCHIVE
    url_template: str | None = None
    version: str = LATEST
    install_dir: str | None = None
    supported_platforms: dict[OSFamily, list[Arch]] = Field(
        default_factory=_default_platforms,
    )
    runtime: RuntimeProfile = Field(default_factory=RuntimeProfile)
    verification: VerificationSettings = Field(default_factory=VerificationSettings)
    api_base: str = "https://api.github.com"
    download_base: str = "https://github.com"
    http_timeout: int = Field(default=30, gt=0)

    @field_validator("repo")
    @classmethod
    def _repo_has_owner(cls, value: str) -> str:
        if value.count("/") != 1 or not all(value.split("/")):
            raise ValueError(f"repo must be 'owner/name', got '{value}'")
        return value

    @field_validator("version")
    @classmethod
    def _version_not_blank(cls, value: str) -> str:
        value = value.strip()
        return value or LATEST

    @property
    def artifact_name(self) -> str:
        """File or directory expected inside the downloaded artifact."""
        if self.artifact_kind == ArtifactKind.APP_BUNDLE:
            return f"{self.app_name}.app"
        return self.binary_name

    def resolved_url_template(self) -> str:
        return self.url_template or DEFAULT_URL_TEMPLATES[self.artifact_kind]

    def resolved_install_dir(self) -> Path:
        """Absolute install directory; relative settings resolve against the cwd."""
        if self.install_dir:
            return Path(os.path.abspath(Path(self.install_dir).expanduser()))
        if self.artifact_kind == ArtifactKind.APP_BUNDLE:
            return Path(APPLICATIONS_DIR)
        return Path(USER_BIN_DIR).expanduser()

    def allows(self, target: PlatformTarget) -> bool:
        return target.arch in self.supported_platforms.get(target.os, [])
