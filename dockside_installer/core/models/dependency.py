"""
Dependency models — what the resolver needs to know about an external tool.

A ``DependencySpec`` pairs a presence probe (a binary name plus optional
well-known locations) with a method-keyed install command map::

    install = {
        "brew": ["brew", "install", "colima"],
        "_default": ["bash", "-c", "curl ... | install ..."],
    }

Method keys are package manager family values. ``_default`` is the
manager-independent fallback (usually a release binary download).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from dockside_installer.core.models.platform import OSFamily, PackageManagerFamily

DEFAULT_METHOD = "_default"


class DependencySpec(BaseModel):
    """One external tool the pipeline requires."""

    name: str
    label: str = ""
    binary: str
    search_paths: list[str] = Field(default_factory=list)
    install: dict[str, list[str]] = Field(default_factory=dict)
    needs_sudo: dict[str, bool] = Field(default_factory=dict)
    env: dict[str, str] = Field(default_factory=dict)
    unattended_env: dict[str, str] = Field(default_factory=dict)   # only without a terminal
    bootstrap: bool = False          # installs the package manager itself
    platforms: list[OSFamily] = Field(
        default_factory=lambda: [OSFamily.MACOS, OSFamily.LINUX],
    )

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def applies_to(self, os_family: OSFamily) -> bool:
        return os_family in self.platforms

    def command_for(
        self,
        family: PackageManagerFamily,
    ) -> tuple[list[str], str] | None:
        """Resolve the install command for a package manager family.

        Returns:
            ``(command, method)``, preferring the family's own entry over
            ``_default``. ``None`` when neither exists.
        """
        for method in (family.value, DEFAULT_METHOD):
            cmd = self.install.get(method)
            if cmd:
                return list(cmd), method
        return None

    def method_needs_sudo(self, method: str) -> bool:
        return self.needs_sudo.get(method, False)


class DependencyOutcome(BaseModel):
    """Result of ensuring one dependency."""

    name: str
    status: Literal["present", "installed"]
    method: str | None = None
    path: str | None = None
