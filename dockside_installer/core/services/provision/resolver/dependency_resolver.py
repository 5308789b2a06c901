"""
L2 Resolver — make sure every required tool is present.

For each registry entry, in order: probe, and only when absent pick the
install command for the host's package manager, run it, and re-probe.
Present tools are never reinstalled, so repeated runs converge.

Any failure here is fatal. Later stages assume the tools exist, and there
is no rollback of what was already installed.
"""

from __future__ import annotations

import logging
import os

from dockside_installer.adapters.base import PackageHost
from dockside_installer.adapters.shell.command import format_command
from dockside_installer.core.errors import InstallFailedError
from dockside_installer.core.models.dependency import DependencyOutcome, DependencySpec
from dockside_installer.core.models.platform import PlatformTarget
from dockside_installer.core.services.provision.data.constants import (
    GO_ARCH,
    GO_OS,
    PM_REFRESH,
    SUDO_VALIDATE,
    UNAME_ARCH,
    UNAME_OS,
)
from dockside_installer.core.services.provision.data.dependencies import DEPENDENCIES
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)


def render_command(cmd: list[str], target: PlatformTarget) -> list[str]:
    """Substitute ``{os}``/``{arch}``/``{uname_os}``/``{uname_arch}`` tokens.

    Plain string replacement, so shell syntax such as ``$(...)`` in the
    same token is left untouched.
    """
    values = {
        "os": GO_OS[target.os],
        "arch": GO_ARCH[target.arch],
        "uname_os": UNAME_OS[target.os],
        "uname_arch": UNAME_ARCH[target.arch],
    }
    rendered = []
    for token in cmd:
        for key, value in values.items():
            token = token.replace(f"{{{key}}}", value)
        rendered.append(token)
    return rendered


def _failure_detail(result: dict) -> str:
    detail = result.get("error", "unknown error")
    stderr = (result.get("stderr") or "").strip()
    if stderr:
        detail = f"{detail}: {stderr.splitlines()[-1]}"
    return detail


class DependencyResolver:
    """Probe-then-install over an ordered dependency registry."""

    def __init__(
        self,
        host: PackageHost,
        registry: list[DependencySpec] | None = None,
        reporter: ProgressReporter | None = None,
        *,
        interactive: bool = False,
    ):
        self._host = host
        self._interactive = interactive
        self._registry = DEPENDENCIES if registry is None else registry
        self._reporter = reporter or ProgressReporter()
        self._refreshed: set[str] = set()

    @property
    def registry(self) -> list[DependencySpec]:
        return list(self._registry)

    def ensure_all(self, target: PlatformTarget) -> list[DependencyOutcome]:
        """Ensure every applicable dependency, in registry order."""
        outcomes = []
        for spec in self._registry:
            if not spec.applies_to(target.os):
                logger.debug("Skipping %s: not needed on %s", spec.name, target.os.value)
                continue
            outcomes.append(self.ensure(spec, target))
        return outcomes

    def ensure(self, spec: DependencySpec, target: PlatformTarget) -> DependencyOutcome:
        """Ensure one dependency is installed.

        Raises:
            InstallFailedError: No install method for this package manager,
                the install command failed, or the tool is still missing.
        """
        label = spec.display_name
        found = self._probe(spec)
        if found:
            self._reporter.success(f"{label} already installed")
            return DependencyOutcome(name=spec.name, status="present", path=found)

        resolved = spec.command_for(target.package_manager)
        if resolved is None:
            raise InstallFailedError(
                f"No install method for {label} with package manager "
                f"'{target.package_manager.value}' on {target.os.value}",
                hint=f"Install '{spec.binary}' manually, then re-run with --skip-deps.",
            )

        cmd, method = resolved
        cmd = render_command(cmd, target)
        needs_sudo = spec.method_needs_sudo(method)
        manual = format_command(["sudo", *cmd] if needs_sudo and os.geteuid() != 0 else cmd)

        if method == target.package_manager.value:
            self._refresh_index(target)

        # Bootstrap installers may prompt: they get the terminal when there is one
        attended = spec.bootstrap and self._interactive
        env = dict(spec.env) if attended else {**spec.env, **spec.unattended_env}
        if attended:
            self._validate_sudo(label)

        self._reporter.info(f"Installing {label}...")
        logger.info("Installing %s via %s: %s", spec.name, method, manual)
        result = self._host.run(cmd, needs_sudo=needs_sudo, env=env or None, interactive=attended)
        if not result.get("ok"):
            raise InstallFailedError(
                f"Failed to install {label}: {_failure_detail(result)}",
                hint=f"Run it manually and re-run the installer: {manual}",
            )

        found = self._probe(spec)
        if not found:
            raise InstallFailedError(
                f"{label} was installed but '{spec.binary}' is still not found",
                hint=f"Open a new shell and check 'command -v {spec.binary}', "
                     "then re-run the installer.",
            )

        self._reporter.success(f"{label} installed")
        return DependencyOutcome(name=spec.name, status="installed", method=method, path=found)

    def _probe(self, spec: DependencySpec) -> str | None:
        found = self._host.which(spec.binary, spec.search_paths)
        if found and spec.bootstrap:
            # Later installs run through this package manager; make sure it resolves
            self._host.add_to_path(os.path.dirname(found))
        return found

    def _validate_sudo(self, label: str) -> None:
        if os.geteuid() == 0:
            return
        self._reporter.info(f"{label} needs administrator access; sudo may ask for your password")
        result = self._host.run(SUDO_VALIDATE, interactive=True)
        if not result.get("ok"):
            raise InstallFailedError(
                f"Administrator access is required to install {label}",
                hint="Check that your account can use sudo, then re-run the installer.",
            )

    def _refresh_index(self, target: PlatformTarget) -> None:
        family = target.package_manager
        refresh = PM_REFRESH.get(family)
        if refresh is None or family.value in self._refreshed:
            return
        self._refreshed.add(family.value)

        self._reporter.info(f"Refreshing {family.value} package index...")
        result = self._host.run(refresh, needs_sudo=True)
        if not result.get("ok"):
            self._reporter.warn(
                f"Package index refresh failed ({_failure_detail(result)}); "
                "continuing with the cached index"
            )
