"""
L3 Detection — platform identity.

Read-only: ``platform.system()``, ``platform.machine()``, and PATH lookups
for the package manager. Runs before anything else; an unsupported host is
rejected here, before any side effect.
"""

from __future__ import annotations

import logging
import platform
import shutil
from collections.abc import Callable

from dockside_installer.core.errors import UnsupportedPlatformError
from dockside_installer.core.models.config import InstallerConfig
from dockside_installer.core.models.platform import (
    Arch,
    OSFamily,
    PackageManagerFamily,
    PlatformTarget,
)
from dockside_installer.core.models.release import ArtifactKind
from dockside_installer.core.services.provision.data.constants import (
    ARCH_SYNONYMS,
    LINUX_PACKAGE_MANAGERS,
    OS_NAMES,
)

logger = logging.getLogger(__name__)


def normalize_os(system: str) -> OSFamily:
    return OS_NAMES.get(system.strip().lower(), OSFamily.UNSUPPORTED)


def normalize_arch(machine: str) -> Arch:
    return ARCH_SYNONYMS.get(machine.strip().lower(), Arch.UNSUPPORTED)


def detect_package_manager(
    os_family: OSFamily,
    which: Callable[[str], str | None] = shutil.which,
) -> PackageManagerFamily:
    """Pick the native package manager family.

    macOS always maps to Homebrew, even before it is installed: the
    resolver bootstraps it. On Linux the first manager found on PATH wins.
    """
    if os_family == OSFamily.MACOS:
        return PackageManagerFamily.BREW
    if os_family == OSFamily.LINUX:
        for binary, family in LINUX_PACKAGE_MANAGERS:
            if which(binary):
                return family
    return PackageManagerFamily.NONE


def _allowed_arches(config: InstallerConfig, os_family: OSFamily) -> str:
    return ", ".join(a.value for a in config.supported_platforms.get(os_family, [])) or "none"


def detect(
    config: InstallerConfig | None = None,
    *,
    system: str | None = None,
    machine: str | None = None,
    which: Callable[[str], str | None] = shutil.which,
) -> PlatformTarget:
    """Resolve the host into a supported ``PlatformTarget``.

    Raises:
        UnsupportedPlatformError: Unknown OS, unknown architecture, an
            architecture this build does not ship for, or an install target
            (app bundle) that does not exist for this OS.
    """
    config = config or InstallerConfig()
    system = system if system is not None else platform.system()
    machine = machine if machine is not None else platform.machine()

    os_family = normalize_os(system)
    arch = normalize_arch(machine)
    logger.debug("Host: system=%s machine=%s → %s/%s", system, machine, os_family, arch)

    if os_family == OSFamily.UNSUPPORTED:
        raise UnsupportedPlatformError(
            f"Unsupported operating system: {system or 'unknown'}",
            hint="Dockside supports macOS and Linux only.",
        )
    if arch == Arch.UNSUPPORTED:
        raise UnsupportedPlatformError(
            f"Unsupported CPU architecture: {machine or 'unknown'}",
            hint="Dockside is built for arm64 (aarch64) and x86_64.",
        )
    if config.artifact_kind == ArtifactKind.APP_BUNDLE and os_family != OSFamily.MACOS:
        raise UnsupportedPlatformError(
            f"The {config.app_name}.app bundle is only available for macOS",
            hint="Set artifact_kind: archive to install the CLI binary instead.",
        )
    if os_family not in config.supported_platforms:
        raise UnsupportedPlatformError(
            f"This installer does not support {os_family.value}",
            hint=f"Supported: {', '.join(o.value for o in config.supported_platforms)}.",
        )

    package_manager = detect_package_manager(os_family, which)
    target = PlatformTarget(os=os_family, arch=arch, package_manager=package_manager)

    if not config.allows(target):
        hint = f"Supported architectures on {os_family.value}: {_allowed_arches(config, os_family)}."
        if os_family == OSFamily.MACOS and config.supported_platforms[os_family] == [Arch.ARM64]:
            hint = "This build requires Apple Silicon (M1 or newer)."
        raise UnsupportedPlatformError(
            f"{arch.value} is not supported on {os_family.value}",
            hint=hint,
        )

    logger.info("Detected platform %s", target)
    return target
