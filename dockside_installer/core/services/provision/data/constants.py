"""
L0 Data — platform name tables and package-manager constants.

Pure data. No logic.
"""

from __future__ import annotations

from dockside_installer.core.models.platform import Arch, OSFamily, PackageManagerFamily

# ``platform.system()`` → OS family
OS_NAMES: dict[str, OSFamily] = {
    "darwin": OSFamily.MACOS,
    "linux": OSFamily.LINUX,
}

# ``platform.machine()`` synonyms → canonical arch
ARCH_SYNONYMS: dict[str, Arch] = {
    "arm64": Arch.ARM64,      # macOS
    "aarch64": Arch.ARM64,    # Linux
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,     # BSD / Windows spelling
}

# Go/Docker-style arch names used by most release download URLs
GO_ARCH: dict[Arch, str] = {
    Arch.ARM64: "arm64",
    Arch.X86_64: "amd64",
}

# uname -m style names (colima, lima assets)
UNAME_ARCH: dict[Arch, str] = {
    Arch.ARM64: "aarch64",
    Arch.X86_64: "x86_64",
}

UNAME_OS: dict[OSFamily, str] = {
    OSFamily.MACOS: "Darwin",
    OSFamily.LINUX: "Linux",
}

GO_OS: dict[OSFamily, str] = {
    OSFamily.MACOS: "darwin",
    OSFamily.LINUX: "linux",
}

# Probe order for Linux package managers: (binary, family)
LINUX_PACKAGE_MANAGERS: tuple[tuple[str, PackageManagerFamily], ...] = (
    ("apt-get", PackageManagerFamily.APT),
    ("dnf", PackageManagerFamily.DNF),
    ("yum", PackageManagerFamily.YUM),
    ("pacman", PackageManagerFamily.PACMAN),
    ("zypper", PackageManagerFamily.ZYPPER),
    ("apk", PackageManagerFamily.APK),
)

# Index refresh run once before the first package install
PM_REFRESH: dict[PackageManagerFamily, list[str]] = {
    PackageManagerFamily.APT: ["apt-get", "update"],
    PackageManagerFamily.APK: ["apk", "update"],
    PackageManagerFamily.PACMAN: ["pacman", "-Sy", "--noconfirm"],
}

# Where Homebrew lands when it is not yet on PATH
HOMEBREW_PREFIXES: tuple[str, ...] = ("/opt/homebrew/bin", "/usr/local/bin")

# Caches sudo credentials up front so a bootstrap installer's own sudo calls
# do not stop for a password mid-run
SUDO_VALIDATE: list[str] = ["sudo", "-v"]
