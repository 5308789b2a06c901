"""
Platform models — normalised host identity.

A ``PlatformTarget`` is derived once at startup by the platform detector
and never mutated afterwards.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class OSFamily(str, Enum):
    MACOS = "macos"
    LINUX = "linux"
    UNSUPPORTED = "unsupported"


class Arch(str, Enum):
    ARM64 = "arm64"
    X86_64 = "x86_64"
    UNSUPPORTED = "unsupported"


class PackageManagerFamily(str, Enum):
    BREW = "brew"
    APT = "apt"
    DNF = "dnf"
    YUM = "yum"
    PACMAN = "pacman"
    ZYPPER = "zypper"
    APK = "apk"
    NONE = "none"


# Rust-style target architecture names used in release asset filenames
_TRIPLE_ARCH = {Arch.ARM64: "aarch64", Arch.X86_64: "x86_64"}
_TRIPLE_VENDOR_OS = {
    OSFamily.MACOS: "apple-darwin",
    OSFamily.LINUX: "unknown-linux-gnu",
}


class PlatformTarget(BaseModel):
    """Normalised (os, arch, package manager) triple for this host."""

    model_config = ConfigDict(frozen=True)

    os: OSFamily
    arch: Arch
    package_manager: PackageManagerFamily = PackageManagerFamily.NONE

    @property
    def supported(self) -> bool:
        return self.os != OSFamily.UNSUPPORTED and self.arch != Arch.UNSUPPORTED

    @property
    def triple(self) -> str:
        """Release target triple, e.g. ``aarch64-apple-darwin``."""
        return f"{_TRIPLE_ARCH[self.arch]}-{_TRIPLE_VENDOR_OS[self.os]}"

    @property
    def slug(self) -> str:
        """Short human form, e.g. ``macos-arm64``."""
        return f"{self.os.value}-{self.arch.value}"

    def __str__(self) -> str:
        return f"{self.slug} ({self.package_manager.value})"
