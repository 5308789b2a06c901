"""
Provisioning errors — the fatal half of the error taxonomy.

Every fatal condition carries a cause and a remediation hint (usually the
exact command the operator should run next). Non-fatal conditions are never
raised: they are collected as warnings on the pipeline report.

Categories:
    setup    — unsupported platform / install target, raised before any mutation
    install  — dependency, runtime, or artifact failure; host may be partially provisioned
    usage    — bad flags or configuration, raised before any work
"""

from __future__ import annotations

from typing import Literal

ErrorCategory = Literal["setup", "install", "usage"]


class ProvisionError(Exception):
    """Base class for fatal provisioning errors."""

    category: ErrorCategory = "install"

    def __init__(self, message: str, *, hint: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def to_dict(self) -> dict[str, str]:
        return {
            "error": self.message,
            "hint": self.hint,
            "category": self.category,
            "type": type(self).__name__,
        }


class UnsupportedPlatformError(ProvisionError):
    """Host OS or CPU architecture is outside the supported set."""

    category: ErrorCategory = "setup"


class ConfigError(ProvisionError):
    """Installer configuration is invalid or unreadable."""

    category: ErrorCategory = "usage"


class InstallFailedError(ProvisionError):
    """A dependency could not be installed."""


class RuntimeStartError(ProvisionError):
    """The container runtime VM failed to start."""


class ReleaseLookupError(ProvisionError):
    """The latest release tag could not be resolved."""


class DownloadError(ProvisionError):
    """The release artifact could not be downloaded."""


class ExtractError(ProvisionError):
    """The downloaded archive could not be unpacked."""


class ArtifactMissingError(ProvisionError):
    """The expected binary or bundle was not found after extraction."""


class ArtifactInstallError(ProvisionError):
    """The artifact could not be placed at its install location."""
