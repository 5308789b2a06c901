"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from dockside_installer.core.models import PlatformTarget, RuntimeProfile, PipelineReport
"""

from dockside_installer.core.models.config import InstallerConfig, VerificationSettings
from dockside_installer.core.models.dependency import (
    DEFAULT_METHOD,
    DependencyOutcome,
    DependencySpec,
)
from dockside_installer.core.models.platform import (
    Arch,
    OSFamily,
    PackageManagerFamily,
    PlatformTarget,
)
from dockside_installer.core.models.release import (
    LATEST,
    ArtifactKind,
    DownloadDescriptor,
    InstalledArtifact,
    ReleaseSelector,
)
from dockside_installer.core.models.report import PipelineReport, VerificationResult
from dockside_installer.core.models.runtime import (
    RuntimeOutcome,
    RuntimeProfile,
    RuntimeStatus,
)

__all__ = [
    # platform.py
    "Arch",
    "ArtifactKind",
    "DEFAULT_METHOD",
    # dependency.py
    "DependencyOutcome",
    "DependencySpec",
    "DownloadDescriptor",
    "InstalledArtifact",
    # config.py
    "InstallerConfig",
    "LATEST",
    "OSFamily",
    "PackageManagerFamily",
    # report.py
    "PipelineReport",
    "PlatformTarget",
    # release.py
    "ReleaseSelector",
    # runtime.py
    "RuntimeOutcome",
    "RuntimeProfile",
    "RuntimeStatus",
    "VerificationResult",
    "VerificationSettings",
]
