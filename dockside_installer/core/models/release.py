"""
Release models — selecting and locating a distributable artifact.

``ReleaseSelector`` is created per invocation, resolved once into a
``DownloadDescriptor``, and then discarded.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from dockside_installer.core.models.platform import PlatformTarget

LATEST = "latest"


class ArtifactKind(str, Enum):
    RAW_BINARY = "raw_binary"
    ARCHIVE = "archive"
    APP_BUNDLE = "app_bundle"


class ReleaseSelector(BaseModel):
    version_tag: str = LATEST
    target: PlatformTarget

    @property
    def wants_latest(self) -> bool:
        return self.version_tag.strip().lower() == LATEST


class DownloadDescriptor(BaseModel):
    url: str
    version: str
    kind: ArtifactKind
    artifact_name: str      # binary name or bundle directory expected after extraction

    @property
    def filename(self) -> str:
        return self.url.rsplit("/", 1)[-1]


class InstalledArtifact(BaseModel):
    path: str
    version: str
    kind: ArtifactKind
    replaced_existing: bool = False
