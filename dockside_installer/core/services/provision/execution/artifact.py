"""
L4 Execution — download and place the application artifact.

Flow: resolve the version (``latest`` → GitHub tag), build the download URL
from the configured template, download into a temporary directory, unpack,
locate the binary or ``.app`` bundle, and place it.

Placement stages the new artifact next to the destination, moves the old
one aside, renames the new one in, and only then deletes the old one. The
rename is atomic, but there is a short window between moving the old
artifact aside and renaming the new one in where the destination does not
exist. An interrupted run in that window leaves ``.<name>.old`` behind,
which the next run cleans up.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tarfile
import tempfile
import zipfile
from pathlib import Path

from dockside_installer.adapters.base import ReleaseSource
from dockside_installer.core.errors import (
    ArtifactInstallError,
    ArtifactMissingError,
    ConfigError,
    DownloadError,
    ExtractError,
    ReleaseLookupError,
)
from dockside_installer.core.models.config import InstallerConfig
from dockside_installer.core.models.release import (
    ArtifactKind,
    DownloadDescriptor,
    InstalledArtifact,
    ReleaseSelector,
)
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  Resolve
# ═══════════════════════════════════════════════════════════════════


def resolve_version(selector: ReleaseSelector, config: InstallerConfig, releases: ReleaseSource) -> str:
    """Return a concrete tag, asking the release source when ``latest``.

    Raises:
        ReleaseLookupError: The latest tag could not be fetched or was empty.
    """
    if not selector.wants_latest:
        return selector.version_tag.strip()

    result = releases.latest_tag()
    tag = (result.get("tag") or "").strip() if result.get("ok") else ""
    if not tag:
        raise ReleaseLookupError(
            f"Failed to fetch the latest version of {config.repo}: "
            f"{result.get('error', 'empty tag')}",
            hint="Check your internet connection, set GITHUB_TOKEN if rate-limited, "
                 "or pass --version vX.Y.Z.",
        )
    return tag


def build_download_url(version: str, target_triple: str, slug: str, config: InstallerConfig) -> str:
    """Fill the URL template. Same inputs, same URL."""
    try:
        return config.resolved_url_template().format(
            download_base=config.download_base.rstrip("/"),
            repo=config.repo,
            version=version,
            target=target_triple,
            slug=slug,
            binary=config.binary_name,
            app=config.app_name,
        )
    except (KeyError, IndexError) as e:
        raise ConfigError(
            f"Unknown placeholder {e} in url_template",
            hint="Allowed: {download_base} {repo} {version} {target} {slug} {binary} {app}",
        ) from e


def resolve_download(
    selector: ReleaseSelector,
    config: InstallerConfig,
    releases: ReleaseSource,
) -> DownloadDescriptor:
    version = resolve_version(selector, config, releases)
    url = build_download_url(version, selector.target.triple, selector.target.slug, config)
    return DownloadDescriptor(
        url=url,
        version=version,
        kind=config.artifact_kind,
        artifact_name=config.artifact_name,
    )


# ═══════════════════════════════════════════════════════════════════
#  Unpack
# ═══════════════════════════════════════════════════════════════════


def _within(root: Path, candidate: Path) -> bool:
    try:
        candidate.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


def _extract_zip(archive: Path, dest: Path) -> None:
    """Unpack a zip, keeping unix modes and symlinks (``.app`` bundles need both)."""
    with zipfile.ZipFile(archive) as zf:
        for info in zf.infolist():
            target = dest / info.filename
            if not _within(dest, target):
                raise ExtractError(
                    f"Refusing to extract '{info.filename}': path escapes the archive",
                    hint="The downloaded archive is malformed; do not install it.",
                )
            mode = info.external_attr >> 16
            if stat.S_ISLNK(mode):
                link = zf.read(info).decode("utf-8")
                if os.path.isabs(link) or not _within(dest, target.parent / link):
                    raise ExtractError(
                        f"Refusing to extract symlink '{info.filename}' -> '{link}'",
                        hint="The downloaded archive is malformed; do not install it.",
                    )
                target.parent.mkdir(parents=True, exist_ok=True)
                os.symlink(link, target)
                continue
            zf.extract(info, dest)
            if mode & 0o777 and not info.is_dir():
                os.chmod(target, mode & 0o777)


def extract_archive(archive: Path, dest: Path) -> None:
    """Unpack ``.tar.gz``/``.tgz``/``.tar`` or ``.zip`` into ``dest``.

    Raises:
        ExtractError: Corrupt archive, unknown format, or unsafe member paths.
    """
    dest.mkdir(parents=True, exist_ok=True)
    name = archive.name.lower()
    try:
        if name.endswith(".zip"):
            _extract_zip(archive, dest)
        elif name.endswith((".tar.gz", ".tgz", ".tar")):
            with tarfile.open(archive, "r:*") as tar:
                tar.extractall(dest, filter="data")
        else:
            raise ExtractError(
                f"Unknown archive format: {archive.name}",
                hint="Set artifact_kind: raw_binary for uncompressed binaries.",
            )
    except (tarfile.TarError, zipfile.BadZipFile, OSError, UnicodeDecodeError) as e:
        raise ExtractError(
            f"Failed to extract {archive.name}: {e}",
            hint="The download may be truncated; re-run the installer.",
        ) from e


def find_artifact(root: Path, name: str, *, is_dir: bool) -> Path | None:
    """Shallowest ``name`` under ``root`` of the right type."""
    matches = [
        p for p in root.rglob(name)
        if (p.is_dir() if is_dir else p.is_file()) and not p.is_symlink()
    ]
    if not matches:
        return None
    return min(matches, key=lambda p: len(p.relative_to(root).parts))


# ═══════════════════════════════════════════════════════════════════
#  Place
# ═══════════════════════════════════════════════════════════════════


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def place_artifact(source: Path, dest: Path, *, executable: bool) -> bool:
    """Replace ``dest`` with ``source``. Returns True when something was replaced.

    Raises:
        ArtifactInstallError: The destination is not writable.
    """
    staged = dest.with_name(f".{dest.name}.new")
    backup = dest.with_name(f".{dest.name}.old")
    replaced = False
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        _remove(staged)
        _remove(backup)

        if source.is_dir():
            shutil.copytree(source, staged, symlinks=True)
        else:
            shutil.copy2(source, staged)
        if executable:
            staged.chmod(0o755)

        replaced = dest.exists() or dest.is_symlink()
        if replaced:
            os.replace(dest, backup)
        try:
            os.replace(staged, dest)
        except OSError:
            if replaced:
                os.replace(backup, dest)
            raise
        if replaced:
            _remove(backup)
    except PermissionError as e:
        raise ArtifactInstallError(
            f"Permission denied writing to {dest.parent}",
            hint="Re-run with --install-dir pointing to a writable directory (e.g. ~/.local/bin).",
        ) from e
    except OSError as e:
        raise ArtifactInstallError(
            f"Failed to install {dest.name} into {dest.parent}: {e}",
            hint="Re-run with --install-dir pointing to a writable directory.",
        ) from e
    finally:
        if staged.exists() or staged.is_symlink():
            try:
                _remove(staged)
            except OSError as e:
                logger.warning("Could not remove staging path %s: %s", staged, e)
    return replaced


# ═══════════════════════════════════════════════════════════════════
#  Install
# ═══════════════════════════════════════════════════════════════════


def install(
    selector: ReleaseSelector,
    install_dir: Path,
    config: InstallerConfig,
    releases: ReleaseSource,
    reporter: ProgressReporter | None = None,
) -> InstalledArtifact:
    """Download the selected release and install it into ``install_dir``.

    Raises:
        ReleaseLookupError, DownloadError, ExtractError,
        ArtifactMissingError, ArtifactInstallError
    """
    reporter = reporter or ProgressReporter()
    if selector.wants_latest:
        reporter.info("Fetching latest version...")
    descriptor = resolve_download(selector, config, releases)
    if selector.wants_latest:
        reporter.info(f"Latest version: {descriptor.version}")

    label = config.app_name if descriptor.kind == ArtifactKind.APP_BUNDLE else config.binary_name
    reporter.info(f"Downloading {label} {descriptor.version}...")
    logger.info("Download URL: %s", descriptor.url)

    with tempfile.TemporaryDirectory(prefix="dockside-install-") as tmp:
        tmp_path = Path(tmp)
        downloaded = tmp_path / descriptor.filename
        result = releases.download(descriptor.url, downloaded)
        if not result.get("ok"):
            raise DownloadError(
                f"Failed to download {label} {descriptor.version}: {result.get('error')}",
                hint=f"Check that the release exists for {selector.target.triple}: {descriptor.url}",
            )

        if descriptor.kind == ArtifactKind.RAW_BINARY:
            source = downloaded
        else:
            unpacked = tmp_path / "unpacked"
            extract_archive(downloaded, unpacked)
            source = find_artifact(
                unpacked,
                descriptor.artifact_name,
                is_dir=descriptor.kind == ArtifactKind.APP_BUNDLE,
            )
            if source is None:
                raise ArtifactMissingError(
                    f"'{descriptor.artifact_name}' not found in {descriptor.filename}",
                    hint=f"Download and install manually from {descriptor.url}",
                )

        dest = Path(install_dir).expanduser() / descriptor.artifact_name
        reporter.info(f"Installing to {dest.parent}...")
        replaced = place_artifact(
            source,
            dest,
            executable=descriptor.kind != ArtifactKind.APP_BUNDLE,
        )

    reporter.success(f"{descriptor.artifact_name} {descriptor.version} installed to {dest.parent}")
    return InstalledArtifact(
        path=str(dest),
        version=descriptor.version,
        kind=descriptor.kind,
        replaced_existing=replaced,
    )
