"""
L4 Execution — put the install directory on the user's PATH.

Appends one export line to the shell rc file chosen from ``$SHELL``.
Writes are idempotent: nothing is written when the directory is already
on PATH or already mentioned in the rc file.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

from dockside_installer.core.models.platform import OSFamily
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)

MARKER = "# Added by dockside-install"

_RC_FILES: dict[str, str] = {
    "zsh": ".zshrc",
    "bash": ".bashrc",
    "fish": ".config/fish/config.fish",
}
_FALLBACK_RC = ".profile"


def shell_type(env: Mapping[str, str]) -> str:
    return os.path.basename(env.get("SHELL", "") or "sh")


def rc_file_for(shell: str, home: Path, os_family: OSFamily) -> Path:
    """The rc file a new interactive shell of this type reads.

    macOS Terminal opens login shells, which read ``.bash_profile`` rather
    than ``.bashrc``.
    """
    if shell == "bash" and os_family == OSFamily.MACOS:
        return home / ".bash_profile"
    return home / _RC_FILES.get(shell, _FALLBACK_RC)


def _shell_config_line(shell: str, path_entry: str) -> str:
    if shell == "fish":
        return f"set -gx PATH {path_entry} $PATH"
    return f'export PATH="{path_entry}:$PATH"'


def _path_entry(directory: Path, home: Path) -> str:
    """``$HOME/...`` form when under home, so the rc file stays portable."""
    try:
        rel = directory.relative_to(home)
    except ValueError:
        return str(directory)
    return f"$HOME/{rel}" if rel.parts else "$HOME"


# Characters that can sit next to a PATH element in an rc file
_EDGE = r"""[\s:"'=]"""


def _references(text: str, candidates: list[str]) -> bool:
    """True when a non-comment line names one of ``candidates`` as a whole PATH element."""
    patterns = [
        re.compile(rf"(?:^|(?<={_EDGE})){re.escape(c)}/?(?=$|{_EDGE})")
        for c in candidates
    ]
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        if any(p.search(line) for p in patterns):
            return True
    return False


def _on_process_path(directory: Path, env: Mapping[str, str]) -> bool:
    entries = [e for e in env.get("PATH", "").split(os.pathsep) if e]
    return any(Path(e).expanduser() == directory for e in entries)


def ensure_on_path(
    install_dir: Path,
    *,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
    os_family: OSFamily = OSFamily.LINUX,
    reporter: ProgressReporter | None = None,
) -> bool:
    """Make ``install_dir`` reachable from new shells.

    Returns:
        True when the rc file was changed (the user must open a new shell
        or ``source`` it), False when nothing needed doing or the write
        failed (reported as a warning).
    """
    env = os.environ if env is None else env
    home = Path.home() if home is None else home
    reporter = reporter or ProgressReporter()
    directory = Path(os.path.abspath(Path(install_dir).expanduser()))

    if _on_process_path(directory, env):
        logger.debug("%s already on PATH", directory)
        return False

    shell = shell_type(env)
    rc_path = rc_file_for(shell, home, os_family)
    entry = _path_entry(directory, home)
    line = _shell_config_line(shell, entry)

    existing = ""
    if rc_path.is_file():
        try:
            existing = rc_path.read_text()
        except OSError as e:
            logger.warning("Could not read %s: %s", rc_path, e)
    if _references(existing, [str(directory), entry]):
        logger.debug("%s already referenced in %s", directory, rc_path)
        return False

    try:
        rc_path.parent.mkdir(parents=True, exist_ok=True)
        with open(rc_path, "a") as f:
            if existing and not existing.endswith("\n"):
                f.write("\n")
            f.write(f"\n{MARKER}\n{line}\n")
    except OSError as e:
        reporter.warn(f"Could not update {rc_path} ({e}). Add this line manually: {line}")
        return False

    logger.info("Added %s to PATH in %s", directory, rc_path)
    reporter.success(f"Added {directory} to PATH in {rc_path}")
    return True
