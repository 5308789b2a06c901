"""
Shell command runner — the single place where ``subprocess.run`` is called.

Every adapter that touches an external tool (package managers, colima,
docker, kubectl) goes through ``run_command``. It never raises: failures
come back in the result dict.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

_TAIL = 2000


def format_command(cmd: list[str]) -> str:
    """Render a command list the way an operator would type it."""
    return shlex.join(cmd)


def run_command(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int = 120,
    env_overrides: dict[str, str] | None = None,
    cwd: str | None = None,
    capture: bool = True,
) -> dict[str, Any]:
    """Run a command and capture its output.

    Commands that need root are prefixed with ``sudo`` unless we already
    are root. sudo prompts on the controlling terminal, so captured
    output does not interfere with password entry.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Whether the command requires root.
        timeout: Seconds before ``TimeoutExpired``.
        env_overrides: Extra env vars merged over the current environment.
        cwd: Working directory for the command.
        capture: When False the command shares our terminal, so the
            operator sees its output and can answer its prompts. Only
            the exit code comes back.

    Returns:
        ``{"ok": True, "stdout": "...", "returncode": 0, "elapsed_ms": N}`` on
        success, ``{"ok": False, "error": "...", "stderr": "...", ...}`` on
        failure.
    """
    if needs_sudo and os.geteuid() != 0:
        cmd = ["sudo"] + cmd

    env = os.environ.copy()
    if env_overrides:
        for key, value in env_overrides.items():
            env[key] = os.path.expandvars(value)

    command = format_command(cmd)
    logger.debug("Executing: %s", command)

    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=capture,
            text=True,
            timeout=timeout,
            env=env,
            cwd=cwd,
        )
    except FileNotFoundError:
        return {
            "ok": False,
            "command": command,
            "returncode": 127,
            "error": f"Command not found: {cmd[0]}",
        }
    except subprocess.TimeoutExpired:
        return {
            "ok": False,
            "command": command,
            "returncode": None,
            "error": f"Command timed out ({timeout}s)",
        }
    except OSError as e:
        logger.exception("Subprocess error: %s", command)
        return {"ok": False, "command": command, "returncode": None, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[-_TAIL:] if result.stdout else ""
    stderr = result.stderr[-_TAIL:] if result.stderr else ""

    if result.returncode == 0:
        return {
            "ok": True,
            "command": command,
            "returncode": 0,
            "stdout": stdout,
            "stderr": stderr,
            "elapsed_ms": elapsed_ms,
        }

    logger.debug("Command failed (exit %d): %s\n%s", result.returncode, command, stderr)
    return {
        "ok": False,
        "command": command,
        "returncode": result.returncode,
        "error": f"Command failed (exit {result.returncode})",
        "stdout": stdout,
        "stderr": stderr,
        "elapsed_ms": elapsed_ms,
    }
