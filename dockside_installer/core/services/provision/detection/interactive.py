"""
L3 Detection — interactive gate for optional features.

Decides whether Kubernetes should be enabled when the caller did not say.
Without a controlling terminal the answer is always the safe default
(disabled); nothing is read from a piped stdin.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TextIO

from dockside_installer.adapters.terminal import open_controlling_terminal, read_key
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)

KUBERNETES_PROMPT = (
    "\nDo you want to enable Kubernetes?\n"
    "  This allows you to run and manage Kubernetes workloads locally.\n"
    "  You can always enable it later from the Dockside app.\n\n"
    "Enable Kubernetes? [y/N] "
)


def terminal_available(open_tty: Callable[[], TextIO | None] = open_controlling_terminal) -> bool:
    """True when someone could answer a prompt."""
    tty = open_tty()
    if tty is None:
        return False
    tty.close()
    return True


def resolve_feature_flag(
    explicit_flag: bool | None,
    *,
    prompt: str = KUBERNETES_PROMPT,
    open_tty: Callable[[], TextIO | None] = open_controlling_terminal,
    reporter: ProgressReporter | None = None,
    flag_name: str = "--with-kubernetes",
) -> bool:
    """Return the effective feature flag.

    An explicit flag is returned unchanged and nobody is asked. Otherwise
    the question goes to the controlling terminal; ``y``/``Y`` enables,
    any other key disables.
    """
    reporter = reporter or ProgressReporter()

    if explicit_flag is not None:
        return explicit_flag

    tty = open_tty()
    if tty is None:
        reporter.info("Non-interactive mode, skipping Kubernetes prompt")
        reporter.info(f"Use {flag_name} to enable Kubernetes")
        return False

    with tty:
        try:
            tty.write(prompt)
            tty.flush()
            answer = read_key(tty)
            tty.write("\n")
            tty.flush()
        except OSError as e:
            logger.warning("Could not read answer from terminal: %s", e)
            return False

    enabled = answer.strip().lower() == "y"
    logger.debug("Prompt answer %r → %s", answer, enabled)
    return enabled
