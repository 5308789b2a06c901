"""
L4 Execution — bring the container runtime VM up.

A running VM is never stopped or restarted here: it may host the
operator's workloads. When it runs without Kubernetes but Kubernetes was
requested, the operator gets a warning with the restart command instead.
"""

from __future__ import annotations

import logging

from dockside_installer.adapters.base import RuntimeController
from dockside_installer.adapters.shell.command import format_command
from dockside_installer.core.errors import RuntimeStartError
from dockside_installer.core.models.runtime import RuntimeOutcome, RuntimeProfile
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)

RESTART_WITH_KUBERNETES = "colima stop && colima start --kubernetes"


def ensure_running(
    profile: RuntimeProfile,
    controller: RuntimeController,
    reporter: ProgressReporter | None = None,
) -> RuntimeOutcome:
    """Start the runtime unless it already runs.

    Raises:
        RuntimeStartError: The start command exited non-zero.
    """
    reporter = reporter or ProgressReporter()
    status = controller.status()
    logger.debug("Runtime status: %s", status)

    if status.running:
        reporter.success(f"{controller.name} is already running")
        mismatch = profile.orchestration_enabled and not status.orchestration_enabled
        if mismatch:
            reporter.warn(
                f"{controller.name} is running without Kubernetes. "
                f"To enable it, restart manually: {RESTART_WITH_KUBERNETES}"
            )
        return RuntimeOutcome(state="already_running", orchestration_mismatch=mismatch)

    k8s = " with Kubernetes" if profile.orchestration_enabled else ""
    reporter.info(
        f"Starting {controller.name}{k8s} "
        f"(cpu={profile.cpu}, memory={profile.memory_gib}GiB, disk={profile.disk_gib}GiB)..."
    )
    result = controller.start(profile)
    if not result.get("ok"):
        detail = (result.get("stderr") or "").strip() or result.get("error", "unknown error")
        raise RuntimeStartError(
            f"Failed to start {controller.name}: {detail}",
            hint=f"Run manually: {format_command(controller.start_command(profile))}",
        )

    reporter.success(f"{controller.name} started")
    return RuntimeOutcome(state="started")
