"""
L4 Execution — check that the provisioned environment actually works.

Nothing here is fatal. The runtime may still be converging after the
installer exits, so every timeout or failed smoke test becomes a warning
on the result and the pipeline carries on.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from dockside_installer.adapters.base import ClusterClient, ContainerEngine
from dockside_installer.core.models.config import VerificationSettings
from dockside_installer.core.models.report import VerificationResult
from dockside_installer.core.reliability import poll_until
from dockside_installer.core.services.provision.progress import ProgressReporter

logger = logging.getLogger(__name__)

POD_MESSAGE = "Kubernetes is working!"


def _tail(result: dict) -> str:
    text = (result.get("stderr") or "").strip() or result.get("error", "")
    return text.splitlines()[-1] if text else "unknown error"


def verify(
    wants_orchestration: bool,
    containers: ContainerEngine,
    cluster: ClusterClient,
    settings: VerificationSettings | None = None,
    reporter: ProgressReporter | None = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> VerificationResult:
    """Poll for readiness and run the smoke tests.

    Steps that did not run stay ``None`` on the result.
    """
    settings = settings or VerificationSettings()
    reporter = reporter or ProgressReporter()
    result = VerificationResult()

    def warn(message: str) -> None:
        result.warnings.append(message)
        reporter.warn(message)

    # ── Container daemon ────────────────────────────────────────
    reporter.info("Waiting for the Docker daemon...")
    daemon = poll_until(
        containers.info,
        max_attempts=settings.daemon_attempts,
        delay=settings.daemon_delay,
        sleep=sleep,
        label="docker daemon",
    )
    result.daemon_ready = daemon.ok
    if daemon.ok:
        reporter.success("Docker daemon is ready")
        smoke = containers.run_smoke(settings.smoke_image)
        result.smoke_test_passed = bool(smoke.get("ok"))
        if result.smoke_test_passed:
            reporter.success(f"Container smoke test passed ({settings.smoke_image})")
        else:
            warn(f"Container smoke test failed: {_tail(smoke)}")
    else:
        warn(
            f"Docker daemon not ready after {daemon.attempts} attempts; "
            "it may still be starting. Check with: docker info"
        )

    if not wants_orchestration:
        return result

    # ── Kubernetes ──────────────────────────────────────────────
    reporter.info("Waiting for the Kubernetes control plane...")
    control_plane = poll_until(
        cluster.cluster_info,
        max_attempts=settings.orchestration_attempts,
        delay=settings.orchestration_delay,
        sleep=sleep,
        label="kubernetes control plane",
    )
    result.orchestration_ready = control_plane.ok
    if not control_plane.ok:
        warn(
            f"Kubernetes not ready after {control_plane.attempts} attempts; "
            "it may still be starting. Check with: kubectl cluster-info"
        )
        return result
    reporter.success("Kubernetes control plane is ready")

    result.nodes_ready = cluster.wait_nodes_ready(settings.node_ready_timeout)
    if not result.nodes_ready:
        warn(
            f"No Kubernetes node reported Ready within {settings.node_ready_timeout}s. "
            "Check with: kubectl get nodes"
        )

    try:
        pod = cluster.run_pod(settings.pod_name, settings.pod_image, ["echo", POD_MESSAGE])
        result.orchestration_smoke_passed = bool(pod.get("ok"))
    finally:
        cleanup = cluster.delete_pod(settings.pod_name)
        if not cleanup.get("ok"):
            logger.warning("Could not delete pod %s: %s", settings.pod_name, _tail(cleanup))

    if result.orchestration_smoke_passed:
        reporter.success(f"Kubernetes smoke test passed ({settings.pod_image})")
    else:
        warn(f"Kubernetes smoke test failed: {_tail(pod)}")
    return result
