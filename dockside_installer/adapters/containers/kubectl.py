"""
kubectl adapter — control-plane readiness and ephemeral test pods.
"""

from __future__ import annotations

from typing import Any

from dockside_installer.adapters.base import ClusterClient
from dockside_installer.adapters.shell.command import run_command


def _kubectl(*args: str, timeout: int = 15) -> dict[str, Any]:
    return run_command(["kubectl", *args], timeout=timeout)


class KubectlClient(ClusterClient):

    @property
    def name(self) -> str:
        return "kubectl"

    def cluster_info(self) -> bool:
        return _kubectl("cluster-info", timeout=20)["ok"]

    def wait_nodes_ready(self, timeout: int) -> bool:
        result = _kubectl(
            "wait", "--for=condition=Ready", "node", "--all",
            f"--timeout={timeout}s",
            timeout=timeout + 15,
        )
        return result["ok"]

    def run_pod(self, name: str, image: str, command: list[str]) -> dict[str, Any]:
        return _kubectl(
            "run", name, "--rm", "-i", "--restart=Never",
            f"--image={image}", "--", *command,
            timeout=180,
        )

    def delete_pod(self, name: str) -> dict[str, Any]:
        return _kubectl("delete", "pod", name, "--ignore-not-found", timeout=60)
