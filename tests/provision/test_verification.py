"""
Provision — verification engine: bounded polls, smoke tests, pod cleanup.
"""

from __future__ import annotations

import pytest

from dockside_installer.core.models.config import VerificationSettings
from dockside_installer.core.services.provision.execution import verify
from dockside_installer.core.services.provision.progress import ProgressReporter
from tests.provision.simulated_hosts import FakeCluster, FakeContainers


class _Sleeps:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class TestDaemon:
    def test_ready_runs_smoke_test(self):
        containers = FakeContainers(ready_after=3)
        sleeps = _Sleeps()
        result = verify(False, containers, FakeCluster(), sleep=sleeps)
        assert result.daemon_ready
        assert result.smoke_test_passed is True
        assert containers.smoke_images == ["hello-world"]
        assert sleeps.calls == [1.0, 1.0]
        assert result.orchestration_ready is None

    def test_never_ready_is_bounded_and_non_fatal(self):
        containers = FakeContainers(ready_after=None)
        sleeps = _Sleeps()
        reporter = ProgressReporter()
        result = verify(False, containers, FakeCluster(), reporter=reporter, sleep=sleeps)

        assert result.daemon_ready is False
        assert result.smoke_test_passed is None
        assert containers.info_calls == 15
        assert len(sleeps.calls) == 14
        assert len(result.warnings) == 1
        assert reporter.warnings == result.warnings

    def test_smoke_failure_is_a_warning(self):
        result = verify(False, FakeContainers(smoke_ok=False), FakeCluster(), sleep=_Sleeps())
        assert result.daemon_ready
        assert result.smoke_test_passed is False
        assert "smoke test failed" in result.warnings[0]

    def test_bounds_come_from_settings(self):
        containers = FakeContainers(ready_after=None)
        settings = VerificationSettings(daemon_attempts=3, daemon_delay=0.5, smoke_image="alpine")
        sleeps = _Sleeps()
        verify(False, containers, FakeCluster(), settings, sleep=sleeps)
        assert containers.info_calls == 3
        assert sleeps.calls == [0.5, 0.5]


class TestOrchestration:
    def test_not_requested_never_touches_cluster(self):
        cluster = FakeCluster()
        verify(False, FakeContainers(), cluster, sleep=_Sleeps())
        assert cluster.info_calls == 0

    def test_full_success(self):
        cluster = FakeCluster()
        result = verify(True, FakeContainers(), cluster, sleep=_Sleeps())
        assert result.orchestration_ready is True
        assert result.nodes_ready is True
        assert result.orchestration_smoke_passed is True
        assert result.warnings == []
        assert result.healthy
        assert cluster.pods_deleted == ["dockside-smoke-test"]

    def test_control_plane_never_ready(self):
        cluster = FakeCluster(ready_after=None)
        sleeps = _Sleeps()
        result = verify(True, FakeContainers(), cluster, sleep=sleeps)
        assert result.orchestration_ready is False
        assert result.nodes_ready is None
        assert result.orchestration_smoke_passed is None
        assert cluster.info_calls == 30
        assert sleeps.calls.count(2.0) == 29
        assert len(result.warnings) == 1
        assert cluster.pods_run == []

    def test_nodes_not_ready_still_runs_pod(self):
        cluster = FakeCluster(nodes_ready=False)
        result = verify(True, FakeContainers(), cluster, sleep=_Sleeps())
        assert result.nodes_ready is False
        assert result.orchestration_smoke_passed is True
        assert cluster.pods_run == ["dockside-smoke-test"]
        assert cluster.pods_deleted == ["dockside-smoke-test"]
        assert len(result.warnings) == 1

    def test_pod_failure_still_cleans_up(self):
        cluster = FakeCluster(pod_ok=False)
        result = verify(True, FakeContainers(), cluster, sleep=_Sleeps())
        assert result.orchestration_smoke_passed is False
        assert cluster.pods_deleted == ["dockside-smoke-test"]
        assert not result.healthy

    def test_interrupted_pod_still_cleans_up(self):
        cluster = FakeCluster(pod_raises=True)
        with pytest.raises(KeyboardInterrupt):
            verify(True, FakeContainers(), cluster, sleep=_Sleeps())
        assert cluster.pods_deleted == ["dockside-smoke-test"]

    def test_daemon_down_does_not_block_cluster_checks(self):
        cluster = FakeCluster()
        result = verify(True, FakeContainers(ready_after=None), cluster, sleep=_Sleeps())
        assert result.daemon_ready is False
        assert result.orchestration_ready is True
