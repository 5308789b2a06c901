"""
Provision — dependency resolver: idempotency, bootstrap, method dispatch.
"""

from __future__ import annotations

import pytest

from dockside_installer.core.errors import InstallFailedError
from dockside_installer.core.models import DependencySpec, OSFamily
from dockside_installer.core.services.provision.data import (
    DEPENDENCIES,
    build_registry,
)
from dockside_installer.core.services.provision.data.dependencies import (
    COLIMA,
    DOCKER,
    HOMEBREW,
    KUBECTL,
)
from dockside_installer.core.services.provision.progress import ProgressReporter
from dockside_installer.core.services.provision.resolver import (
    DependencyResolver,
    render_command,
)
from dockside_installer.core.services.provision.resolver import dependency_resolver as resolver_mod
from tests.provision.simulated_hosts import (
    LINUX_ARM_APK,
    LINUX_NO_PM,
    LINUX_X86,
    MAC_ARM,
    FakePackageHost,
)


class TestRegistry:
    def test_bootstrap_comes_first(self):
        assert DEPENDENCIES[0].bootstrap
        assert all(not spec.bootstrap for spec in DEPENDENCIES[1:])

    def test_bootstrap_after_regular_rejected(self):
        with pytest.raises(ValueError, match="must precede"):
            build_registry([DOCKER, HOMEBREW])

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            build_registry([DOCKER, DOCKER])

    def test_homebrew_is_macos_only(self):
        assert HOMEBREW.applies_to(OSFamily.MACOS)
        assert not HOMEBREW.applies_to(OSFamily.LINUX)


class TestRenderCommand:
    def test_linux_placeholders(self):
        cmd = render_command(["x-{os}-{arch}", "{uname_os}/{uname_arch}"], LINUX_X86)
        assert cmd == ["x-linux-amd64", "Linux/x86_64"]

    def test_shell_syntax_untouched(self):
        cmd = render_command(["bash", "-c", "echo $(uname) {os}"], MAC_ARM)
        assert cmd == ["bash", "-c", "echo $(uname) darwin"]


class TestIdempotency:
    def test_all_present_installs_nothing(self):
        host = FakePackageHost({"brew", "docker", "colima", "kubectl"})
        resolver = DependencyResolver(host)
        outcomes = resolver.ensure_all(MAC_ARM)
        assert [o.status for o in outcomes] == ["present"] * 4
        assert host.runs == []

    def test_second_run_is_a_no_op(self):
        host = FakePackageHost()
        resolver = DependencyResolver(host)
        first = resolver.ensure_all(LINUX_X86)
        assert {o.status for o in first} == {"installed"}
        runs_after_first = len(host.runs)

        second = DependencyResolver(host).ensure_all(LINUX_X86)
        assert {o.status for o in second} == {"present"}
        assert len(host.runs) == runs_after_first

    def test_linux_skips_homebrew(self):
        host = FakePackageHost({"docker", "colima", "kubectl"})
        outcomes = DependencyResolver(host).ensure_all(LINUX_X86)
        assert [o.name for o in outcomes] == ["docker", "colima", "kubectl"]


class TestBootstrap:
    def test_homebrew_installed_then_put_on_path(self):
        host = FakePackageHost()
        resolver = DependencyResolver(host)
        outcome = resolver.ensure(HOMEBREW, MAC_ARM)

        assert outcome.status == "installed"
        assert outcome.path == "/opt/homebrew/bin/brew"
        assert host.path_dirs[0] == "/opt/homebrew/bin"
        assert host.runs[0]["env"] == {"NONINTERACTIVE": "1"}
        assert host.runs[0]["needs_sudo"] is False

    def test_brew_found_off_path_is_activated(self):
        host = FakePackageHost(locations={"brew": "/opt/homebrew/bin/brew"})
        outcome = DependencyResolver(host).ensure(HOMEBREW, MAC_ARM)
        assert outcome.status == "present"
        assert "/opt/homebrew/bin" in host.path_dirs
        assert host.runs == []

    def test_bootstrap_that_leaves_nothing_is_fatal(self):
        host = FakePackageHost(no_effect={"Homebrew/install"})
        with pytest.raises(InstallFailedError, match="still not found"):
            DependencyResolver(host).ensure(HOMEBREW, MAC_ARM)

    def test_bootstrap_precedes_other_installs(self):
        host = FakePackageHost()
        DependencyResolver(host).ensure_all(MAC_ARM)
        assert "Homebrew/install" in " ".join(host.commands[0])
        assert host.commands[1][:2] == ["brew", "install"]


class TestAttendedBootstrap:
    @pytest.fixture(autouse=True)
    def not_root(self, monkeypatch):
        monkeypatch.setattr(resolver_mod.os, "geteuid", lambda: 501)

    def test_unattended_bootstrap_is_non_interactive(self):
        host = FakePackageHost()
        DependencyResolver(host, interactive=False).ensure(HOMEBREW, MAC_ARM)
        assert host.commands[0] != ["sudo", "-v"]
        assert host.runs[0]["env"] == {"NONINTERACTIVE": "1"}
        assert host.runs[0]["interactive"] is False

    def test_attended_bootstrap_gets_the_terminal(self):
        host = FakePackageHost()
        DependencyResolver(host, interactive=True).ensure(HOMEBREW, MAC_ARM)
        assert host.commands[0] == ["sudo", "-v"]
        install = host.runs[1]
        assert "Homebrew/install" in " ".join(install["cmd"])
        assert install["env"] is None
        assert install["interactive"] is True

    def test_attended_bootstrap_without_sudo_is_fatal(self):
        host = FakePackageHost(fail={"sudo -v"})
        with pytest.raises(InstallFailedError, match="Administrator access"):
            DependencyResolver(host, interactive=True).ensure(HOMEBREW, MAC_ARM)
        assert len(host.runs) == 1

    def test_regular_installs_stay_captured(self):
        host = FakePackageHost({"brew"})
        DependencyResolver(host, interactive=True).ensure(COLIMA, MAC_ARM)
        assert host.commands == [["brew", "install", "colima"]]
        assert host.runs[0]["interactive"] is False


class TestMethodDispatch:
    def test_apt_refreshes_once_before_first_install(self):
        host = FakePackageHost()
        DependencyResolver(host).ensure_all(LINUX_X86)
        refreshes = [c for c in host.commands if c == ["apt-get", "update"]]
        assert len(refreshes) == 1
        assert host.commands[0] == ["apt-get", "update"]
        assert host.commands[1] == ["apt-get", "install", "-y", "docker.io"]

    def test_linux_package_installs_use_sudo(self):
        host = FakePackageHost({"colima", "kubectl"})
        DependencyResolver(host).ensure(DOCKER, LINUX_X86)
        install = host.runs[-1]
        assert install["cmd"][0] == "apt-get"
        assert install["needs_sudo"] is True

    def test_default_method_used_when_family_missing(self):
        host = FakePackageHost()
        outcome = DependencyResolver(host).ensure(COLIMA, LINUX_X86)
        assert outcome.method == "_default"
        script = host.commands[-1][-1]
        assert "colima-Linux-x86_64" in script

    def test_kubectl_default_download_renders_go_arch(self):
        host = FakePackageHost()
        DependencyResolver(host).ensure(KUBECTL, LINUX_X86)
        assert "/bin/linux/amd64/kubectl" in host.commands[-1][-1]

    def test_kubectl_native_package_on_alpine(self):
        host = FakePackageHost()
        outcome = DependencyResolver(host).ensure(KUBECTL, LINUX_ARM_APK)
        assert outcome.method == "apk"
        assert host.commands[-1] == ["apk", "add", "kubectl"]

    def test_no_method_for_family_is_fatal(self):
        host = FakePackageHost()
        with pytest.raises(InstallFailedError) as exc:
            DependencyResolver(host).ensure(DOCKER, LINUX_NO_PM)
        assert "Docker CLI" in exc.value.message
        assert "'none'" in exc.value.message
        assert host.runs == []


class TestFailures:
    def test_failed_command_is_fatal_with_manual_command(self):
        host = FakePackageHost(fail={"docker.io"})
        with pytest.raises(InstallFailedError) as exc:
            DependencyResolver(host).ensure(DOCKER, LINUX_X86)
        assert exc.value.category == "install"
        assert "apt-get install -y docker.io" in exc.value.hint
        assert "simulated failure" in exc.value.message

    def test_failure_stops_remaining_dependencies(self):
        host = FakePackageHost(fail={"docker.io"})
        with pytest.raises(InstallFailedError):
            DependencyResolver(host).ensure_all(LINUX_X86)
        assert not any("colima" in " ".join(c) for c in host.commands)

    def test_refresh_failure_is_only_a_warning(self):
        host = FakePackageHost(fail={"update"})
        reporter = ProgressReporter()
        outcome = DependencyResolver(host, reporter=reporter).ensure(DOCKER, LINUX_X86)
        assert outcome.status == "installed"
        assert len(reporter.warnings) == 1


class TestCustomRegistry:
    def test_only_registry_entries_are_resolved(self):
        spec = DependencySpec(name="jq", binary="jq", install={"apt": ["apt-get", "install", "-y", "jq"]})
        host = FakePackageHost(fail={"jq"})
        with pytest.raises(InstallFailedError, match="jq"):
            DependencyResolver(host, registry=[spec]).ensure_all(LINUX_X86)
