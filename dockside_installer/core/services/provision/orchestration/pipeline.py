"""
L5 Orchestration — the provisioning pipeline.

Strictly sequential::

    detect → dependencies → kubernetes gate → runtime → verify → artifact → PATH

Fatal conditions propagate as ``ProvisionError`` subclasses and stop the
run where it is; nothing already done is rolled back. Warnings never stop
the run; they end up on the returned ``PipelineReport``.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from dockside_installer.adapters import HostAdapters
from dockside_installer.core.models.config import InstallerConfig
from dockside_installer.core.models.platform import PlatformTarget
from dockside_installer.core.models.release import ArtifactKind, ReleaseSelector
from dockside_installer.core.models.report import PipelineReport
from dockside_installer.core.services.provision.detection import (
    detect,
    resolve_feature_flag,
    terminal_available,
)
from dockside_installer.core.services.provision.execution import (
    ensure_on_path,
    ensure_running,
    install,
    rc_file_for,
    verify,
)
from dockside_installer.core.services.provision.execution.shell_config import shell_type
from dockside_installer.core.services.provision.progress import ProgressReporter
from dockside_installer.core.services.provision.resolver import DependencyResolver

logger = logging.getLogger(__name__)


@dataclass
class PipelineOptions:
    """Per-invocation switches (CLI flags)."""

    skip_deps: bool = False
    deps_only: bool = False
    with_kubernetes: bool | None = None     # None → ask (or default off)
    version: str | None = None
    install_dir: str | None = None
    skip_runtime: bool = False
    skip_verify: bool = False
    modify_path: bool = True


def run_pipeline(
    options: PipelineOptions,
    adapters: HostAdapters,
    config: InstallerConfig,
    reporter: ProgressReporter | None = None,
    *,
    target: PlatformTarget | None = None,
    home: Path | None = None,
    sleep: Callable[[float], None] | None = None,
) -> PipelineReport:
    """Run every stage the options allow and return the report.

    Args:
        target: Pre-detected platform; detected from the host when ``None``.
        home: Home directory for rc-file edits (defaults to the user's).
        sleep: Delay function for readiness polls (defaults to ``time.sleep``).

    Raises:
        ProvisionError: Any fatal condition.
    """
    reporter = reporter or ProgressReporter()
    report = PipelineReport()
    started = time.monotonic()

    # ── Platform ────────────────────────────────────────────────
    if target is None:
        target = detect(config, which=adapters.packages.which)
    report.target = target
    reporter.info(f"Detected {target}")

    # ── Dependencies ────────────────────────────────────────────
    if options.skip_deps:
        report.skip("dependencies")
        reporter.info("Skipping dependency installation (--skip-deps)")
    else:
        reporter.info("Setting up Docker environment...")
        resolver = DependencyResolver(
            adapters.packages,
            reporter=reporter,
            interactive=terminal_available(adapters.open_tty),
        )
        report.dependencies = resolver.ensure_all(target)

    # ── Runtime + verification ─────────────────────────────────
    if options.skip_runtime:
        report.orchestration_requested = bool(options.with_kubernetes)
        report.skip("runtime")
        report.skip("verification")
    else:
        wants_k8s = resolve_feature_flag(
            options.with_kubernetes,
            open_tty=adapters.open_tty,
            reporter=reporter,
        )
        report.orchestration_requested = wants_k8s
        profile = config.runtime.model_copy(update={"orchestration_enabled": wants_k8s})
        report.runtime = ensure_running(profile, adapters.runtime, reporter)

        if options.skip_verify:
            report.skip("verification")
        else:
            report.verification = verify(
                wants_k8s,
                adapters.containers,
                adapters.cluster,
                config.verification,
                reporter,
                sleep=sleep or time.sleep,
            )

    # ── Artifact + PATH ─────────────────────────────────────────
    if options.deps_only:
        report.skip("artifact")
        report.skip("path")
    else:
        if options.install_dir:
            install_dir = Path(os.path.abspath(Path(options.install_dir).expanduser()))
        else:
            install_dir = config.resolved_install_dir()
        selector = ReleaseSelector(
            version_tag=options.version or config.version,
            target=target,
        )
        report.installed = install(selector, install_dir, config, adapters.releases, reporter)

        if config.artifact_kind == ArtifactKind.APP_BUNDLE or not options.modify_path:
            report.skip("path")
        else:
            home = Path.home() if home is None else home
            report.path_updated = ensure_on_path(
                install_dir,
                home=home,
                os_family=target.os,
                reporter=reporter,
            )
            if report.path_updated:
                report.shell_rc = str(rc_file_for(shell_type(os.environ), home, target.os))

    report.warnings = list(reporter.warnings)
    logger.info(
        "Pipeline finished in %.1fs (%d warning(s), skipped: %s)",
        time.monotonic() - started,
        len(report.warnings),
        ", ".join(report.skipped_stages) or "none",
    )
    return report
