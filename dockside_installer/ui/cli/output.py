"""
Terminal output for the installer CLI.

Progress lines are tagged so warnings stand out from informational ones:
``[INFO]`` blue, ``[OK]`` green, ``[WARN]`` yellow, ``[ERROR]`` red.
"""

from __future__ import annotations

import click

from dockside_installer.core.errors import ProvisionError
from dockside_installer.core.models.config import InstallerConfig
from dockside_installer.core.models.release import ArtifactKind
from dockside_installer.core.models.report import PipelineReport
from dockside_installer.core.services.provision.progress import EventKind, Sink

_TAGS: dict[str, tuple[str, str]] = {
    "info": ("INFO", "blue"),
    "success": ("OK", "green"),
    "warn": ("WARN", "yellow"),
}


def _tagged(tag: str, color: str, message: str, *, err: bool = False) -> None:
    click.secho(f"[{tag}]", fg=color, bold=True, nl=False, err=err)
    click.echo(f" {message}", err=err)


def print_event(kind: EventKind, message: str) -> None:
    tag, color = _TAGS[kind]
    _tagged(tag, color, message)


def make_sink(*, quiet: bool = False) -> Sink:
    """Progress sink for the CLI. Quiet mode keeps only warnings."""
    if not quiet:
        return print_event

    def _warnings_only(kind: EventKind, message: str) -> None:
        if kind == "warn":
            print_event(kind, message)

    return _warnings_only


def print_banner(config: InstallerConfig) -> None:
    click.echo()
    click.secho(f"  {config.app_name} Installer", fg="blue", bold=True)
    click.echo(f"  {config.repo}")
    click.echo()


def print_error(error: ProvisionError) -> None:
    _tagged("ERROR", "red", error.message, err=True)
    if error.hint:
        click.echo(f"        {error.hint}", err=True)


def print_summary(report: PipelineReport, config: InstallerConfig) -> None:
    """Final block: outcome, repeated warnings, next steps."""
    click.echo()
    if report.warnings:
        click.secho(
            f"Installation complete with {len(report.warnings)} warning(s):",
            fg="yellow",
            bold=True,
        )
        for warning in report.warnings:
            click.echo(f"  • {warning}")
    else:
        click.secho("Installation complete!", fg="green", bold=True)
    click.echo()

    installed = report.installed
    if installed is not None:
        if installed.kind == ArtifactKind.APP_BUNDLE:
            click.echo(f"Open {config.app_name} from Spotlight or run:")
            click.echo(f"  open {installed.path}")
        else:
            click.echo(f"Installed {config.binary_name} {installed.version} to {installed.path}")
        click.echo()

    if report.path_updated and report.shell_rc:
        click.echo("To use it in this shell, open a new terminal or run:")
        click.echo(f"  source {report.shell_rc}")
        click.echo()

    if report.orchestration_requested and report.verification is not None:
        if report.verification.orchestration_ready:
            click.echo("Kubernetes is enabled. Try: kubectl get nodes")
            click.echo()
