"""
Dockside installer — CLI entrypoint.

Usage:
    dockside-install --help
    dockside-install --with-kubernetes
    dockside-install --version v0.1.0 --install-dir ~/bin
    python -m dockside_installer --deps-only
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from dockside_installer import __version__
from dockside_installer.core.observability.logging_config import resolve_level, setup_logging


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(
    __version__, "-V", "--installer-version", prog_name="dockside-install",
)
@click.option("--skip-deps", is_flag=True, help="Skip installing Homebrew, Docker, Colima and kubectl.")
@click.option("--deps-only", is_flag=True, help="Only set up dependencies (no app).")
@click.option(
    "--with-kubernetes/--without-kubernetes",
    "with_kubernetes",
    default=None,
    help="Enable Kubernetes support (default: ask when a terminal is available).",
)
@click.option("--version", "version", metavar="VER", default=None,
              help="Install a specific version (default: latest).")
@click.option("--install-dir", type=click.Path(file_okay=False), default=None,
              help="Where to install the app (default: ~/.local/bin or /Applications).")
@click.option("--skip-runtime", is_flag=True, help="Do not start Colima (implies --skip-verify).")
@click.option("--skip-verify", is_flag=True, help="Skip Docker/Kubernetes smoke tests.")
@click.option("--no-modify-path", is_flag=True, help="Do not edit shell rc files.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the report as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Only print warnings and errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to dockside-installer.yml (default: auto-detect).",
)
def cli(
    skip_deps: bool,
    deps_only: bool,
    with_kubernetes: bool | None,
    version: str | None,
    install_dir: str | None,
    skip_runtime: bool,
    skip_verify: bool,
    no_modify_path: bool,
    as_json: bool,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Dockside installer — set up Docker, Colima and Kubernetes, then install Dockside."""
    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("DOCKSIDE_LOG_LEVEL"),
        ),
        log_file=os.environ.get("DOCKSIDE_LOG_FILE"),
        log_file_level=os.environ.get("DOCKSIDE_LOG_FILE_LEVEL"),
    )

    from dockside_installer.adapters import HostAdapters
    from dockside_installer.core.config import load_config
    from dockside_installer.core.errors import ProvisionError
    from dockside_installer.core.services.provision import (
        PipelineOptions,
        ProgressReporter,
        run_pipeline,
    )
    from dockside_installer.ui.cli import output

    reporter = ProgressReporter(sink=None if as_json else output.make_sink(quiet=quiet))
    options = PipelineOptions(
        skip_deps=skip_deps,
        deps_only=deps_only,
        with_kubernetes=with_kubernetes,
        version=version,
        install_dir=install_dir,
        skip_runtime=skip_runtime,
        skip_verify=skip_verify,
        modify_path=not no_modify_path,
    )

    try:
        config = load_config(Path(config_path) if config_path else None)
        if not as_json and not quiet:
            output.print_banner(config)
        report = run_pipeline(options, HostAdapters.system(config), config, reporter)
    except ProvisionError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, **e.to_dict()}, indent=2))
        else:
            output.print_error(e)
        sys.exit(2 if e.category == "usage" else 1)

    if as_json:
        click.echo(json.dumps({"ok": True, **report.to_dict()}, indent=2))
        return

    output.print_summary(report, config)


if __name__ == "__main__":
    cli()
