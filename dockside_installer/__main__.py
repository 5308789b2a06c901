"""Allow ``python -m dockside_installer``."""

from dockside_installer.main import cli

cli()
