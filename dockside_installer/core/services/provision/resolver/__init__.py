"""
L2 Resolver — dependency presence and installation.
"""

from dockside_installer.core.services.provision.resolver.dependency_resolver import (  # noqa: F401
    DependencyResolver,
    render_command,
)
