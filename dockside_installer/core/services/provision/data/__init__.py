"""
L0 Data — registry and constant tables.

Pure data. No I/O.
"""

from dockside_installer.core.services.provision.data.constants import (  # noqa: F401
    ARCH_SYNONYMS,
    GO_ARCH,
    GO_OS,
    HOMEBREW_PREFIXES,
    LINUX_PACKAGE_MANAGERS,
    OS_NAMES,
    PM_REFRESH,
    UNAME_ARCH,
    UNAME_OS,
)
from dockside_installer.core.services.provision.data.dependencies import (  # noqa: F401
    DEPENDENCIES,
    build_registry,
)
