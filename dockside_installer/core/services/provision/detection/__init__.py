"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ host state but never WRITE.
"""

from dockside_installer.core.services.provision.detection.interactive import (  # noqa: F401
    KUBERNETES_PROMPT,
    resolve_feature_flag,
    terminal_available,
)
from dockside_installer.core.services.provision.detection.platform import (  # noqa: F401
    detect,
    detect_package_manager,
    normalize_arch,
    normalize_os,
)
