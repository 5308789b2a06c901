"""
L4 Execution — stages that change the host.
"""

from dockside_installer.core.services.provision.execution.artifact import (  # noqa: F401
    build_download_url,
    extract_archive,
    install,
    place_artifact,
    resolve_download,
)
from dockside_installer.core.services.provision.execution.runtime import (  # noqa: F401
    RESTART_WITH_KUBERNETES,
    ensure_running,
)
from dockside_installer.core.services.provision.execution.shell_config import (  # noqa: F401
    ensure_on_path,
    rc_file_for,
)
from dockside_installer.core.services.provision.execution.verification import (  # noqa: F401
    verify,
)
