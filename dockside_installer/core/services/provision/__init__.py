"""
Provisioning service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate layer (data → resolver → detection → execution →
orchestration)::

    from dockside_installer.core.services.provision import run_pipeline
"""

# ── L0: Data ──
from dockside_installer.core.services.provision.data import DEPENDENCIES  # noqa: F401

# ── L2: Resolver ──
from dockside_installer.core.services.provision.resolver import (  # noqa: F401
    DependencyResolver,
)

# ── L3: Detection ──
from dockside_installer.core.services.provision.detection import (  # noqa: F401
    detect,
    resolve_feature_flag,
)

# ── L4: Execution ──
from dockside_installer.core.services.provision.execution import (  # noqa: F401
    ensure_on_path,
    ensure_running,
    install,
    verify,
)

# ── L5: Orchestration ──
from dockside_installer.core.services.provision.orchestration import (  # noqa: F401
    PipelineOptions,
    run_pipeline,
)

# ── Progress ──
from dockside_installer.core.services.provision.progress import (  # noqa: F401
    ProgressReporter,
)
