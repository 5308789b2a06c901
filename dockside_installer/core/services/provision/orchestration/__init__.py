"""
L5 Orchestration — top-level coordinator.
"""

from dockside_installer.core.services.provision.orchestration.pipeline import (  # noqa: F401
    PipelineOptions,
    run_pipeline,
)
