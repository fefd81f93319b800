"""Flux operator bootstrap for freshly provisioned clusters."""

from flux_bootstrap.__version__ import __version__
from flux_bootstrap.core.context import ExecutionContext
from flux_bootstrap.integrations.kubernetes.config import ClusterConfig
from flux_bootstrap.services.kubernetes.bootstrap import reconcile_bootstrap

__all__ = [
    "ClusterConfig",
    "ExecutionContext",
    "__version__",
    "reconcile_bootstrap",
]
