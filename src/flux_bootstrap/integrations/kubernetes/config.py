"""Kubernetes integration configuration models."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Local OCI registry coordinates
DEFAULT_LOCAL_REGISTRY_PORT = 5111
LOCAL_REGISTRY_CLUSTER_HOST = "local-registry"
LOCAL_REGISTRY_CLUSTER_PORT = 5000
DEFAULT_ENDPOINT_HOST = "localhost"

# Bounded waits
DEFAULT_API_TIMEOUT = 120.0
DEFAULT_POLL_INTERVAL = 2.0


class ClusterConfig(BaseModel):
    """Cluster settings the bootstrap derives its desired state from.

    Loaded and defaulted by the caller; only the fields the bootstrap
    reads are modelled here.
    """

    model_config = ConfigDict(extra="forbid")

    source_directory: str = ""
    local_registry_enabled: bool = False
    local_registry_host_port: int = 0
    flux_interval: timedelta = timedelta(0)

    @field_validator("local_registry_host_port")
    @classmethod
    def validate_host_port(cls, v: int) -> int:
        """Validate the host port fits in a TCP port (0 means default)."""
        if not 0 <= v <= 65535:
            raise ValueError("local_registry_host_port must be between 0 and 65535")
        return v

    def resolved_host_port(self) -> int:
        """Return the configured host port, or the default when unset."""
        return self.local_registry_host_port or DEFAULT_LOCAL_REGISTRY_PORT


class BootstrapDefaultsConfig(BaseModel):
    """Timing for the bounded waits of a bootstrap run."""

    model_config = ConfigDict(extra="forbid")

    api_timeout: float = DEFAULT_API_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @field_validator("api_timeout", "poll_interval")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Validate durations are positive."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> BootstrapDefaultsConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            OPS_FLUX_API_TIMEOUT: Seconds to wait for each API or resource
            OPS_FLUX_POLL_INTERVAL: Seconds between probes
        """
        config_dict = base_config.copy() if base_config else {}

        if timeout := os.environ.get("OPS_FLUX_API_TIMEOUT"):
            config_dict["api_timeout"] = float(timeout)

        if interval := os.environ.get("OPS_FLUX_POLL_INTERVAL"):
            config_dict["poll_interval"] = float(interval)

        return cls.model_validate(config_dict)
