"""Version information for flux_bootstrap."""

__version__ = "0.1.0"
