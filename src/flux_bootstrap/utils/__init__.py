"""Utility functions for flux_bootstrap."""

from flux_bootstrap.utils.durations import format_duration
from flux_bootstrap.utils.naming import (
    DNS1123_LABEL_MAX_LENGTH,
    is_dns1123_label,
    sanitize_name,
)
from flux_bootstrap.utils.polling import PollTimeoutError, poll_until

__all__ = [
    "DNS1123_LABEL_MAX_LENGTH",
    "PollTimeoutError",
    "format_duration",
    "is_dns1123_label",
    "poll_until",
    "sanitize_name",
]
