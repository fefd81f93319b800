"""Kubernetes object name helpers."""

from __future__ import annotations

import re

DNS1123_LABEL_MAX_LENGTH = 63

_DNS1123_LABEL_RE = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def is_dns1123_label(value: str) -> bool:
    """Return True if ``value`` is a valid RFC 1123 label."""
    return len(value) <= DNS1123_LABEL_MAX_LENGTH and bool(_DNS1123_LABEL_RE.match(value))


def sanitize_name(value: str, fallback: str) -> str:
    """Map arbitrary text onto a valid DNS-1123 label.

    Lower-cases and trims ``value``, keeps ``[a-z0-9]`` and collapses every
    run of other characters into a single hyphen. Leading and trailing
    hyphens are dropped and the result is cut to 63 characters.

    Never raises: empty input, input with no usable characters, or any
    result that still fails validation yields ``fallback`` unchanged.

    Args:
        value: Text to sanitize, e.g. a directory-derived project name.
        fallback: Label to use when ``value`` cannot produce one. Must
            already be valid.

    Returns:
        A valid label.

    Example:
        >>> sanitize_name(" ../My Workloads  ", "default")
        'my-workloads'
    """
    trimmed = value.strip().lower()
    if not trimmed:
        return fallback

    chars: list[str] = []
    previous_hyphen = False
    for ch in trimmed:
        if "a" <= ch <= "z" or "0" <= ch <= "9":
            chars.append(ch)
            previous_hyphen = False
        elif not previous_hyphen:
            chars.append("-")
            previous_hyphen = True

    sanitized = "".join(chars).strip("-")
    if len(sanitized) > DNS1123_LABEL_MAX_LENGTH:
        sanitized = sanitized[:DNS1123_LABEL_MAX_LENGTH].rstrip("-")

    if not sanitized or not is_dns1123_label(sanitized):
        return fallback
    return sanitized
