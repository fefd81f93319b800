"""Duration formatting for Kubernetes custom resource fields.

Flux and its operator serialise intervals the way Go's
``time.Duration.String()`` does (``1m0s``, ``1h30m0s``, ``500ms``). Writing the
same shape keeps a value written here byte-equal to what the controllers
write back.
"""

from __future__ import annotations

from datetime import timedelta


def format_duration(value: timedelta) -> str:
    """Render a timedelta as a Go duration string.

    Examples:
        >>> format_duration(timedelta(minutes=1))
        '1m0s'
        >>> format_duration(timedelta(seconds=90))
        '1m30s'
        >>> format_duration(timedelta(milliseconds=500))
        '500ms'
        >>> format_duration(timedelta(microseconds=1500))
        '1.5ms'
    """
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        millis, frac_micros = divmod(micros, 1_000)
        ms = str(millis)
        if frac_micros:
            ms += "." + f"{frac_micros:03d}".rstrip("0")
        return f"{sign}{ms}ms"

    total_seconds, frac = divmod(micros, 1_000_000)
    hours, rest = divmod(total_seconds, 3_600)
    minutes, seconds = divmod(rest, 60)

    secs = str(seconds)
    if frac:
        secs += "." + f"{frac:06d}".rstrip("0")

    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"
