"""Custom HTTP header parsing."""

from collections.abc import Iterable

HEADER_SEPARATOR = ":"


def parse_custom_headers(entries: Iterable[str]) -> dict[str, str]:
    """Parse ``Name:value`` entries into a header mapping.

    Each entry is split on the first colon. Entries that are empty or have
    no colon are skipped. Keys and values are kept exactly as given.
    """
    headers: dict[str, str] = {}
    for entry in entries:
        if not entry:
            continue
        key, sep, value = entry.partition(HEADER_SEPARATOR)
        if not sep:
            continue
        headers[key] = value
    return headers


def format_custom_headers(headers: dict[str, str]) -> list[str]:
    """Render a header mapping back into ``Name:value`` entries."""
    return [f"{key}{HEADER_SEPARATOR}{value}" for key, value in headers.items()]
