"""Splitting raw option strings into ordered entry fragments."""

from collections.abc import Callable, Iterable

# A splitter turns one raw option value into its fragments
Splitter = Callable[[str], list[str]]


def split_commas(raw: str) -> list[str]:
    """Split on every comma, including commas inside flag values."""
    return raw.split(",")


def split_lines(raw: str) -> list[str]:
    """Split on newlines, tolerating CRLF line endings."""
    return [line.removesuffix("\r") for line in raw.split("\n")]


def collect_entries(
    values: Iterable[str | None] | None,
    splitter: Splitter = split_commas,
) -> list[str]:
    """Collect fragments from each value of a repeatable option.

    Args:
        values: Raw values in the order they were given
        splitter: Function applied to each value

    Returns:
        All fragments, in order
    """
    entries: list[str] = []
    if not values:
        return entries
    for value in values:
        if value is None:
            continue
        entries.extend(splitter(value))
    return entries
