"""Headless browser optional argument parsing.

Argument values may legitimately contain commas, e.g.
``--proxy-bypass-list=a.com,b.com``. Since the option layer splits on every
comma, the fragments have to be merged back together here.

The merge is a two-state machine:

- IDLE: no entry is pending; continuation fragments are dropped.
- ACCUMULATING: a ``key=value`` entry is pending and continuation fragments
  are appended to its value.

A fragment starts a new entry when it begins with ``--`` or contains ``=``.
Only the start of the fragment is checked, so ``c/d--z`` is a continuation.
"""

from collections.abc import Iterable
from enum import Enum, auto

FLAG_MARKER = "--"
VALUE_SEPARATOR = "="
FRAGMENT_SEPARATOR = ","


class MergeState(Enum):
    """States of the fragment merger."""

    IDLE = auto()
    ACCUMULATING = auto()


class ArgumentMerger:
    """Single-pass merger of comma-fragmented argument entries."""

    def __init__(self) -> None:
        self.state = MergeState.IDLE
        self.arguments: dict[str, str] = {}
        self._key = ""
        self._value = ""

    def feed(self, fragment: str) -> None:
        """Consume the next fragment."""
        if not fragment:
            return

        if fragment.startswith(FLAG_MARKER) or VALUE_SEPARATOR in fragment:
            self.flush()
            self._start_entry(fragment)
        elif self.state is MergeState.ACCUMULATING:
            self._value += FRAGMENT_SEPARATOR + fragment

    def flush(self) -> None:
        """Store the pending entry, if any, and return to IDLE."""
        if self.state is MergeState.ACCUMULATING:
            self.arguments[self._key] = self._value
        self._reset()

    def finish(self) -> dict[str, str]:
        """Flush the pending entry and return all merged arguments."""
        self.flush()
        return self.arguments

    def _start_entry(self, fragment: str) -> None:
        key, sep, value = fragment.partition(VALUE_SEPARATOR)
        key = key.strip()
        if not key.removeprefix(FLAG_MARKER):
            return

        if not sep:
            # Boolean flag, never takes continuation fragments
            self.arguments[key] = ""
            return

        value = value.strip()
        if not value:
            return

        self.state = MergeState.ACCUMULATING
        self._key = key
        self._value = value

    def _reset(self) -> None:
        self.state = MergeState.IDLE
        self._key = ""
        self._value = ""


def parse_optional_arguments(entries: Iterable[str]) -> dict[str, str]:
    """Merge comma-split fragments into an argument mapping.

    Args:
        entries: Fragments in the order they were split

    Returns:
        Mapping of flag name to value; boolean flags map to an empty string
    """
    merger = ArgumentMerger()
    for entry in entries:
        merger.feed(entry)
    return merger.finish()


def format_optional_arguments(arguments: dict[str, str]) -> list[str]:
    """Render an argument mapping back into entries.

    Boolean flags are rendered bare, everything else as ``key=value``.
    """
    return [
        f"{key}{VALUE_SEPARATOR}{value}" if value else key
        for key, value in arguments.items()
    ]
