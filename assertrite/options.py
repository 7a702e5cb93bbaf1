"""End-user configurable options, read once from the environment.

The ``ASSERT2`` environment variable holds comma separated options,
whitespace around the commas is ignored and case does not matter:

- ``pretty``: always expand values with the multi-line debug format
- ``compact``: always expand values with the single-line debug format
- ``color`` / ``no-color``: unconditionally enable or disable colors

For example ``ASSERT2=color,pretty``. Unknown options are ignored.

Without ``color``/``no-color``, colors follow the ``NO_COLOR``,
``CLICOLOR`` and ``CLICOLOR_FORCE`` conventions, and are otherwise
enabled only if stderr is a terminal.
"""

from __future__ import annotations

import enum
import os
import sys
import threading
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TextIO

from . import debugfmt

ENV_VAR = "ASSERT2"

# Longest compact representation that is still shown on a single line
COMPACT_MAX_LEN = 40


class ExpansionFormat(enum.Enum):
    """How values are expanded in a failure report."""

    # Compact if all compact representations are short enough, else pretty
    AUTO = "auto"
    PRETTY = "pretty"
    COMPACT = "compact"

    @property
    def force_pretty(self) -> bool:
        return self is ExpansionFormat.PRETTY

    @property
    def force_compact(self) -> bool:
        return self is ExpansionFormat.COMPACT

    def expand_all(self, values: Iterable[Any]) -> list[str]:
        """Expand all values with the same format, compact or pretty."""
        values = list(values)
        if not self.force_pretty:
            expanded = [debugfmt.compact(v) for v in values]
            if self.force_compact or is_compact_good(expanded):
                return expanded
        return [debugfmt.pretty(v) for v in values]


def is_compact_good(expanded: Iterable[str]) -> bool:
    """Heuristically determine if compact representations are readable enough."""
    expanded = list(expanded)
    if any(len(value) > COMPACT_MAX_LEN for value in expanded):
        return False
    return not any("\n" in value for value in expanded)


def _is_true(value: str | None) -> bool:
    return value is not None and value.lower() in ("1", "true", "yes")


def _is_false(value: str | None) -> bool:
    return value is not None and value.lower() in ("0", "false", "no")


def should_color(
    environ: Mapping[str, str] | None = None, stream: TextIO | None = None
) -> bool:
    """Check if the clicolors conventions ask for colored output."""
    if environ is None:
        environ = os.environ
    if _is_true(environ.get("NO_COLOR")):
        return False
    if _is_false(environ.get("CLICOLOR")):
        return False
    if _is_true(environ.get("CLICOLOR_FORCE")):
        return True
    if stream is None:
        stream = sys.stderr
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@dataclass(frozen=True)
class AssertOptions:
    """Options for rendering failure reports."""

    expand: ExpansionFormat = ExpansionFormat.AUTO
    color: bool = False

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, stream: TextIO | None = None
    ) -> AssertOptions:
        """Parse the options from the environment."""
        if environ is None:
            environ = os.environ
        expand = ExpansionFormat.AUTO
        color = None
        for word in environ.get(ENV_VAR, "").split(","):
            word = word.strip().lower()
            if word == "pretty":
                expand = ExpansionFormat.PRETTY
            elif word == "compact":
                expand = ExpansionFormat.COMPACT
            elif word == "color":
                color = True
            elif word == "no-color":
                color = False
        if color is None:
            color = should_color(environ, stream)
        return cls(expand=expand, color=color)


_options: AssertOptions | None = None
_options_lock = threading.Lock()


def get_options() -> AssertOptions:
    """Get the process-wide options, computing them on first use.

    The value never changes once computed. A thread that finds another
    thread busy initializing retries the read instead of blocking on it.
    """
    global _options

    while True:
        options = _options
        if options is not None:
            return options
        if not _options_lock.acquire(blocking=False):
            time.sleep(0)
            continue
        try:
            if _options is None:
                _options = AssertOptions.from_env()
            return _options
        finally:
            _options_lock.release()
