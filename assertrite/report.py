"""Failure reports for assertions: the data model and the terminal renderer."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Sequence, TextIO, Union

from . import debugfmt
from .diff import MultiLineDiff, SingleLineDiff, split_lines
from .logging import logger
from .options import AssertOptions, get_options, is_compact_good
from .style import (
    DEFAULT_STYLE,
    DIMMED_STYLE,
    ERROR_STYLE,
    LEFT_STYLE,
    MACRO_STYLE,
    NOTE_STYLE,
    OP_STYLE,
    RIGHT_STYLE,
    Style,
)
from .writer import DEFAULT_TERM_WIDTH, Snippet, WrappingWriter

DEFAULT_GLUE = " && "
ELLIPSIS = "..."


@dataclass(frozen=True)
class BinaryPredicate:
    """A comparison, e.g. ``left == right``."""

    left: str
    operator: str
    right: str


@dataclass(frozen=True)
class LetPredicate:
    """A pattern match, e.g. ``let Some(x) = value``."""

    pattern: str
    expression: str


@dataclass(frozen=True)
class BoolPredicate:
    """A plain boolean expression."""

    expression: str


Predicate = Union[BinaryPredicate, LetPredicate, BoolPredicate]


@dataclass(frozen=True)
class BinaryExpansion:
    """Runtime values of a failed comparison."""

    left: Any
    operator: str
    right: Any


@dataclass(frozen=True)
class LetExpansion:
    """The value that did not match the pattern."""

    value: Any


@dataclass(frozen=True)
class BoolExpansion:
    """A boolean expression that evaluated to false."""


Expansion = Union[BinaryExpansion, LetExpansion, BoolExpansion]


def _make_snippet(data: str, style: Style, failed: bool, undercurl: bool) -> Snippet:
    if not failed:
        return Snippet(data, DIMMED_STYLE)
    snippet = Snippet(data, style)
    return snippet.undercurl_error() if undercurl else snippet


def write_predicate(
    writer: WrappingWriter, predicate: Predicate, failed: bool, undercurl: bool
) -> None:
    """Write one predicate, dimmed unless it is the failed one."""
    if isinstance(predicate, BinaryPredicate):
        parts = [
            (predicate.left, LEFT_STYLE),
            (" ", DEFAULT_STYLE),
            (predicate.operator, OP_STYLE),
            (" ", DEFAULT_STYLE),
            (predicate.right, RIGHT_STYLE),
        ]
    elif isinstance(predicate, LetPredicate):
        parts = [
            ("let ", OP_STYLE),
            (predicate.pattern, LEFT_STYLE),
            (" = ", OP_STYLE),
            (predicate.expression, RIGHT_STYLE),
        ]
    elif isinstance(predicate, BoolPredicate):
        parts = [(predicate.expression, RIGHT_STYLE)]
    else:
        raise TypeError(f"Not a predicate: {predicate!r}")
    for data, style in parts:
        writer.write_snippet(_make_snippet(data, style, failed, undercurl))


def write_expansion(
    writer: WrappingWriter, expansion: Expansion, options: AssertOptions
) -> None:
    """Write the runtime values of the failed predicate, without final newline."""
    if isinstance(expansion, BinaryExpansion):
        _write_binary(writer, expansion, options)
    elif isinstance(expansion, LetExpansion):
        _write_let(writer, expansion, options)
    elif isinstance(expansion, BoolExpansion):
        writer.write("with expansion:\n")
        writer.write("  ")
        writer.write_styled("false", RIGHT_STYLE)
    else:
        raise TypeError(f"Not an expansion: {expansion!r}")


def identical_repr_note(operator: str) -> tuple[str, bool]:
    """Note for a failed comparison whose operands have the same repr().

    Returns the text and whether it hints at a bug (a broken ``__eq__`` or
    ``__repr__``) rather than a coincidence.
    """
    if operator == "==":
        return (
            "Note: Left and right compared as unequal, "
            "but the repr() of left and right is identical!",
            True,
        )
    return ("Note: repr() of left and right is identical.", False)


def _write_binary(
    writer: WrappingWriter, expansion: BinaryExpansion, options: AssertOptions
) -> None:
    operator = expansion.operator
    if not options.expand.force_pretty:
        left = debugfmt.compact(expansion.left)
        right = debugfmt.compact(expansion.right)
        if options.expand.force_compact or is_compact_good([left, right]):
            writer.write("with expansion:\n")
            diff = SingleLineDiff(left, right)
            writer.write("  ")
            diff.write_left(writer)
            writer.write(" ")
            writer.write_styled(operator, OP_STYLE)
            writer.write(" ")
            diff.write_right(writer)
            if left == right:
                writer.flush_line()
                note, is_error = identical_repr_note(operator)
                writer.write_styled(note, ERROR_STYLE if is_error else NOTE_STYLE)
            return

    # Compact was disabled or not good enough, show a diff of the pretty forms
    left = debugfmt.pretty(expansion.left)
    right = debugfmt.pretty(expansion.right)
    writer.write("with diff:\n")
    MultiLineDiff(left, right).write_interleaved(writer)


def _write_let(
    writer: WrappingWriter, expansion: LetExpansion, options: AssertOptions
) -> None:
    writer.write("with expansion:\n")
    [value] = options.expand.expand_all([expansion.value])
    for i, line in enumerate(split_lines(value)):
        if i:
            writer.flush_line()
        writer.write("  ")
        writer.write_styled(line, RIGHT_STYLE)


def terminal_width(file: TextIO) -> int:
    try:
        return os.get_terminal_size(file.fileno()).columns
    except (AttributeError, OSError, ValueError):
        return DEFAULT_TERM_WIDTH


@dataclass
class FailedCheck:
    """Everything needed to report one failed assertion.

    ``predicates`` is the chain of sub-checks joined by ``&&``. Items are
    ``(glue, predicate)`` pairs where glue is the separator written before
    the predicate; bare predicates get the default glue.
    ``failed`` is the index of the predicate that failed and ``expansion``
    holds its runtime values.
    """

    macro_name: str
    file: str
    line: int
    column: int
    predicates: Sequence[Any]
    failed: int
    expansion: Expansion
    custom_msg: str | None = None
    fragments: Sequence[tuple[str, str]] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        chain = []
        for i, item in enumerate(self.predicates):
            if isinstance(item, tuple):
                glue, predicate = item
            else:
                glue, predicate = ("" if i == 0 else DEFAULT_GLUE), item
            chain.append((glue, predicate))
        self.predicates = chain
        if not 0 <= self.failed < len(chain):
            raise ValueError(
                f"failed={self.failed} is not an index into {len(chain)} predicates"
            )

    def render(
        self, options: AssertOptions | None = None, term_width: int | None = None
    ) -> str:
        """Render the report as text, newline terminated."""
        if options is None:
            options = get_options()
        if term_width is None:
            term_width = DEFAULT_TERM_WIDTH
        with WrappingWriter(term_width, options.color) as writer:
            self._write_assertion(writer)
            if self.fragments:
                writer.write("with:\n")
                for name, expansion in self.fragments:
                    writer.write("  ")
                    writer.write_styled(name, MACRO_STYLE)
                    writer.write(" ")
                    writer.write_styled("=", OP_STYLE)
                    writer.write(" ")
                    writer.write_styled(expansion, MACRO_STYLE)
                    writer.flush_line()
            write_expansion(writer, self.expansion, options)
            if not writer.at_line_start:
                writer.flush_line()
            if self.custom_msg is not None:
                writer.write("with message:\n  ")
                writer.write_styled(self.custom_msg, NOTE_STYLE)
                writer.flush_line()
            writer.flush_line()
        return writer.getvalue()

    def print(
        self,
        file: TextIO | None = None,
        *,
        options: AssertOptions | None = None,
        term_width: int | None = None,
    ) -> str:
        """Write the report to stderr (or file) in a single write.

        Returns the text written.
        """
        if file is None:
            file = sys.stderr
        if term_width is None:
            term_width = terminal_width(file)
        try:
            output = self.render(options, term_width)
        except Exception:
            # Never hide the actual failure behind a rendering bug
            logger.exception("Rendering the assertion failure failed")
            output = f"Assertion failed at {self.file}:{self.line}:{self.column}\n"
        file.write(output)
        return output

    def _repr_html_(self) -> str:
        from .html import html_report

        return str(html_report(self))

    def _write_assertion(self, writer: WrappingWriter) -> None:
        writer.write_styled("Assertion failed", ERROR_STYLE)
        writer.write(" at ")
        writer.write_styled(self.file, NOTE_STYLE)
        writer.write(f":{self.line}:{self.column}")
        writer.flush_line()
        writer.write("  ")
        writer.write_styled(self.macro_name, MACRO_STYLE)
        writer.write_styled("!( ", MACRO_STYLE)

        undercurl = len(self.predicates) > 1
        for i, (glue, predicate) in enumerate(self.predicates[: self.failed + 1]):
            if i > 0:
                writer.write_styled(glue, DIMMED_STYLE)
            write_predicate(writer, predicate, i == self.failed, undercurl)

        # Short-circuited predicates were never evaluated
        if self.failed + 1 < len(self.predicates):
            glue, _ = self.predicates[self.failed + 1]
            writer.write_styled(f"{glue}{ELLIPSIS}", DIMMED_STYLE)

        writer.write_styled(" )", MACRO_STYLE)
        writer.flush_line()
