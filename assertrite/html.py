from __future__ import annotations

from typing import Any

from html5tagger import E  # type: ignore[import]

from . import debugfmt
from .diff import Different, Equal, LeftOnly, MultiLineDiff, SingleLineDiff
from .options import AssertOptions, get_options, is_compact_good
from .report import (
    ELLIPSIS,
    BinaryExpansion,
    BinaryPredicate,
    BoolExpansion,
    FailedCheck,
    LetExpansion,
    LetPredicate,
    identical_repr_note,
)

style = """
.assertrite { font-family: sans-serif; }
.assertrite pre { margin: 0 0 0.5em 1em; }
.assertrite .error { color: #e33; font-weight: bold; }
.assertrite .macro { color: #a3a; }
.assertrite .operator { color: #36c; font-weight: bold; }
.assertrite .left, .assertrite .diff-left { color: #0aa; }
.assertrite .right, .assertrite .diff-right { color: #b80; }
.assertrite .dimmed, .assertrite .diff-equal { opacity: 0.6; }
.assertrite .diff-left mark { background: #0aa; color: black; }
.assertrite .diff-right mark { background: #b80; color: black; }
.assertrite .predicates mark { background: none; text-decoration: underline wavy #e33; }
.assertrite .message { font-weight: bold; }
"""


def html_report(
    check: FailedCheck,
    options: AssertOptions | None = None,
    *,
    include_css: bool = True,
) -> Any:
    """Render a failure report as HTML, e.g. for display in a notebook."""
    if options is None:
        options = get_options()
    with E.div(class_="assertrite") as doc:
        if include_css:
            doc._style(style)
        with doc.h3(class_="assertrite-header"):
            doc.span("Assertion failed", class_="error")
            doc.span(" at ")
            doc.span(check.file, class_="location")
            doc.span(f":{check.line}:{check.column}")
        _predicate_chain(doc, check)
        if check.fragments:
            doc.p("with:")
            with doc.pre(class_="fragments"):
                for name, expansion in check.fragments:
                    doc.span(name, class_="macro")
                    doc.span(" = ", class_="operator")
                    doc.span(f"{expansion}\n", class_="macro")
        _expansion(doc, check.expansion, options)
        if check.custom_msg is not None:
            doc.p("with message:")
            doc.p(check.custom_msg, class_="message")
    return doc


def _predicate_chain(doc: Any, check: FailedCheck) -> None:
    failed = check.failed
    with doc.pre(class_="predicates"):
        doc.span(f"{check.macro_name}!( ", class_="macro")
        for i, (glue, predicate) in enumerate(check.predicates[: failed + 1]):
            if i > 0:
                doc.span(glue, class_="dimmed")
            if i == failed:
                with doc.mark:
                    _predicate(doc, predicate, emphasis=True)
            else:
                with doc.span(class_="dimmed"):
                    _predicate(doc, predicate, emphasis=False)
        if failed + 1 < len(check.predicates):
            glue, _ = check.predicates[failed + 1]
            doc.span(f"{glue}{ELLIPSIS}", class_="dimmed")
        doc.span(" )", class_="macro")


def _predicate(doc: Any, predicate: Any, *, emphasis: bool) -> None:
    if isinstance(predicate, BinaryPredicate):
        parts = [
            (predicate.left, "left"),
            (f" {predicate.operator} ", "operator"),
            (predicate.right, "right"),
        ]
    elif isinstance(predicate, LetPredicate):
        parts = [
            ("let ", "operator"),
            (predicate.pattern, "left"),
            (" = ", "operator"),
            (predicate.expression, "right"),
        ]
    else:
        parts = [(predicate.expression, "right")]
    for text, cls in parts:
        doc.span(text, class_=cls if emphasis else None)


def _word_diff(doc: Any, spans: list[tuple[str, bool]], cls: str | None) -> None:
    with doc.span(class_=cls):
        for text, highlighted in spans:
            if highlighted:
                doc.mark(text)
            else:
                doc.span(text)


def _expansion(doc: Any, expansion: Any, options: AssertOptions) -> None:
    if isinstance(expansion, BinaryExpansion):
        if not options.expand.force_pretty:
            left = debugfmt.compact(expansion.left)
            right = debugfmt.compact(expansion.right)
            if options.expand.force_compact or is_compact_good([left, right]):
                doc.p("with expansion:")
                words = SingleLineDiff(left, right)
                with doc.pre(class_="expansion"):
                    _word_diff(doc, words.left_highlights.spans(left), "diff-left")
                    doc.span(f" {expansion.operator} ", class_="operator")
                    _word_diff(doc, words.right_highlights.spans(right), "diff-right")
                if left == right:
                    note, is_error = identical_repr_note(expansion.operator)
                    doc.p(note, class_="error" if is_error else "note")
                return
        doc.p("with diff:")
        diff = MultiLineDiff(
            debugfmt.pretty(expansion.left), debugfmt.pretty(expansion.right)
        )
        with doc.pre(class_="diff"):
            for line in diff.line_diffs:
                if isinstance(line, Different):
                    words = SingleLineDiff(line.left, line.right)
                    with doc.span(class_="diff-left"):
                        doc.span("< ")
                        _word_diff(doc, words.left_highlights.spans(line.left), None)
                        doc.span("\n")
                    with doc.span(class_="diff-right"):
                        doc.span("> ")
                        _word_diff(doc, words.right_highlights.spans(line.right), None)
                        doc.span("\n")
                elif isinstance(line, Equal):
                    doc.span(f"  {line.line}\n", class_="diff-equal")
                elif isinstance(line, LeftOnly):
                    doc.span(f"< {line.line}\n", class_="diff-left")
                else:
                    doc.span(f"> {line.line}\n", class_="diff-right")
    elif isinstance(expansion, LetExpansion):
        doc.p("with expansion:")
        [value] = options.expand.expand_all([expansion.value])
        doc.pre(value, class_="expansion right")
    elif isinstance(expansion, BoolExpansion):
        doc.p("with expansion:")
        doc.pre("false", class_="expansion right")
