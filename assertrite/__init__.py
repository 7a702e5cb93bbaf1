from .checks import AssertionFailed, CheckFailed, check_scope, fail, fail_check
from .diff import line_diff, split_words
from .html import html_report
from .options import AssertOptions, ExpansionFormat, get_options
from .report import (
    BinaryExpansion,
    BinaryPredicate,
    BoolExpansion,
    BoolPredicate,
    FailedCheck,
    LetExpansion,
    LetPredicate,
)

__all__ = [
    "FailedCheck",
    "BinaryPredicate",
    "LetPredicate",
    "BoolPredicate",
    "BinaryExpansion",
    "LetExpansion",
    "BoolExpansion",
    "AssertOptions",
    "ExpansionFormat",
    "get_options",
    "html_report",
    "check_scope",
    "fail",
    "fail_check",
    "AssertionFailed",
    "CheckFailed",
    "line_diff",
    "split_words",
]
