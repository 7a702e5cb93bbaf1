"""Assertion and check entry points.

An assertion prints its report and raises immediately. A check inside a
``check_scope()`` prints its report and lets the code continue, the scope
raises ``CheckFailed`` when it exits. Outside of any scope a failing check
raises right away, like an assertion.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from .report import FailedCheck

_status = threading.local()


class AssertionFailed(AssertionError):
    """An assertion failed; its report has already been printed."""

    def __init__(self, check: FailedCheck, report: str) -> None:
        super().__init__(f"{check.macro_name} failed at {check.file}:{check.line}")
        self.check = check
        self.report = report


class CheckFailed(AssertionError):
    """One or more checks failed; their reports have already been printed."""

    def __init__(self, count: int = 1, reports: list[str] | None = None) -> None:
        super().__init__("check failed" if count == 1 else f"{count} checks failed")
        self.count = count
        self.reports = reports or []


def _scopes() -> int:
    return getattr(_status, "scopes", 0)


@contextmanager
def check_scope() -> Iterator[None]:
    """Collect failing checks in the block and raise when it ends.

    Scopes are per thread and may be nested; each scope raises for the
    checks that failed since it (or an inner scope) last closed.
    """
    _status.scopes = _scopes() + 1
    try:
        yield
    finally:
        _status.scopes -= 1
        reports = getattr(_status, "reports", [])
        _status.reports = []
    if reports:
        raise CheckFailed(len(reports), reports)


def fail(check: FailedCheck, **print_args: Any) -> None:
    """Report a failed assertion and raise ``AssertionFailed``."""
    report = check.print(**print_args)
    raise AssertionFailed(check, report)


def fail_check(check: FailedCheck, **print_args: Any) -> None:
    """Report a failed check, deferring the failure if a check scope is open."""
    report = check.print(**print_args)
    if _scopes() > 0:
        if not hasattr(_status, "reports"):
            _status.reports = []
        _status.reports.append(report)
        return
    raise CheckFailed(1, [report])
