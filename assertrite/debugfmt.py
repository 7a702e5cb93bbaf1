"""Compact (single-line) and pretty (multi-line) debug representations."""

from __future__ import annotations

import dataclasses
from typing import Any

from .logging import logger

INDENT = "    "


def fallback_repr(value: Any) -> str:
    return f"<object of type {type(value).__qualname__}>"


def compact(value: Any) -> str:
    """Single-line debug representation of a value."""
    try:
        return repr(value)
    except Exception:
        logger.exception("repr() failed while reporting an assertion failure")
        return fallback_repr(value)


def pretty(value: Any) -> str:
    """Multi-line debug representation: one item per line, indented."""
    try:
        return _pretty(value, "", set())
    except Exception:
        logger.exception("Pretty-printing failed, using the compact form")
        return compact(value)


def _fields(value: Any) -> list[tuple[str, Any]] | None:
    """Named fields of record-like objects, or None for anything else."""
    cls = type(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        fields = [
            (f.name, object.__getattribute__(value, f.name))
            for f in dataclasses.fields(value)
            if f.repr
        ]
        # A custom or disabled __repr__ is the value's own debug output
        generated = ", ".join(f"{name}={field!r}" for name, field in fields)
        if repr(value) != f"{cls.__qualname__}({generated})":
            return None
        return fields
    if isinstance(value, tuple) and isinstance(getattr(value, "_fields", None), tuple):
        return [(name, getattr(value, name)) for name in value._fields]
    # msgspec Struct and Pydantic BaseModel support (without importing either)
    if isinstance(fields := getattr(cls, "__struct_fields__", None), tuple):
        return [(name, object.__getattribute__(value, name)) for name in fields]
    if isinstance(fields := getattr(cls, "model_fields", None), dict):
        return [(name, getattr(value, name)) for name in fields]
    return None


_CONTAINERS = (
    (dict, "{", "}"),
    (list, "[", "]"),
    (tuple, "(", ")"),
    (set, "{", "}"),
    (frozenset, "{", "}"),
)


def _brackets(value: Any) -> tuple[str, str] | None:
    """Opening and closing text of a container, or None if not a container.

    Subclasses whose repr names the type, like ``Counter({...})``, keep the
    name around the brackets. Subclasses with an unrelated repr are not
    expanded.
    """
    cls = type(value)
    for base, opening, closing in _CONTAINERS:
        if not isinstance(value, base):
            continue
        if cls is base and base is not frozenset:
            return opening, closing
        name = cls.__name__
        if compact(value).startswith(f"{name}("):
            return f"{name}({opening}", f"{closing})"
        if cls.__repr__ is base.__repr__:
            return opening, closing
        return None
    return None


def _block(opening: str, items: list[str], closing: str, indent: str) -> str:
    inner = indent + INDENT
    lines = [opening]
    lines += [f"{inner}{item}," for item in items]
    lines.append(f"{indent}{closing}")
    return "\n".join(lines)


def _pretty(value: Any, indent: str, active: set[int]) -> str:
    if id(value) in active:
        return "..."
    inner = indent + INDENT

    fields = _fields(value)
    if fields is not None:
        name = type(value).__qualname__
        if not fields:
            return f"{name}()"
        active.add(id(value))
        try:
            items = [f"{k}={_pretty(v, inner, active)}" for k, v in fields]
        finally:
            active.discard(id(value))
        return _block(f"{name}(", items, ")", indent)

    if not isinstance(value, (dict, list, tuple, set, frozenset)) or not value:
        return compact(value)
    brackets = _brackets(value)
    if brackets is None:
        return compact(value)
    opening, closing = brackets
    active.add(id(value))
    try:
        if isinstance(value, dict):
            items = [
                f"{compact(k)}: {_pretty(v, inner, active)}" for k, v in value.items()
            ]
        else:
            items = [_pretty(v, inner, active) for v in value]
    finally:
        active.discard(id(value))
    return _block(opening, items, closing, indent)
