# ruff: noqa
"""Sample values and failure reports shared by the tests."""

from collections import namedtuple
from dataclasses import dataclass, field

from assertrite import (
    AssertOptions,
    BinaryExpansion,
    BinaryPredicate,
    BoolExpansion,
    BoolPredicate,
    FailedCheck,
    LetExpansion,
    LetPredicate,
)

PLAIN = AssertOptions(color=False)
COLOR = AssertOptions(color=True)


@dataclass
class Pet:
    name: str
    age: int
    kind: str
    shaved: bool


@dataclass
class Box:
    items: list
    secret: str = field(default="hidden", repr=False)


@dataclass(repr=False)
class Opaque:
    value: int


@dataclass
class Money:
    cents: int

    def __repr__(self):
        return f"Money<{self.cents}>"


class Stack(list):
    pass


class Tagged(list):
    def __repr__(self):
        return "Tagged!"


class Blank:
    def __repr__(self):
        return ""


Point = namedtuple("Point", ["x", "y"])


class Broken:
    def __repr__(self):
        raise RuntimeError("no repr for you")


class Stubborn:
    """Never equal to anything, but always looks the same."""

    def __eq__(self, other):
        return False

    def __repr__(self):
        return "Stubborn"


SCRAPPY = Pet(name="Scrappy", age=7, kind="Bearded Collie", shaved=False)
COCO = Pet(name="Coco", age=7, kind="Bearded Collie", shaved=True)


def math_check(**kwargs):
    """check!( 6 + 1 <= 2 * 3 )"""
    return FailedCheck(
        macro_name="check",
        file="tests/test_math.py",
        line=3,
        column=5,
        predicates=[BinaryPredicate("6 + 1", "<=", "2 * 3")],
        failed=0,
        expansion=BinaryExpansion(7, "<=", 6),
        **kwargs,
    )


def pet_check():
    """check!( scrappy == coco )"""
    return FailedCheck(
        macro_name="check",
        file="tests/test_pets.py",
        line=10,
        column=5,
        predicates=[BinaryPredicate("scrappy", "==", "coco")],
        failed=0,
        expansion=BinaryExpansion(SCRAPPY, "==", COCO),
    )


def chain_check(failed=1):
    """check!( let Some(x) = foo && x == 3 && done )"""
    return FailedCheck(
        macro_name="check",
        file="t.py",
        line=1,
        column=1,
        predicates=[
            LetPredicate("Some(x)", "foo"),
            BinaryPredicate("x", "==", "3"),
            BoolPredicate("done"),
        ],
        failed=failed,
        expansion=BinaryExpansion(4, "==", 3),
    )


def let_check(value):
    """assert!( let Ok(_) = open_file() )"""
    return FailedCheck(
        macro_name="assert",
        file="io.py",
        line=2,
        column=9,
        predicates=[LetPredicate("Ok(_)", "open_file()")],
        failed=0,
        expansion=LetExpansion(value),
    )


def bool_check():
    """assert!( is_ready() )"""
    return FailedCheck(
        macro_name="assert",
        file="ready.py",
        line=4,
        column=1,
        predicates=[BoolPredicate("is_ready()")],
        failed=0,
        expansion=BoolExpansion(),
    )
