"""Exceptions raised by tree generation.

Generation never returns a partial tree: a call either produces a complete,
well-typed expression or raises one of these.
"""

from __future__ import annotations

from typing import Any


class TreeForgeError(Exception):
    """Base class for all treeforge errors."""


class TypeExhaustionError(TreeForgeError):
    """No operator, constant factory or input variable can fill a position.

    Attributes:
        stype: The required type (None on the untyped path)
        what: Which kind of candidate was missing
    """

    def __init__(self, stype: Any, what: str):
        self.stype = stype
        self.what = what
        type_string = "untyped" if stype is None else f"type {stype.string}"
        super().__init__(f"Could not find {what} of {type_string}")


class InvalidTypeError(TreeForgeError, ValueError):
    """A required type is missing, unrecognised or malformed."""


class IllTypedExpressionError(TreeForgeError):
    """An expression tree failed type verification."""
