"""Type descriptors for strongly-typed tree generation.

Two variants make up the closed union ``SType``:
- BaseType: an opaque value type such as ``double``
- FunctionType: an ordered domain of types plus a range type

Every type has a canonical string key (``.string``) used for registry lookups.
Function type keys look like ``(double, double) -> double``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from treeforge.errors import InvalidTypeError


@dataclass(frozen=True)
class BaseType:
    """A value type identified by its name."""

    name: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.isidentifier():
            raise InvalidTypeError(f"Invalid base type name: {self.name!r}")

    @property
    def string(self) -> str:
        return self.name

    @property
    def range_type(self) -> "BaseType":
        return self

    def __str__(self) -> str:
        return self.string


@dataclass(frozen=True)
class FunctionType:
    """A function type with ordered domain types and a range type."""

    domain: tuple["SType", ...]
    range: "SType"

    def __post_init__(self) -> None:
        # Accept any iterable for the domain but store a tuple
        object.__setattr__(self, "domain", tuple(self.domain))
        for t in (*self.domain, self.range):
            if not isinstance(t, (BaseType, FunctionType)):
                raise InvalidTypeError(f"Not a type: {t!r}")

    @property
    def arity(self) -> int:
        return len(self.domain)

    @property
    def string(self) -> str:
        domain = ", ".join(t.string for t in self.domain)
        return f"({domain}) -> {_operand_string(self.range)}"

    @property
    def range_type(self) -> "SType":
        return self.range

    def __str__(self) -> str:
        return self.string


SType = Union[BaseType, FunctionType]


def _operand_string(t: SType) -> str:
    if isinstance(t, FunctionType):
        return f"({t.string})"
    return t.string


def function_type(domain: Iterable[SType], range_type: SType) -> SType:
    """Build the function type ``domain -> range_type``.

    An empty domain yields ``range_type`` itself.
    """
    domain = tuple(domain)
    if not domain:
        return range_type
    return FunctionType(domain, range_type)


def is_type(value: object) -> bool:
    """Check whether value is a BaseType or FunctionType."""
    return isinstance(value, (BaseType, FunctionType))


def parse_type(text: str) -> SType:
    """Parse a canonical type key back into a type.

    Examples:
        >>> parse_type("double")
        BaseType(name='double')
        >>> parse_type("(double, double) -> double").arity
        2
    """
    parser = _TypeParser(text)
    result = parser.parse_type()
    parser.skip_spaces()
    if parser.pos != len(text):
        raise InvalidTypeError(f"Unexpected input at {parser.pos} in type {text!r}")
    return result


class _TypeParser:
    """Recursive-descent parser for type keys."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def skip_spaces(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def peek(self, token: str) -> bool:
        self.skip_spaces()
        return self.text.startswith(token, self.pos)

    def expect(self, token: str) -> None:
        if not self.peek(token):
            raise InvalidTypeError(
                f"Expected {token!r} at {self.pos} in type {self.text!r}"
            )
        self.pos += len(token)

    def parse_type(self) -> SType:
        if not self.peek("("):
            return self.parse_name()

        self.expect("(")
        items: list[SType] = []
        if not self.peek(")"):
            items.append(self.parse_type())
            while self.peek(","):
                self.expect(",")
                items.append(self.parse_type())
        self.expect(")")

        if self.peek("->"):
            self.expect("->")
            return FunctionType(tuple(items), self.parse_operand())
        # Parenthesised operand
        if len(items) != 1:
            raise InvalidTypeError(f"Missing '->' in type {self.text!r}")
        return items[0]

    def parse_operand(self) -> SType:
        if self.peek("("):
            return self.parse_type()
        return self.parse_name()

    def parse_name(self) -> BaseType:
        self.skip_spaces()
        start = self.pos
        while self.pos < len(self.text) and (
            self.text[self.pos].isalnum() or self.text[self.pos] == "_"
        ):
            self.pos += 1
        name = self.text[start:self.pos]
        if not name:
            raise InvalidTypeError(f"Expected a type name at {start} in type {self.text!r}")
        return BaseType(name)
