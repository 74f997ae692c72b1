"""Registries of the building blocks available to tree generation.

Each registry exposes:
- all: every member, in registration order
- by_type: type key -> members whose type matches exactly
- by_range: range type key -> members whose range type matches

Registries are immutable once constructed. Input variable sets grow by
``extend``, which returns a new set sharing its parent's entries.
"""

from __future__ import annotations

from functools import cached_property
from typing import Any, Callable, Iterable, Mapping

from treeforge.expression.types import FunctionType, SType, is_type
from treeforge.errors import InvalidTypeError

ConstantFactory = Callable[[], Any]


def _index(members: Iterable[tuple[Any, SType | None]], key: Callable[[SType], str]) -> dict[str, tuple]:
    index: dict[str, list] = {}
    for member, stype in members:
        if stype is not None:
            index.setdefault(key(stype), []).append(member)
    return {k: tuple(v) for k, v in index.items()}


class FunctionSet:
    """Operators available for internal call nodes.

    Typed operators are registered with their FunctionType signature, untyped
    ones with just an arity. Untyped generation may use both.
    """

    def __init__(
        self,
        signatures: Mapping[str, FunctionType] | None = None,
        arities: Mapping[str, int] | None = None,
    ):
        self._signatures: dict[str, FunctionType] = dict(signatures or {})
        self._arities: dict[str, int] = {}

        for name, sig in self._signatures.items():
            if not isinstance(sig, FunctionType):
                raise InvalidTypeError(f"Operator {name} needs a function type, got {sig!r}")
            self._arities[name] = sig.arity

        for name, arity in (arities or {}).items():
            if arity < 0:
                raise ValueError(f"Arity of {name} must be non-negative, got {arity}")
            if name in self._arities and self._arities[name] != arity:
                raise ValueError(
                    f"Arity {arity} of {name} conflicts with its signature "
                    f"{self._signatures[name].string}"
                )
            self._arities[name] = arity

    @property
    def all(self) -> tuple[str, ...]:
        return tuple(self._arities)

    @cached_property
    def by_type(self) -> dict[str, tuple[str, ...]]:
        return _index(self._signatures.items(), lambda t: t.string)

    @cached_property
    def by_range(self) -> dict[str, tuple[str, ...]]:
        return _index(self._signatures.items(), lambda t: t.range_type.string)

    def arity(self, name: str) -> int:
        """Get the number of arguments an operator accepts."""
        return self._arities[name]

    def signature(self, name: str) -> FunctionType:
        """Get the type signature of a typed operator."""
        return self._signatures[name]

    def __contains__(self, name: object) -> bool:
        return name in self._arities

    def __len__(self) -> int:
        return len(self._arities)

    def __repr__(self) -> str:
        return f"FunctionSet({', '.join(self.all)})"


class ConstantFactorySet:
    """Zero-argument callables that each produce one fresh constant.

    Members are given as bare factories (untyped) or (factory, type) pairs.
    """

    def __init__(self, factories: Iterable[ConstantFactory | tuple[ConstantFactory, SType | None]] = ()):
        entries: list[tuple[ConstantFactory, SType | None]] = []
        for entry in factories:
            factory, stype = entry if isinstance(entry, tuple) else (entry, None)
            if not callable(factory):
                raise TypeError(f"Constant factory must be callable, got {factory!r}")
            if stype is not None and not is_type(stype):
                raise InvalidTypeError(f"Not a type: {stype!r}")
            entries.append((factory, stype))
        self._entries = tuple(entries)

    @property
    def all(self) -> tuple[ConstantFactory, ...]:
        return tuple(f for f, _ in self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @cached_property
    def by_type(self) -> dict[str, tuple[ConstantFactory, ...]]:
        return _index(self._entries, lambda t: t.string)

    @cached_property
    def by_range(self) -> dict[str, tuple[ConstantFactory, ...]]:
        return _index(self._entries, lambda t: t.range_type.string)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ConstantFactorySet(n={len(self)})"


class InputVariableSet:
    """Named terminal references: input variables and bound formal parameters.

    Given as a mapping of name -> type (None for untyped) or a plain iterable
    of untyped names.
    """

    def __init__(
        self,
        variables: Mapping[str, SType | None] | Iterable[str] = (),
        parent: "InputVariableSet | None" = None,
    ):
        if isinstance(variables, Mapping):
            own = dict(variables)
        else:
            own = {name: None for name in variables}
        for name, stype in own.items():
            if stype is not None and not is_type(stype):
                raise InvalidTypeError(f"Input variable {name} has invalid type {stype!r}")
        self._own = own
        self._parent = parent

    def extend(self, bound: Mapping[str, SType | None]) -> "InputVariableSet":
        """Return a new set holding these variables plus the newly bound ones."""
        return InputVariableSet(bound, parent=self)

    @cached_property
    def _entries(self) -> tuple[tuple[str, SType | None], ...]:
        inherited = self._parent._entries if self._parent is not None else ()
        return inherited + tuple(self._own.items())

    @property
    def all(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._entries)

    @property
    def types(self) -> tuple[SType | None, ...]:
        return tuple(stype for _, stype in self._entries)

    @cached_property
    def by_type(self) -> dict[str, tuple[str, ...]]:
        return _index(self._entries, lambda t: t.string)

    @cached_property
    def by_range(self) -> dict[str, tuple[str, ...]]:
        return _index(self._entries, lambda t: t.range_type.string)

    def type_of(self, name: str) -> SType | None:
        for var, stype in reversed(self._entries):
            if var == name:
                return stype
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return name in self.all

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"InputVariableSet({', '.join(self.all)})"
