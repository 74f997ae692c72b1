"""Expression tree nodes for generated programs.

Implements immutable tree nodes:
- ConstantNode: Literal produced by a constant factory (e.g., 1.0)
- VariableNode: Reference to an input variable, bound parameter or named function
- CallNode: Operator applied to child expressions (e.g., plus(x, 1.0))
- LambdaNode: Literal function with formal parameters and a body

Nodes built by the typed growers carry their type in ``stype``; untyped
nodes leave it as None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import Any

from treeforge.expression.types import SType


@dataclass(frozen=True)
class Node(ABC):
    """Abstract base class for expression tree nodes."""

    @property
    @abstractmethod
    def children(self) -> tuple["Node", ...]:
        """Get the direct sub-expressions of this node."""
        pass

    @abstractmethod
    def to_string(self) -> str:
        """Convert node to string representation."""
        pass

    @property
    def arity(self) -> int:
        return len(self.children)

    @property
    def is_terminal(self) -> bool:
        return not self.children

    def with_type(self, stype: SType | None) -> "Node":
        """Return a copy of this node tagged with stype."""
        return replace(self, stype=stype)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class ConstantNode(Node):
    """Constant literal created by invoking a constant factory."""

    value: Any = None
    stype: SType | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    def to_string(self) -> str:
        if isinstance(self.value, str):
            return repr(self.value)
        return str(self.value)


@dataclass(frozen=True)
class VariableNode(Node):
    """Reference to a named value: input variable, formal parameter or function."""

    name: str = ""
    stype: SType | None = None

    @property
    def children(self) -> tuple[Node, ...]:
        return ()

    def to_string(self) -> str:
        return self.name


@dataclass(frozen=True)
class CallNode(Node):
    """Operator call node.

    Represents calls like plus(x, 1.0) or map(function(x1) sin(x1), xs).
    """

    name: str = ""
    args: tuple[Node, ...] = ()
    stype: SType | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def children(self) -> tuple[Node, ...]:
        return self.args

    def to_string(self) -> str:
        return f"{self.name}({', '.join(c.to_string() for c in self.args)})"


@dataclass(frozen=True)
class LambdaNode(Node):
    """Literal function expression synthesized for a function-typed position."""

    params: tuple[str, ...] = ()
    body: Node | None = None
    stype: SType | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        if self.body is None:
            raise ValueError("LambdaNode requires a body")

    @property
    def children(self) -> tuple[Node, ...]:
        return (self.body,)

    def to_string(self) -> str:
        return f"function({', '.join(self.params)}) {self.body.to_string()}"


def count_nodes(node: Node) -> int:
    """Count total nodes in a subtree."""
    return 1 + sum(count_nodes(c) for c in node.children)


def get_depth(node: Node) -> int:
    """Get the depth of a subtree as the longest root-to-leaf node count."""
    if node.children:
        return 1 + max(get_depth(c) for c in node.children)
    return 1


def collect_nodes(node: Node) -> list[Node]:
    """Collect all nodes in a subtree (pre-order traversal)."""
    result = [node]
    for child in node.children:
        result.extend(collect_nodes(child))
    return result


def leaf_depths(node: Node, depth: int = 1) -> list[int]:
    """Get the depth of every leaf, in pre-order."""
    if not node.children:
        return [depth]
    depths: list[int] = []
    for child in node.children:
        depths.extend(leaf_depths(child, depth + 1))
    return depths


def collect_params(node: Node) -> list[str]:
    """Collect formal parameter names introduced by every LambdaNode in a subtree."""
    return [p for n in collect_nodes(node) if isinstance(n, LambdaNode) for p in n.params]


def value_type(node: Node) -> SType | None:
    """Get the type of the value a node evaluates to.

    Call nodes built by the typed grower are tagged with the function type
    ``(input variable types) -> result``; their value type is its range.
    """
    if node.stype is None:
        return None
    if isinstance(node, CallNode):
        return node.stype.range_type
    return node.stype
