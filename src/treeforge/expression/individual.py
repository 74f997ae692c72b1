"""Generated individuals: complete callable units for the evolutionary loop.

An individual pairs an ordered formal-parameter list with a body expression:
    function(x, y) plus(x, times(y, 2.5))

Individuals are immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
import hashlib

from treeforge.expression.nodes import Node, count_nodes, get_depth
from treeforge.expression.types import SType


@dataclass(frozen=True)
class GeneratedIndividual:
    """Randomly generated function.

    Attributes:
        params: Formal parameter names, taken from the input variable set
        body: Root of the body expression tree
        stype: Function type of the individual (typed generation only)
    """

    params: tuple[str, ...]
    body: Node
    stype: SType | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def size(self) -> int:
        """Get total number of nodes in the body."""
        return count_nodes(self.body)

    @property
    def depth(self) -> int:
        """Get body depth."""
        return get_depth(self.body)

    @property
    def formula(self) -> str:
        """Get string representation of the function."""
        return f"function({', '.join(self.params)}) {self.body.to_string()}"

    @property
    def hash(self) -> str:
        """Get a hash of the formula for deduplication."""
        return hashlib.md5(self.formula.encode()).hexdigest()[:12]

    def to_dict(self) -> dict:
        return {
            "params": list(self.params),
            "body": self.body.to_string(),
            "type": self.stype.string if self.stype is not None else None,
            "depth": self.depth,
            "size": self.size,
        }

    def __str__(self) -> str:
        return self.formula

    def __repr__(self) -> str:
        return f"GeneratedIndividual({self.formula}, size={self.size}, depth={self.depth})"
