"""Untyped random expression growth.

Builds expression trees without type checking:
- grow: each node independently becomes a subtree or a terminal
- full: subtrees everywhere until the depth bound, so every leaf sits at max_depth
"""

from __future__ import annotations

import random

from treeforge.creation.terminal import effective_const_prob, random_element, select_terminal
from treeforge.errors import TypeExhaustionError
from treeforge.expression.nodes import CallNode, Node
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet


def randexpr_grow(
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    subtree_prob: float = 0.5,
    cur_depth: int = 1,
    rng: random.Random | None = None,
) -> Node:
    """Create a random expression by random growth.

    In each step of growth, with probability subtree_prob an operator is
    chosen from the function set and its operands are generated recursively.
    Otherwise a terminal is created: a constant with probability const_prob,
    else an input variable. Nodes at depth max_depth are always terminals.

    Args:
        funcset: Function set
        inset: Input variable set
        conset: Constant factory set
        max_depth: Maximum expression tree depth
        const_prob: Probability of a constant when a terminal is created
        subtree_prob: Probability of creating a subtree
        cur_depth: Depth of the node being created
        rng: Random number generator

    Returns:
        Root node of the new expression
    """
    rng = rng or random.Random()
    const_prob = effective_const_prob(conset, const_prob)

    if cur_depth >= max_depth:
        return select_terminal(None, inset, conset, const_prob, rng)

    if rng.random() < subtree_prob:
        name = random_element(funcset.all, rng)
        if name is None:
            raise TypeExhaustionError(None, "an operator")
        args = [
            randexpr_grow(
                funcset, inset, conset, max_depth, const_prob, subtree_prob, cur_depth + 1, rng
            )
            for _ in range(funcset.arity(name))
        ]
        return CallNode(name=name, args=tuple(args))

    return select_terminal(None, inset, conset, const_prob, rng)


def randexpr_full(
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    rng: random.Random | None = None,
) -> Node:
    """Create a random full expression tree of depth max_depth."""
    return randexpr_grow(funcset, inset, conset, max_depth, const_prob, 1.0, rng=rng)
