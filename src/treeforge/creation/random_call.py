"""One-shot random expressions of a given type.

``random_call`` builds a single well-typed term: a function-denoting
expression for a function type, a value-denoting one for a base type. Unlike
the typed growers, call nodes are tagged with the requested type itself.
Useful wherever a random term is needed outside population initialization,
for example as the body of a constant factory.
"""

from __future__ import annotations

import random

from treeforge.creation.terminal import effective_const_prob, select_terminal
from treeforge.creation.typed import (
    check_type,
    existing_function,
    range_operator,
    synthesize_closure,
)
from treeforge.expression.nodes import CallNode, Node
from treeforge.expression.types import FunctionType, SType
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet


def _random_call(
    stype: SType,
    funcset: FunctionSet,
    conset: ConstantFactorySet,
    inset: InputVariableSet,
    max_depth: int,
    const_prob: float,
    subtree_prob: float,
    cur_depth: int,
    formal_idx: int,
    formal_prefix: str,
    rng: random.Random,
) -> tuple[Node, int]:
    check_type(stype)

    def call_child(child_type: SType, scope: InputVariableSet, idx: int) -> tuple[Node, int]:
        return _random_call(
            child_type, funcset, conset, scope, max_depth, const_prob, subtree_prob,
            cur_depth + 1, idx, formal_prefix, rng,
        )

    make_leaf = rng.random() >= subtree_prob or cur_depth >= max_depth

    if isinstance(stype, FunctionType):
        if make_leaf:
            return existing_function(stype, funcset, rng), formal_idx
        return synthesize_closure(stype, inset, formal_idx, formal_prefix, call_child)

    if make_leaf:
        return select_terminal(stype, inset, conset, const_prob, rng), formal_idx

    name = range_operator(stype, funcset, rng)
    args = []
    for domain_type in funcset.signature(name).domain:
        child, formal_idx = call_child(domain_type, inset, formal_idx)
        args.append(child)
    return CallNode(name=name, args=tuple(args), stype=stype), formal_idx


def random_call(
    stype: SType,
    funcset: FunctionSet,
    conset: ConstantFactorySet,
    inset: InputVariableSet | None = None,
    max_depth: int = 8,
    const_prob: float = 0.2,
    subtree_prob: float = 0.5,
    cur_depth: int = 1,
    formal_idx: int = 1,
    formal_prefix: str = "x",
    rng: random.Random | None = None,
) -> Node:
    """Create a random well-typed expression of the given type.

    In each step of growth, with probability subtree_prob an operator (or,
    for a function type, a new closure) is created and its operands are
    generated recursively. Otherwise an existing function (function type) or
    a terminal (base type) is chosen.

    Args:
        stype: Type of the expression to create
        funcset: Function set
        conset: Constant factory set
        inset: Input variable set, may be empty
        max_depth: Maximum expression tree depth
        const_prob: Probability of a constant when a terminal is created
        subtree_prob: Probability of creating a subtree
        cur_depth: Depth of the node being created
        formal_idx: First free index for fresh formal parameters
        formal_prefix: Name prefix for fresh formal parameters
        rng: Random number generator

    Returns:
        A randomly generated expression tagged with its type

    Raises:
        InvalidTypeError: If stype is None or not a type
        TypeExhaustionError: If no candidate of a required type exists
    """
    rng = rng or random.Random()
    inset = inset if inset is not None else InputVariableSet()
    const_prob = effective_const_prob(conset, const_prob)
    node, _ = _random_call(
        stype, funcset, conset, inset, max_depth, const_prob, subtree_prob,
        cur_depth, formal_idx, formal_prefix, rng,
    )
    return node
