"""Typed random expression growth (strongly-typed GP).

Every node created here is tagged with its type:
- value positions get an operator of matching range, or a terminal
- function positions get an existing function of exactly that type, or a
  freshly synthesized closure whose parameters are new bound variables

Fresh parameters are named ``<prefix><n>`` from a running index that is
threaded through the recursion, so no two closures created in one call share
a parameter name.
"""

from __future__ import annotations

import logging
import random
from typing import Callable

from treeforge.creation.terminal import effective_const_prob, random_element, select_terminal
from treeforge.errors import InvalidTypeError, TypeExhaustionError
from treeforge.expression.nodes import CallNode, LambdaNode, Node, VariableNode
from treeforge.expression.types import BaseType, FunctionType, SType, function_type
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet

logger = logging.getLogger(__name__)

# (range type, extended input set, next free formal index) -> (body, next free formal index)
BodyBuilder = Callable[[SType, InputVariableSet, int], "tuple[Node, int]"]


def check_type(stype: object) -> None:
    """Raise InvalidTypeError unless stype is a BaseType or FunctionType."""
    if stype is None:
        raise InvalidTypeError("Type must not be None")
    if not isinstance(stype, (BaseType, FunctionType)):
        raise InvalidTypeError(f"Invalid type requested: {stype!r}")


def check_inset_typed(inset: InputVariableSet) -> None:
    """Raise InvalidTypeError if any input variable has no type."""
    untyped = [name for name, stype in zip(inset.all, inset.types) if stype is None]
    if untyped:
        raise InvalidTypeError(f"Typed generation needs typed input variables, untyped: {untyped}")


def existing_function(stype: FunctionType, funcset: FunctionSet, rng: random.Random) -> Node:
    """Reference a named function of exactly the given function type."""
    name = random_element(funcset.by_type.get(stype.string), rng)
    if name is None:
        raise TypeExhaustionError(stype, "a function")
    return VariableNode(name=name, stype=stype)


def range_operator(stype: SType, funcset: FunctionSet, rng: random.Random) -> str:
    """Pick an operator whose range is the given type."""
    name = random_element(funcset.by_range.get(stype.string), rng)
    if name is None:
        raise TypeExhaustionError(stype, "a function of range")
    return name


def fresh_params(
    count: int, inset: InputVariableSet, formal_idx: int, formal_prefix: str
) -> tuple[tuple[str, ...], int]:
    """Allocate count parameter names not already in scope.

    Indices whose name is taken by an input variable or an enclosing
    parameter are skipped. Returns the names and the next free index.
    """
    params = []
    while len(params) < count:
        name = f"{formal_prefix}{formal_idx}"
        formal_idx += 1
        if name not in inset:
            params.append(name)
    return tuple(params), formal_idx


def synthesize_closure(
    stype: FunctionType,
    inset: InputVariableSet,
    formal_idx: int,
    formal_prefix: str,
    build_body: BodyBuilder,
) -> tuple[Node, int]:
    """Create a literal function of the given type with a generated body.

    One fresh parameter is allocated per domain type, numbered from
    formal_idx and skipping names already in scope. The body is built against
    the range type with the input set extended by the new parameters.
    """
    params, formal_idx = fresh_params(stype.arity, inset, formal_idx, formal_prefix)
    scope = inset.extend(dict(zip(params, stype.domain)))
    logger.debug(f"Synthesizing closure of type {stype.string} with params {params}")
    body, next_idx = build_body(stype.range, scope, formal_idx)
    return LambdaNode(params=params, body=body, stype=stype), next_idx


def _grow_typed(
    stype: SType,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int,
    const_prob: float,
    subtree_prob: float,
    cur_depth: int,
    formal_idx: int,
    formal_prefix: str,
    rng: random.Random,
) -> tuple[Node, int]:
    """Recursive worker returning (node, next free formal index)."""
    check_type(stype)
    const_prob = effective_const_prob(conset, const_prob)

    def grow_child(child_type: SType, scope: InputVariableSet, idx: int) -> tuple[Node, int]:
        return _grow_typed(
            child_type, funcset, scope, conset, max_depth, const_prob, subtree_prob,
            cur_depth + 1, idx, formal_prefix, rng,
        )

    if isinstance(stype, FunctionType):
        if rng.random() >= subtree_prob or cur_depth >= max_depth:
            return existing_function(stype, funcset, rng), formal_idx
        return synthesize_closure(stype, inset, formal_idx, formal_prefix, grow_child)

    if cur_depth >= max_depth:
        return select_terminal(stype, inset, conset, const_prob, rng), formal_idx

    if rng.random() < subtree_prob:
        name = range_operator(stype, funcset, rng)
        args = []
        for domain_type in funcset.signature(name).domain:
            child, formal_idx = grow_child(domain_type, inset, formal_idx)
            args.append(child)
        # The subtree over its free input variables denotes a function
        subtree_type = function_type(inset.types, stype)
        return CallNode(name=name, args=tuple(args), stype=subtree_type), formal_idx

    return select_terminal(stype, inset, conset, const_prob, rng), formal_idx


def randexpr_typed_grow(
    stype: SType,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    subtree_prob: float = 0.5,
    cur_depth: int = 1,
    formal_idx: int = 1,
    formal_prefix: str = "x",
    rng: random.Random | None = None,
) -> Node:
    """Create a random well-typed expression by random growth.

    Like randexpr_grow, but only operators, constants and input variables of
    the required type are used, and every node is tagged with its type.

    Args:
        stype: Type the created expression must have
        funcset: Function set (typed operators)
        inset: Input variable set
        conset: Constant factory set
        max_depth: Maximum expression tree depth
        const_prob: Probability of a constant when a terminal is created
        subtree_prob: Probability of creating a subtree
        cur_depth: Depth of the node being created
        formal_idx: First free index for fresh formal parameters
        formal_prefix: Name prefix for fresh formal parameters
        rng: Random number generator

    Returns:
        Root node of the new expression

    Raises:
        InvalidTypeError: If stype is None or not a type, or an input variable is untyped
        TypeExhaustionError: If no candidate of a required type exists
    """
    rng = rng or random.Random()
    check_inset_typed(inset)
    node, _ = _grow_typed(
        stype, funcset, inset, conset, max_depth, const_prob, subtree_prob,
        cur_depth, formal_idx, formal_prefix, rng,
    )
    return node


def randexpr_typed_full(
    stype: SType,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    formal_idx: int = 1,
    formal_prefix: str = "x",
    rng: random.Random | None = None,
) -> Node:
    """Create a random full well-typed expression tree of depth max_depth."""
    return randexpr_typed_grow(
        stype, funcset, inset, conset, max_depth, const_prob, 1.0,
        formal_idx=formal_idx, formal_prefix=formal_prefix, rng=rng,
    )
