"""Function initializers: complete individuals for population initialization.

Each initializer takes its formal parameters from the input variable set and
generates the body with a pluggable expression factory. The ramped
half-and-half variants flip a fair coin per individual between full and grow
mode, giving a population of mixed shapes and sizes.
"""

from __future__ import annotations

import random
from typing import Callable

from treeforge.creation.typed import check_inset_typed, randexpr_typed_full, randexpr_typed_grow
from treeforge.creation.untyped import randexpr_full, randexpr_grow
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.nodes import Node
from treeforge.expression.types import FunctionType, SType
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet

ExprFactory = Callable[..., Node]


def randfunc(
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    expr_factory: ExprFactory = randexpr_grow,
    rng: random.Random | None = None,
) -> GeneratedIndividual:
    """Create a function with a random expression as its body.

    Args:
        funcset: Function set
        inset: Input variable set, also the function's formal parameters
        conset: Constant factory set
        max_depth: Maximum expression tree depth
        const_prob: Probability of a constant when a terminal is created
        expr_factory: Untyped expression factory for the body
        rng: Random number generator

    Returns:
        A new GeneratedIndividual
    """
    rng = rng or random.Random()
    body = expr_factory(funcset, inset, conset, max_depth, const_prob=const_prob, rng=rng)
    return GeneratedIndividual(params=inset.all, body=body)


def randfunc_ramped_half_and_half(
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    grow: ExprFactory = randexpr_grow,
    full: ExprFactory = randexpr_full,
    rng: random.Random | None = None,
) -> GeneratedIndividual:
    """Create a random function, full mode if a uniform draw exceeds 0.5 else grow mode."""
    rng = rng or random.Random()
    factory = full if rng.random() > 0.5 else grow
    return randfunc(funcset, inset, conset, max_depth, const_prob, expr_factory=factory, rng=rng)


def randfunc_typed(
    stype: SType,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    expr_factory: ExprFactory = randexpr_typed_grow,
    rng: random.Random | None = None,
) -> GeneratedIndividual:
    """Create a well-typed function with a random expression as its body.

    Args:
        stype: Range type of the function to create
        funcset: Function set
        inset: Typed input variable set, also the function's formal parameters
        conset: Constant factory set
        max_depth: Maximum expression tree depth
        const_prob: Probability of a constant when a terminal is created
        expr_factory: Typed expression factory for the body
        rng: Random number generator

    Returns:
        A new GeneratedIndividual of type ``(input types) -> stype``

    Raises:
        InvalidTypeError: If an input variable has no type
    """
    check_inset_typed(inset)
    rng = rng or random.Random()
    body = expr_factory(stype, funcset, inset, conset, max_depth, const_prob=const_prob, rng=rng)
    return GeneratedIndividual(
        params=inset.all,
        body=body,
        stype=FunctionType(inset.types, stype),
    )


def randfunc_typed_ramped_half_and_half(
    stype: SType,
    funcset: FunctionSet,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    max_depth: int = 8,
    const_prob: float = 0.2,
    grow: ExprFactory = randexpr_typed_grow,
    full: ExprFactory = randexpr_typed_full,
    rng: random.Random | None = None,
) -> GeneratedIndividual:
    """Typed ramped half-and-half: full mode if a uniform draw exceeds 0.5 else grow mode."""
    rng = rng or random.Random()
    factory = full if rng.random() > 0.5 else grow
    return randfunc_typed(
        stype, funcset, inset, conset, max_depth, const_prob, expr_factory=factory, rng=rng
    )
