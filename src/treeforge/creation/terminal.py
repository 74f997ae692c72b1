"""Terminal selection: constants versus input variables.

A terminal is either a fresh constant (produced by invoking a constant
factory) or a reference to an input variable. Which class is tried first is
decided by the constant probability; on the typed path the other class is the
fallback when the first has no candidate of the required type.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable, Sequence, TypeVar

from treeforge.errors import TypeExhaustionError
from treeforge.expression.nodes import ConstantNode, Node, VariableNode
from treeforge.expression.types import SType
from treeforge.primitives.sets import ConstantFactorySet, InputVariableSet

logger = logging.getLogger(__name__)

T = TypeVar("T")


def random_element(candidates: Sequence[T] | None, rng: random.Random) -> T | None:
    """Pick a uniformly random element, or None if there are no candidates."""
    if not candidates:
        return None
    return rng.choice(candidates)


def effective_const_prob(conset: ConstantFactorySet, const_prob: float) -> float:
    """Force the constant probability to 0 when there are no constant factories."""
    return 0.0 if conset.is_empty else const_prob


def make_constant(factory: Callable[[], Any], stype: SType | None = None) -> Node:
    """Invoke a constant factory and wrap its result as a terminal node."""
    value = factory()
    if isinstance(value, Node):
        return value.with_type(stype) if stype is not None else value
    return ConstantNode(value=value, stype=stype)


def _constant_of(
    stype: SType, inset: InputVariableSet, conset: ConstantFactorySet, rng: random.Random
) -> Node | None:
    factory = random_element(conset.by_type.get(stype.string), rng)
    if factory is None:
        return None
    return make_constant(factory, stype)


def _variable_of(
    stype: SType, inset: InputVariableSet, conset: ConstantFactorySet, rng: random.Random
) -> Node | None:
    name = random_element(inset.by_type.get(stype.string), rng)
    if name is None:
        return None
    return VariableNode(name=name, stype=stype)


TerminalStrategy = Callable[
    [SType, InputVariableSet, ConstantFactorySet, random.Random], "Node | None"
]

CONSTANT_FIRST: tuple[TerminalStrategy, ...] = (_constant_of, _variable_of)
VARIABLE_FIRST: tuple[TerminalStrategy, ...] = (_variable_of, _constant_of)


def select_terminal(
    stype: SType | None,
    inset: InputVariableSet,
    conset: ConstantFactorySet,
    const_prob: float,
    rng: random.Random | None = None,
) -> Node:
    """Create a random terminal node.

    With probability const_prob a constant factory is invoked, otherwise an
    input variable is chosen. With a type, only candidates of exactly that
    type are considered and the node is tagged with it; when the preferred
    class has no candidate the other class is tried. Without a type, the
    choice is made from the unfiltered sets with no fallback.

    Args:
        stype: Required type, or None for untyped generation
        inset: Input variable set
        conset: Constant factory set
        const_prob: Probability of creating a constant
        rng: Random number generator

    Returns:
        A ConstantNode or VariableNode

    Raises:
        TypeExhaustionError: If no terminal can be produced
    """
    rng = rng or random.Random()
    want_constant = rng.random() < const_prob

    if stype is None:
        if want_constant:
            factory = random_element(conset.all, rng)
            if factory is None:
                raise TypeExhaustionError(None, "a constant factory")
            return make_constant(factory)
        name = random_element(inset.all, rng)
        if name is None:
            raise TypeExhaustionError(None, "an input variable")
        return VariableNode(name=name)

    strategies = CONSTANT_FIRST if want_constant else VARIABLE_FIRST
    for i, strategy in enumerate(strategies):
        node = strategy(stype, inset, conset, rng)
        if node is not None:
            if i > 0:
                logger.debug(f"Terminal fallback to {strategy.__name__} for type {stype.string}")
            return node

    raise TypeExhaustionError(stype, "a constant factory or input variable")
