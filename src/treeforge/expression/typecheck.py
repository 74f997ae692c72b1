"""Type verification for tagged expression trees.

Re-derives the type of every node from the function set signatures and the
variable scope, and compares it against the node's tag.
"""

from __future__ import annotations

from treeforge.errors import IllTypedExpressionError
from treeforge.expression.nodes import (
    CallNode,
    ConstantNode,
    LambdaNode,
    Node,
    VariableNode,
    value_type,
)
from treeforge.expression.types import FunctionType, SType
from treeforge.primitives.sets import FunctionSet, InputVariableSet


def check_well_typed(
    node: Node,
    funcset: FunctionSet,
    inset: InputVariableSet | None = None,
    expected: SType | None = None,
) -> bool:
    """Verify that a typed expression tree is well-typed.

    Args:
        node: Root of the tree
        funcset: Function set the tree was generated from
        inset: Input variables in scope at the root
        expected: Type the root must evaluate to, if known

    Returns:
        True if the tree is well-typed

    Raises:
        IllTypedExpressionError: On the first ill-typed node
    """
    _check(node, funcset, inset if inset is not None else InputVariableSet())
    if expected is not None and value_type(node) != expected:
        raise IllTypedExpressionError(
            f"{node.to_string()} has type {_type_string(value_type(node))}, "
            f"expected {expected.string}"
        )
    return True


def is_well_typed(
    node: Node,
    funcset: FunctionSet,
    inset: InputVariableSet | None = None,
    expected: SType | None = None,
) -> bool:
    """Check well-typedness without raising."""
    try:
        return check_well_typed(node, funcset, inset, expected)
    except IllTypedExpressionError:
        return False


def _type_string(stype: SType | None) -> str:
    return "untyped" if stype is None else stype.string


def _check(node: Node, funcset: FunctionSet, scope: InputVariableSet) -> None:
    if node.stype is None:
        raise IllTypedExpressionError(f"Node {node.to_string()} is not tagged with a type")

    if isinstance(node, ConstantNode):
        return

    if isinstance(node, VariableNode):
        if node.name in scope:
            actual = scope.type_of(node.name)
        elif node.name in funcset:
            actual = funcset.signature(node.name)
        else:
            raise IllTypedExpressionError(f"Unbound name: {node.name}")
        if actual != node.stype:
            raise IllTypedExpressionError(
                f"{node.name} has type {_type_string(actual)}, tagged {node.stype.string}"
            )
        return

    if isinstance(node, CallNode):
        if node.name not in funcset:
            raise IllTypedExpressionError(f"Unknown operator: {node.name}")
        sig = funcset.signature(node.name)
        if len(node.args) != sig.arity:
            raise IllTypedExpressionError(
                f"{node.name} expects {sig.arity} arguments, got {len(node.args)}"
            )
        for i, (child, domain_type) in enumerate(zip(node.args, sig.domain)):
            _check(child, funcset, scope)
            if value_type(child) != domain_type:
                raise IllTypedExpressionError(
                    f"Argument {i + 1} of {node.name} has type "
                    f"{_type_string(value_type(child))}, expected {domain_type.string}"
                )
        if value_type(node) != sig.range:
            raise IllTypedExpressionError(
                f"{node.name} returns {sig.range.string}, tagged {node.stype.string}"
            )
        return

    if isinstance(node, LambdaNode):
        if not isinstance(node.stype, FunctionType) or node.stype.arity != len(node.params):
            raise IllTypedExpressionError(
                f"Closure with {len(node.params)} parameters tagged {node.stype.string}"
            )
        inner = scope.extend(dict(zip(node.params, node.stype.domain)))
        _check(node.body, funcset, inner)
        if value_type(node.body) != node.stype.range:
            raise IllTypedExpressionError(
                f"Closure body has type {_type_string(value_type(node.body))}, "
                f"expected {node.stype.range.string}"
            )
        return

    raise IllTypedExpressionError(f"Unknown node type: {type(node)}")
