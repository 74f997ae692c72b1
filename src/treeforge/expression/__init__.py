"""Expression tree representation for generated programs."""

from treeforge.expression.types import BaseType, FunctionType, SType, function_type, parse_type
from treeforge.expression.nodes import (
    Node,
    ConstantNode,
    VariableNode,
    CallNode,
    LambdaNode,
)
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.compiler import ExpressionCompiler, compile_individual
from treeforge.expression.typecheck import check_well_typed, is_well_typed

__all__ = [
    "BaseType",
    "FunctionType",
    "SType",
    "function_type",
    "parse_type",
    "Node",
    "ConstantNode",
    "VariableNode",
    "CallNode",
    "LambdaNode",
    "GeneratedIndividual",
    "ExpressionCompiler",
    "compile_individual",
    "check_well_typed",
    "is_well_typed",
]
