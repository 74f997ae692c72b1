"""
treeforge: Random program tree generation for tree-based genetic programming.

Builds expression trees from a palette of operators, constant factories and
input variables, untyped or under a static type system, with grow, full and
ramped half-and-half initialization.
"""

__version__ = "0.1.0"

from treeforge.config import GenerationConfig
from treeforge.errors import (
    IllTypedExpressionError,
    InvalidTypeError,
    TreeForgeError,
    TypeExhaustionError,
)
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.types import BaseType, FunctionType, function_type, parse_type
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet
from treeforge.creation import (
    randexpr_full,
    randexpr_grow,
    randexpr_typed_full,
    randexpr_typed_grow,
    randfunc,
    randfunc_ramped_half_and_half,
    randfunc_typed,
    randfunc_typed_ramped_half_and_half,
    random_call,
    select_terminal,
)

__all__ = [
    "__version__",
    "GenerationConfig",
    "TreeForgeError",
    "TypeExhaustionError",
    "InvalidTypeError",
    "IllTypedExpressionError",
    "GeneratedIndividual",
    "BaseType",
    "FunctionType",
    "function_type",
    "parse_type",
    "FunctionSet",
    "ConstantFactorySet",
    "InputVariableSet",
    "randexpr_grow",
    "randexpr_full",
    "randexpr_typed_grow",
    "randexpr_typed_full",
    "randfunc",
    "randfunc_ramped_half_and_half",
    "randfunc_typed",
    "randfunc_typed_ramped_half_and_half",
    "random_call",
    "select_terminal",
]
