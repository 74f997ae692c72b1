"""Compiler from generated individuals to Python callables.

Interprets the expression tree against a table of operator implementations.
Closures in the tree become Python closures; a name is resolved in the
innermost variable scope first, then in the implementation table.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.nodes import (
    CallNode,
    ConstantNode,
    LambdaNode,
    Node,
    VariableNode,
)


@dataclass
class CompiledFunction:
    """Compiled individual that can be called like a regular function."""

    individual: GeneratedIndividual
    evaluate: Callable[..., Any]

    def __call__(self, *args: Any) -> Any:
        return self.evaluate(*args)


class ExpressionCompiler:
    """Compiles individuals using a table of operator implementations."""

    def __init__(self, implementations: Mapping[str, Callable[..., Any]]):
        self.implementations = dict(implementations)

    def compile(self, individual: GeneratedIndividual) -> CompiledFunction:
        params = individual.params

        def evaluate(*args: Any) -> Any:
            if len(args) != len(params):
                raise TypeError(f"Expected {len(params)} arguments, got {len(args)}")
            return self.evaluate_node(individual.body, dict(zip(params, args)))

        return CompiledFunction(individual=individual, evaluate=evaluate)

    def evaluate_node(self, node: Node, env: Mapping[str, Any]) -> Any:
        """Recursively evaluate a node in a variable environment."""
        if isinstance(node, ConstantNode):
            return node.value

        elif isinstance(node, VariableNode):
            return self._resolve(node.name, env)

        elif isinstance(node, CallNode):
            func = self._resolve(node.name, env)
            args = [self.evaluate_node(child, env) for child in node.args]
            return func(*args)

        elif isinstance(node, LambdaNode):
            def closure(*args: Any) -> Any:
                if len(args) != len(node.params):
                    raise TypeError(f"Expected {len(node.params)} arguments, got {len(args)}")
                return self.evaluate_node(node.body, {**env, **dict(zip(node.params, args))})

            return closure

        else:
            raise TypeError(f"Unknown node type: {type(node)}")

    def _resolve(self, name: str, env: Mapping[str, Any]) -> Any:
        if name in env:
            return env[name]
        if name in self.implementations:
            return self.implementations[name]
        raise ValueError(f"Unknown name: {name}")


def compile_individual(
    individual: GeneratedIndividual,
    implementations: Mapping[str, Callable[..., Any]],
) -> CompiledFunction:
    """Convenience function to compile an individual."""
    return ExpressionCompiler(implementations).compile(individual)
