"""Tests for compiling individuals into callables."""

import math
import operator

import pytest

from treeforge.expression.compiler import ExpressionCompiler, compile_individual
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.nodes import CallNode, ConstantNode, LambdaNode, VariableNode

IMPLEMENTATIONS = {
    "plus": operator.add,
    "times": operator.mul,
    "sin": math.sin,
    "apply": lambda f, x: f(x),
}


class TestExpressionCompiler:
    """Test expression compilation and evaluation."""

    def test_compile_arithmetic(self):
        """Test compiling an arithmetic expression."""
        # function(x, y) plus(x, times(y, 2.0))
        body = CallNode("plus", (VariableNode("x"), CallNode("times", (VariableNode("y"), ConstantNode(2.0)))))
        func = compile_individual(GeneratedIndividual(("x", "y"), body), IMPLEMENTATIONS)

        assert func(1.0, 3.0) == 7.0

    def test_compile_closure(self):
        """Test compiling a closure argument."""
        # function(x) apply(function(x1) times(x1, x), 4.0)
        closure = LambdaNode(("x1",), CallNode("times", (VariableNode("x1"), VariableNode("x"))))
        body = CallNode("apply", (closure, ConstantNode(4.0)))
        func = compile_individual(GeneratedIndividual(("x",), body), IMPLEMENTATIONS)

        assert func(2.5) == 10.0

    def test_compile_named_function_reference(self):
        """Test passing a named function as an argument."""
        body = CallNode("apply", (VariableNode("sin"), VariableNode("x")))
        func = compile_individual(GeneratedIndividual(("x",), body), IMPLEMENTATIONS)

        assert func(0.0) == 0.0

    def test_wrong_argument_count(self):
        """Test calling with the wrong number of arguments."""
        func = compile_individual(GeneratedIndividual(("x",), VariableNode("x")), IMPLEMENTATIONS)
        with pytest.raises(TypeError):
            func(1.0, 2.0)

    def test_unknown_name(self):
        """Test evaluating an unknown operator."""
        compiler = ExpressionCompiler(IMPLEMENTATIONS)
        with pytest.raises(ValueError, match="Unknown name"):
            compiler.evaluate_node(CallNode("cos", (ConstantNode(0.0),)), {})
