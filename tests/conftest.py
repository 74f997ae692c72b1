"""
Pytest fixtures for treeforge tests.

Palettes are small and deterministic; random streams are seeded or scripted
so scenarios are reproducible.
"""

import random

import pytest

from treeforge.expression.types import BaseType, FunctionType
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet


class ScriptedRandom(random.Random):
    """Random generator whose uniform draws come from a fixed script.

    Element choices still come from the seeded generator.
    """

    def __init__(self, draws, seed=0):
        super().__init__(seed)
        self.draws = list(draws)

    def random(self):
        return self.draws.pop(0)

    # Overriding random() alone makes choice() draw through random()
    def getrandbits(self, k):
        return super().getrandbits(k)


@pytest.fixture
def double():
    return BaseType("double")


@pytest.fixture
def boolean():
    return BaseType("bool")


@pytest.fixture
def unary(double):
    """Type (double) -> double."""
    return FunctionType((double,), double)


@pytest.fixture
def arithmetic_funcset(double):
    """Binary arithmetic operators over doubles."""
    binary = FunctionType((double, double), double)
    return FunctionSet({"plus": binary, "minus": binary, "times": binary})


@pytest.fixture
def higher_order_funcset(double, unary):
    """Arithmetic plus a higher-order operator and a named unary function."""
    return FunctionSet({
        "plus": FunctionType((double, double), double),
        "sin": unary,
        "apply": FunctionType((unary, double), double),
    })


@pytest.fixture
def double_conset(double):
    return ConstantFactorySet([(lambda: 1.0, double)])


@pytest.fixture
def xy_inset(double):
    return InputVariableSet({"x": double, "y": double})


@pytest.fixture
def untyped_funcset():
    return FunctionSet(arities={"add": 2, "mul": 2, "neg": 1})


@pytest.fixture
def scripted():
    """Factory for scripted random streams."""
    return ScriptedRandom
