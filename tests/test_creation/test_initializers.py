"""Tests for function initializers."""

import random

import pytest

from treeforge.creation.initializers import (
    randfunc,
    randfunc_ramped_half_and_half,
    randfunc_typed,
    randfunc_typed_ramped_half_and_half,
)
from treeforge.creation.untyped import randexpr_full
from treeforge.errors import InvalidTypeError
from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.nodes import VariableNode, leaf_depths
from treeforge.expression.types import FunctionType
from treeforge.primitives.sets import ConstantFactorySet, InputVariableSet


def spy_factory(label, calls):
    """Expression factory that records which mode was used."""
    def factory(*args, **kwargs):
        calls.append(label)
        return VariableNode("x")
    return factory


class TestRandfunc:
    """Test untyped initializers."""

    def test_params_come_from_input_set(self, untyped_funcset):
        """Test that formal parameters are the input variables."""
        inset = InputVariableSet(["x", "y"])
        individual = randfunc(untyped_funcset, inset, ConstantFactorySet([lambda: 1.0]), 4, rng=random.Random(0))

        assert isinstance(individual, GeneratedIndividual)
        assert individual.params == ("x", "y")
        assert individual.stype is None
        assert individual.depth <= 4
        assert individual.formula.startswith("function(x, y) ")

    def test_custom_expression_factory(self, untyped_funcset):
        """Test plugging in full mode as the body factory."""
        inset = InputVariableSet(["x"])
        individual = randfunc(
            untyped_funcset, inset, ConstantFactorySet(), 3,
            expr_factory=randexpr_full, rng=random.Random(0),
        )
        assert set(leaf_depths(individual.body)) == {3}

    def test_ramped_coin(self, untyped_funcset, scripted):
        """Test full mode exactly when the draw exceeds 0.5."""
        calls = []
        grow, full = spy_factory("grow", calls), spy_factory("full", calls)
        rng = scripted([0.7, 0.2, 0.51, 0.5])
        inset = InputVariableSet(["x"])

        for _ in range(4):
            randfunc_ramped_half_and_half(
                untyped_funcset, inset, ConstantFactorySet(), grow=grow, full=full, rng=rng
            )

        assert calls == ["full", "grow", "full", "grow"]

    def test_ramped_produces_both_modes(self, untyped_funcset):
        """Test that ramped initialization mixes both modes."""
        calls = []
        grow, full = spy_factory("grow", calls), spy_factory("full", calls)
        rng = random.Random(0)
        for _ in range(50):
            randfunc_ramped_half_and_half(
                untyped_funcset, InputVariableSet(["x"]), ConstantFactorySet(),
                grow=grow, full=full, rng=rng,
            )
        assert set(calls) == {"grow", "full"}


class TestRandfuncTyped:
    """Test typed initializers."""

    def test_individual_type(self, double, arithmetic_funcset, xy_inset, double_conset):
        """Test the function type of a typed individual."""
        individual = randfunc_typed(double, arithmetic_funcset, xy_inset, double_conset, 4, rng=random.Random(0))

        assert individual.params == ("x", "y")
        assert individual.stype == FunctionType((double, double), double)
        assert individual.to_dict()["type"] == "(double, double) -> double"

    def test_empty_input_set(self, double, arithmetic_funcset, double_conset):
        """Test a typed function with no parameters."""
        individual = randfunc_typed(
            double, arithmetic_funcset, InputVariableSet(), double_conset, 3, rng=random.Random(0)
        )

        assert individual.params == ()
        assert individual.stype == FunctionType((), double)
        assert individual.formula.startswith("function() ")

    def test_typed_ramped_coin(self, double, arithmetic_funcset, xy_inset, double_conset, scripted):
        """Test the typed ramped coin."""
        calls = []
        grow, full = spy_factory("grow", calls), spy_factory("full", calls)
        rng = scripted([0.9, 0.1])

        for _ in range(2):
            randfunc_typed_ramped_half_and_half(
                double, arithmetic_funcset, xy_inset, double_conset, grow=grow, full=full, rng=rng
            )

        assert calls == ["full", "grow"]

    @pytest.mark.parametrize("seed", range(5))
    def test_typed_ramped_respects_depth(self, double, arithmetic_funcset, xy_inset, double_conset, seed):
        """Test depth bound of typed ramped individuals."""
        individual = randfunc_typed_ramped_half_and_half(
            double, arithmetic_funcset, xy_inset, double_conset, 4, rng=random.Random(seed)
        )
        assert individual.depth <= 4

    def test_untyped_input_variable(self, double, arithmetic_funcset, double_conset):
        """Typed functions need typed formal parameters."""
        with pytest.raises(InvalidTypeError, match="untyped"):
            randfunc_typed(double, arithmetic_funcset, InputVariableSet(["x"]), double_conset)
