"""Tests for untyped grow and full generation."""

import random

import pytest

from treeforge.creation.untyped import randexpr_full, randexpr_grow
from treeforge.errors import TypeExhaustionError
from treeforge.expression.nodes import (
    CallNode,
    ConstantNode,
    VariableNode,
    collect_nodes,
    get_depth,
    leaf_depths,
)
from treeforge.primitives.sets import ConstantFactorySet, FunctionSet, InputVariableSet


@pytest.fixture
def inset():
    return InputVariableSet(["x", "y"])


@pytest.fixture
def conset():
    return ConstantFactorySet([lambda: 0.5])


class TestRandexprGrow:
    """Test grow mode."""

    @pytest.mark.parametrize("max_depth", [1, 2, 4, 7])
    def test_depth_bound(self, untyped_funcset, inset, conset, max_depth):
        """Test that trees never exceed max_depth."""
        rng = random.Random(42)
        for _ in range(50):
            node = randexpr_grow(untyped_funcset, inset, conset, max_depth, rng=rng)
            assert get_depth(node) <= max_depth

    def test_call_nodes_match_arity(self, untyped_funcset, inset, conset):
        """Test that calls get as many arguments as the arity."""
        rng = random.Random(7)
        for _ in range(20):
            node = randexpr_grow(untyped_funcset, inset, conset, 5, subtree_prob=0.8, rng=rng)
            for n in collect_nodes(node):
                if isinstance(n, CallNode):
                    assert len(n.args) == untyped_funcset.arity(n.name)

    def test_no_type_tags(self, untyped_funcset, inset, conset):
        """Test that untyped nodes carry no type."""
        node = randexpr_grow(untyped_funcset, inset, conset, 5, rng=random.Random(0))
        assert all(n.stype is None for n in collect_nodes(node))

    def test_terminal_when_no_subtree(self, untyped_funcset, inset, conset):
        """Test a terminal root when subtrees are disabled."""
        node = randexpr_grow(untyped_funcset, inset, conset, 5, subtree_prob=0.0, rng=random.Random(0))
        assert isinstance(node, (VariableNode, ConstantNode))

    def test_empty_constant_set_yields_no_constants(self, untyped_funcset, inset):
        """Test that an empty constant set means no constants."""
        rng = random.Random(3)
        for _ in range(20):
            node = randexpr_grow(untyped_funcset, inset, ConstantFactorySet(), 5, const_prob=1.0, rng=rng)
            assert not any(isinstance(n, ConstantNode) for n in collect_nodes(node))

    def test_seeded_generation_is_reproducible(self, untyped_funcset, inset, conset):
        """Test that a seeded generator reproduces the tree."""
        a = randexpr_grow(untyped_funcset, inset, conset, 6, rng=random.Random(11))
        b = randexpr_grow(untyped_funcset, inset, conset, 6, rng=random.Random(11))
        assert a == b

    def test_empty_function_set(self, inset, conset):
        """Test the error when there are no operators."""
        with pytest.raises(TypeExhaustionError):
            randexpr_grow(FunctionSet(), inset, conset, 3, subtree_prob=1.0, rng=random.Random(0))


class TestRandexprFull:
    """Test full mode."""

    @pytest.mark.parametrize("max_depth", [1, 3, 5])
    def test_every_leaf_at_max_depth(self, inset, conset, max_depth):
        """Test that full trees have all leaves at max_depth."""
        funcset = FunctionSet(arities={"add": 2, "mul": 2})
        rng = random.Random(5)
        for _ in range(10):
            node = randexpr_full(funcset, inset, conset, max_depth, rng=rng)
            assert set(leaf_depths(node)) == {max_depth}

    def test_full_binary_tree_size(self, inset, conset):
        """Test the node count of a full binary tree."""
        funcset = FunctionSet(arities={"add": 2})
        node = randexpr_full(funcset, inset, conset, 4, rng=random.Random(0))
        assert len(collect_nodes(node)) == 2 ** 4 - 1
