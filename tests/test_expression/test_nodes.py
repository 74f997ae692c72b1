"""Tests for expression nodes and individuals."""

from treeforge.expression.individual import GeneratedIndividual
from treeforge.expression.nodes import (
    CallNode,
    ConstantNode,
    LambdaNode,
    VariableNode,
    collect_nodes,
    collect_params,
    count_nodes,
    get_depth,
    leaf_depths,
    value_type,
)
from treeforge.expression.types import FunctionType


class TestNodes:
    """Test node structure helpers."""

    def test_terminal_nodes(self):
        """Test constant and variable nodes."""
        assert ConstantNode(1.0).to_string() == "1.0"
        assert ConstantNode("a").to_string() == "'a'"
        assert VariableNode("x").to_string() == "x"
        assert VariableNode("x").is_terminal
        assert get_depth(VariableNode("x")) == 1

    def test_call_node(self):
        """Test call node children and rendering."""
        # plus(x, times(y, 2.0))
        node = CallNode("plus", (VariableNode("x"), CallNode("times", [VariableNode("y"), ConstantNode(2.0)])))

        assert node.to_string() == "plus(x, times(y, 2.0))"
        assert node.arity == 2
        assert count_nodes(node) == 5
        assert get_depth(node) == 3
        assert leaf_depths(node) == [2, 3, 3]
        assert [n.to_string() for n in collect_nodes(node)][:2] == ["plus(x, times(y, 2.0))", "x"]

    def test_lambda_node(self):
        """Test closure rendering."""
        node = LambdaNode(("x1", "x2"), CallNode("plus", (VariableNode("x1"), VariableNode("x2"))))

        assert node.to_string() == "function(x1, x2) plus(x1, x2)"
        assert get_depth(node) == 3
        assert collect_params(node) == ["x1", "x2"]

    def test_with_type(self, double):
        """Test retagging a node."""
        node = ConstantNode(1.0)
        tagged = node.with_type(double)

        assert tagged.stype == double
        assert node.stype is None  # Immutable

    def test_value_type(self, double):
        """Test the value type of tagged nodes."""
        call = CallNode("plus", (), stype=FunctionType((double,), double))
        assert value_type(call) == double
        assert value_type(VariableNode("x", stype=double)) == double
        assert value_type(VariableNode("x")) is None


class TestGeneratedIndividual:
    """Test GeneratedIndividual."""

    def test_formula_and_shape(self):
        """Test individual formula, size and depth."""
        body = CallNode("plus", (VariableNode("x"), ConstantNode(1.0)))
        ind = GeneratedIndividual(params=["x"], body=body)

        assert ind.params == ("x",)
        assert ind.formula == "function(x) plus(x, 1.0)"
        assert ind.size == 3
        assert ind.depth == 2

    def test_hash_deduplicates_by_formula(self):
        """Test that equal formulas hash equally."""
        a = GeneratedIndividual(("x",), VariableNode("x"))
        b = GeneratedIndividual(("x",), VariableNode("x"))
        c = GeneratedIndividual(("x",), ConstantNode(0.0))

        assert a.hash == b.hash
        assert a.hash != c.hash

    def test_to_dict(self, double):
        """Test individual serialization."""
        ind = GeneratedIndividual(("x",), VariableNode("x", double), FunctionType((double,), double))
        data = ind.to_dict()

        assert data["type"] == "(double) -> double"
        assert data["body"] == "x"
        assert data["depth"] == 1
