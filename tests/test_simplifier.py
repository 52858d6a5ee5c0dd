"""
Tests for the algebraic rewrite rules behind Node.simplify().
"""

import pytest

from symbolic_cas import parse
from symbolic_cas.errors import DivisionByZero
from symbolic_cas.expression_tree import ConstantNode, VariableNode, UnaryOpNode
from symbolic_cas.expression_tree.utils import ExpressionSimplifier


def _s(text):
    return parse(text).simplify().to_string()


class TestIdentities:
    """Additive, multiplicative and power identities."""

    @pytest.mark.parametrize("text, expected", [
        ("x + 0", "x"),
        ("0 + x", "x"),
        ("x - 0", "x"),
        ("0 - x", "-x"),
        ("x * 0", "0"),
        ("0 * (x + y)", "0"),
        ("x * 1", "x"),
        ("1 * x", "x"),
        ("x / 1", "x"),
        ("0 / x", "0"),
        ("x ^ 0", "1"),
        ("x ^ 1", "x"),
        ("0 ^ x", "0"),
        ("1 ^ x", "1"),
        ("+x", "x"),
        ("--x", "x"),
        ("-0", "0"),
    ])
    def test_rule(self, text, expected):
        assert _s(text) == expected

    def test_simplify_x_plus_zero_matches_x(self):
        assert _s("x + 0") == _s("x")

    def test_rules_apply_bottom_up(self):
        assert _s("(x * 1 + 0) ^ (2 - 1)") == "x"
        assert _s("sin(x + 0)") == "sin(x)"

    def test_no_rule_applies(self):
        assert _s("x + y") == "(x + y)"
        assert _s("x - x") == "(x - x)"


class TestConstantFolding:
    """Constant subtrees collapse to numbers."""

    @pytest.mark.parametrize("text, expected", [
        ("2 + 3 * 4", "14"),
        ("2^10", "1024"),
        ("7 / 2", "3.5"),
        ("-(2 + 3)", "-5"),
        ("sin(0)", "0"),
        ("sqrt(16) + x", "(4 + x)"),
    ])
    def test_fold(self, text, expected):
        assert _s(text) == expected

    def test_undefined_values_are_left_alone(self):
        assert _s("sqrt(-1)") == "sqrt(-1)"
        assert _s("ln(0)") == "ln(0)"

    def test_literal_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            parse("x / 0").simplify()
        with pytest.raises(DivisionByZero):
            parse("1 + 1/0").simplify()


class TestCoefficients:
    """Constant factors are collected on the left."""

    def test_constant_moves_left(self):
        expr = parse("x * 2").simplify()
        assert isinstance(expr.left, ConstantNode)
        assert expr.to_string() == "2x"

    def test_nested_coefficients_multiply(self):
        assert _s("2 * (3 * x)") == "6x"
        assert _s("(x * 3) * 2") == "6x"

    def test_coefficient_divided_by_constant(self):
        assert _s("(6 * x) / 3") == "2x"
        assert _s("(3 * x) / 3") == "x"

    def test_division_without_coefficient_stays(self):
        assert _s("x / 2") == "(x / 2)"


class TestEntryPoints:
    """Direct use of the static rule tables."""

    def test_simplify_unary_double_negation(self):
        inner = UnaryOpNode('neg', VariableNode('x'))
        assert ExpressionSimplifier.simplify_unary('neg', inner) == VariableNode('x')

    def test_simplify_binary_returns_fresh_node(self):
        left, right = VariableNode('x'), VariableNode('y')
        result = ExpressionSimplifier.simplify_binary('+', left, right)
        assert result.to_string() == "(x + y)"

    def test_simplify_function_folds_constants(self):
        result = ExpressionSimplifier.simplify_function('cos', [ConstantNode(0)])
        assert result == ConstantNode(1)


class TestIdempotence:
    """simplify(simplify(e)) renders like simplify(e)."""

    @pytest.mark.parametrize("text", [
        "x + 0",
        "2 * (3 * x) + 0",
        "(6 * x) / 3 - 0",
        "x * 2 * 3",
        "--(-x)",
        "0 - (0 - x)",
        "x^2 + x",
        "sin(x) * cos(x) / 1",
        "2 * x / 4",
        "(x + 1) * 2 * (y - 0)",
        "-(3 * x) * 2",
        "sqrt(-1) * x",
        "x^1^2 + 1^x",
    ])
    def test_idempotent(self, text):
        once = parse(text).simplify()
        twice = once.simplify()
        assert twice.to_string() == once.to_string()
        assert twice == once

    @pytest.mark.parametrize("text", ["x^3", "x*sin(x)", "x/(x + 1)", "(2x + 1)^3"])
    def test_idempotent_on_derivatives(self, text):
        once = parse(text).differentiate("x").simplify()
        assert once.simplify().to_string() == once.to_string()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
