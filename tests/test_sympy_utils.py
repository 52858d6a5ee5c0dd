"""
Cross-checks against SymPy: conversion, equivalence and derivatives.
"""

import pytest
import sympy as sp

from symbolic_cas import parse
from symbolic_cas.expression_tree.utils import (
    to_sympy, are_equivalent, sympy_derivative, latex_representation
)

x, y = sp.symbols("x y")


class TestConversion:
    """Trees map onto the equivalent SymPy expressions."""

    def test_polynomial(self):
        assert to_sympy(parse("2x + 1")) == 2 * x + 1

    def test_integral_constants_stay_exact(self):
        assert to_sympy(parse("x^2")) == x ** 2
        assert isinstance(to_sympy(parse("3")), sp.Integer)

    def test_fractional_constants(self):
        assert to_sympy(parse("0.5")) == sp.Float(0.5)

    def test_subtraction_and_division(self):
        assert sp.simplify(to_sympy(parse("(x - y) / 2")) - (x - y) / 2) == 0

    @pytest.mark.parametrize("text, expected", [
        ("sin(x)", sp.sin(x)),
        ("cos(x)", sp.cos(x)),
        ("tan(x)", sp.tan(x)),
        ("ln(x)", sp.log(x)),
        ("log(x)", sp.log(x, 10)),
        ("sqrt(x)", sp.sqrt(x)),
        ("abs(x)", sp.Abs(x)),
        ("-x", -x),
        ("+x", x),
    ])
    def test_functions(self, text, expected):
        assert to_sympy(parse(text)) == expected


class TestEquivalence:
    """are_equivalent delegates to SymPy's simplifier."""

    def test_equivalent_forms(self):
        assert are_equivalent(parse("x*2"), parse("2x"))
        assert are_equivalent(parse("(x + 1)^2"), parse("x^2 + 2x + 1"))

    def test_different_forms(self):
        assert not are_equivalent(parse("x + 1"), parse("x"))


class TestDerivativesAgreeWithSympy:
    """Our derivative rules match SymPy's."""

    @pytest.mark.parametrize("text", [
        "x^3",
        "3x^2 + 2x + 1",
        "x*sin(x)",
        "x/(x + 1)",
        "(2x + 1)^3",
        "cos(x^2)",
        "ln(x)*x",
        "sin(x)/x",
        "x*y^2",
    ])
    def test_derivative(self, text):
        expr = parse(text)
        ours = to_sympy(expr.differentiate("x").simplify())
        assert sp.simplify(ours - sympy_derivative(expr, "x")) == 0

    @pytest.mark.parametrize("text", ["x^2", "x + 1", "sin(x)", "cos(x)", "ln(x)", "1/x", "5"])
    def test_integral_differentiates_back(self, text):
        expr = parse(text)
        integral = to_sympy(expr.integrate("x"))
        assert sp.simplify(sp.diff(integral, x) - to_sympy(expr)) == 0


class TestLatex:
    """LaTeX rendering with a plain-text fallback."""

    def test_power(self):
        assert latex_representation(parse("x^2")) == "x^{2}"

    def test_fallback_for_unconvertible_tree(self):
        assert latex_representation(parse("sin(x, y)")) == "sin(x, y)"
        assert latex_representation(parse("sin(x, y)"), fallback="?") == "?"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
