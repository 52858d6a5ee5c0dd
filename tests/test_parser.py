"""
Tests for the recursive-descent parser and the AST it builds.
"""

import pytest

from symbolic_cas.errors import (
    ParseError, UndefinedVariable, DivisionByZero, DomainError, FunctionArityError
)
from symbolic_cas.parser import (
    parse_expression, NumberNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
)


class TestPrecedence:
    """Operator binding and associativity."""

    def test_multiplication_binds_tighter(self):
        ast = parse_expression("2 + 3 * 4")
        assert ast.to_string() == "(2 + (3 * 4))"
        assert ast.evaluate({}) == 14

    def test_power_is_right_associative(self):
        ast = parse_expression("2^3^2")
        assert ast.to_string() == "(2 ^ (3 ^ 2))"
        assert ast.evaluate({}) == 512

    def test_subtraction_is_left_associative(self):
        ast = parse_expression("10 - 4 - 3")
        assert ast.to_string() == "((10 - 4) - 3)"
        assert ast.evaluate({}) == 3

    def test_division_is_left_associative(self):
        assert parse_expression("8 / 4 / 2").evaluate({}) == 1

    def test_parentheses_override(self):
        assert parse_expression("(2 + 3) * 4").evaluate({}) == 20

    def test_unary_minus_binds_tighter_than_power(self):
        ast = parse_expression("-x^2")
        assert isinstance(ast, BinaryOpNode)
        assert isinstance(ast.left, UnaryOpNode)
        assert ast.evaluate({"x": 3}) == 9

    def test_unary_plus(self):
        ast = parse_expression("+x")
        assert isinstance(ast, UnaryOpNode)
        assert ast.operator == 'pos'
        assert ast.evaluate({"x": 4}) == 4

    def test_double_negation(self):
        assert parse_expression("--x").evaluate({"x": 2}) == 2
        assert parse_expression("--x").to_string() == "-(-x)"


class TestImplicitMultiplication:
    """Adjacent factors multiply."""

    @pytest.mark.parametrize("implicit, explicit", [
        ("2x", "2*x"),
        ("x y", "x*y"),
        ("2sin(x)", "2*sin(x)"),
        ("(x + 1)(x - 1)", "(x + 1)*(x - 1)"),
        ("3(x)", "3*x"),
    ])
    def test_matches_explicit_form(self, implicit, explicit):
        bindings = {"x": 5, "y": 7}
        assert parse_expression(implicit).evaluate(bindings) == parse_expression(explicit).evaluate(bindings)

    def test_binds_like_multiplication(self):
        assert parse_expression("2x^2").to_string() == "(2 * (x ^ 2))"
        assert parse_expression("1 + 2x").to_string() == "(1 + (2 * x))"


class TestFunctions:
    """Call syntax."""

    def test_single_argument(self):
        ast = parse_expression("sin(x + 1)")
        assert isinstance(ast, FunctionNode)
        assert ast.name == "sin"
        assert len(ast.args) == 1
        assert ast.to_string() == "sin((x + 1))"

    def test_multiple_arguments_parse(self):
        ast = parse_expression("sin(x, y)")
        assert len(ast.args) == 2
        assert ast.to_string() == "sin(x, y)"

    def test_empty_argument_list_parses(self):
        ast = parse_expression("cos()")
        assert ast.args == ()

    def test_wrong_arity_fails_on_evaluation(self):
        with pytest.raises(FunctionArityError):
            parse_expression("sin(x, y)").evaluate({"x": 1, "y": 2})
        with pytest.raises(FunctionArityError):
            parse_expression("cos()").evaluate({})

    def test_log_is_base_ten(self):
        assert parse_expression("log(1000)").evaluate({}) == pytest.approx(3.0)
        assert parse_expression("ln(1)").evaluate({}) == 0.0

    def test_nested(self):
        assert parse_expression("sqrt(abs(-16))").evaluate({}) == 4.0


class TestParseErrors:
    """Malformed input reports a message and an offset."""

    def test_dangling_operator(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression("2 +")
        assert exc_info.value.offset == 3
        assert "end of expression" in exc_info.value.message

    def test_unclosed_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression("(x + 1")
        assert "closing parenthesis" in exc_info.value.message
        assert exc_info.value.offset == 6

    def test_unexpected_closing_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression("x + 1)")
        assert exc_info.value.offset == 5

    def test_invalid_character(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression("2 $ 3")
        assert exc_info.value.offset == 2
        assert "'$'" in exc_info.value.message

    def test_function_without_parenthesis(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression("sin x")
        assert exc_info.value.offset == 4

    def test_malformed_number(self):
        with pytest.raises(ParseError) as exc_info:
            parse_expression(".")
        assert exc_info.value.offset == 0

    @pytest.mark.parametrize("text", ["", "   ", "*", "x ^", "()", "sin(x,)"])
    def test_offset_is_never_negative(self, text):
        with pytest.raises(ParseError) as exc_info:
            parse_expression(text)
        assert exc_info.value.offset >= 0

    def test_message_includes_position(self):
        with pytest.raises(ParseError, match="at position 3"):
            parse_expression("2 +")


class TestASTEvaluation:
    """Numeric semantics of the AST."""

    def test_undefined_variable(self):
        with pytest.raises(UndefinedVariable) as exc_info:
            parse_expression("x + 1").evaluate({})
        assert exc_info.value.name == "x"

    def test_undefined_variable_without_bindings(self):
        with pytest.raises(UndefinedVariable):
            parse_expression("y").evaluate()

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            parse_expression("1/0").evaluate({})

    def test_division_by_zero_is_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            parse_expression("x/(x - 2)").evaluate({"x": 2})

    @pytest.mark.parametrize("text", ["sqrt(-1)", "ln(0)", "log(-5)", "(-8)^(1/3)"])
    def test_domain_errors(self, text):
        with pytest.raises(DomainError):
            parse_expression(text).evaluate({})

    def test_copy_is_independent(self):
        ast = parse_expression("2 * (x + 1)")
        clone = ast.copy()
        assert clone is not ast
        assert clone.right is not ast.right
        assert clone.to_string() == ast.to_string()

    def test_node_types(self):
        ast = parse_expression("3 + y")
        assert isinstance(ast.left, NumberNode)
        assert isinstance(ast.right, VariableNode)
        assert ast.left.value == 3.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
