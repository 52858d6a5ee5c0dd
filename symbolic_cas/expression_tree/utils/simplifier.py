import math
from typing import List, Optional
from ..core.node import Node, ConstantNode, BinaryOpNode, UnaryOpNode, FunctionNode
from ..core.operators import evaluate_binary_op, evaluate_unary_op, evaluate_function
from ...errors import DivisionByZero, EvaluationError


class ExpressionSimplifier:
  """Algebraic rewrite rules applied bottom-up by Node.simplify().

  Every entry point expects children that are already simplified and
  returns a fresh node, never one of the inputs' parents.
  """

  @staticmethod
  def simplify_binary(operator: str, left: Node, right: Node) -> Node:
    if operator == '+':
      if left.is_zero():
        return right  # 0 + x = x
      if right.is_zero():
        return left  # x + 0 = x

    elif operator == '-':
      if right.is_zero():
        return left  # x - 0 = x
      if left.is_zero():
        return ExpressionSimplifier.simplify_unary('neg', right)  # 0 - x = -x

    elif operator == '*':
      if left.is_zero() or right.is_zero():
        return ConstantNode(0.0)
      if left.is_one():
        return right
      if right.is_one():
        return left

    elif operator == '/':
      if right.is_zero():
        raise DivisionByZero("Division by zero in expression")
      if left.is_zero():
        return ConstantNode(0.0)
      if right.is_one():
        return left

    elif operator == '^':
      if right.is_zero():
        return ConstantNode(1.0)  # x^0 = 1
      if right.is_one():
        return left
      if left.is_zero():
        return ConstantNode(0.0)
      if left.is_one():
        return ConstantNode(1.0)

    if left.is_constant() and right.is_constant():
      folded = ExpressionSimplifier._fold(lambda: evaluate_binary_op(left.evaluate(), right.evaluate(), operator))
      if folded is not None:
        return folded

    if operator == '*':
      return ExpressionSimplifier._collect_coefficient(left, right)

    if operator == '/' and isinstance(right, ConstantNode) and ExpressionSimplifier._is_scaled_term(left):
      # (c*u)/k = (c/k)*u
      return ExpressionSimplifier.simplify_binary('*', ConstantNode(left.left.value / right.value), left.right)

    return BinaryOpNode(operator, left, right)

  @staticmethod
  def simplify_unary(operator: str, operand: Node) -> Node:
    if operator == 'pos':
      return operand

    if operator == 'neg':
      if operand.is_zero():
        return ConstantNode(0.0)
      # -(-x) = x
      if isinstance(operand, UnaryOpNode) and operand.operator == 'neg':
        return operand.operand

    if operand.is_constant():
      folded = ExpressionSimplifier._fold(lambda: evaluate_unary_op(operand.evaluate(), operator))
      if folded is not None:
        return folded

    return UnaryOpNode(operator, operand)

  @staticmethod
  def simplify_function(name: str, args: List[Node]) -> Node:
    if all(arg.is_constant() for arg in args):
      folded = ExpressionSimplifier._fold(lambda: evaluate_function(name, [arg.evaluate() for arg in args]))
      if folded is not None:
        return folded
    return FunctionNode(name, args)

  @staticmethod
  def _fold(compute) -> Optional[ConstantNode]:
    """Constant-fold, leaving the node alone when the value is undefined (sqrt(-1), log(0), ...)"""
    try:
      result = compute()
    except EvaluationError:
      return None
    if math.isfinite(result):
      return ConstantNode(result)
    return None

  @staticmethod
  def _is_scaled_term(node: Node) -> bool:
    return (isinstance(node, BinaryOpNode) and node.operator == '*' and
            isinstance(node.left, ConstantNode))

  @staticmethod
  def _collect_coefficient(left: Node, right: Node) -> Node:
    # Coefficients live on the left: x*2 = 2*x
    if isinstance(right, ConstantNode) and not isinstance(left, ConstantNode):
      left, right = right, left

    # 2*(3*x) = 6*x
    if isinstance(left, ConstantNode) and ExpressionSimplifier._is_scaled_term(right):
      return ExpressionSimplifier.simplify_binary('*', ConstantNode(left.value * right.left.value), right.right)

    return BinaryOpNode('*', left, right)
