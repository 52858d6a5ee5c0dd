"""
Abstract syntax tree produced by the parser.

The AST only knows how to print, evaluate and copy itself; the algebra
(differentiation, integration, simplification) lives in the symbolic tree
it is converted into. Numeric semantics are shared with that tree through
the operator tables in expression_tree.core.operators.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from ..errors import UndefinedVariable
from ..expression_tree.core.operators import (
  BINARY_OPERATORS, UNARY_OPERATORS, format_number, format_signed,
  evaluate_binary_op, evaluate_unary_op, evaluate_function
)


class ASTNode(ABC):

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def evaluate(self, bindings: Optional[Mapping[str, float]] = None) -> float:
    pass

  @abstractmethod
  def copy(self) -> 'ASTNode':
    pass

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r})"


class NumberNode(ASTNode):
  def __init__(self, value: float):
    self.value = float(value)

  def to_string(self) -> str:
    return format_number(self.value)

  def evaluate(self, bindings=None) -> float:
    return self.value

  def copy(self) -> 'NumberNode':
    return NumberNode(self.value)


class VariableNode(ASTNode):
  def __init__(self, name: str):
    self.name = name

  def to_string(self) -> str:
    return self.name

  def evaluate(self, bindings=None) -> float:
    if not bindings or self.name not in bindings:
      raise UndefinedVariable(self.name)
    return float(bindings[self.name])

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name)


class BinaryOpNode(ASTNode):
  def __init__(self, operator: str, left: ASTNode, right: ASTNode):
    if operator not in BINARY_OPERATORS:
      raise ValueError(f"Unknown binary operator: {operator}")
    self.operator = operator
    self.left = left
    self.right = right

  def to_string(self) -> str:
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def evaluate(self, bindings=None) -> float:
    left_val = self.left.evaluate(bindings)
    right_val = self.right.evaluate(bindings)
    return evaluate_binary_op(left_val, right_val, self.operator)

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.operator, self.left.copy(), self.right.copy())


class UnaryOpNode(ASTNode):
  def __init__(self, operator: str, operand: ASTNode):
    if operator not in UNARY_OPERATORS:
      raise ValueError(f"Unknown unary operator: {operator}")
    self.operator = operator
    self.operand = operand

  def to_string(self) -> str:
    if self.operator == 'pos':
      return format_signed("+", self.operand.to_string())
    if self.operator == 'neg':
      return format_signed("-", self.operand.to_string())
    return f"{self.operator}({self.operand.to_string()})"

  def evaluate(self, bindings=None) -> float:
    return evaluate_unary_op(self.operand.evaluate(bindings), self.operator)

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.operator, self.operand.copy())


class FunctionNode(ASTNode):
  def __init__(self, name: str, args: Sequence[ASTNode]):
    self.name = name
    self.args = tuple(args)

  def to_string(self) -> str:
    return f"{self.name}({', '.join(arg.to_string() for arg in self.args)})"

  def evaluate(self, bindings=None) -> float:
    return evaluate_function(self.name, [arg.evaluate(bindings) for arg in self.args])

  def copy(self) -> 'FunctionNode':
    return FunctionNode(self.name, [arg.copy() for arg in self.args])
