"""Expression Tree Module

Symbolic expression trees: evaluation, differentiation, integration and
simplification.
"""

from .core.node import (
  Node,
  ConstantNode,
  VariableNode,
  BinaryOpNode,
  UnaryOpNode,
  FunctionNode
)
from .core.operators import (
  NodeType,
  BINARY_OPERATORS,
  UNARY_OPERATORS,
  KNOWN_FUNCTIONS,
  format_number,
  evaluate_binary_op,
  evaluate_unary_op,
  evaluate_function
)
from .utils import ExpressionSimplifier, to_sympy, latex_representation

__all__ = [
    "Node", "ConstantNode", "VariableNode", "BinaryOpNode", "UnaryOpNode", "FunctionNode",
    "NodeType", "BINARY_OPERATORS", "UNARY_OPERATORS", "KNOWN_FUNCTIONS",
    "format_number", "evaluate_binary_op", "evaluate_unary_op", "evaluate_function",
    "ExpressionSimplifier", "to_sympy", "latex_representation"
]
