"""AST to symbolic tree conversion."""

from .errors import ParseError, UnrecognizedNode
from .expression_tree.core.node import (
  Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
)
from .expression_tree.core.operators import BINARY_OPERATORS, UNARY_OPERATORS
from .parser import ast_nodes


def ast_to_symbolic(ast: ast_nodes.ASTNode) -> Node:
  """One-to-one structural mapping of a parsed AST onto the symbolic tree"""
  try:
    return _convert(ast)
  except RecursionError:
    raise ParseError("Expression nested too deeply", 0) from None


def _convert(ast: ast_nodes.ASTNode) -> Node:
  if isinstance(ast, ast_nodes.NumberNode):
    return ConstantNode(ast.value)

  if isinstance(ast, ast_nodes.VariableNode):
    return VariableNode(ast.name)

  if isinstance(ast, ast_nodes.BinaryOpNode):
    if ast.operator not in BINARY_OPERATORS:
      raise UnrecognizedNode(ast)
    return BinaryOpNode(ast.operator, _convert(ast.left), _convert(ast.right))

  if isinstance(ast, ast_nodes.UnaryOpNode):
    if ast.operator not in UNARY_OPERATORS:
      raise UnrecognizedNode(ast)
    return UnaryOpNode(ast.operator, _convert(ast.operand))

  if isinstance(ast, ast_nodes.FunctionNode):
    return FunctionNode(ast.name, [_convert(arg) for arg in ast.args])

  raise UnrecognizedNode(ast)
