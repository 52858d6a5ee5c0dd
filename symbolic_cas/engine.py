from typing import List, Mapping, Optional, Tuple

import numpy as np

from .converter import ast_to_symbolic
from .errors import CasError, NoExpression, UnsupportedEquation
from .expression_tree.core.node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode
from .expression_tree.utils.sympy_utils import latex_representation
from .expression_tree.utils.tree_utils import contains_variable
from .logging_system import LogLevel, set_log_level, log_info, log_operation, log_warning
from .parser import ASTNode, parse_expression
from .sampling import DEFAULT_SAMPLE_POINTS, sample_expression


class SymbolicEngine:
  """Holds one current expression and exposes the algebra on it.

  Operations never modify the held expression; they return new trees. Only
  parse_from_string and parse_from_ast replace it, so one engine should not
  be shared between threads that parse.
  """

  def __init__(self, log_level: Optional[LogLevel] = None):
    if log_level is not None:
      set_log_level(log_level)
    self._expression: Optional[Node] = None
    self.last_error: Optional[CasError] = None

  def parse_from_string(self, text: str) -> bool:
    """Parse and convert `text`; on failure the engine holds nothing and `last_error` says why"""
    try:
      ast = parse_expression(text)
    except CasError as e:
      return self._reject(text, e)
    return self._load(ast, text)

  def parse_from_ast(self, ast: ASTNode) -> bool:
    return self._load(ast, f"<{type(ast).__name__}>")

  def _load(self, ast: ASTNode, source: str) -> bool:
    try:
      self._expression = ast_to_symbolic(ast)
    except CasError as e:
      return self._reject(source, e)
    self.last_error = None
    log_info(f"Parsed expression: {self._expression.to_string()}")
    return True

  def _reject(self, source: str, error: CasError) -> bool:
    self._expression = None
    self.last_error = error
    log_warning(f"Could not parse {source!r}: {error}")
    return False

  def has_expression(self) -> bool:
    return self._expression is not None

  @property
  def expression(self) -> Optional[Node]:
    return self._expression

  def _require_expression(self, operation: str) -> Node:
    if self._expression is None:
      raise NoExpression(operation)
    log_operation(operation, self._expression.to_string())
    return self._expression

  def differentiate(self, variable: str = 'x') -> Node:
    return self._require_expression("differentiate").differentiate(variable)

  def integrate(self, variable: str = 'x') -> Node:
    return self._require_expression("integrate").integrate(variable)

  def simplify(self) -> Node:
    return self._require_expression("simplify").simplify()

  def evaluate(self, bindings: Optional[Mapping[str, float]] = None) -> float:
    return self._require_expression("evaluate").evaluate(bindings)

  def to_string(self) -> str:
    return self._require_expression("render").to_string()

  def to_latex(self) -> str:
    return latex_representation(self._require_expression("render"))

  def sample(self, variable: str, x_min: float, x_max: float,
             num_points: int = DEFAULT_SAMPLE_POINTS,
             bindings: Optional[Mapping[str, float]] = None) -> Tuple[np.ndarray, np.ndarray]:
    """(xs, ys) over [x_min, x_max], dropping points that fail to evaluate"""
    root = self._require_expression("sample")
    return sample_expression(root, variable, x_min, x_max, num_points, bindings)

  def solve(self, variable: str = 'x') -> Node:
    """
    Solve `expression = 0` for `variable`.

    Only linear equations are handled: the simplified root must be a sum or
    difference of a constant and a side holding the variable, and that side
    may only wrap the variable in constant coefficients, divisions by a
    constant, sign changes and further constant offsets.

    Returns:
      The unsimplified closed form of the root; 2*x - 3 gives (3 / 2)
    """
    root = self._require_expression("solve").simplify()

    if not (isinstance(root, BinaryOpNode) and root.operator in ('+', '-')):
      raise UnsupportedEquation(f"top-level form {root.to_string()}")

    if root.right.is_constant() and contains_variable(root.left, variable):
      side, constant = root.left, root.right
    elif root.left.is_constant() and contains_variable(root.right, variable):
      side, constant = root.right, root.left
    else:
      raise UnsupportedEquation(f"no constant term separable from {variable} in {root.to_string()}")

    # v + c = 0 and c + v = 0 give v = -c; v - c = 0 and c - v = 0 give v = c
    if root.operator == '+':
      rhs = UnaryOpNode('neg', constant.copy())
    else:
      rhs = constant.copy()

    return _isolate(side, rhs, variable)

  def factor(self) -> List[Node]:
    """
    Split the simplified expression into factors whose product is the expression.

    Only an existing product and the shape v^2 + v are recognized. Anything
    else comes back as a single factor, which does not mean it is irreducible.
    """
    root = self._require_expression("factor").simplify()

    if isinstance(root, BinaryOpNode) and root.operator == '*':
      return [root.left.copy(), root.right.copy()]

    name = _square_plus_self(root)
    if name is not None:
      return [VariableNode(name), BinaryOpNode('+', VariableNode(name), ConstantNode(1.0))]

    return [root]


def _isolate(side: Node, rhs: Node, variable: str) -> Node:
  """Peel linear wrappers off `side` until only `variable` is left, applying each inverse to `rhs`"""
  while not (isinstance(side, VariableNode) and side.name == variable):
    if isinstance(side, UnaryOpNode) and side.operator == 'neg':
      rhs = UnaryOpNode('neg', rhs)
      side = side.operand
      continue
    if isinstance(side, UnaryOpNode) and side.operator == 'pos':
      side = side.operand
      continue
    if not isinstance(side, BinaryOpNode):
      raise UnsupportedEquation(f"{side.to_string()} is not linear in {variable}")

    left, right = side.left, side.right
    if side.operator == '*' and left.is_constant():
      rhs, side = BinaryOpNode('/', rhs, left.copy()), right
    elif side.operator == '*' and right.is_constant():
      rhs, side = BinaryOpNode('/', rhs, right.copy()), left
    elif side.operator == '/' and right.is_constant():
      rhs, side = BinaryOpNode('*', rhs, right.copy()), left
    elif side.operator == '+' and right.is_constant():
      rhs, side = BinaryOpNode('-', rhs, right.copy()), left
    elif side.operator == '+' and left.is_constant():
      rhs, side = BinaryOpNode('-', rhs, left.copy()), right
    elif side.operator == '-' and right.is_constant():
      rhs, side = BinaryOpNode('+', rhs, right.copy()), left
    elif side.operator == '-' and left.is_constant():
      # k - u = r  ->  u = k - r
      rhs, side = BinaryOpNode('-', left.copy(), rhs), right
    else:
      raise UnsupportedEquation(f"{side.to_string()} is not linear in {variable}")

  return rhs


def _square_plus_self(node: Node) -> Optional[str]:
  """Name of v when node is v^2 + v, else None"""
  if not (isinstance(node, BinaryOpNode) and node.operator == '+'):
    return None
  square, linear = node.left, node.right
  if not (isinstance(square, BinaryOpNode) and square.operator == '^'):
    return None
  if not (isinstance(square.left, VariableNode) and isinstance(square.right, ConstantNode)):
    return None
  if square.right.value != 2.0:
    return None
  if isinstance(linear, VariableNode) and linear.name == square.left.name:
    return linear.name
  return None


def parse(text: str) -> Node:
  """Parse text straight into a symbolic expression, raising ParseError on malformed input"""
  return ast_to_symbolic(parse_expression(text))
