import sympy as sp
from abc import ABC, abstractmethod
from typing import Optional, Mapping, Sequence, Tuple
from .operators import (
  NodeType, BINARY_OPERATORS, UNARY_OPERATORS, SIGN_OPERATORS,
  format_number, format_signed, evaluate_binary_op, evaluate_unary_op, evaluate_function
)
from ...errors import (
  UndefinedVariable, UnsupportedDifferentiation, UnsupportedIntegration, UnknownFunction
)

Bindings = Mapping[str, float]


class Node(ABC):
  """Immutable symbolic expression node.

  Every operation returns a new tree; children are never shared between two
  live trees, so any subtree reused in a new parent is copied first.
  """

  __slots__ = ('_hash_cache', '_size_cache')

  def __init__(self):
    self._hash_cache: Optional[int] = None
    self._size_cache: Optional[int] = None

  @abstractmethod
  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    pass

  @abstractmethod
  def to_string(self) -> str:
    pass

  @abstractmethod
  def copy(self) -> 'Node':
    pass

  @abstractmethod
  def differentiate(self, variable: str) -> 'Node':
    pass

  @abstractmethod
  def integrate(self, variable: str) -> 'Node':
    pass

  @abstractmethod
  def simplify(self) -> 'Node':
    pass

  @abstractmethod
  def is_constant(self) -> bool:
    pass

  # is_zero/is_one are structural heuristics: they may miss a subtree that
  # happens to evaluate to 0 or 1, but never report one that does not.
  def is_zero(self) -> bool:
    return False

  def is_one(self) -> bool:
    return False

  @abstractmethod
  def children(self) -> Tuple['Node', ...]:
    pass

  @abstractmethod
  def to_sympy(self) -> sp.Expr:
    pass

  def size(self) -> int:
    """Node count"""
    if self._size_cache is None:
      self._size_cache = self._compute_size()
    return self._size_cache

  def depth(self) -> int:
    from ..utils.tree_utils import calculate_tree_depth
    return calculate_tree_depth(self)

  @abstractmethod
  def _compute_size(self) -> int:
    pass

  @abstractmethod
  def _compute_hash(self) -> int:
    pass

  @abstractmethod
  def _label(self):
    """Value, name or operator identifying the node apart from its children"""
    pass

  def __hash__(self) -> int:
    if self._hash_cache is None:
      self._hash_cache = self._compute_hash()
    return self._hash_cache

  def __eq__(self, other) -> bool:
    if type(self) is not type(other) or hash(self) != hash(other):
      return False
    return self._label() == other._label() and self.children() == other.children()

  def __str__(self) -> str:
    return self.to_string()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self.to_string()!r})"


class ConstantNode(Node):
  __slots__ = ('value',)

  def __init__(self, value: float):
    super().__init__()
    self.value = float(value)

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    return self.value

  def to_string(self) -> str:
    return format_number(self.value)

  def copy(self) -> 'ConstantNode':
    return ConstantNode(self.value)

  def differentiate(self, variable: str) -> Node:
    return ConstantNode(0.0)

  def integrate(self, variable: str) -> Node:
    # c dx = c*x
    return BinaryOpNode('*', ConstantNode(self.value), VariableNode(variable))

  def simplify(self) -> Node:
    return ConstantNode(self.value)

  def is_constant(self) -> bool:
    return True

  def is_zero(self) -> bool:
    return self.value == 0.0

  def is_one(self) -> bool:
    return self.value == 1.0

  def children(self) -> Tuple[Node, ...]:
    return ()

  def to_sympy(self) -> sp.Expr:
    if self.value.is_integer():
      return sp.Integer(int(self.value))
    return sp.Float(self.value)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.CONSTANT, self.value))

  def _label(self):
    return self.value


class VariableNode(Node):
  __slots__ = ('name',)

  def __init__(self, name: str):
    super().__init__()
    self.name = name

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    if not bindings or self.name not in bindings:
      raise UndefinedVariable(self.name)
    return float(bindings[self.name])

  def to_string(self) -> str:
    return self.name

  def copy(self) -> 'VariableNode':
    return VariableNode(self.name)

  def differentiate(self, variable: str) -> Node:
    return ConstantNode(1.0 if self.name == variable else 0.0)

  def integrate(self, variable: str) -> Node:
    if self.name == variable:
      # x dx = x^2/2
      return BinaryOpNode('/',
                          BinaryOpNode('^', VariableNode(variable), ConstantNode(2.0)),
                          ConstantNode(2.0))
    # Any other variable is a constant with respect to the integration variable
    return BinaryOpNode('*', VariableNode(self.name), VariableNode(variable))

  def simplify(self) -> Node:
    return VariableNode(self.name)

  def is_constant(self) -> bool:
    return False

  def children(self) -> Tuple[Node, ...]:
    return ()

  def to_sympy(self) -> sp.Expr:
    return sp.Symbol(self.name)

  def _compute_size(self) -> int:
    return 1

  def _compute_hash(self) -> int:
    return hash((NodeType.VARIABLE, self.name))

  def _label(self):
    return self.name


def _is_variable(node: Node, variable: str) -> bool:
  return isinstance(node, VariableNode) and node.name == variable


def _format_coefficient(coeff: float, operand: Node) -> str:
  """Render c*u as an attached coefficient: 2x, -x, 3sin(x), 2(x + 1)"""
  text = operand.to_string()
  if coeff == 1.0:
    return text
  if coeff == -1.0:
    return format_signed("-", text)

  simple = isinstance(operand, (VariableNode, FunctionNode)) or (
    isinstance(operand, UnaryOpNode) and operand.operator not in SIGN_OPERATORS)
  # Binary operands already render inside their own parentheses
  wrapped = text.startswith("(") and text.endswith(")")
  if simple or wrapped:
    return format_number(coeff) + text
  return f"{format_number(coeff)}({text})"


class BinaryOpNode(Node):
  __slots__ = ('operator', 'left', 'right')

  def __init__(self, operator: str, left: Node, right: Node):
    super().__init__()
    if operator not in BINARY_OPERATORS:
      raise ValueError(f"Unknown binary operator: {operator}")
    self.operator = operator
    self.left = left
    self.right = right

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    left_val = self.left.evaluate(bindings)
    right_val = self.right.evaluate(bindings)
    return evaluate_binary_op(left_val, right_val, self.operator)

  def to_string(self) -> str:
    if self.operator == '*':
      left, right = self.left, self.right
      if isinstance(left, ConstantNode) and isinstance(right, ConstantNode):
        return format_number(left.value * right.value)
      if isinstance(left, ConstantNode) and not right.is_constant():
        return _format_coefficient(left.value, right)
      if isinstance(right, ConstantNode) and not left.is_constant():
        return _format_coefficient(right.value, left)
    return f"({self.left.to_string()} {self.operator} {self.right.to_string()})"

  def copy(self) -> 'BinaryOpNode':
    return BinaryOpNode(self.operator, self.left.copy(), self.right.copy())

  def differentiate(self, variable: str) -> Node:
    left, right = self.left, self.right

    if self.operator in ('+', '-'):
      return BinaryOpNode(self.operator, left.differentiate(variable), right.differentiate(variable))

    if self.operator == '*':
      # Product rule: (u*v)' = u*v' + v*u'
      return BinaryOpNode('+',
                          BinaryOpNode('*', left.copy(), right.differentiate(variable)),
                          BinaryOpNode('*', right.copy(), left.differentiate(variable)))

    if self.operator == '/':
      # Quotient rule: (u/v)' = (v*u' - u*v') / v^2
      numerator = BinaryOpNode('-',
                               BinaryOpNode('*', right.copy(), left.differentiate(variable)),
                               BinaryOpNode('*', left.copy(), right.differentiate(variable)))
      denominator = BinaryOpNode('^', right.copy(), ConstantNode(2.0))
      return BinaryOpNode('/', numerator, denominator)

    # Power rule, constant exponents only: (u^n)' = n*u^(n-1)*u'
    if not right.is_constant():
      raise UnsupportedDifferentiation(f"non-constant exponent in {self.to_string()}")
    exponent = right.evaluate()
    return BinaryOpNode('*',
                        BinaryOpNode('*', right.copy(),
                                     BinaryOpNode('^', left.copy(), ConstantNode(exponent - 1.0))),
                        left.differentiate(variable))

  def integrate(self, variable: str) -> Node:
    left, right = self.left, self.right

    if self.operator in ('+', '-'):
      return BinaryOpNode(self.operator, left.integrate(variable), right.integrate(variable))

    if self.operator == '*':
      # Constant factors move outside the integral
      if left.is_constant() and not right.is_constant():
        return BinaryOpNode('*', left.copy(), right.integrate(variable))
      if right.is_constant() and not left.is_constant():
        return BinaryOpNode('*', left.integrate(variable), right.copy())
      raise UnsupportedIntegration(f"general product {self.to_string()}")

    if self.operator == '/':
      # c/x dx = c*ln(x)
      if left.is_constant() and _is_variable(right, variable):
        return BinaryOpNode('*', left.copy(), UnaryOpNode('ln', VariableNode(variable)))
      raise UnsupportedIntegration(f"quotient {self.to_string()}")

    if self.operator == '^' and _is_variable(left, variable) and right.is_constant():
      exponent = right.evaluate()
      if exponent == -1.0:
        return UnaryOpNode('ln', VariableNode(variable))
      # x^n dx = x^(n+1)/(n+1)
      return BinaryOpNode('/',
                          BinaryOpNode('^', VariableNode(variable), ConstantNode(exponent + 1.0)),
                          ConstantNode(exponent + 1.0))
    raise UnsupportedIntegration(f"power {self.to_string()}")

  def simplify(self) -> Node:
    from ..utils.simplifier import ExpressionSimplifier
    return ExpressionSimplifier.simplify_binary(self.operator, self.left.simplify(), self.right.simplify())

  def is_constant(self) -> bool:
    return self.left.is_constant() and self.right.is_constant()

  def children(self) -> Tuple[Node, ...]:
    return (self.left, self.right)

  def to_sympy(self) -> sp.Expr:
    left = self.left.to_sympy()
    right = self.right.to_sympy()
    if self.operator == '+':
      return sp.Add(left, right)
    elif self.operator == '-':
      return sp.Add(left, sp.Mul(-1, right))
    elif self.operator == '*':
      return sp.Mul(left, right)
    elif self.operator == '/':
      return sp.Mul(left, sp.Pow(right, -1))
    return sp.Pow(left, right)

  def _compute_size(self) -> int:
    return 1 + self.left.size() + self.right.size()

  def _compute_hash(self) -> int:
    return hash((NodeType.BINARY_OP, self.operator, hash(self.left), hash(self.right)))

  def _label(self):
    return self.operator


class UnaryOpNode(Node):
  __slots__ = ('operator', 'operand')

  def __init__(self, operator: str, operand: Node):
    super().__init__()
    if operator not in UNARY_OPERATORS:
      raise ValueError(f"Unknown unary operator: {operator}")
    self.operator = operator
    self.operand = operand

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    return evaluate_unary_op(self.operand.evaluate(bindings), self.operator)

  def to_string(self) -> str:
    if self.operator == 'pos':
      return format_signed("+", self.operand.to_string())
    if self.operator == 'neg':
      return format_signed("-", self.operand.to_string())
    return f"{self.operator}({self.operand.to_string()})"

  def copy(self) -> 'UnaryOpNode':
    return UnaryOpNode(self.operator, self.operand.copy())

  def differentiate(self, variable: str) -> Node:
    if self.operator == 'pos':
      return self.operand.differentiate(variable)
    if self.operator == 'neg':
      return UnaryOpNode('neg', self.operand.differentiate(variable))
    if self.is_constant():
      return ConstantNode(0.0)
    return _chain_rule(self.operator, self.operand, variable)

  def integrate(self, variable: str) -> Node:
    if self.operator == 'pos':
      return self.operand.integrate(variable)
    if self.operator == 'neg':
      return UnaryOpNode('neg', self.operand.integrate(variable))
    return _integrate_elementary(self.operator, self.operand, variable)

  def simplify(self) -> Node:
    from ..utils.simplifier import ExpressionSimplifier
    return ExpressionSimplifier.simplify_unary(self.operator, self.operand.simplify())

  def is_constant(self) -> bool:
    return self.operand.is_constant()

  def is_zero(self) -> bool:
    return self.operator in SIGN_OPERATORS and self.operand.is_zero()

  def is_one(self) -> bool:
    return self.operator == 'pos' and self.operand.is_one()

  def children(self) -> Tuple[Node, ...]:
    return (self.operand,)

  def to_sympy(self) -> sp.Expr:
    return _sympy_function(self.operator, self.operand.to_sympy())

  def _compute_size(self) -> int:
    return 1 + self.operand.size()

  def _compute_hash(self) -> int:
    return hash((NodeType.UNARY_OP, self.operator, hash(self.operand)))

  def _label(self):
    return self.operator


class FunctionNode(Node):
  """Call-syntax encoding of a math function, name(arg, ...)"""

  __slots__ = ('name', 'args')

  def __init__(self, name: str, args: Sequence[Node]):
    super().__init__()
    self.name = name
    self.args = tuple(args)

  def evaluate(self, bindings: Optional[Bindings] = None) -> float:
    return evaluate_function(self.name, [arg.evaluate(bindings) for arg in self.args])

  def to_string(self) -> str:
    return f"{self.name}({', '.join(arg.to_string() for arg in self.args)})"

  def copy(self) -> 'FunctionNode':
    return FunctionNode(self.name, [arg.copy() for arg in self.args])

  def differentiate(self, variable: str) -> Node:
    if len(self.args) != 1:
      raise UnsupportedDifferentiation(f"{self.name} called with {len(self.args)} arguments")
    if self.is_constant():
      return ConstantNode(0.0)
    if self.name not in ('sin', 'cos', 'ln'):
      raise UnsupportedDifferentiation(f"function {self.name}")
    return _chain_rule(self.name, self.args[0], variable)

  def integrate(self, variable: str) -> Node:
    if len(self.args) != 1:
      raise UnsupportedIntegration(f"{self.name} called with {len(self.args)} arguments")
    return _integrate_elementary(self.name, self.args[0], variable)

  def simplify(self) -> Node:
    from ..utils.simplifier import ExpressionSimplifier
    return ExpressionSimplifier.simplify_function(self.name, [arg.simplify() for arg in self.args])

  def is_constant(self) -> bool:
    return all(arg.is_constant() for arg in self.args)

  def children(self) -> Tuple[Node, ...]:
    return self.args

  def to_sympy(self) -> sp.Expr:
    if len(self.args) != 1:
      raise UnknownFunction(f"{self.name}/{len(self.args)}")
    return _sympy_function(self.name, self.args[0].to_sympy())

  def _compute_size(self) -> int:
    return 1 + sum(arg.size() for arg in self.args)

  def _compute_hash(self) -> int:
    return hash((NodeType.FUNCTION, self.name, tuple(hash(arg) for arg in self.args)))

  def _label(self):
    return self.name


def _chain_rule(function: str, operand: Node, variable: str) -> Node:
  """f(u)' = f'(u) * u'"""
  if function == 'sin':
    outer = UnaryOpNode('cos', operand.copy())
  elif function == 'cos':
    outer = UnaryOpNode('neg', UnaryOpNode('sin', operand.copy()))
  elif function == 'tan':
    # sec^2(u) = 1/cos^2(u)
    outer = BinaryOpNode('/', ConstantNode(1.0),
                         BinaryOpNode('^', UnaryOpNode('cos', operand.copy()), ConstantNode(2.0)))
  elif function == 'ln':
    outer = BinaryOpNode('/', ConstantNode(1.0), operand.copy())
  elif function == 'sqrt':
    outer = BinaryOpNode('/', ConstantNode(1.0),
                         BinaryOpNode('*', ConstantNode(2.0), UnaryOpNode('sqrt', operand.copy())))
  else:
    raise UnsupportedDifferentiation(f"function {function}")
  return BinaryOpNode('*', outer, operand.differentiate(variable))


def _integrate_elementary(function: str, operand: Node, variable: str) -> Node:
  if not _is_variable(operand, variable):
    raise UnsupportedIntegration(f"{function} of {operand.to_string()}")

  if function == 'sin':
    return UnaryOpNode('neg', UnaryOpNode('cos', VariableNode(variable)))
  if function == 'cos':
    return UnaryOpNode('sin', VariableNode(variable))
  if function == 'ln':
    # ln(x) dx = x*ln(x) - x
    return BinaryOpNode('-',
                        BinaryOpNode('*', VariableNode(variable), UnaryOpNode('ln', VariableNode(variable))),
                        VariableNode(variable))
  raise UnsupportedIntegration(f"function {function}")


def _sympy_function(function: str, operand: sp.Expr) -> sp.Expr:
  if function == 'pos':
    return operand
  elif function == 'neg':
    return -operand
  elif function == 'sin':
    return sp.sin(operand)
  elif function == 'cos':
    return sp.cos(operand)
  elif function == 'tan':
    return sp.tan(operand)
  elif function == 'log':
    return sp.log(operand, 10)
  elif function == 'ln':
    return sp.log(operand)
  elif function == 'sqrt':
    return sp.sqrt(operand)
  elif function == 'abs':
    return sp.Abs(operand)
  raise UnknownFunction(function)
