import math
from enum import IntEnum
from typing import Sequence
from ...errors import DivisionByZero, DomainError, UnknownFunction, FunctionArityError

class NodeType(IntEnum):
  CONSTANT = 0
  VARIABLE = 1
  BINARY_OP = 2
  UNARY_OP = 3
  FUNCTION = 4

BINARY_OPERATORS = ('+', '-', '*', '/', '^')
UNARY_OPERATORS = ('pos', 'neg', 'sin', 'cos', 'tan', 'log', 'ln', 'sqrt', 'abs')

# Names the lexer classifies as functions; 'log' is base 10, 'ln' is natural
KNOWN_FUNCTIONS = ('sin', 'cos', 'tan', 'log', 'ln', 'sqrt', 'abs')

SIGN_OPERATORS = ('pos', 'neg')


def format_number(value: float) -> str:
  """Integral values print without a decimal point, everything else as %g"""
  if math.isfinite(value) and value == int(value) and abs(value) < 1e15:
    return str(int(value))
  return f"{value:g}"


def format_signed(sign: str, text: str) -> str:
  """Prefix a sign, parenthesizing operands that already start with one: -(-3x), not --3x"""
  if text.startswith(('-', '+')):
    return f"{sign}({text})"
  return sign + text


def evaluate_binary_op(left_val: float, right_val: float, operator: str) -> float:
  if operator == '+':
    return left_val + right_val
  elif operator == '-':
    return left_val - right_val
  elif operator == '*':
    return left_val * right_val
  elif operator == '/':
    if right_val == 0:
      raise DivisionByZero()
    return left_val / right_val
  elif operator == '^':
    if left_val == 0 and right_val < 0:
      raise DivisionByZero("Zero raised to a negative power")
    try:
      return math.pow(left_val, right_val)
    except ValueError:
      # Negative base with a fractional exponent
      raise DomainError('^', left_val) from None
    except OverflowError:
      odd_exponent = float(right_val).is_integer() and int(right_val) % 2 == 1
      return -math.inf if left_val < 0 and odd_exponent else math.inf
  raise ValueError(f"Unknown binary operator: {operator}")


def evaluate_unary_op(operand_val: float, operator: str) -> float:
  if operator == 'pos':
    return operand_val
  elif operator == 'neg':
    return -operand_val
  elif operator == 'log':
    if operand_val <= 0:
      raise DomainError('log', operand_val)
    return math.log10(operand_val)
  elif operator == 'ln':
    if operand_val <= 0:
      raise DomainError('ln', operand_val)
    return math.log(operand_val)
  elif operator == 'sqrt':
    if operand_val < 0:
      raise DomainError('sqrt', operand_val)
    return math.sqrt(operand_val)
  elif operator == 'abs':
    return abs(operand_val)

  try:
    if operator == 'sin':
      return math.sin(operand_val)
    elif operator == 'cos':
      return math.cos(operand_val)
    elif operator == 'tan':
      return math.tan(operand_val)
  except ValueError:
    # math.sin(inf) and friends
    raise DomainError(operator, operand_val) from None
  raise ValueError(f"Unknown unary operator: {operator}")


def evaluate_function(name: str, arg_values: Sequence[float]) -> float:
  """Evaluate a call-syntax function with the same semantics as its unary operator"""
  if name not in KNOWN_FUNCTIONS:
    raise UnknownFunction(name)
  if len(arg_values) != 1:
    raise FunctionArityError(name, 1, len(arg_values))
  return evaluate_unary_op(arg_values[0], name)
