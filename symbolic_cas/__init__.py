"""Symbolic CAS Package

Parses human-written formulas and manipulates them symbolically:
evaluation, differentiation, integration, simplification, linear solving
and basic factoring.
"""

from .errors import (
  CasError, ParseError, EvaluationError, UndefinedVariable, DivisionByZero,
  DomainError, UnknownFunction, FunctionArityError, UnsupportedDifferentiation,
  UnsupportedIntegration, UnsupportedEquation, NoExpression, UnrecognizedNode
)
from .expression_tree import (
  Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
)
from .parser import Lexer, Parser, tokenize, parse_expression
from .converter import ast_to_symbolic
from .engine import SymbolicEngine, parse
from .sampling import sample_expression, DEFAULT_SAMPLE_POINTS
from .logging_system import LogLevel, configure_logging, set_log_level, get_logger

__version__ = "0.1.0"
__all__ = [
  "CasError", "ParseError", "EvaluationError", "UndefinedVariable", "DivisionByZero",
  "DomainError", "UnknownFunction", "FunctionArityError", "UnsupportedDifferentiation",
  "UnsupportedIntegration", "UnsupportedEquation", "NoExpression", "UnrecognizedNode",
  "Node", "ConstantNode", "VariableNode", "BinaryOpNode", "UnaryOpNode", "FunctionNode",
  "Lexer", "Parser", "tokenize", "parse_expression",
  "ast_to_symbolic",
  "SymbolicEngine", "parse",
  "sample_expression", "DEFAULT_SAMPLE_POINTS",
  "LogLevel", "configure_logging", "set_log_level", "get_logger"
]
