import sympy as sp
from typing import Optional

from ..core.node import Node
from ...errors import UnknownFunction


def to_sympy(node: Node) -> sp.Expr:
  """Convert a symbolic tree into the equivalent SymPy expression"""
  return node.to_sympy()


def are_equivalent(first: Node, second: Node) -> bool:
  """
  Check whether two trees denote the same function, using SymPy's simplifier.

  Used to cross-check our own rewrite rules (derivatives, integrals,
  simplification) against an independent CAS.
  """
  difference = sp.simplify(to_sympy(first) - to_sympy(second))
  return difference == 0 or difference.is_zero is True


def sympy_derivative(node: Node, variable: str) -> sp.Expr:
  """Reference derivative computed by SymPy"""
  return sp.diff(to_sympy(node), sp.Symbol(variable))


def latex_representation(node: Node, fallback: Optional[str] = None) -> str:
  """Get LaTeX representation of the expression"""
  try:
    return sp.latex(to_sympy(node))
  except (UnknownFunction, TypeError, ValueError):
    return fallback if fallback is not None else node.to_string()
