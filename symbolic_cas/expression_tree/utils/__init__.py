"""Utilities for expression trees."""

from .simplifier import ExpressionSimplifier
from .sympy_utils import to_sympy, are_equivalent, sympy_derivative, latex_representation
from .tree_utils import calculate_tree_depth, contains_variable

__all__ = [
    'ExpressionSimplifier',
    'to_sympy', 'are_equivalent', 'sympy_derivative', 'latex_representation',
    'calculate_tree_depth', 'contains_variable'
]
