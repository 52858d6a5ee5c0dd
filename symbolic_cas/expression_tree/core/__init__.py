"""Core expression tree components."""

from .node import Node, ConstantNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
from .operators import (
    NodeType, BINARY_OPERATORS, UNARY_OPERATORS, KNOWN_FUNCTIONS,
    format_number, evaluate_binary_op, evaluate_unary_op, evaluate_function
)

__all__ = [
    'Node', 'ConstantNode', 'VariableNode', 'BinaryOpNode', 'UnaryOpNode', 'FunctionNode',
    'NodeType', 'BINARY_OPERATORS', 'UNARY_OPERATORS', 'KNOWN_FUNCTIONS',
    'format_number', 'evaluate_binary_op', 'evaluate_unary_op', 'evaluate_function'
]
