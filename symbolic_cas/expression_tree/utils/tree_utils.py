"""
Tree Utility Functions

Inspection helpers used by node metrics and the equation solver. None of
them modify the tree they are given.
"""

from ..core.node import Node, BinaryOpNode, UnaryOpNode, FunctionNode, ConstantNode, VariableNode


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    if isinstance(node, (ConstantNode, VariableNode)):
        return 1
    elif isinstance(node, UnaryOpNode):
        return 1 + calculate_tree_depth(node.operand)
    elif isinstance(node, BinaryOpNode):
        left_depth = calculate_tree_depth(node.left)
        right_depth = calculate_tree_depth(node.right)
        return 1 + max(left_depth, right_depth)
    elif isinstance(node, FunctionNode):
        return 1 + max((calculate_tree_depth(arg) for arg in node.args), default=0)
    else:
        return 1


def contains_variable(node: Node, name: str) -> bool:
    """Check whether the tree references the variable `name` anywhere"""
    if isinstance(node, VariableNode):
        return node.name == name
    return any(contains_variable(child, name) for child in node.children())
