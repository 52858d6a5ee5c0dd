"""
Expression grammar: tokenizer, recursive-descent parser and the AST it
produces.
"""

from .tokens import Token, TokenType
from .lexer import Lexer, tokenize
from .ast_nodes import ASTNode, NumberNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
from .parser import Parser, parse_expression

__all__ = [
    'Token', 'TokenType', 'Lexer', 'tokenize',
    'ASTNode', 'NumberNode', 'VariableNode', 'BinaryOpNode', 'UnaryOpNode', 'FunctionNode',
    'Parser', 'parse_expression'
]
