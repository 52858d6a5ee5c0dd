from typing import List

from .ast_nodes import ASTNode, NumberNode, VariableNode, BinaryOpNode, UnaryOpNode, FunctionNode
from .lexer import Lexer
from .tokens import TokenType, POWER_START_TOKENS
from ..errors import ParseError


class Parser:
  """Recursive-descent parser with one token of lookahead.

  Grammar, loosest binding first:

    expression := term (('+' | '-') term)*
    term       := power (('*' | '/')? power)*     adjacency is implicit '*'
    power      := primary ('^' power)?            right associative
    primary    := NUMBER | VARIABLE
                | FUNCTION '(' [expression (',' expression)*] ')'
                | '(' expression ')'
                | ('+' | '-') primary
  """

  def __init__(self, text: str):
    self.lexer = Lexer(text)
    self.current = self.lexer.next_token()

  def advance(self):
    self.current = self.lexer.next_token()

  def expect(self, token_type: TokenType, message: str):
    if self.current.type != token_type:
      self._fail(message)

  def _fail(self, message: str):
    if self.current.type == TokenType.INVALID:
      raise ParseError(f"Invalid character {self.current.value!r}", self.current.position)
    if self.current.type == TokenType.END_OF_FILE:
      raise ParseError(f"{message}, reached end of expression", self.current.position)
    raise ParseError(f"{message}, found {self.current.value!r}", self.current.position)

  def parse(self) -> ASTNode:
    try:
      result = self.parse_expression()
    except RecursionError:
      raise ParseError("Expression nested too deeply", self.current.position) from None
    self.expect(TokenType.END_OF_FILE, "Expected end of expression")
    return result

  def parse_expression(self) -> ASTNode:
    left = self.parse_term()

    while self.current.type in (TokenType.PLUS, TokenType.MINUS):
      operator = '+' if self.current.type == TokenType.PLUS else '-'
      self.advance()
      left = BinaryOpNode(operator, left, self.parse_term())

    return left

  def parse_term(self) -> ASTNode:
    left = self.parse_power()

    while self.current.type in (TokenType.MULTIPLY, TokenType.DIVIDE) or self.current.type in POWER_START_TOKENS:
      if self.current.type in (TokenType.MULTIPLY, TokenType.DIVIDE):
        operator = '*' if self.current.type == TokenType.MULTIPLY else '/'
        self.advance()
      else:
        # Implicit multiplication: 2x, x sin(x), (a)(b)
        operator = '*'
      left = BinaryOpNode(operator, left, self.parse_power())

    return left

  def parse_power(self) -> ASTNode:
    base = self.parse_primary()

    if self.current.type == TokenType.POWER:
      self.advance()
      # Recurse into power, not term, so 2^3^2 = 2^(3^2)
      return BinaryOpNode('^', base, self.parse_power())

    return base

  def parse_primary(self) -> ASTNode:
    token = self.current

    if token.type == TokenType.NUMBER:
      try:
        value = float(token.value)
      except ValueError:
        raise ParseError(f"Malformed number {token.value!r}", token.position) from None
      self.advance()
      return NumberNode(value)

    if token.type == TokenType.VARIABLE:
      self.advance()
      return VariableNode(token.value)

    if token.type == TokenType.FUNCTION:
      return self.parse_function()

    if token.type == TokenType.LEFT_PAREN:
      self.advance()
      expr = self.parse_expression()
      self.expect(TokenType.RIGHT_PAREN, "Expected closing parenthesis")
      self.advance()
      return expr

    if token.type in (TokenType.PLUS, TokenType.MINUS):
      self.advance()
      operator = 'pos' if token.type == TokenType.PLUS else 'neg'
      return UnaryOpNode(operator, self.parse_primary())

    self._fail("Expected a number, variable, function or '('")

  def parse_function(self) -> FunctionNode:
    name = self.current.value
    self.advance()

    self.expect(TokenType.LEFT_PAREN, f"Expected '(' after function name {name!r}")
    self.advance()

    args: List[ASTNode] = []
    if self.current.type != TokenType.RIGHT_PAREN:
      args.append(self.parse_expression())
      while self.current.type == TokenType.COMMA:
        self.advance()
        args.append(self.parse_expression())

    self.expect(TokenType.RIGHT_PAREN, "Expected closing parenthesis")
    self.advance()
    return FunctionNode(name, args)


def parse_expression(text: str) -> ASTNode:
  """Parse text into an AST, raising ParseError on malformed input"""
  return Parser(text).parse()
