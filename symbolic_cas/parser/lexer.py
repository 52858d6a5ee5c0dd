from typing import Iterator

from .tokens import Token, TokenType, SINGLE_CHAR_TOKENS
from ..expression_tree.core.operators import KNOWN_FUNCTIONS


class Lexer:
  """Lazy, restartable tokenizer.

  Never raises: characters outside the grammar come back as INVALID tokens
  and it is up to the parser to reject them. Once the input is exhausted
  every further call returns END_OF_FILE.
  """

  def __init__(self, text: str):
    self.text = text
    self.pos = 0

  def reset(self):
    self.pos = 0

  def _peek(self, offset: int = 0) -> str:
    index = self.pos + offset
    return self.text[index] if index < len(self.text) else ''

  def skip_whitespace(self):
    while self.pos < len(self.text) and self.text[self.pos].isspace():
      self.pos += 1

  def next_token(self) -> Token:
    self.skip_whitespace()

    if self.pos >= len(self.text):
      return Token(TokenType.END_OF_FILE, "", len(self.text))

    current = self.text[self.pos]

    if current.isdigit() or current == '.':
      return self._read_number()

    if current.isalpha() or current == '_':
      return self._read_identifier()

    start = self.pos
    self.pos += 1
    return Token(SINGLE_CHAR_TOKENS.get(current, TokenType.INVALID), current, start)

  def _read_number(self) -> Token:
    start = self.pos
    seen_decimal = False

    while self.pos < len(self.text):
      char = self.text[self.pos]
      if char.isdigit():
        self.pos += 1
      elif char == '.' and not seen_decimal:
        seen_decimal = True
        self.pos += 1
      else:
        break

    # Exponent only when digits follow, so "2e" lexes as 2 followed by variable e
    if self._peek() in ('e', 'E'):
      sign = 1 if self._peek(1) in ('+', '-') else 0
      if self._peek(1 + sign).isdigit():
        self.pos += 1 + sign
        while self._peek().isdigit():
          self.pos += 1

    return Token(TokenType.NUMBER, self.text[start:self.pos], start)

  def _read_identifier(self) -> Token:
    start = self.pos
    while self.pos < len(self.text) and (self.text[self.pos].isalnum() or self.text[self.pos] == '_'):
      self.pos += 1

    identifier = self.text[start:self.pos]
    token_type = TokenType.FUNCTION if identifier in KNOWN_FUNCTIONS else TokenType.VARIABLE
    return Token(token_type, identifier, start)

  def __iter__(self) -> Iterator[Token]:
    """Yield tokens from the current position through END_OF_FILE"""
    while True:
      token = self.next_token()
      yield token
      if token.type == TokenType.END_OF_FILE:
        return


def tokenize(text: str) -> list:
  return list(Lexer(text))
