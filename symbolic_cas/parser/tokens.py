from enum import IntEnum


class TokenType(IntEnum):
  NUMBER = 0
  VARIABLE = 1
  FUNCTION = 2
  PLUS = 3
  MINUS = 4
  MULTIPLY = 5
  DIVIDE = 6
  POWER = 7
  LEFT_PAREN = 8
  RIGHT_PAREN = 9
  COMMA = 10
  END_OF_FILE = 11
  INVALID = 12


SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.DIVIDE,
    '^': TokenType.POWER,
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    ',': TokenType.COMMA,
}

# Tokens that can begin a Power production; seeing one right after a complete
# factor means implicit multiplication
POWER_START_TOKENS = (TokenType.NUMBER, TokenType.VARIABLE, TokenType.FUNCTION, TokenType.LEFT_PAREN)


class Token:
  __slots__ = ('type', 'value', 'position')

  def __init__(self, type_: TokenType, value: str = "", position: int = 0):
    self.type = type_
    self.value = value
    self.position = position

  def __eq__(self, other) -> bool:
    if not isinstance(other, Token):
      return False
    return (self.type, self.value, self.position) == (other.type, other.value, other.position)

  def __repr__(self) -> str:
    return f"Token({self.type.name}, {self.value!r}, {self.position})"
