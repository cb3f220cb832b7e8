"""
Token model for the ParsoTongue language.

This module defines the closed set of token categories produced by the lexer and
the immutable `Token` record consumed by the parser.

Classes:
    TokenFamily: Coarse grouping of token categories (keyword, operator, ...).
    TokenType: Every token category recognized by the lexer.
    Token: A classified lexeme with its source position.

Constants:
    KEYWORDS: Maps reserved words to their keyword token types.

Example:
    >>> tok = Token(TokenType.INTEGER, "42", 42, line=1, column=9, start_offset=8)
    >>> tok.end_offset
    10

Exports:
    - TokenFamily
    - TokenType
    - Token
    - KEYWORDS
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenFamily(Enum):
    KEYWORD = auto()
    OPERATOR = auto()
    SYMBOL = auto()
    LITERAL = auto()
    IDENTIFIER = auto()
    OTHER = auto()


class TokenType(Enum):
    # Keywords
    VAR = auto()
    FUNCTION = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()

    # Operators
    PLUS = auto()
    MINUS = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    LESS_THAN = auto()
    GREATER_THAN = auto()
    LESS_EQUAL = auto()
    GREATER_EQUAL = auto()
    EQUAL_EQUAL = auto()
    NOT_EQUAL = auto()

    # Symbols
    ASSIGN = auto()
    SEMICOLON = auto()
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()

    # Literals
    INTEGER = auto()
    STRING = auto()

    IDENTIFIER = auto()
    EOF = auto()

    @property
    def family(self) -> TokenFamily:
        return _FAMILIES[self]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"TokenType.{self.name}"


_FAMILIES: dict[TokenType, TokenFamily] = {
    **dict.fromkeys(
        (
            TokenType.VAR,
            TokenType.FUNCTION,
            TokenType.IF,
            TokenType.ELSE,
            TokenType.RETURN,
        ),
        TokenFamily.KEYWORD,
    ),
    **dict.fromkeys(
        (
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.MULTIPLY,
            TokenType.DIVIDE,
            TokenType.MODULO,
            TokenType.LESS_THAN,
            TokenType.GREATER_THAN,
            TokenType.LESS_EQUAL,
            TokenType.GREATER_EQUAL,
            TokenType.EQUAL_EQUAL,
            TokenType.NOT_EQUAL,
        ),
        TokenFamily.OPERATOR,
    ),
    **dict.fromkeys(
        (
            TokenType.ASSIGN,
            TokenType.SEMICOLON,
            TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE,
            TokenType.COMMA,
        ),
        TokenFamily.SYMBOL,
    ),
    TokenType.INTEGER: TokenFamily.LITERAL,
    TokenType.STRING: TokenFamily.LITERAL,
    TokenType.IDENTIFIER: TokenFamily.IDENTIFIER,
    TokenType.EOF: TokenFamily.OTHER,
}


KEYWORDS: dict[str, TokenType] = {
    "var": TokenType.VAR,
    "function": TokenType.FUNCTION,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
}


@dataclass(frozen=True, repr=False)
class Token:
    """A single lexical token of a ParsoTongue program.

    Attributes:
        type (TokenType): The token category.
        lexeme (str): The exact source text the token was built from
            (empty for EOF, quotes included for strings).
        literal (int | str | None): Decoded value of INTEGER and STRING tokens.
        line (int): 1-based line of the token's first character.
        column (int): 1-based column of the token's first character.
        start_offset (int): 0-based index of the first character in the source.
    """

    type: TokenType
    lexeme: str
    literal: int | str | None = None
    line: int = 1
    column: int = 1
    start_offset: int = 0

    @property
    def length(self) -> int:
        return len(self.lexeme)

    @property
    def end_offset(self) -> int:
        return self.start_offset + self.length

    def describe(self) -> str:
        """Returns a short human-readable name for error messages."""
        if self.type is TokenType.EOF:
            return "end of input"
        return f"{self.type} {self.lexeme!r}"

    def __repr__(self) -> str:
        return (
            f"Token({self.type}, {self.lexeme!r}, "
            f"line={self.line}, col={self.column}, offset={self.start_offset})"
        )


__all__ = ["KEYWORDS", "Token", "TokenFamily", "TokenType"]
