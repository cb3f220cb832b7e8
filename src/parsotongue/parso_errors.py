"""
Error types raised by the ParsoTongue lexer and parser.

All errors derive from the builtin `SyntaxError`, so callers may catch every
front-end failure at once or each kind separately. Every error aborts the
whole lex or parse call; no partial token list or AST is ever returned.

Classes:
    LexError: Unrecognized character, lone `!`, unterminated string or
        out-of-range integer literal.
    ParseError: A token other than the one the grammar requires.
    InvalidOperatorError: A matched token is not a legal binary operator.
"""

from parsotongue.parso_tokens import Token, TokenType


class LexError(SyntaxError):
    """Raised on the first lexing error.

    Attributes:
        message (str): Description of the failure without position.
        line (int): 1-based line of the offending character.
        column (int): 1-based column of the offending character.
        offset (int): 0-based index of the offending character.
    """

    def __init__(self, message: str, line: int, column: int, offset: int) -> None:
        super().__init__(f"Error at line {line}, column {column}: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.offset = offset


class ParseError(SyntaxError):
    """Raised on the first grammar violation.

    The string form names the position ("end" when the offending token is EOF,
    otherwise its line and column), the expectation and the token found.

    Attributes:
        message (str): What the parser expected.
        token (Token): The offending token.
    """

    def __init__(self, message: str, token: Token) -> None:
        self.message = message
        self.token = token
        super().__init__(
            f"Error at {self.location}: {message}, got {token.describe()}"
        )

    @property
    def location(self) -> str:
        if self.token.type is TokenType.EOF:
            return "end"
        return f"line {self.token.line} at position {self.token.column}"


class InvalidOperatorError(SyntaxError):
    """Raised when a token that is not a binary operator reaches a binary expression.

    Attributes:
        category (TokenType): The unexpected token category.
        token (Token | None): The token carrying it, when known.
    """

    def __init__(self, category: TokenType, token: Token | None = None) -> None:
        super().__init__(f"Expected binary operator, got {category} instead")
        self.category = category
        self.token = token


__all__ = ["InvalidOperatorError", "LexError", "ParseError"]
