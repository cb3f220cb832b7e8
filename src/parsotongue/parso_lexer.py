"""
Lexical analyzer for the ParsoTongue programming language.

This module converts raw source text into an EOF-terminated list of tokens in
a single left-to-right pass.

Classes:
    CharacterStream: Cursor over the source with line and column tracking.
    Lexer: Converts a source string into a sequence of tokens.

Features:
    - Skips spaces, tabs, carriage returns and newlines
    - One- and two-character operators (`=`/`==`, `<`/`<=`, `>`/`>=`, `!=`)
    - Recognizes:
        * Identifiers and the keywords `var`, `function`, `if`, `else`, `return`
        * Unsigned decimal integers (signed 32-bit range)
        * Double-quoted strings (no escape sequences, may span lines)
        * Operators and punctuation

Raises:
    LexError: On an unexpected character, a lone `!`, an unterminated string
        or an integer literal that does not fit in 32 bits.

Example:
    >>> [str(tok.type) for tok in tokenize("var x = 42;")]
    ['VAR', 'IDENTIFIER', 'ASSIGN', 'INTEGER', 'SEMICOLON', 'EOF']

Exports:
    - CharacterStream
    - Lexer
    - tokenize
"""

import string

from parsotongue.parso_errors import LexError
from parsotongue.parso_tokens import KEYWORDS, Token, TokenType

MAX_INTEGER = 2**31 - 1
MAX_INTEGER_DIGITS = len(str(MAX_INTEGER))

WHITESPACE = frozenset(" \r\t\n")
DIGITS = frozenset(string.digits)
IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = IDENT_START | DIGITS

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
}

# first char -> (type alone, type when followed by "=")
EQUALS_SUFFIX_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS_THAN, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER_THAN, TokenType.GREATER_EQUAL),
}


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    One stream is created per tokenize call and owns the cursor for that call only.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        A newline advances `line` and resets `column` to 1; any other character
        advances `column` by one.

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def match(self, expected: str) -> bool:
        """Consumes the current character only if it equals `expected`."""
        if self.peek() != expected:
            return False
        self.next()
        return True

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Lexer:
    """Lexical analyzer for the ParsoTongue language.

    The lexer holds only the source text; all cursor state lives in a
    `CharacterStream` created afresh by every `tokenize()` call, so repeated
    calls on one instance are independent and deterministic.

    Attributes:
        source (str): The text to tokenize.
    """

    def __init__(self, source: str) -> None:
        self.source = source

    def tokenize(self) -> list[Token]:
        """Scans the whole source and returns its tokens, ending with EOF.

        The EOF token sits at the final cursor line/column; its offset is the end
        of the last real token, so trailing whitespace is not counted.

        Raises:
            LexError: On the first malformed token. No partial list is returned.
        """
        stream = CharacterStream(self.source)
        tokens: list[Token] = []

        while True:
            self.skip_whitespace(stream)
            if stream.end_of_file():
                break
            tokens.append(self.scan_token(stream))

        eof_offset = tokens[-1].end_offset if tokens else 0
        tokens.append(
            Token(TokenType.EOF, "", None, stream.line, stream.column, eof_offset)
        )
        return tokens

    def skip_whitespace(self, stream: CharacterStream) -> None:
        while not stream.end_of_file() and stream.peek() in WHITESPACE:
            stream.next()

    def scan_token(self, stream: CharacterStream) -> Token:
        """Consumes exactly one token starting at the current (non-blank) character."""
        start, line, col = stream.position, stream.line, stream.column
        ch = stream.next()

        if ch in SINGLE_CHAR_TOKENS:
            return self._make_token(stream, SINGLE_CHAR_TOKENS[ch], start, line, col)

        if ch in EQUALS_SUFFIX_TOKENS:
            alone, with_equals = EQUALS_SUFFIX_TOKENS[ch]
            token_type = with_equals if stream.match("=") else alone
            return self._make_token(stream, token_type, start, line, col)

        if ch == "!":
            if stream.match("="):
                return self._make_token(stream, TokenType.NOT_EQUAL, start, line, col)
            raise LexError("Unexpected character: '!'", line, col, start)

        if ch == '"':
            return self.string(stream, start, line, col)

        if ch in DIGITS:
            return self.integer(stream, start, line, col)

        if ch in IDENT_START:
            return self.identifier(stream, start, line, col)

        raise LexError(f"Unexpected character: {ch!r}", line, col, start)

    def string(self, stream: CharacterStream, start: int, line: int, col: int) -> Token:
        """Scans up to the closing quote; the literal is the raw text between quotes."""
        while not stream.end_of_file() and stream.peek() != '"':
            stream.next()

        if stream.end_of_file():
            raise LexError("Unterminated string", line, col, start)

        stream.next()  # closing quote
        value = self.source[start + 1 : stream.position - 1]
        return self._make_token(stream, TokenType.STRING, start, line, col, value)

    def integer(self, stream: CharacterStream, start: int, line: int, col: int) -> Token:
        while stream.peek() in DIGITS:
            stream.next()

        text = self.source[start : stream.position]
        # length check must come first: int() refuses strings over 4300 digits
        digits = text.lstrip("0") or "0"
        if len(digits) > MAX_INTEGER_DIGITS or int(digits) > MAX_INTEGER:
            raise LexError(
                f"Integer literal out of range: {text} (max {MAX_INTEGER})",
                line,
                col,
                start,
            )
        value = int(digits)
        return self._make_token(stream, TokenType.INTEGER, start, line, col, value)

    def identifier(
        self, stream: CharacterStream, start: int, line: int, col: int
    ) -> Token:
        while stream.peek() in IDENT_CHARS:
            stream.next()

        text = self.source[start : stream.position]
        token_type = KEYWORDS.get(text, TokenType.IDENTIFIER)
        return self._make_token(stream, token_type, start, line, col)

    def _make_token(
        self,
        stream: CharacterStream,
        token_type: TokenType,
        start: int,
        line: int,
        col: int,
        literal: int | str | None = None,
    ) -> Token:
        lexeme = self.source[start : stream.position]
        return Token(token_type, lexeme, literal, line, col, start)


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` with a fresh `Lexer`."""
    return Lexer(source).tokenize()


__all__ = ["CharacterStream", "Lexer", "tokenize"]
