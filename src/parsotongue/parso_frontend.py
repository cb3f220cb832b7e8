"""
Provides the `ParsoTongueParser` facade that runs the full front end: source
text to tokens to `Program`.

Classes and Features:
    - TokenSource (Protocol): Anything with a `tokenize()` returning tokens.
    - ProgramSource (Protocol): Anything with a `parse()` returning a Program.
    - ParsoTongueParser: Wires a lexer factory and a parser factory together.
      Both default to the stock `Lexer` and `Parser` classes; any callable with
      the same shape may be substituted (e.g. for instrumentation or tests).

Usage:
    >>> program = ParsoTongueParser().parse("var x = 42;")
    >>> program.statements[0].name
    'x'

Raises:
    LexError: If the source cannot be tokenized.
    ParseError, InvalidOperatorError: If the tokens violate the grammar.
"""

from collections.abc import Callable
from typing import Protocol

from parsotongue.parso_ast import Program
from parsotongue.parso_lexer import Lexer
from parsotongue.parso_parser import Parser
from parsotongue.parso_tokens import Token


class TokenSource(Protocol):
    def tokenize(self) -> list[Token]: ...  # pragma: no cover


class ProgramSource(Protocol):
    def parse(self) -> Program: ...  # pragma: no cover


LexerFactory = Callable[[str], TokenSource]
"""Builds a lexer for one source string."""

ParserFactory = Callable[[list[Token]], ProgramSource]
"""Builds a parser for one token list."""


class ParsoTongueParser:
    """Runs the lexer and the parser for one source string per `parse()` call.

    Attributes:
        lexer_factory (LexerFactory): Called with the source text.
        parser_factory (ParserFactory): Called with the lexer's tokens.
    """

    def __init__(
        self,
        lexer_factory: LexerFactory = Lexer,
        parser_factory: ParserFactory = Parser,
    ) -> None:
        self.lexer_factory = lexer_factory
        self.parser_factory = parser_factory

    def tokenize(self, source: str) -> list[Token]:
        return self.lexer_factory(source).tokenize()

    def parse(self, source: str) -> Program:
        """Lexes and parses `source`, failing as a whole on the first error."""
        tokens = self.tokenize(source)
        return self.parser_factory(tokens).parse()


def parse_source(source: str) -> Program:
    """Parses `source` with the default lexer and parser."""
    return ParsoTongueParser().parse(source)


__all__ = ["LexerFactory", "ParserFactory", "ParsoTongueParser", "parse_source"]
