"""
ParsoTongue Language Parser

Parses ParsoTongue tokens into an abstract syntax tree rooted at a `Program`.

This module implements a recursive-descent parser with one method per grammar
nonterminal. Operator precedence is encoded by call nesting; every binary level
folds its operands left-to-right, so `1 + 2 + 12` parses as `(1 + 2) + 12`.

Grammar
-------
    Program        := Statement* EOF
    Statement      := VarDecl | FuncDecl | IfStmt | '{' Block | ReturnStmt | ExprStmt
    VarDecl        := 'var' IDENTIFIER '=' Expression ';'
    FuncDecl       := 'function' IDENTIFIER '(' (IDENTIFIER (',' IDENTIFIER)*)? ')' '{' Block
    ReturnStmt     := 'return' Expression? ';'
    IfStmt         := 'if' '(' Expression ')' '{' Block ('else' '{' Block)?
    Block          := Statement* '}'
    ExprStmt       := Expression ';'
    Expression     := Equality
    Equality       := Comparison (('==' | '!=') Comparison)*
    Comparison     := Additive (('<' | '>' | '<=' | '>=') Additive)*
    Additive       := Multiplicative (('+' | '-') Multiplicative)*
    Multiplicative := Primary (('*' | '/' | '%') Primary)*
    Primary        := INTEGER | STRING | IDENTIFIER ('(' (Expression (',' Expression)*)? ')')?
                    | '(' Expression ')'

Entry Points
------------
- `parse()`: Parse a full program.
- `parse_expression_entrypoint()`: Parse one bare expression (REPL mode).

Raises
------
ParseError
    Raised on the first token that violates the grammar.
InvalidOperatorError
    Raised when a token that is not a binary operator would build a
    `BinaryExpression`.
"""

from collections.abc import Callable

from parsotongue.parso_ast import (
    BinaryExpression,
    Block,
    Expression,
    ExpressionStatement,
    FunctionCall,
    FunctionDeclaration,
    IfStatement,
    IntegerLiteral,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
    VariableDeclaration,
    VariableReference,
)
from parsotongue.parso_errors import InvalidOperatorError, ParseError
from parsotongue.parso_tokens import Token, TokenFamily, TokenType

EQUALITY_OPS = (TokenType.EQUAL_EQUAL, TokenType.NOT_EQUAL)
COMPARISON_OPS = (
    TokenType.LESS_THAN,
    TokenType.GREATER_THAN,
    TokenType.LESS_EQUAL,
    TokenType.GREATER_EQUAL,
)
ADDITIVE_OPS = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE_OPS = (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO)


class Parser:
    """
    ParsoTongue Parser Class

    Transforms an EOF-terminated token list into a `Program`. The only state is
    the cursor `position`, which `parse()` resets, so one instance can be
    parsed repeatedly with identical results.

    Attributes
    ----------
    tokens : list[Token]
        The input token stream; its last token must be EOF.
    position : int
        Current index into the token stream.

    Raises
    ------
    ValueError
        If the token list is empty or does not end with an EOF token.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[-1].type is not TokenType.EOF:
            raise ValueError("Token sequence must end with an EOF token.")
        self.tokens: list[Token] = tokens
        self.position: int = 0

    # Cursor helpers

    def current(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def is_at_end(self) -> bool:
        return self.current().type is TokenType.EOF

    def advance(self) -> Token:
        """Consumes and returns the current token; a no-op at EOF."""
        tok = self.current()
        if not self.is_at_end():
            self.position += 1
        return tok

    def check(self, token_type: TokenType) -> bool:
        return not self.is_at_end() and self.current().type is token_type

    def match(self, *types: TokenType) -> Token | None:
        """Consumes the current token if it has one of `types`."""
        for token_type in types:
            if self.check(token_type):
                return self.advance()
        return None

    def expect(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        raise ParseError(message, self.current())

    def expect_binary_operator(self, token: Token) -> TokenType:
        """Validates that `token` is a binary operator and returns its type.

        Every operator-family token is accepted; the grammar already restricts
        which operators reach each precedence level.
        """
        if token.type.family is TokenFamily.OPERATOR:
            return token.type
        raise InvalidOperatorError(token.type, token)

    # Entry points

    def parse(self) -> Program:
        """Parse a full ParsoTongue program."""
        self.position = 0
        statements: list[Statement] = []
        try:
            while not self.is_at_end():
                statements.append(self.parse_statement())
        except RecursionError as e:
            raise ParseError("Nesting too deep", self.current()) from e
        return Program(statements)

    def parse_expression_entrypoint(self) -> Expression:
        """Parse a single expression that must span the whole token stream."""
        self.position = 0
        try:
            expr = self.parse_expression()
        except RecursionError as e:
            raise ParseError("Nesting too deep", self.current()) from e
        if not self.is_at_end():
            raise ParseError("Expected end of input after expression", self.current())
        return expr

    # Statements

    def parse_statement(self) -> Statement:
        if self.match(TokenType.VAR):
            return self.parse_variable_declaration()
        if self.match(TokenType.FUNCTION):
            return self.parse_function_declaration()
        if self.match(TokenType.IF):
            return self.parse_if()
        if self.match(TokenType.LEFT_BRACE):
            return self.parse_block()
        if self.match(TokenType.RETURN):
            return self.parse_return()
        return self.parse_expression_statement()

    def parse_variable_declaration(self) -> VariableDeclaration:
        name = self.expect(TokenType.IDENTIFIER, "Expected variable name").lexeme
        self.expect(TokenType.ASSIGN, "Expected '=' after variable name")
        initial_value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after variable declaration")
        return VariableDeclaration(name, initial_value)

    def parse_function_declaration(self) -> FunctionDeclaration:
        name = self.expect(TokenType.IDENTIFIER, "Expected function name").lexeme
        self.expect(TokenType.LEFT_PAREN, "Expected '(' after function name")

        parameters: list[str] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                param = self.expect(TokenType.IDENTIFIER, "Expected parameter name")
                parameters.append(param.lexeme)
                if not self.match(TokenType.COMMA):
                    break

        self.expect(TokenType.RIGHT_PAREN, "Expected ')' after parameters")
        self.expect(TokenType.LEFT_BRACE, "Expected '{' before function body")
        return FunctionDeclaration(name, parameters, self.parse_block())

    def parse_return(self) -> ReturnStatement:
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after return value")
        return ReturnStatement(value)

    def parse_if(self) -> IfStatement:
        self.expect(TokenType.LEFT_PAREN, "Expected '(' after 'if'")
        condition = self.parse_expression()
        self.expect(TokenType.RIGHT_PAREN, "Expected ')' after if condition")
        self.expect(TokenType.LEFT_BRACE, "Expected '{' before if body")
        then_block = self.parse_block()

        else_block = None
        if self.match(TokenType.ELSE):
            # `else if` must be spelled `else { if ... }`
            self.expect(TokenType.LEFT_BRACE, "Expected '{' before else body")
            else_block = self.parse_block()

        return IfStatement(condition, then_block, else_block)

    def parse_block(self) -> Block:
        """Parse statements up to the closing brace; the `{` is already consumed."""
        statements: list[Statement] = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.parse_statement())
        self.expect(TokenType.RIGHT_BRACE, "Expected '}' after block")
        return Block(statements)

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after expression")
        return ExpressionStatement(expr)

    # Expressions

    def parse_expression(self) -> Expression:
        return self.parse_equality()

    def parse_equality(self) -> Expression:
        return self._fold_left(self.parse_comparison, EQUALITY_OPS)

    def parse_comparison(self) -> Expression:
        return self._fold_left(self.parse_additive, COMPARISON_OPS)

    def parse_additive(self) -> Expression:
        return self._fold_left(self.parse_multiplicative, ADDITIVE_OPS)

    def parse_multiplicative(self) -> Expression:
        return self._fold_left(self.parse_primary, MULTIPLICATIVE_OPS)

    def _fold_left(
        self, operand: Callable[[], Expression], operators: tuple[TokenType, ...]
    ) -> Expression:
        expr = operand()
        while op_tok := self.match(*operators):
            operator = self.expect_binary_operator(op_tok)
            expr = BinaryExpression(expr, operator, operand())
        return expr

    def parse_primary(self) -> Expression:
        if tok := self.match(TokenType.INTEGER):
            return IntegerLiteral(int(tok.literal))  # type: ignore[arg-type]
        if tok := self.match(TokenType.STRING):
            return StringLiteral(str(tok.literal))
        if tok := self.match(TokenType.IDENTIFIER):
            if self.match(TokenType.LEFT_PAREN):
                return self.parse_call(tok.lexeme)
            return VariableReference(tok.lexeme)
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.expect(TokenType.RIGHT_PAREN, "Expected ')' after expression")
            return expr
        raise ParseError("Expected expression", self.current())

    def parse_call(self, name: str) -> FunctionCall:
        """Parse call arguments; the callee name and `(` are already consumed."""
        arguments: list[Expression] = []
        if not self.check(TokenType.RIGHT_PAREN):
            while True:
                arguments.append(self.parse_expression())
                if not self.match(TokenType.COMMA):
                    break
        self.expect(TokenType.RIGHT_PAREN, "Expected ')' after function arguments")
        return FunctionCall(name, arguments)


def parse(tokens: list[Token]) -> Program:
    """Parses `tokens` with a fresh `Parser`."""
    return Parser(tokens).parse()


__all__ = ["Parser", "parse"]
