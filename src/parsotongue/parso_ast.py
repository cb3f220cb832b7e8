"""
Defines the abstract syntax tree (AST) for the ParsoTongue programming language.

Every node is a frozen dataclass, so trees are immutable once built and compare
structurally. Sequence fields are stored as tuples; lists passed to a
constructor are frozen on the way in.

Classes:
    ASTNode: Base of every node; provides `to_dict()` serialization.
    Statement / Expression: The two node families.

    Program: Root node holding the top-level statements.
    VariableDeclaration, FunctionDeclaration, ReturnStatement, Block,
    IfStatement, ExpressionStatement: Statement variants.
    BinaryExpression, IntegerLiteral, StringLiteral, VariableReference,
    FunctionCall: Expression variants.

Functions:
    walk(node): Pre-order iteration over a subtree.
    count_nodes(node): Number of AST nodes in a subtree.
    dump_ast(node, file): Human-readable indented tree.

Example:
    >>> VariableDeclaration("x", IntegerLiteral(42)).to_dict()
    {'kind': 'VariableDeclaration', 'name': 'x', 'initial_value': {'kind': 'IntegerLiteral', 'value': 42}}
"""

import sys
from collections.abc import Iterator
from dataclasses import dataclass, fields
from typing import Any, TextIO

from parsotongue.parso_tokens import TokenType

ASTDict = dict[str, Any]
"""JSON-ready dictionary form of a node: `kind` plus one key per field."""


class ASTNode:
    def to_dict(self) -> ASTDict:
        """Converts the node (and all descendants) into nested dictionaries.

        Each child dict is created empty and filled when its node is popped
        from the work stack, so the depth of the tree is not limited by the
        recursion limit.
        """
        root: ASTDict = {}
        pending: list[tuple[ASTNode, ASTDict]] = [(self, root)]
        while pending:
            node, out = pending.pop()
            out["kind"] = type(node).__name__
            for field in fields(node):  # type: ignore[arg-type]
                value = getattr(node, field.name)
                if isinstance(value, tuple):
                    out[field.name] = [_serialize(v, pending) for v in value]
                else:
                    out[field.name] = _serialize(value, pending)
        return root

    def children(self) -> tuple["ASTNode", ...]:
        """Direct child nodes in source order."""
        found: list[ASTNode] = []
        for field in fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if isinstance(value, ASTNode):
                found.append(value)
            elif isinstance(value, tuple):
                found.extend(v for v in value if isinstance(v, ASTNode))
        return tuple(found)


class Statement(ASTNode):
    pass


class Expression(ASTNode):
    pass


def _serialize(value: Any, pending: list[tuple[ASTNode, ASTDict]]) -> Any:
    if isinstance(value, ASTNode):
        child: ASTDict = {}
        pending.append((value, child))
        return child
    if isinstance(value, TokenType):
        return value.name
    return value


def _freeze(node: ASTNode, name: str) -> None:
    object.__setattr__(node, name, tuple(getattr(node, name)))


# Expressions


@dataclass(frozen=True)
class BinaryExpression(Expression):
    left: Expression
    operator: TokenType
    right: Expression


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str


@dataclass(frozen=True)
class VariableReference(Expression):
    name: str


@dataclass(frozen=True)
class FunctionCall(Expression):
    name: str
    arguments: tuple[Expression, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "arguments")


# Statements


@dataclass(frozen=True)
class Block(Statement):
    statements: tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "statements")


@dataclass(frozen=True)
class VariableDeclaration(Statement):
    name: str
    initial_value: Expression


@dataclass(frozen=True)
class FunctionDeclaration(Statement):
    name: str
    parameters: tuple[str, ...]
    body: Block

    def __post_init__(self) -> None:
        _freeze(self, "parameters")


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression | None = None


@dataclass(frozen=True)
class IfStatement(Statement):
    condition: Expression
    then_block: Block
    else_block: Block | None = None


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression


@dataclass(frozen=True)
class Program(ASTNode):
    statements: tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        _freeze(self, "statements")


def walk(node: ASTNode) -> Iterator[ASTNode]:
    """Yields `node` and all of its descendants in pre-order.

    Iterative, so arbitrarily deep trees do not hit the recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def count_nodes(node: ASTNode) -> int:
    """Counts the AST nodes in a subtree, `node` included."""
    return sum(1 for _ in walk(node))


def _indent(depth: int) -> str:
    return "  " * depth


def _label(node: ASTNode) -> str:
    match node:
        case VariableDeclaration(name=name):
            return f"VariableDeclaration {name}"
        case FunctionDeclaration(name=name, parameters=parameters):
            return f"FunctionDeclaration {name}({', '.join(parameters)})"
        case ReturnStatement(value=None):
            return "ReturnStatement (empty)"
        case IfStatement(else_block=else_block):
            return "IfStatement" if else_block is not None else "IfStatement (no else)"
        case BinaryExpression(operator=operator):
            return f"BinaryExpression {operator}"
        case IntegerLiteral(value=value):
            return f"IntegerLiteral({value})"
        case StringLiteral(value=value):
            return f"StringLiteral({value!r})"
        case VariableReference(name=name):
            return f"VariableReference {name}"
        case FunctionCall(name=name, arguments=arguments):
            return f"FunctionCall {name}/{len(arguments)}"
        case _:
            return type(node).__name__


def dump_ast(node: ASTNode, *, file: TextIO | None = None) -> None:
    """Prints a human-readable AST tree to *file* (stdout by default), one node per line."""
    out = file if file is not None else sys.stdout
    stack: list[tuple[ASTNode, int]] = [(node, 0)]
    while stack:
        current, depth = stack.pop()
        out.write(f"{_indent(depth)}{_label(current)}\n")
        stack.extend((child, depth + 1) for child in reversed(current.children()))


__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryExpression",
    "Block",
    "Expression",
    "ExpressionStatement",
    "FunctionCall",
    "FunctionDeclaration",
    "IfStatement",
    "IntegerLiteral",
    "Program",
    "ReturnStatement",
    "Statement",
    "StringLiteral",
    "VariableDeclaration",
    "VariableReference",
    "count_nodes",
    "dump_ast",
    "walk",
]
