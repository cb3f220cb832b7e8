import dataclasses
import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from parsotongue.parso_ast import (
    BinaryExpression,
    Block,
    ExpressionStatement,
    FunctionCall,
    FunctionDeclaration,
    IfStatement,
    IntegerLiteral,
    Program,
    ReturnStatement,
    StringLiteral,
    VariableDeclaration,
    VariableReference,
    count_nodes,
    dump_ast,
    walk,
)
from parsotongue.parso_tokens import TokenType

ADD_FUNCTION = FunctionDeclaration(
    "add",
    ["a", "b"],
    Block(
        [
            ReturnStatement(
                BinaryExpression(
                    VariableReference("a"), TokenType.PLUS, VariableReference("b")
                )
            )
        ]
    ),
)


def test_structural_equality() -> None:
    n1 = VariableDeclaration("x", IntegerLiteral(1))
    n2 = VariableDeclaration("x", IntegerLiteral(1))
    assert n1 == n2
    assert hash(n1) == hash(n2)


def test_not_equal_different_value() -> None:
    assert VariableDeclaration("x", IntegerLiteral(1)) != VariableDeclaration(
        "x", IntegerLiteral(2)
    )


def test_not_equal_different_variant() -> None:
    assert VariableReference("x") != StringLiteral("x")


def test_lists_are_frozen_to_tuples() -> None:
    program = Program([ExpressionStatement(IntegerLiteral(1))])
    assert isinstance(program.statements, tuple)
    assert program == Program((ExpressionStatement(IntegerLiteral(1)),))
    assert ADD_FUNCTION.parameters == ("a", "b")
    assert FunctionCall("f", [IntegerLiteral(1)]).arguments == (IntegerLiteral(1),)


def test_nodes_are_immutable() -> None:
    node = IntegerLiteral(1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.value = 2  # type: ignore[misc]


def test_defaults() -> None:
    assert ReturnStatement().value is None
    assert IfStatement(IntegerLiteral(1), Block()).else_block is None
    assert Program().statements == ()


def test_to_dict() -> None:
    d = ADD_FUNCTION.to_dict()
    assert d == {
        "kind": "FunctionDeclaration",
        "name": "add",
        "parameters": ["a", "b"],
        "body": {
            "kind": "Block",
            "statements": [
                {
                    "kind": "ReturnStatement",
                    "value": {
                        "kind": "BinaryExpression",
                        "left": {"kind": "VariableReference", "name": "a"},
                        "operator": "PLUS",
                        "right": {"kind": "VariableReference", "name": "b"},
                    },
                }
            ],
        },
    }


def test_to_dict_optional_fields() -> None:
    d = IfStatement(VariableReference("c"), Block()).to_dict()
    assert d["else_block"] is None
    assert d["then_block"] == {"kind": "Block", "statements": []}


def test_children_in_source_order() -> None:
    node = IfStatement(VariableReference("c"), Block(), Block())
    assert node.children() == (VariableReference("c"), Block(), Block())
    assert IntegerLiteral(3).children() == ()


def test_walk_is_preorder() -> None:
    kinds = [type(n).__name__ for n in walk(Program([ADD_FUNCTION]))]
    assert kinds == [
        "Program",
        "FunctionDeclaration",
        "Block",
        "ReturnStatement",
        "BinaryExpression",
        "VariableReference",
        "VariableReference",
    ]


def test_count_nodes() -> None:
    assert count_nodes(Program()) == 1
    assert count_nodes(Program([ADD_FUNCTION])) == 7


def test_count_nodes_deep_tree() -> None:
    expr = IntegerLiteral(0)
    for i in range(5000):
        expr = BinaryExpression(expr, TokenType.PLUS, IntegerLiteral(i))
    assert count_nodes(expr) == 10001


def test_dump_ast() -> None:
    program = Program(
        [
            ADD_FUNCTION,
            IfStatement(
                FunctionCall("f", [StringLiteral("s")]),
                Block([ReturnStatement()]),
            ),
        ]
    )
    buf = io.StringIO()
    dump_ast(program, file=buf)
    assert buf.getvalue().splitlines() == [
        "Program",
        "  FunctionDeclaration add(a, b)",
        "    Block",
        "      ReturnStatement",
        "        BinaryExpression PLUS",
        "          VariableReference a",
        "          VariableReference b",
        "  IfStatement (no else)",
        "    FunctionCall f/1",
        "      StringLiteral('s')",
        "    Block",
        "      ReturnStatement (empty)",
    ]


def test_dump_ast_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    dump_ast(IntegerLiteral(5))
    assert capsys.readouterr().out == "IntegerLiteral(5)\n"


@given(st.text(), st.integers())  # type: ignore[misc]
def test_equal_leaves_hash_equal(name: str, value: int) -> None:
    assert hash(VariableDeclaration(name, IntegerLiteral(value))) == hash(
        VariableDeclaration(name, IntegerLiteral(value))
    )


@given(st.lists(st.text(min_size=1), max_size=5))  # type: ignore[misc]
def test_function_call_arguments_roundtrip_to_dict(names: list[str]) -> None:
    call = FunctionCall("f", [VariableReference(n) for n in names])
    d = call.to_dict()
    assert [a["name"] for a in d["arguments"]] == names


def test_to_dict_deep_left_chain() -> None:
    expr: BinaryExpression | IntegerLiteral = IntegerLiteral(0)
    for i in range(1, 3000):
        expr = BinaryExpression(expr, TokenType.PLUS, IntegerLiteral(i))
    d = expr.to_dict()
    depth = 0
    while d["kind"] == "BinaryExpression":
        assert d["operator"] == "PLUS"
        assert d["right"] == {"kind": "IntegerLiteral", "value": 2999 - depth}
        d = d["left"]
        depth += 1
    assert depth == 2999
    assert d == {"kind": "IntegerLiteral", "value": 0}


def test_to_dict_keeps_field_order() -> None:
    d = VariableDeclaration("x", IntegerLiteral(1)).to_dict()
    assert list(d) == ["kind", "name", "initial_value"]
