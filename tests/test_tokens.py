import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from parsotongue.parso_tokens import KEYWORDS, Token, TokenFamily, TokenType


@pytest.mark.parametrize(
    "token_type,family",
    [
        (TokenType.VAR, TokenFamily.KEYWORD),
        (TokenType.RETURN, TokenFamily.KEYWORD),
        (TokenType.PLUS, TokenFamily.OPERATOR),
        (TokenType.NOT_EQUAL, TokenFamily.OPERATOR),
        (TokenType.GREATER_EQUAL, TokenFamily.OPERATOR),
        (TokenType.ASSIGN, TokenFamily.SYMBOL),
        (TokenType.COMMA, TokenFamily.SYMBOL),
        (TokenType.INTEGER, TokenFamily.LITERAL),
        (TokenType.STRING, TokenFamily.LITERAL),
        (TokenType.IDENTIFIER, TokenFamily.IDENTIFIER),
        (TokenType.EOF, TokenFamily.OTHER),
    ],
)  # type: ignore[misc]
def test_token_type_family(token_type: TokenType, family: TokenFamily) -> None:
    assert token_type.family is family


def test_every_token_type_has_a_family() -> None:
    for token_type in TokenType:
        assert isinstance(token_type.family, TokenFamily)


def test_family_sizes() -> None:
    counts = {family: 0 for family in TokenFamily}
    for token_type in TokenType:
        counts[token_type.family] += 1
    assert counts[TokenFamily.KEYWORD] == 5
    assert counts[TokenFamily.OPERATOR] == 11
    assert counts[TokenFamily.SYMBOL] == 7
    assert counts[TokenFamily.LITERAL] == 2
    assert counts[TokenFamily.IDENTIFIER] == 1
    assert counts[TokenFamily.OTHER] == 1


def test_keyword_table() -> None:
    assert set(KEYWORDS) == {"var", "function", "if", "else", "return"}
    assert all(t.family is TokenFamily.KEYWORD for t in KEYWORDS.values())


def test_token_type_str_and_repr() -> None:
    assert str(TokenType.EQUAL_EQUAL) == "EQUAL_EQUAL"
    assert repr(TokenType.PLUS) == "TokenType.PLUS"


def test_token_derived_offsets() -> None:
    tok = Token(TokenType.STRING, '"abc"', "abc", line=2, column=5, start_offset=10)
    assert tok.length == 5
    assert tok.end_offset == 15


def test_eof_token_has_zero_length() -> None:
    tok = Token(TokenType.EOF, "", None, line=3, column=1, start_offset=7)
    assert tok.length == 0
    assert tok.end_offset == 7
    assert tok.describe() == "end of input"


def test_token_describe() -> None:
    tok = Token(TokenType.IDENTIFIER, "foo", None, 1, 1, 0)
    assert tok.describe() == "IDENTIFIER 'foo'"


def test_token_repr() -> None:
    tok = Token(TokenType.PLUS, "+", None, 1, 3, 2)
    assert repr(tok) == "Token(PLUS, '+', line=1, col=3, offset=2)"


def test_token_is_immutable() -> None:
    tok = Token(TokenType.PLUS, "+", None, 1, 1, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        tok.lexeme = "-"  # type: ignore[misc]


def test_token_equality_and_hash() -> None:
    a = Token(TokenType.INTEGER, "7", 7, 1, 1, 0)
    b = Token(TokenType.INTEGER, "7", 7, 1, 1, 0)
    c = Token(TokenType.INTEGER, "7", 7, 1, 2, 1)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c


@given(
    lexeme=st.text(max_size=20), start=st.integers(min_value=0, max_value=10_000)
)  # type: ignore[misc]
def test_end_offset_is_start_plus_length(lexeme: str, start: int) -> None:
    tok = Token(TokenType.IDENTIFIER, lexeme, None, 1, 1, start)
    assert tok.end_offset - tok.start_offset == len(lexeme)
