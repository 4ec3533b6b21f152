import sys

import pytest
from hypothesis import given
from hypothesis import strategies as st

from zermelo.zermelo_lexer import CharacterStream, Lexer, Token, TokenStream
from zermelo.zermelo_uimap import UserInterfaceMapper


def tokenize(source: str) -> list[Token]:
    return Lexer(CharacterStream(source)).tokenize()


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)][:-1]


def test_symbol_tokens() -> None:
    code = "% Ø ∅ { } , * ⊆ ⊂ ⊄ ⊇ ⊃ ⊅ = ∪ ∩ ∖ ∸ c :: ; ~ / \\ [ ]"
    expected = [
        "VARIABLE",
        "EMPTY_SET",
        "EMPTY_SET",
        "LBRACE",
        "RBRACE",
        "COMMA",
        "ASTERISK",
        "SUBSET",
        "PROPER_SUBSET",
        "NOT_SUBSET",
        "SUPERSET",
        "PROPER_SUPERSET",
        "NOT_SUPERSET",
        "EQUAL",
        "UNION",
        "INTERSECTION",
        "LEFT_DIFFERENCE",
        "RIGHT_DIFFERENCE",
        "COMPLEMENT",
        "COLON",
        "SEMICOLON",
        "TILDE",
        "SLASH",
        "BACKSLASH",
        "LBRACKET",
        "RBRACKET",
    ]
    assert types_of(code) == expected


def test_ascii_spellings() -> None:
    assert types_of("<= < !<= >= > !>= | & -") == [
        "SUBSET",
        "PROPER_SUBSET",
        "NOT_SUBSET",
        "SUPERSET",
        "PROPER_SUPERSET",
        "NOT_SUPERSET",
        "UNION",
        "INTERSECTION",
        "LEFT_DIFFERENCE",
    ]


def test_longest_match_without_spaces() -> None:
    assert types_of("<=<") == ["SUBSET", "PROPER_SUBSET"]
    assert types_of("::;") == ["COLON", "SEMICOLON"]


def test_single_colon_is_error_token() -> None:
    tok = tokenize(":")[0]
    assert tok.type == "ERROR"
    assert tok.value == ":"


def test_integer_token_has_int_value() -> None:
    tok = tokenize("123")[0]
    assert tok.type == "INTEGER"
    assert tok.value == 123


@given(st.integers(min_value=0, max_value=10**12))
def test_integer_values(n: int) -> None:
    tok = tokenize(str(n))[0]
    assert tok == Token("INTEGER", n, 1, 1)


def test_quoted_and_apostrophized_chars() -> None:
    q, a = tokenize("\"x\" 'y'")[:2]
    assert (q.type, q.value) == ("QUOTED_CHAR", "x")
    assert (a.type, a.value) == ("APOS_CHAR", "y")


@pytest.mark.parametrize(
    "source,expected",
    [
        ('"\\n"', "\n"),
        ('"\\t"', "\t"),
        ('"\\\\"', "\\"),
        ('"\\""', '"'),
        ("'\\''", "'"),
        ('" "', " "),
    ],
)
def test_char_escapes(source: str, expected: str) -> None:
    assert tokenize(source)[0].value == expected


@pytest.mark.parametrize(
    "source,message",
    [
        ('"a', "Unterminated"),
        ('"ab"', "Unterminated"),
        ('""', "Empty"),
        ('"', "Unterminated"),
        ('"\\q"', "Unknown escape"),
    ],
)
def test_bad_char_literals(source: str, message: str) -> None:
    with pytest.raises(SyntaxError, match=message):
        tokenize(source)


def test_comments_and_positions() -> None:
    tokens = tokenize("# leading comment\n c")
    assert tokens[0] == Token("COMPLEMENT", "c", 2, 2)
    assert tokens[1].type == "EOF"


def test_unknown_character_becomes_error_token() -> None:
    assert tokenize("?")[0] == Token("ERROR", "?", 1, 1)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("∪Øc", ["UNION", "EMPTY_SET", "COMPLEMENT"]),
        ("cØ", ["COMPLEMENT", "EMPTY_SET"]),
        ("Ø∅", ["EMPTY_SET", "EMPTY_SET"]),
        ("*3Ø", ["ASTERISK", "INTEGER", "EMPTY_SET"]),
    ],
)
def test_empty_set_marker_needs_no_spaces(source: str, expected: list[str]) -> None:
    assert types_of(source) == expected


def test_non_ascii_letters_are_not_words() -> None:
    assert tokenize("é")[0] == Token("ERROR", "é", 1, 1)
    assert types_of("cé") == ["COMPLEMENT", "ERROR"]


def test_non_ascii_digits_are_not_integers() -> None:
    assert types_of("1²") == ["INTEGER", "ERROR"]


@pytest.mark.skipif(
    not hasattr(sys, "set_int_max_str_digits"), reason="no int string conversion limit"
)
def test_integer_literal_too_long() -> None:
    with pytest.raises(SyntaxError, match="Integer literal too long at line 1, col 3"):
        tokenize("* " + "9" * 5000)


def test_words_are_identifiers_without_sugar() -> None:
    tok = tokenize("union")[0]
    assert tok.type == "IDENT"
    assert tok.value == "union"


def test_words_resolve_through_sugar() -> None:
    lexer = Lexer(CharacterStream("union c nope"), UserInterfaceMapper.from_canonical())
    tokens = lexer.tokenize()
    assert [t.type for t in tokens] == ["UNION", "COMPLEMENT", "IDENT", "EOF"]


def test_eof_is_returned_repeatedly() -> None:
    lexer = Lexer(CharacterStream("c"))
    assert lexer.next_token().type == "COMPLEMENT"
    assert lexer.next_token().type == "EOF"
    assert lexer.next_token().type == "EOF"


def test_token_is_immutable() -> None:
    tok = Token("INTEGER", 1)
    with pytest.raises(AttributeError):
        tok.value = 2  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del tok.type


def test_token_equality_and_hash() -> None:
    assert Token("COMMA", ",", 1, 2) == Token("COMMA", ",", 1, 2)
    assert Token("COMMA", ",", 1, 2) != Token("COMMA", ",", 1, 3)
    assert len({Token("COMMA", ","), Token("COMMA", ",")}) == 1
    assert repr(Token("INTEGER", 4)) == "Token(INTEGER, 4)"


def test_token_stream_synthesizes_and_repeats_eof() -> None:
    stream = TokenStream([Token("TILDE", "~")])
    assert stream.next_token().type == "TILDE"
    assert stream.next_token().type == "EOF"
    assert stream.next_token().type == "EOF"


def test_token_stream_keeps_explicit_eof() -> None:
    eof = Token("EOF", "EOF", 3, 4)
    stream = TokenStream([eof])
    assert stream.next_token() is eof
    assert stream.next_token() is eof


def test_character_stream_read_past_end() -> None:
    cs = CharacterStream("")
    assert cs.peek() == ""
    with pytest.raises(EOFError):
        cs.next()
