"""
Lexical analyzer for the Zermelo programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable lexical unit with type, value, and source location.
    TokenSource: Protocol for pull-based token suppliers consumed by the parser.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenStream: Serves a prepared list of tokens through the TokenSource protocol.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Longest-match recognition of symbolic operators (`<=`, `!<=`, `::`, ...)
    - Recognizes:
        * Integer literals (value is an `int`)
        * Quoted (`"a"`) and apostrophized (`'a'`) character literals with escapes
        * Words: the complement marker `c`, sugar aliases, or plain identifiers

Raises:
    SyntaxError: If an unterminated or malformed character literal, or an integer
        literal too long to convert, is encountered.

Example:
    >>> lexer = Lexer(CharacterStream("* 3"))
    >>> lexer.next_token()
    Token(ASTERISK, '*')
    >>> lexer.next_token()
    Token(INTEGER, 3)

Exports:
    - CharacterStream
    - Token
    - TokenSource
    - Lexer
    - TokenStream
    - is_word_start
    - is_word_char
    - token_hashmap
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from zermelo.zermelo_constants import (
    APOS_CHAR,
    CHAR_ESCAPES,
    EOF,
    ERROR,
    IDENT,
    INTEGER,
    QUOTED_CHAR,
    token_hashmap,
)

if TYPE_CHECKING:
    from zermelo.zermelo_uimap import UserInterfaceMapper

_MAX_OPERATOR_LEN = max(len(k) for k in token_hashmap)


def is_word_start(ch: str) -> bool:
    # ASCII only: symbols such as `Ø` are letters to `str.isalpha`
    return ch.isascii() and (ch.isalpha() or ch == "_")


def is_word_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == "_")


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

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

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
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
        """Returns the character at `offset` from the current position, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Zermelo language.

    Tokens are immutable: assigning any attribute after construction raises
    `AttributeError`.

    Attributes:
        type (str): The token type (e.g. 'INTEGER', 'UNION', 'EOF').
        value (Any): `int` for integer literals, the character for character
            literals, the surface text otherwise.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    type: str
    value: Any
    line: int
    col: int

    def __init__(self, type_: str, value: Any = None, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))

    def location(self) -> str:
        """Returns a human-readable `line L, col C` string for error messages."""
        return f"line {self.line}, col {self.col}"


class TokenSource(Protocol):
    """Pull-based, single-pass supplier of tokens.

    Implementations must keep returning an `EOF` token once the underlying
    input is exhausted.
    """

    def next_token(self) -> Token: ...  # pragma: no cover


class TokenStream:
    """Adapts a prepared list of tokens to the `TokenSource` protocol.

    If the list does not end with an `EOF` token one is synthesized. After the
    list is exhausted the final `EOF` token is returned on every call.

    Attributes:
        tokens (list[Token]): The tokens to serve, ending in `EOF`.
        position (int): Index of the next token to hand out.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].type != EOF:
            self.tokens.append(Token(EOF, EOF))
        self.position = 0

    def next_token(self) -> Token:
        tok = self.tokens[self.position]
        if self.position < len(self.tokens) - 1:
            self.position += 1
        return tok


class Lexer:
    """Lexical analyzer for the Zermelo language.

    Converts a `CharacterStream` into `Token` objects and satisfies the
    `TokenSource` protocol. When a `UserInterfaceMapper` is supplied, words
    that are not keywords are resolved through its alias table.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        uimap (UserInterfaceMapper | None): Optional sugar alias resolver.
    """

    def __init__(
        self, stream: CharacterStream, uimap: UserInterfaceMapper | None = None
    ) -> None:
        self.stream = stream
        self.uimap = uimap

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(_MAX_OPERATOR_LEN):
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def read_char_literal(self, quote: str, type_: str) -> Token:
        """Reads a one-character literal delimited by `quote`, handling escapes.

        Raises:
            SyntaxError: If the literal is empty, unterminated, holds more than
                one character, or uses an unknown escape.
        """
        line, col = self.stream.line, self.stream.column
        self.advance()  # opening quote
        if self.stream.end_of_file():
            raise SyntaxError(f"Unterminated character literal at line {line}, col {col}")

        ch = self.advance()
        if ch == quote:
            raise SyntaxError(f"Empty character literal at line {line}, col {col}")
        if ch == "\\":
            if self.stream.end_of_file():
                raise SyntaxError(
                    f"Unterminated character literal at line {line}, col {col}"
                )
            esc = self.advance()
            if esc not in CHAR_ESCAPES:
                raise SyntaxError(
                    f"Unknown escape '\\{esc}' at line {line}, col {col}"
                )
            ch = CHAR_ESCAPES[esc]

        if self.peek() != quote:
            raise SyntaxError(
                f"Unterminated character literal at line {line}, col {col}"
            )
        self.advance()
        return Token(type_, ch, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns `EOF` on every call once the source is exhausted.

        Raises:
            SyntaxError: If a malformed character literal or an integer literal
                too long to convert is encountered.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, EOF, self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Word: keyword, sugar alias or identifier
        if is_word_start(ch):
            word = ""
            while not self.stream.end_of_file() and is_word_char(self.peek()):
                word += self.advance()
            if word in token_hashmap:
                return Token(token_hashmap[word], word, line, col)
            if self.uimap is not None:
                mapped = self.uimap.get_token(word, line, col)
                if mapped is not None:
                    return mapped
            return Token(IDENT, word, line, col)

        # 2. Integer
        if ch.isascii() and ch.isdigit():
            num = ""
            while self.peek().isascii() and self.peek().isdigit():
                num += self.advance()
            try:
                value = int(num)
            except ValueError:
                raise SyntaxError(
                    f"Integer literal too long at line {line}, col {col}"
                ) from None
            return Token(INTEGER, value, line, col)

        # 3. Character literals
        if ch == '"':
            return self.read_char_literal('"', QUOTED_CHAR)
        if ch == "'":
            return self.read_char_literal("'", APOS_CHAR)

        # 4. Symbolic operator
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character
        return Token(ERROR, self.advance(), line, col)

    def tokenize(self) -> list[Token]:
        """Drains the stream into a list of tokens ending with `EOF`."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == EOF:
                return tokens


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "TokenSource",
    "TokenStream",
    "is_word_char",
    "is_word_start",
    "token_hashmap",
]
