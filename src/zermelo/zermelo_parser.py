"""
Zermelo Language Parser

Parses a Zermelo token stream into an abstract syntax tree (AST).

This module implements a predictive recursive-descent parser with one token of
lookahead. Tokens are pulled on demand from a `TokenSource` (normally the
`Lexer`), and every grammar production is a method on `Parser`. Dispatch is
purely on the type of the current token; there is no backtracking.

Grammar
-------
    program    := statement* EOF
    statement  := '*' expression
                | QUOTED_CHAR
                | predicate set '[' statement* ']'
                | operator set
                | 'c' | '::' | ';' | '~'
                | APOS_CHAR '/' statement* '\\'
    predicate  := '⊆' | '⊂' | '⊄' | '⊇' | '⊃' | '⊅' | '='
    operator   := '∪' | '∩' | '∖' | '∸'
    set        := 'Ø' | '{' [expression (',' expression)*] '}'
    expression := INTEGER | '%'

Parser Behavior
---------------
- Strict: the first unexpected token raises `ParseError` (a `SyntaxError`).
- No error recovery and no partial trees; a failed parse returns nothing.
- A rejected token is never consumed.

Entry Points
------------
- `parse()`: Parse a full program into a `program` node.

Raises
------
ParseError
    Raised when a token does not fit the grammar at its position.
"""

from __future__ import annotations

from zermelo.zermelo_ast import ASTNode
from zermelo.zermelo_constants import (
    APOS_CHAR,
    ASTERISK,
    BACKSLASH,
    COLON,
    COMMA,
    COMPLEMENT,
    COMPLEMENT_NODE,
    EMPTY_SET,
    EOF,
    FLIP,
    IF_CHAR,
    INCREMENT,
    INPUT_CHAR,
    INTEGER,
    INTEGER_LITERAL,
    LBRACE,
    LBRACKET,
    LOOP,
    PREDICATE_TOKENS,
    PRINT_CHAR,
    PROGRAM,
    QUOTED_CHAR,
    RBRACE,
    RBRACKET,
    SEMICOLON,
    SET_LITERAL,
    SET_OP,
    SET_OPERATOR_TOKENS,
    SLASH,
    TILDE,
    VARIABLE,
    VARIABLE_REF,
)
from zermelo.zermelo_lexer import Token, TokenSource


class ParseError(SyntaxError):
    """Raised when the token stream does not conform to the Zermelo grammar.

    Attributes:
        expected (str): The expected token type or the name of the expected construct.
        actual (Token): The token actually found.
    """

    def __init__(self, expected: str, actual: Token, message: str | None = None):
        if message is None:
            message = f"Expected {expected}, got {actual}"
        super().__init__(f"{message} at {actual.location()}")
        self.expected = expected
        self.actual = actual


class Parser:
    """
    Zermelo Parser Class

    Holds a reference to a `TokenSource` and one buffered lookahead token.
    Construction pulls the first token from the source.

    Attributes
    ----------
    source : TokenSource
        The token supplier.
    current_token : Token
        The lookahead token.

    Methods
    -------
    parse() -> ASTNode
        Parse a complete program.
    expect(type_) -> Token
        Consume the current token if it has the given type.
    advance() -> Token
        Consume the current token unconditionally.
    """

    def __init__(self, source: TokenSource) -> None:
        self.source: TokenSource = source
        self.current_token: Token = source.next_token()

    def advance(self) -> Token:
        tok = self.current_token
        self.current_token = self.source.next_token()
        return tok

    def expect(self, type_: str) -> Token:
        tok = self.current_token
        if tok.type != type_:
            raise ParseError(type_, tok)
        return self.advance()

    def parse(self) -> ASTNode:
        """Parse a full Zermelo program and return its `program` node."""
        statements: list[ASTNode] = []
        while self.current_token.type != EOF:
            statements.append(self.parse_statement())
        self.expect(EOF)
        return ASTNode(PROGRAM, children=statements)

    def parse_expression(self) -> ASTNode:
        """Parse an integer literal or the `%` variable marker."""
        tok = self.current_token
        if tok.type == INTEGER:
            return ASTNode(INTEGER_LITERAL, self.expect(INTEGER).value)
        if tok.type == VARIABLE:
            self.expect(VARIABLE)
            return ASTNode(VARIABLE_REF)
        raise ParseError("expression", tok, "Invalid expression token")

    def parse_set_literal(self) -> ASTNode:
        """Parse `Ø` or a braced, comma-separated list of expressions."""
        tok = self.current_token
        if tok.type == EMPTY_SET:
            self.expect(EMPTY_SET)
            return ASTNode(SET_LITERAL)
        if tok.type == LBRACE:
            self.expect(LBRACE)
            elements: list[ASTNode] = []
            if self.current_token.type != RBRACE:
                elements.append(self.parse_expression())
                while self.current_token.type == COMMA:
                    self.expect(COMMA)
                    elements.append(self.parse_expression())
            self.expect(RBRACE)
            return ASTNode(SET_LITERAL, children=elements)
        raise ParseError("set literal", tok, "Expected set literal")

    def parse_statement(self) -> ASTNode:
        """Parse one statement, choosing the production by the current token type."""
        tok_type = self.current_token.type

        if tok_type == ASTERISK:
            self.expect(ASTERISK)
            return ASTNode(FLIP, children=[self.parse_expression()])
        if tok_type == QUOTED_CHAR:
            return ASTNode(PRINT_CHAR, self.expect(QUOTED_CHAR).value)
        if tok_type in PREDICATE_TOKENS:
            return self.parse_loop()
        if tok_type in SET_OPERATOR_TOKENS:
            return self.parse_set_operation()
        if tok_type == COMPLEMENT:
            return self.parse_simple(COMPLEMENT, COMPLEMENT_NODE)
        if tok_type == COLON:
            return self.parse_simple(COLON, INCREMENT)
        if tok_type == SEMICOLON:
            return self.parse_simple(SEMICOLON, INCREMENT)
        if tok_type == TILDE:
            return self.parse_simple(TILDE, INPUT_CHAR)
        if tok_type == APOS_CHAR:
            return self.parse_char_test()

        raise ParseError("statement", self.current_token, "Invalid statement token")

    def parse_loop(self) -> ASTNode:
        """Parse `predicate set [ statement* ]`."""
        predicate = self.advance().type
        guard = self.parse_set_literal()
        self.expect(LBRACKET)
        body = self.parse_statements_until(RBRACKET)
        self.expect(RBRACKET)
        return ASTNode(LOOP, predicate, [guard, *body])

    def parse_set_operation(self) -> ASTNode:
        """Parse `operator set`; the left operand is the implicit current set."""
        operator = self.advance().type
        operand = self.parse_set_literal()
        return ASTNode(SET_OP, operator, [operand])

    def parse_char_test(self) -> ASTNode:
        """Parse `'x' / statement* \\`."""
        guard_char = self.expect(APOS_CHAR).value
        self.expect(SLASH)
        body = self.parse_statements_until(BACKSLASH)
        self.expect(BACKSLASH)
        return ASTNode(IF_CHAR, guard_char, body)

    def parse_statements_until(self, terminator: str) -> list[ASTNode]:
        # EOF falls through to parse_statement, which rejects it
        statements: list[ASTNode] = []
        while self.current_token.type != terminator:
            statements.append(self.parse_statement())
        return statements

    def parse_simple(self, type_: str, kind: str) -> ASTNode:
        """Build a payload-free node of `kind` and consume one `type_` token."""
        node = ASTNode(kind)
        self.expect(type_)
        return node
