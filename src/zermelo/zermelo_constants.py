"""
Token types, node kinds, and surface spellings for the Zermelo language.

Exports:
    token_hashmap: Maps every symbolic spelling to its token type.
    CANONICAL_TOKENS: Token types that may be targeted by sugar aliases, in slot order.
    CANONICAL_TOKEN_MAP: Default word aliases ("sugar") for the canonical tokens.
    PREDICATE_TOKENS, SET_OPERATOR_TOKENS: Token groups used by statement dispatch.
"""

INTEGER = "INTEGER"
VARIABLE = "VARIABLE"
EMPTY_SET = "EMPTY_SET"
LBRACE = "LBRACE"
RBRACE = "RBRACE"
COMMA = "COMMA"
ASTERISK = "ASTERISK"
QUOTED_CHAR = "QUOTED_CHAR"
SUBSET = "SUBSET"
PROPER_SUBSET = "PROPER_SUBSET"
NOT_SUBSET = "NOT_SUBSET"
SUPERSET = "SUPERSET"
PROPER_SUPERSET = "PROPER_SUPERSET"
NOT_SUPERSET = "NOT_SUPERSET"
EQUAL = "EQUAL"
UNION = "UNION"
INTERSECTION = "INTERSECTION"
LEFT_DIFFERENCE = "LEFT_DIFFERENCE"
RIGHT_DIFFERENCE = "RIGHT_DIFFERENCE"
COMPLEMENT = "COMPLEMENT"
COLON = "COLON"
SEMICOLON = "SEMICOLON"
TILDE = "TILDE"
APOS_CHAR = "APOS_CHAR"
SLASH = "SLASH"
BACKSLASH = "BACKSLASH"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
EOF = "EOF"

# Lexer-only; never valid in any production
IDENT = "IDENT"
ERROR = "ERROR"

PREDICATE_TOKENS: tuple[str, ...] = (
    SUBSET,
    PROPER_SUBSET,
    NOT_SUBSET,
    SUPERSET,
    PROPER_SUPERSET,
    NOT_SUPERSET,
    EQUAL,
)

SET_OPERATOR_TOKENS: tuple[str, ...] = (
    UNION,
    INTERSECTION,
    LEFT_DIFFERENCE,
    RIGHT_DIFFERENCE,
)

# Symbolic spellings; the lexer takes the longest match.
token_hashmap: dict[str, str] = {
    "%": VARIABLE,
    "Ø": EMPTY_SET,
    "∅": EMPTY_SET,
    "{": LBRACE,
    "}": RBRACE,
    ",": COMMA,
    "*": ASTERISK,
    "⊆": SUBSET,
    "<=": SUBSET,
    "⊂": PROPER_SUBSET,
    "<": PROPER_SUBSET,
    "⊄": NOT_SUBSET,
    "!<=": NOT_SUBSET,
    "⊇": SUPERSET,
    ">=": SUPERSET,
    "⊃": PROPER_SUPERSET,
    ">": PROPER_SUPERSET,
    "⊅": NOT_SUPERSET,
    "!>=": NOT_SUPERSET,
    "=": EQUAL,
    "∪": UNION,
    "|": UNION,
    "∩": INTERSECTION,
    "&": INTERSECTION,
    "∖": LEFT_DIFFERENCE,
    "-": LEFT_DIFFERENCE,
    "∸": RIGHT_DIFFERENCE,
    "c": COMPLEMENT,
    "::": COLON,
    ";": SEMICOLON,
    "~": TILDE,
    "/": SLASH,
    "\\": BACKSLASH,
    "[": LBRACKET,
    "]": RBRACKET,
}

# Slot order for list-mode sugar configuration.
CANONICAL_TOKENS: list[str] = [
    VARIABLE,
    EMPTY_SET,
    ASTERISK,
    *PREDICATE_TOKENS,
    *SET_OPERATOR_TOKENS,
    COMPLEMENT,
    COLON,
    SEMICOLON,
    TILDE,
    LBRACE,
    RBRACE,
    COMMA,
    SLASH,
    BACKSLASH,
    LBRACKET,
    RBRACKET,
]

CANONICAL_TOKEN_MAP: dict[str, str] = {
    "var": VARIABLE,
    "empty": EMPTY_SET,
    "flip": ASTERISK,
    "subset": SUBSET,
    "psubset": PROPER_SUBSET,
    "nsubset": NOT_SUBSET,
    "superset": SUPERSET,
    "psuperset": PROPER_SUPERSET,
    "nsuperset": NOT_SUPERSET,
    "equal": EQUAL,
    "union": UNION,
    "inter": INTERSECTION,
    "ldiff": LEFT_DIFFERENCE,
    "rdiff": RIGHT_DIFFERENCE,
    "complement": COMPLEMENT,
    "inc": COLON,
    "read": TILDE,
}

# AST node kinds
PROGRAM = "program"
INTEGER_LITERAL = "integer"
VARIABLE_REF = "variable"
SET_LITERAL = "set"
FLIP = "flip"
PRINT_CHAR = "print_char"
SET_OP = "set_op"
LOOP = "loop"
IF_CHAR = "if_char"
COMPLEMENT_NODE = "complement"
INCREMENT = "increment"
INPUT_CHAR = "input_char"

NODE_KINDS: frozenset[str] = frozenset(
    {
        PROGRAM,
        INTEGER_LITERAL,
        VARIABLE_REF,
        SET_LITERAL,
        FLIP,
        PRINT_CHAR,
        SET_OP,
        LOOP,
        IF_CHAR,
        COMPLEMENT_NODE,
        INCREMENT,
        INPUT_CHAR,
    }
)

CHAR_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

SOURCE_SUFFIX = ".zer"
