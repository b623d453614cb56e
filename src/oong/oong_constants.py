"""
Token kinds and lookup tables shared by the oong lexer and parser.

Contents:
    TokenKind: Closed enumeration of every lexical unit the lexer can emit.
    keyword_hashmap: Case-sensitive keyword text -> TokenKind.
    strict_keyword_hashmap: Words reserved only when the lexer is in strict mode.
    console_hashmap: `console.<member>` spellings -> print-family TokenKind.
    punctuator_hashmap: Operator and punctuator text -> TokenKind (longest match).
    PRINT_KINDS, LET_KINDS, VAR_MODIFIER_KINDS, LITERAL_KINDS, NUMERIC_KINDS:
        Token groups used by the parser's dispatch.
    ASSIGNMENT_OPERATORS, BINARY_OPERATORS, PREFIX_OPERATORS: Operator groups.
"""

from enum import Enum, auto


class TokenKind(Enum):
    """Every token kind produced by `Lexer.next_token`."""

    EOF = auto()
    INVALID = auto()
    IDENTIFIER = auto()

    # Print family
    PRINT = auto()
    CONSOLE_LOG = auto()
    CONSOLE_ERROR = auto()
    CONSOLE_WARN = auto()
    CONSOLE_INFO = auto()
    CONSOLE_SUCCESS = auto()

    # Keywords
    BREAK = auto()
    DO = auto()
    INSTANCEOF = auto()
    TYPEOF = auto()
    CASE = auto()
    ELSE = auto()
    NEW = auto()
    VAR = auto()
    CATCH = auto()
    FINALLY = auto()
    RETURN = auto()
    VOID = auto()
    CONTINUE = auto()
    FOR = auto()
    SWITCH = auto()
    WHILE = auto()
    DEBUGGER = auto()
    FUNCTION = auto()
    THIS = auto()
    WITH = auto()
    DEFAULT = auto()
    IF = auto()
    THROW = auto()
    DELETE = auto()
    IN = auto()
    TRY = auto()
    AS = auto()
    FROM = auto()
    OF = auto()
    YIELD = auto()
    YIELD_STAR = auto()
    CLASS = auto()
    ENUM = auto()
    EXTENDS = auto()
    SUPER = auto()
    CONST = auto()
    EXPORT = auto()
    IMPORT = auto()
    ASYNC = auto()
    AWAIT = auto()

    # Reserved in strict mode only
    IMPLEMENTS = auto()
    PRIVATE = auto()
    PUBLIC = auto()
    INTERFACE = auto()
    PACKAGE = auto()
    PROTECTED = auto()
    STATIC = auto()
    STRICT_LET = auto()
    NON_STRICT_LET = auto()

    # Literals
    NULL_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    STRING_LITERAL = auto()
    INTEGER = auto()
    DECIMAL_LITERAL = auto()
    BIG_DECIMAL_INTEGER_LITERAL = auto()
    HEX_INTEGER_LITERAL = auto()
    BIG_HEX_INTEGER_LITERAL = auto()
    OCTAL_INTEGER_LITERAL = auto()
    LEGACY_OCTAL_INTEGER_LITERAL = auto()
    BIG_OCTAL_INTEGER_LITERAL = auto()
    BINARY_INTEGER_LITERAL = auto()
    BIG_BINARY_INTEGER_LITERAL = auto()
    REGULAR_EXPRESSION_LITERAL = auto()

    # Template strings
    BACKTICK = auto()
    TEMPLATE_STRING_ATOM = auto()
    TEMPLATE_STRING_START_EXPRESSION = auto()

    # Punctuators
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    SEMI = auto()
    COMMA = auto()
    COLON = auto()
    DOT = auto()
    ELLIPSIS = auto()
    HASHTAG = auto()
    QUESTION = auto()
    QUESTION_DOT = auto()
    ARROW = auto()

    # Operators
    ASSIGN = auto()
    EQUALS = auto()
    IDENTITY_EQUALS = auto()
    NOT_EQUALS = auto()
    IDENTITY_NOT_EQUALS = auto()
    PLUS = auto()
    PLUS_PLUS = auto()
    PLUS_ASSIGN = auto()
    MINUS = auto()
    MINUS_MINUS = auto()
    MINUS_ASSIGN = auto()
    MULTIPLY = auto()
    MULTIPLY_ASSIGN = auto()
    POWER = auto()
    POWER_ASSIGN = auto()
    DIVIDE = auto()
    DIVIDE_ASSIGN = auto()
    MODULUS = auto()
    MODULUS_ASSIGN = auto()
    BIT_NOT = auto()
    NOT = auto()
    BIT_AND = auto()
    BIT_AND_ASSIGN = auto()
    LOGICAL_AND = auto()
    LOGICAL_AND_ASSIGN = auto()
    BIT_OR = auto()
    BIT_OR_ASSIGN = auto()
    LOGICAL_OR = auto()
    LOGICAL_OR_ASSIGN = auto()
    BIT_XOR = auto()
    BIT_XOR_ASSIGN = auto()
    NULL_COALESCE = auto()
    NULLISH_COALESCING_ASSIGN = auto()
    LESS_THAN = auto()
    LESS_THAN_EQUALS = auto()
    LEFT_SHIFT_ARITHMETIC = auto()
    LEFT_SHIFT_ARITHMETIC_ASSIGN = auto()
    MORE_THAN = auto()
    GREATER_THAN_EQUALS = auto()
    RIGHT_SHIFT_ARITHMETIC = auto()
    RIGHT_SHIFT_ARITHMETIC_ASSIGN = auto()
    RIGHT_SHIFT_LOGICAL = auto()
    RIGHT_SHIFT_LOGICAL_ASSIGN = auto()


keyword_hashmap: dict[str, TokenKind] = {
    "print": TokenKind.PRINT,
    "break": TokenKind.BREAK,
    "do": TokenKind.DO,
    "instanceof": TokenKind.INSTANCEOF,
    "typeof": TokenKind.TYPEOF,
    "case": TokenKind.CASE,
    "else": TokenKind.ELSE,
    "new": TokenKind.NEW,
    "var": TokenKind.VAR,
    "catch": TokenKind.CATCH,
    "finally": TokenKind.FINALLY,
    "return": TokenKind.RETURN,
    "void": TokenKind.VOID,
    "continue": TokenKind.CONTINUE,
    "for": TokenKind.FOR,
    "switch": TokenKind.SWITCH,
    "while": TokenKind.WHILE,
    "debugger": TokenKind.DEBUGGER,
    "function": TokenKind.FUNCTION,
    "this": TokenKind.THIS,
    "with": TokenKind.WITH,
    "default": TokenKind.DEFAULT,
    "if": TokenKind.IF,
    "throw": TokenKind.THROW,
    "delete": TokenKind.DELETE,
    "in": TokenKind.IN,
    "try": TokenKind.TRY,
    "as": TokenKind.AS,
    "from": TokenKind.FROM,
    "of": TokenKind.OF,
    "yield": TokenKind.YIELD,
    "class": TokenKind.CLASS,
    "enum": TokenKind.ENUM,
    "extends": TokenKind.EXTENDS,
    "super": TokenKind.SUPER,
    "const": TokenKind.CONST,
    "export": TokenKind.EXPORT,
    "import": TokenKind.IMPORT,
    "async": TokenKind.ASYNC,
    "await": TokenKind.AWAIT,
    "null": TokenKind.NULL_LITERAL,
    "true": TokenKind.BOOLEAN_LITERAL,
    "false": TokenKind.BOOLEAN_LITERAL,
}

strict_keyword_hashmap: dict[str, TokenKind] = {
    "implements": TokenKind.IMPLEMENTS,
    "private": TokenKind.PRIVATE,
    "public": TokenKind.PUBLIC,
    "interface": TokenKind.INTERFACE,
    "package": TokenKind.PACKAGE,
    "protected": TokenKind.PROTECTED,
    "static": TokenKind.STATIC,
}

console_hashmap: dict[str, TokenKind] = {
    "log": TokenKind.CONSOLE_LOG,
    "error": TokenKind.CONSOLE_ERROR,
    "warn": TokenKind.CONSOLE_WARN,
    "info": TokenKind.CONSOLE_INFO,
    "success": TokenKind.CONSOLE_SUCCESS,
}

# Longest match wins, which yields the documented tie-break order per leading
# character (e.g. `=>`, `===`, `==`, `=`).
punctuator_hashmap: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ";": TokenKind.SEMI,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "#": TokenKind.HASHTAG,
    "~": TokenKind.BIT_NOT,
    ".": TokenKind.DOT,
    "...": TokenKind.ELLIPSIS,
    "?": TokenKind.QUESTION,
    "?.": TokenKind.QUESTION_DOT,
    "??": TokenKind.NULL_COALESCE,
    "??=": TokenKind.NULLISH_COALESCING_ASSIGN,
    "=": TokenKind.ASSIGN,
    "=>": TokenKind.ARROW,
    "==": TokenKind.EQUALS,
    "===": TokenKind.IDENTITY_EQUALS,
    "!": TokenKind.NOT,
    "!=": TokenKind.NOT_EQUALS,
    "!==": TokenKind.IDENTITY_NOT_EQUALS,
    "+": TokenKind.PLUS,
    "++": TokenKind.PLUS_PLUS,
    "+=": TokenKind.PLUS_ASSIGN,
    "-": TokenKind.MINUS,
    "--": TokenKind.MINUS_MINUS,
    "-=": TokenKind.MINUS_ASSIGN,
    "*": TokenKind.MULTIPLY,
    "*=": TokenKind.MULTIPLY_ASSIGN,
    "**": TokenKind.POWER,
    "**=": TokenKind.POWER_ASSIGN,
    "/": TokenKind.DIVIDE,
    "/=": TokenKind.DIVIDE_ASSIGN,
    "%": TokenKind.MODULUS,
    "%=": TokenKind.MODULUS_ASSIGN,
    "&": TokenKind.BIT_AND,
    "&=": TokenKind.BIT_AND_ASSIGN,
    "&&": TokenKind.LOGICAL_AND,
    "&&=": TokenKind.LOGICAL_AND_ASSIGN,
    "|": TokenKind.BIT_OR,
    "|=": TokenKind.BIT_OR_ASSIGN,
    "||": TokenKind.LOGICAL_OR,
    "||=": TokenKind.LOGICAL_OR_ASSIGN,
    "^": TokenKind.BIT_XOR,
    "^=": TokenKind.BIT_XOR_ASSIGN,
    "<": TokenKind.LESS_THAN,
    "<=": TokenKind.LESS_THAN_EQUALS,
    "<<": TokenKind.LEFT_SHIFT_ARITHMETIC,
    "<<=": TokenKind.LEFT_SHIFT_ARITHMETIC_ASSIGN,
    ">": TokenKind.MORE_THAN,
    ">=": TokenKind.GREATER_THAN_EQUALS,
    ">>": TokenKind.RIGHT_SHIFT_ARITHMETIC,
    ">>=": TokenKind.RIGHT_SHIFT_ARITHMETIC_ASSIGN,
    ">>>": TokenKind.RIGHT_SHIFT_LOGICAL,
    ">>>=": TokenKind.RIGHT_SHIFT_LOGICAL_ASSIGN,
}

MAX_PUNCTUATOR_LENGTH = max(len(p) for p in punctuator_hashmap)

PRINT_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.PRINT, *console_hashmap.values()}
)

LET_KINDS: frozenset[TokenKind] = frozenset(
    {TokenKind.STRICT_LET, TokenKind.NON_STRICT_LET}
)

VAR_MODIFIER_KINDS: frozenset[TokenKind] = LET_KINDS | {TokenKind.VAR, TokenKind.CONST}

NUMERIC_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.INTEGER,
        TokenKind.DECIMAL_LITERAL,
        TokenKind.BIG_DECIMAL_INTEGER_LITERAL,
        TokenKind.HEX_INTEGER_LITERAL,
        TokenKind.BIG_HEX_INTEGER_LITERAL,
        TokenKind.OCTAL_INTEGER_LITERAL,
        TokenKind.LEGACY_OCTAL_INTEGER_LITERAL,
        TokenKind.BIG_OCTAL_INTEGER_LITERAL,
        TokenKind.BINARY_INTEGER_LITERAL,
        TokenKind.BIG_BINARY_INTEGER_LITERAL,
    }
)

LITERAL_KINDS: frozenset[TokenKind] = NUMERIC_KINDS | {
    TokenKind.NULL_LITERAL,
    TokenKind.BOOLEAN_LITERAL,
    TokenKind.STRING_LITERAL,
    TokenKind.REGULAR_EXPRESSION_LITERAL,
}

# Keyword-like kinds that still name a binding or property when used as identifiers.
CONTEXTUAL_KEYWORD_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.AS,
        TokenKind.FROM,
        TokenKind.OF,
        TokenKind.ASYNC,
        TokenKind.NON_STRICT_LET,
    }
)

RESERVED_WORD_KINDS: frozenset[TokenKind] = frozenset(
    {
        *keyword_hashmap.values(),
        *strict_keyword_hashmap.values(),
        *LET_KINDS,
        TokenKind.YIELD_STAR,
    }
) - {TokenKind.PRINT}

ASSIGNMENT_OPERATORS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.ASSIGN,
        TokenKind.PLUS_ASSIGN,
        TokenKind.MINUS_ASSIGN,
        TokenKind.MULTIPLY_ASSIGN,
        TokenKind.DIVIDE_ASSIGN,
        TokenKind.MODULUS_ASSIGN,
        TokenKind.POWER_ASSIGN,
        TokenKind.LEFT_SHIFT_ARITHMETIC_ASSIGN,
        TokenKind.RIGHT_SHIFT_ARITHMETIC_ASSIGN,
        TokenKind.RIGHT_SHIFT_LOGICAL_ASSIGN,
        TokenKind.BIT_AND_ASSIGN,
        TokenKind.BIT_XOR_ASSIGN,
        TokenKind.BIT_OR_ASSIGN,
        TokenKind.LOGICAL_AND_ASSIGN,
        TokenKind.LOGICAL_OR_ASSIGN,
        TokenKind.NULLISH_COALESCING_ASSIGN,
    }
)

BINARY_OPERATORS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.MULTIPLY,
        TokenKind.DIVIDE,
        TokenKind.MODULUS,
        TokenKind.POWER,
        TokenKind.LEFT_SHIFT_ARITHMETIC,
        TokenKind.RIGHT_SHIFT_ARITHMETIC,
        TokenKind.RIGHT_SHIFT_LOGICAL,
        TokenKind.LESS_THAN,
        TokenKind.MORE_THAN,
        TokenKind.LESS_THAN_EQUALS,
        TokenKind.GREATER_THAN_EQUALS,
        TokenKind.EQUALS,
        TokenKind.NOT_EQUALS,
        TokenKind.IDENTITY_EQUALS,
        TokenKind.IDENTITY_NOT_EQUALS,
        TokenKind.BIT_AND,
        TokenKind.BIT_XOR,
        TokenKind.BIT_OR,
        TokenKind.LOGICAL_AND,
        TokenKind.LOGICAL_OR,
        TokenKind.NULL_COALESCE,
        TokenKind.INSTANCEOF,
        TokenKind.IN,
    }
)

PREFIX_OPERATORS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.PLUS_PLUS,
        TokenKind.MINUS_MINUS,
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.BIT_NOT,
        TokenKind.NOT,
        TokenKind.DELETE,
        TokenKind.VOID,
        TokenKind.TYPEOF,
        TokenKind.AWAIT,
    }
)

__all__ = [
    "ASSIGNMENT_OPERATORS",
    "BINARY_OPERATORS",
    "CONTEXTUAL_KEYWORD_KINDS",
    "LET_KINDS",
    "LITERAL_KINDS",
    "MAX_PUNCTUATOR_LENGTH",
    "NUMERIC_KINDS",
    "PREFIX_OPERATORS",
    "PRINT_KINDS",
    "RESERVED_WORD_KINDS",
    "TokenKind",
    "VAR_MODIFIER_KINDS",
    "console_hashmap",
    "keyword_hashmap",
    "punctuator_hashmap",
    "strict_keyword_hashmap",
]
