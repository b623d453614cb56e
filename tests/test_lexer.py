import pytest
from hypothesis import given, settings, strategies as st

from oong.oong_constants import TokenKind, keyword_hashmap, strict_keyword_hashmap
from oong.oong_lexer import (
    Lexer,
    LexerState,
    Token,
    decode_escapes,
    decode_string_literal,
    tokenize,
)


def kinds(source: str, strict: bool = False) -> list[TokenKind]:
    return [token.kind for token in tokenize(source, strict)]


def first(source: str, strict: bool = False) -> Token:
    return Lexer(source, strict).next_token()


def test_longest_punctuator_wins() -> None:
    source = "=> === == = ... ?. ?? ??= >>>= >>> >> >= **= ** &&= ||="
    assert kinds(source) == [
        TokenKind.ARROW,
        TokenKind.IDENTITY_EQUALS,
        TokenKind.EQUALS,
        TokenKind.ASSIGN,
        TokenKind.ELLIPSIS,
        TokenKind.QUESTION_DOT,
        TokenKind.NULL_COALESCE,
        TokenKind.NULLISH_COALESCING_ASSIGN,
        TokenKind.RIGHT_SHIFT_LOGICAL_ASSIGN,
        TokenKind.RIGHT_SHIFT_LOGICAL,
        TokenKind.RIGHT_SHIFT_ARITHMETIC,
        TokenKind.GREATER_THAN_EQUALS,
        TokenKind.POWER_ASSIGN,
        TokenKind.POWER,
        TokenKind.LOGICAL_AND_ASSIGN,
        TokenKind.LOGICAL_OR_ASSIGN,
    ]


def test_question_dot_before_digit_is_conditional() -> None:
    tokens = list(tokenize("a?.5:1"))
    assert [t.kind for t in tokens] == [
        TokenKind.IDENTIFIER,
        TokenKind.QUESTION,
        TokenKind.DECIMAL_LITERAL,
        TokenKind.COLON,
        TokenKind.INTEGER,
    ]
    assert tokens[2].text == ".5"


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, kind",
    [
        ("42", TokenKind.INTEGER),
        ("1_000", TokenKind.INTEGER),
        ("1.5e10", TokenKind.DECIMAL_LITERAL),
        ("1e3", TokenKind.DECIMAL_LITERAL),
        (".5", TokenKind.DECIMAL_LITERAL),
        ("2.5E-3", TokenKind.DECIMAL_LITERAL),
        ("10n", TokenKind.BIG_DECIMAL_INTEGER_LITERAL),
        ("0x1F", TokenKind.HEX_INTEGER_LITERAL),
        ("0XffN", TokenKind.HEX_INTEGER_LITERAL),
        ("0xFFn", TokenKind.BIG_HEX_INTEGER_LITERAL),
        ("0b101", TokenKind.BINARY_INTEGER_LITERAL),
        ("0b101n", TokenKind.BIG_BINARY_INTEGER_LITERAL),
        ("0o17", TokenKind.OCTAL_INTEGER_LITERAL),
        ("0o17n", TokenKind.BIG_OCTAL_INTEGER_LITERAL),
        ("007", TokenKind.LEGACY_OCTAL_INTEGER_LITERAL),
    ],
)
def test_numeric_literal_kinds(source: str, kind: TokenKind) -> None:
    token = first(source)
    assert token.kind is kind
    if source == "0XffN":
        # Upper-case `N` is not the BigInt suffix.
        assert token.text == "0Xff"
        return
    assert token.text == source
    # Re-scanning the token's own text gives the same token back.
    rescanned = first(token.text)
    assert (rescanned.kind, rescanned.text) == (token.kind, token.text)


def test_integer_value_ignores_separators() -> None:
    token = first("1_000")
    assert token.int_value == 1000
    assert repr(token) == "Token(INTEGER, 1000, pos=0)"


def test_integer_value_is_not_clamped_to_64_bits() -> None:
    token = first(str(2**64 + 1))
    assert token.kind is TokenKind.INTEGER
    assert token.int_value == 2**64 + 1


def test_legacy_octal_is_rejected_in_strict_mode() -> None:
    token = first("007", strict=True)
    assert token.kind is TokenKind.INTEGER
    assert token.text == "0"
    assert token.int_value == 0


def test_missing_prefix_digits_fall_back_to_zero() -> None:
    tokens = list(tokenize("0xg"))
    assert [(t.kind, t.text) for t in tokens] == [
        (TokenKind.INTEGER, "0"),
        (TokenKind.IDENTIFIER, "xg"),
    ]


@given(st.integers(min_value=0, max_value=10**30))  # type: ignore[misc]
def test_decimal_integers_round_trip(n: int) -> None:
    token = first(str(n))
    assert token.kind is TokenKind.INTEGER
    assert token.int_value == n
    assert token.end == len(str(n))


@settings(max_examples=200)  # type: ignore[misc]
@given(st.from_regex(r"\A[A-Za-z_$][A-Za-z0-9_$]{0,12}\Z"))  # type: ignore[misc]
def test_plain_names_lex_as_identifiers(name: str) -> None:
    if name in keyword_hashmap or name == "let":
        return
    token = first(name)
    assert token.kind is TokenKind.IDENTIFIER
    assert token.text == name


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, text",
    [
        ('"abc', '"abc'),
        ("'abc\nx'", "'abc"),
        ("'\\x4'", "'\\x"),
        ("'\\u12'", "'\\u"),
        ("'\\01'", "'\\0"),
    ],
)
def test_malformed_strings_are_invalid(source: str, text: str) -> None:
    token = first(source)
    assert token.kind is TokenKind.INVALID
    assert token.text == text


def test_string_escapes_decode() -> None:
    token = first(r'"a\tb\x41B\u{43}\'"')
    assert token.kind is TokenKind.STRING_LITERAL
    assert decode_string_literal(token.text) == "a\tbABC'"


def test_line_continuation_is_dropped() -> None:
    assert decode_escapes("ab\\\ncd") == "abcd"


@pytest.mark.parametrize(  # type: ignore[misc]
    "body, decoded",
    [("\\1", "\x01"), ("a\\7b", "a\x07b"), ("\\8", "8"), ("\\9", "9")],
)
def test_digit_escapes_decode(body: str, decoded: str) -> None:
    assert decode_escapes(body) == decoded


@pytest.mark.parametrize("source", ["'\\8'", "'\\9'", "'\\12'"])  # type: ignore[misc]
def test_non_zero_digit_escapes_are_valid(source: str) -> None:
    token = first(source)
    assert token.kind is TokenKind.STRING_LITERAL
    assert token.text == source


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, expected",
    [
        ("(/a/gi", [TokenKind.LPAREN, TokenKind.REGULAR_EXPRESSION_LITERAL]),
        ("/ab+c/", [TokenKind.REGULAR_EXPRESSION_LITERAL]),
        ("a/b", [TokenKind.IDENTIFIER, TokenKind.DIVIDE, TokenKind.IDENTIFIER]),
        (
            "(a)/2",
            [
                TokenKind.LPAREN,
                TokenKind.IDENTIFIER,
                TokenKind.RPAREN,
                TokenKind.DIVIDE,
                TokenKind.INTEGER,
            ],
        ),
        ("x /= 2", [TokenKind.IDENTIFIER, TokenKind.DIVIDE_ASSIGN, TokenKind.INTEGER]),
    ],
)
def test_slash_disambiguation(source: str, expected: list[TokenKind]) -> None:
    assert kinds(source) == expected


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "a; /x/",
        "a && /x/",
        "a || /x/",
        "a ^ /x/",
        "~/x/",
        "a * /x/",
        "a % /x/",
        "a < /x/",
        "a > /x/",
        "} /x/",
    ],
)
def test_regex_follows_operators_and_statement_ends(source: str) -> None:
    assert kinds(source)[-1] is TokenKind.REGULAR_EXPRESSION_LITERAL


@pytest.mark.parametrize("source", ["x] /x/", "1 /x/", "a++ /x/", "'s' /x/"])  # type: ignore[misc]
def test_slash_after_operands_is_division(source: str) -> None:
    assert TokenKind.DIVIDE in kinds(source)
    assert TokenKind.REGULAR_EXPRESSION_LITERAL not in kinds(source)


def test_regex_class_may_contain_slash() -> None:
    tokens = list(tokenize("x = /[/]/.test(y)"))
    assert tokens[2].kind is TokenKind.REGULAR_EXPRESSION_LITERAL
    assert tokens[2].text == "/[/]/"
    assert tokens[3].kind is TokenKind.DOT


def test_template_tokens_follow_parser_braces() -> None:
    lexer = Lexer("`a${1}b`")
    seen = []
    for _ in range(5):
        token = lexer.next_token()
        seen.append((token.kind, token.text))
    assert seen == [
        (TokenKind.BACKTICK, "`"),
        (TokenKind.TEMPLATE_STRING_ATOM, "a"),
        (TokenKind.TEMPLATE_STRING_START_EXPRESSION, "${"),
        (TokenKind.INTEGER, "1"),
        (TokenKind.RBRACE, "}"),
    ]
    lexer.process_template_close_brace()
    assert lexer.next_token() == Token(TokenKind.TEMPLATE_STRING_ATOM, "b", 6)
    assert lexer.next_token().kind is TokenKind.BACKTICK
    assert lexer.next_token().kind is TokenKind.EOF


def test_tokenize_tracks_template_braces() -> None:
    assert kinds("`a${ {x: 1} }b`") == [
        TokenKind.BACKTICK,
        TokenKind.TEMPLATE_STRING_ATOM,
        TokenKind.TEMPLATE_STRING_START_EXPRESSION,
        TokenKind.LBRACE,
        TokenKind.IDENTIFIER,
        TokenKind.COLON,
        TokenKind.INTEGER,
        TokenKind.RBRACE,
        TokenKind.RBRACE,
        TokenKind.TEMPLATE_STRING_ATOM,
        TokenKind.BACKTICK,
    ]


def test_template_atoms_keep_whitespace() -> None:
    tokens = list(tokenize("` a  b `"))
    assert tokens[1].text == " a  b "


def test_unterminated_template_reports_once() -> None:
    lexer = Lexer("`abc")
    assert lexer.next_token().kind is TokenKind.BACKTICK
    assert lexer.next_token().kind is TokenKind.TEMPLATE_STRING_ATOM
    invalid = lexer.next_token()
    assert invalid.kind is TokenKind.INVALID
    assert invalid.text == ""
    assert lexer.next_token().kind is TokenKind.EOF


def test_comments_and_hash_bang_are_trivia() -> None:
    source = "#!/usr/bin/env node\n// line\n/* a /* nested */ b */ <!-- html --> x"
    assert [(t.kind, t.text) for t in tokenize(source)] == [(TokenKind.IDENTIFIER, "x")]


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "<![CDATA[ if ( ]]> x",
        "x /* never closed",
        "x /* outer /* inner */ still open",
        "x <![CDATA[ never closed",
    ],
)
def test_cdata_and_unterminated_comments_are_trivia(source: str) -> None:
    assert [(t.kind, t.text) for t in tokenize(source)] == [(TokenKind.IDENTIFIER, "x")]


def test_hash_bang_after_byte_order_mark() -> None:
    assert kinds("\ufeff#!shebang\nprint") == [TokenKind.PRINT]


def test_hash_outside_first_line_is_a_token() -> None:
    assert kinds("#x") == [TokenKind.HASHTAG, TokenKind.IDENTIFIER]


@pytest.mark.parametrize(  # type: ignore[misc]
    "source, strict, kind",
    [
        ("let", False, TokenKind.NON_STRICT_LET),
        ("let", True, TokenKind.STRICT_LET),
        ("static", False, TokenKind.IDENTIFIER),
        ("static", True, TokenKind.STATIC),
        ("implements", True, TokenKind.IMPLEMENTS),
        ("print", False, TokenKind.PRINT),
        ("null", False, TokenKind.NULL_LITERAL),
        ("false", False, TokenKind.BOOLEAN_LITERAL),
        ("Print", False, TokenKind.IDENTIFIER),
    ],
)
def test_keyword_kinds(source: str, strict: bool, kind: TokenKind) -> None:
    assert first(source, strict).kind is kind


def test_every_strict_word_is_an_identifier_outside_strict_mode() -> None:
    for word in strict_keyword_hashmap:
        assert first(word).kind is TokenKind.IDENTIFIER


@pytest.mark.parametrize(  # type: ignore[misc]
    "member, kind",
    [
        ("log", TokenKind.CONSOLE_LOG),
        ("error", TokenKind.CONSOLE_ERROR),
        ("warn", TokenKind.CONSOLE_WARN),
        ("info", TokenKind.CONSOLE_INFO),
        ("success", TokenKind.CONSOLE_SUCCESS),
    ],
)
def test_console_members_are_single_tokens(member: str, kind: TokenKind) -> None:
    token = first(f"console.{member}(1)")
    assert token.kind is kind
    assert token.text == f"console.{member}"


def test_other_console_members_stay_separate() -> None:
    assert kinds("console.logger") == [
        TokenKind.IDENTIFIER,
        TokenKind.DOT,
        TokenKind.IDENTIFIER,
    ]


def test_yield_star() -> None:
    assert kinds("yield*x") == [TokenKind.YIELD_STAR, TokenKind.IDENTIFIER]
    assert kinds("yield *= 2") == [
        TokenKind.YIELD,
        TokenKind.MULTIPLY_ASSIGN,
        TokenKind.INTEGER,
    ]


def test_identifiers_with_escapes_and_unicode() -> None:
    assert [(t.kind, t.text) for t in tokenize("\\u0061bc caf\u00e9")] == [
        (TokenKind.IDENTIFIER, "\\u0061bc"),
        (TokenKind.IDENTIFIER, "caf\u00e9"),
    ]


def test_unknown_character_is_invalid() -> None:
    assert first("@").kind is TokenKind.INVALID


def test_end_of_input_repeats() -> None:
    lexer = Lexer("  ")
    assert lexer.next_token().kind is TokenKind.EOF
    assert lexer.next_token() == Token(TokenKind.EOF, "", 2)
    assert lexer.end_of_file()


def test_reset_rescans_identically() -> None:
    lexer = Lexer("a b c")
    lexer.next_token()
    saved = lexer.state()
    assert saved == LexerState(1, False)
    once = lexer.next_token()
    lexer.reset(saved)
    assert lexer.next_token() == once
    lexer.reset(0)
    assert lexer.next_token().text == "a"


def test_line_col_counts_all_line_terminators() -> None:
    lexer = Lexer("a\r\nb\u2028c")
    assert lexer.line_col(0) == (1, 1)
    assert lexer.line_col(3) == (2, 1)
    assert lexer.line_col(5) == (3, 1)


def test_line_terminator_between() -> None:
    lexer = Lexer("a\nb c")
    assert lexer.contains_line_terminator_between(0, 3)
    assert not lexer.contains_line_terminator_between(2, 5)


@pytest.mark.parametrize("separator", ["\r", "\r\n", "\u2028", "\u2029"])  # type: ignore[misc]
def test_every_line_terminator_counts_between_tokens(separator: str) -> None:
    lexer = Lexer(f"a{separator}b")
    assert lexer.contains_line_terminator_between(0, 2 + len(separator))


def test_token_repr() -> None:
    assert repr(first("x")) == "Token(IDENTIFIER, 'x', pos=0)"
    assert repr(first("  42")) == "Token(INTEGER, 42, pos=2)"


@settings(max_examples=300)  # type: ignore[misc]
@given(st.text(max_size=60))  # type: ignore[misc]
def test_lexer_always_terminates_and_moves_forward(source: str) -> None:
    tokens = list(tokenize(source))
    assert len(tokens) <= 2 * len(source) + 1
    end = 0
    for token in tokens:
        assert token.pos >= end
        assert source[token.pos : token.end] == token.text
        end = token.end
