"""
Lexical analyzer for the oong language (a JavaScript/TypeScript-like surface syntax).

This module converts source text into tokens, one token per call, on demand:

Classes:
    Token: Immutable lexical unit (kind, raw text, offset, optional integer value).
    LexerState: Snapshot of the scan cursor, used by the parser to backtrack.
    Lexer: Pull-based scanner over an immutable source string.

Features:
    - Skips whitespace, line terminators (CRLF, LF, CR, U+2028, U+2029), a leading
      hash-bang line, `//` and nested `/* */` comments, `<!-- -->` and
      `<![CDATA[ ]]>` comments
    - Longest-match recognition of punctuators and operators
    - Recognizes:
        * Identifiers (with `\\uXXXX` / `\\u{...}` escapes) and keywords
        * Decimal, hex, binary, octal and legacy octal numbers, BigInt suffixes
        * String literals with escape validation
        * Template strings (atoms, `${` expression starts, closing backticks)
        * Regular expression literals, disambiguated from division

The lexer never raises: malformed input is reported as a `TokenKind.INVALID`
token spanning the offending text.

Example:
    >>> lexer = Lexer("print(42)")
    >>> lexer.next_token()
    Token(PRINT, 'print', pos=0)

Exports:
    - Token
    - LexerState
    - Lexer
    - line_terminator_length
    - decode_escapes
    - decode_string_literal
    - tokenize
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass
from typing import NamedTuple

from oong.oong_constants import (
    MAX_PUNCTUATOR_LENGTH,
    TokenKind,
    console_hashmap,
    keyword_hashmap,
    punctuator_hashmap,
    strict_keyword_hashmap,
)

WHITESPACE = "\t\v\f \u00a0\ufeff"
LINE_TERMINATORS = "\r\n\u2028\u2029"
DECIMAL_DIGITS = "0123456789"
HEX_DIGITS = "0123456789abcdefABCDEF"
OCTAL_DIGITS = "01234567"
BINARY_DIGITS = "01"

# Characters after which a `/` starts a regular expression rather than a division.
REGEX_PRECEDERS = "(,=:[!?{};&|^~*%<>"


def line_terminator_length(source: str, pos: int) -> int:
    """Returns the length of the line terminator at `pos` (CRLF counts as one), or 0."""
    if pos >= len(source):
        return 0
    ch = source[pos]
    if ch == "\r":
        return 2 if source.startswith("\n", pos + 1) else 1
    if ch in "\n\u2028\u2029":
        return 1
    return 0


def _is_identifier_part(ch: str) -> bool:
    if ch.isascii():
        return ch.isalnum() or ch in "_$"
    return ch not in LINE_TERMINATORS and ch not in WHITESPACE


def _unicode_escape_length(source: str, pos: int) -> int:
    """Length of a `\\uXXXX` or `\\u{...}` escape starting at `pos`, or 0."""
    if not source.startswith("\\u", pos):
        return 0
    digits = source[pos + 2 : pos + 6]
    if len(digits) == 4 and all(d in HEX_DIGITS for d in digits):
        return 6
    if source.startswith("{", pos + 2):
        end = pos + 3
        while end < len(source) and source[end] in HEX_DIGITS:
            end += 1
        if end > pos + 3 and source.startswith("}", end):
            return end + 1 - pos
    return 0


@dataclass(frozen=True)
class Token:
    """A single lexical unit of oong source.

    Attributes:
        kind (TokenKind): The token's kind.
        text (str): The raw source slice covered by the token.
        pos (int): Offset of the first character of the token in the source.
        int_value (int | None): Parsed value, set only for plain decimal integers.
            It is an arbitrary-precision int; literals past 64 bits keep their
            exact value.
    """

    kind: TokenKind
    text: str
    pos: int = 0
    int_value: int | None = None

    @property
    def end(self) -> int:
        """Offset just past the last character of the token."""
        return self.pos + len(self.text)

    def __repr__(self) -> str:
        if self.kind is TokenKind.INTEGER and self.int_value is not None:
            return f"Token(INTEGER, {self.int_value}, pos={self.pos})"
        return f"Token({self.kind.name}, {self.text!r}, pos={self.pos})"


class LexerState(NamedTuple):
    """Everything the lexer needs to resume scanning from a given point."""

    pos: int
    in_template: bool


class Lexer:
    """Pull-based scanner for oong source.

    The lexer is a pure function of `(pos, in_template)`, so it can be rewound with
    `reset()` to any state previously returned by `state()`.

    Attributes:
        source (str): The immutable source text.
        pos (int): Offset of the next unread character.
        strict (bool): Strict mode; reserves extra words and disables legacy octals.
        in_template (bool): True while scanning template string atoms.
    """

    def __init__(self, source: str, strict: bool = False) -> None:
        self.source = source
        self.pos = 0
        self.strict = strict
        self.in_template = False
        self._line_starts: list[int] | None = None

    # Cursor management

    def state(self) -> LexerState:
        return LexerState(self.pos, self.in_template)

    def reset(self, state: LexerState | int) -> None:
        """Rewinds (or fast-forwards) the scanner to a saved state or a raw offset."""
        if isinstance(state, LexerState):
            self.pos, self.in_template = state
        else:
            self.pos = state
            self.in_template = False

    def end_of_file(self) -> bool:
        return self.pos >= len(self.source)

    def line_col(self, offset: int) -> tuple[int, int]:
        """Converts an offset into a 1-based (line, column) pair."""
        if self._line_starts is None:
            starts = [0]
            pos = 0
            while pos < len(self.source):
                length = line_terminator_length(self.source, pos)
                if length:
                    pos += length
                    starts.append(pos)
                else:
                    pos += 1
            self._line_starts = starts
        line = bisect.bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1] + 1

    # Template mode, driven by the parser

    def process_template_open_brace(self) -> None:
        """Leaves atom mode after `${` so the embedded expression lexes normally."""
        self.in_template = False

    def process_template_close_brace(self) -> None:
        """Resumes atom mode once the parser has reached the `}` closing a `${`."""
        self.in_template = True

    # Helpers used by the parser for ASI and by the regex heuristic

    def contains_line_terminator_between(self, start: int, end: int) -> bool:
        return any(ch in LINE_TERMINATORS for ch in self.source[start:end])

    def is_regex_possible(self, offset: int | None = None) -> bool:
        """Judges whether a `/` at `offset` starts a regular expression literal.

        Looks back past whitespace and line terminators at the previous character;
        start of input and the characters in `REGEX_PRECEDERS` favor a regex,
        anything else favors division.
        """
        pos = (self.pos if offset is None else offset) - 1
        while pos >= 0:
            ch = self.source[pos]
            if ch in WHITESPACE or ch in LINE_TERMINATORS:
                pos -= 1
                continue
            return ch in REGEX_PRECEDERS
        return True

    # Trivia

    def skip_trivia(self) -> None:
        """Skips whitespace, line terminators, the hash-bang line and all comment forms."""
        source = self.source
        while self.pos < len(source):
            if self.pos == 0 and self._skip_hash_bang():
                continue
            ch = source[self.pos]
            if ch in WHITESPACE:
                self.pos += 1
                continue
            length = line_terminator_length(source, self.pos)
            if length:
                self.pos += length
                continue
            if source.startswith("//", self.pos):
                self._skip_to_line_end(self.pos + 2)
                continue
            if source.startswith("<!--", self.pos):
                self._skip_until("-->", self.pos + 4)
                continue
            if source.startswith("<![CDATA[", self.pos):
                self._skip_until("]]>", self.pos + 9)
                continue
            if source.startswith("/*", self.pos):
                self._skip_block_comment()
                continue
            break

    def _skip_hash_bang(self) -> bool:
        start = 1 if self.source.startswith("\ufeff") else 0
        if not self.source.startswith("#!", start):
            return False
        self._skip_to_line_end(start + 2)
        return True

    def _skip_to_line_end(self, pos: int) -> None:
        while pos < len(self.source) and not line_terminator_length(self.source, pos):
            pos += 1
        self.pos = pos

    def _skip_until(self, terminator: str, pos: int) -> None:
        end = self.source.find(terminator, pos)
        self.pos = len(self.source) if end < 0 else end + len(terminator)

    def _skip_block_comment(self) -> None:
        source = self.source
        pos = self.pos + 2
        depth = 1
        while pos + 1 < len(source):
            if source.startswith("/*", pos):
                depth += 1
                pos += 2
            elif source.startswith("*/", pos):
                depth -= 1
                pos += 2
                if depth == 0:
                    self.pos = pos
                    return
            else:
                pos += 1
        # Unterminated comments run to the end of input.
        self.pos = len(source)

    # Tokens

    def _make(
        self, kind: TokenKind, start: int, end: int, int_value: int | None = None
    ) -> Token:
        self.pos = end
        return Token(kind, self.source[start:end], start, int_value)

    def next_token(self) -> Token:
        """Consumes and returns the next Token; returns EOF forever at end of input."""
        if self.in_template:
            return self._scan_template_atom()

        self.skip_trivia()
        source = self.source
        start = self.pos
        if start >= len(source):
            return self._make(TokenKind.EOF, start, start)

        ch = source[start]

        # 1. Identifier or keyword
        if (
            (ch.isascii() and (ch.isalpha() or ch in "_$"))
            or (not ch.isascii() and _is_identifier_part(ch))
            or _unicode_escape_length(source, start)
        ):
            return self._scan_identifier(start)

        # 2. Number (including `.5`)
        if ch in DECIMAL_DIGITS or (ch == "." and self._is_digit_at(start + 1)):
            return self._scan_number(start)

        # 3. String
        if ch in "\"'":
            return self._scan_string(start)

        # 4. Template start
        if ch == "`":
            self.in_template = True
            return self._make(TokenKind.BACKTICK, start, start + 1)

        # 5. Regular expression, when one is expected here
        if ch == "/" and self.is_regex_possible(start):
            token = self._scan_regular_expression(start)
            if token is not None:
                return token

        # 6. Punctuator or operator
        token = self.match_operator(start)
        if token is not None:
            return token

        # 7. Unknown character
        return self._make(TokenKind.INVALID, start, start + 1)

    def match_operator(self, start: int) -> Token | None:
        """Matches the longest punctuator at `start`."""
        source = self.source
        for length in range(MAX_PUNCTUATOR_LENGTH, 0, -1):
            candidate = source[start : start + length]
            if len(candidate) == length and candidate in punctuator_hashmap:
                # `a?.5:1` is a conditional, not an optional chain.
                if candidate == "?." and self._is_digit_at(start + 2):
                    continue
                return self._make(punctuator_hashmap[candidate], start, start + length)
        return None

    def _scan_identifier(self, start: int) -> Token:
        source = self.source
        pos = start
        while pos < len(source):
            if _is_identifier_part(source[pos]):
                pos += 1
                continue
            escape = _unicode_escape_length(source, pos)
            if not escape:
                break
            pos += escape

        text = source[start:pos]
        if text == "console" and source.startswith(".", pos):
            member_end = pos + 1
            while member_end < len(source) and _is_identifier_part(source[member_end]):
                member_end += 1
            member = source[pos + 1 : member_end]
            if member in console_hashmap:
                return self._make(console_hashmap[member], start, member_end)
        if text == "yield" and source.startswith("*", pos) and not source.startswith(
            "*=", pos
        ):
            return self._make(TokenKind.YIELD_STAR, start, pos + 1)
        if text == "let":
            kind = TokenKind.STRICT_LET if self.strict else TokenKind.NON_STRICT_LET
            return self._make(kind, start, pos)
        if text in keyword_hashmap:
            return self._make(keyword_hashmap[text], start, pos)
        if self.strict and text in strict_keyword_hashmap:
            return self._make(strict_keyword_hashmap[text], start, pos)
        return self._make(TokenKind.IDENTIFIER, start, pos)

    def _scan_number(self, start: int) -> Token:
        source = self.source
        first = source[start]
        nxt = source[start + 1 : start + 2]

        if first == "0" and nxt:
            if nxt in "xX":
                return self._scan_prefixed_integer(
                    start,
                    HEX_DIGITS,
                    TokenKind.HEX_INTEGER_LITERAL,
                    TokenKind.BIG_HEX_INTEGER_LITERAL,
                )
            if nxt in "bB":
                return self._scan_prefixed_integer(
                    start,
                    BINARY_DIGITS,
                    TokenKind.BINARY_INTEGER_LITERAL,
                    TokenKind.BIG_BINARY_INTEGER_LITERAL,
                )
            if nxt in "oO":
                return self._scan_prefixed_integer(
                    start,
                    OCTAL_DIGITS,
                    TokenKind.OCTAL_INTEGER_LITERAL,
                    TokenKind.BIG_OCTAL_INTEGER_LITERAL,
                )
            if nxt in OCTAL_DIGITS and not self.strict:
                pos = start + 1
                while pos < len(source) and source[pos] in OCTAL_DIGITS:
                    pos += 1
                if source.startswith("n", pos):
                    return self._make(
                        TokenKind.BIG_OCTAL_INTEGER_LITERAL, start, pos + 1
                    )
                return self._make(TokenKind.LEGACY_OCTAL_INTEGER_LITERAL, start, pos)
            if nxt in DECIMAL_DIGITS:
                # `0` cannot lead a multi-digit decimal; the rest is the next token.
                return self._make(TokenKind.INTEGER, start, start + 1, 0)

        pos = start
        has_integer_part = first in DECIMAL_DIGITS
        if has_integer_part:
            pos = self._skip_decimal_digits(pos)

        is_decimal = False
        if source.startswith(".", pos) and self._is_digit_at(pos + 1):
            is_decimal = True
            pos = self._skip_decimal_digits(pos + 1)

        if source[pos : pos + 1] in ("e", "E"):
            exponent = pos + 1
            if source[exponent : exponent + 1] in ("+", "-"):
                exponent += 1
            if self._is_digit_at(exponent):
                is_decimal = True
                pos = self._skip_decimal_digits(exponent)

        if is_decimal:
            return self._make(TokenKind.DECIMAL_LITERAL, start, pos)
        if source.startswith("n", pos):
            return self._make(TokenKind.BIG_DECIMAL_INTEGER_LITERAL, start, pos + 1)
        value = int(source[start:pos].replace("_", ""))
        return self._make(TokenKind.INTEGER, start, pos, value)

    def _is_digit_at(self, pos: int) -> bool:
        return pos < len(self.source) and self.source[pos] in DECIMAL_DIGITS

    def _skip_decimal_digits(self, pos: int) -> int:
        source = self.source
        while pos < len(source) and (source[pos] in DECIMAL_DIGITS or source[pos] == "_"):
            pos += 1
        return pos

    def _scan_prefixed_integer(
        self, start: int, digits: str, kind: TokenKind, big_kind: TokenKind
    ) -> Token:
        source = self.source
        pos = start + 2
        if pos >= len(source) or source[pos] not in digits:
            # Not a prefixed literal after all: emit the `0` and leave the prefix.
            return self._make(TokenKind.INTEGER, start, start + 1, 0)
        while pos < len(source) and (source[pos] in digits or source[pos] == "_"):
            pos += 1
        if source.startswith("n", pos):
            return self._make(big_kind, start, pos + 1)
        return self._make(kind, start, pos)

    def _scan_escape(self, pos: int) -> tuple[bool, int]:
        """Validates the escape sequence whose backslash is at `pos`.

        Returns:
            tuple[bool, int]: Whether the escape is well formed, and the offset
            just past it (or past the offending prefix when malformed).
        """
        source = self.source
        if pos + 1 >= len(source):
            return True, len(source)

        # Line continuation: a backslash followed by one or more line terminators.
        end = pos + 1
        while True:
            length = line_terminator_length(source, end)
            if not length:
                break
            end += length
        if end > pos + 1:
            return True, end

        escape = source[pos + 1]
        if escape == "x":
            digits = source[pos + 2 : pos + 4]
            if len(digits) == 2 and all(d in HEX_DIGITS for d in digits):
                return True, pos + 4
            return False, pos + 2
        if escape == "u":
            length = _unicode_escape_length(source, pos)
            if length:
                return True, pos + length
            return False, pos + 2
        if escape == "0" and self._is_digit_at(pos + 2):
            return False, pos + 2
        return True, pos + 2

    def _scan_string(self, start: int) -> Token:
        source = self.source
        quote = source[start]
        pos = start + 1
        while pos < len(source):
            ch = source[pos]
            if ch == quote:
                return self._make(TokenKind.STRING_LITERAL, start, pos + 1)
            if ch == "\\":
                ok, end = self._scan_escape(pos)
                if not ok:
                    return self._make(TokenKind.INVALID, start, end)
                pos = end
                continue
            if line_terminator_length(source, pos):
                break
            pos += 1
        # Unterminated: the invalid token stops short of the line terminator.
        return self._make(TokenKind.INVALID, start, pos)

    def _scan_template_atom(self) -> Token:
        source = self.source
        start = self.pos
        pos = start
        while pos < len(source):
            ch = source[pos]
            if ch == "\\":
                ok, end = self._scan_escape(pos)
                if not ok:
                    return self._make(TokenKind.INVALID, start, end)
                pos = end
                continue
            if ch == "`":
                if pos > start:
                    return self._make(TokenKind.TEMPLATE_STRING_ATOM, start, pos)
                self.in_template = False
                return self._make(TokenKind.BACKTICK, pos, pos + 1)
            if ch == "$" and source.startswith("{", pos + 1):
                if pos > start:
                    return self._make(TokenKind.TEMPLATE_STRING_ATOM, start, pos)
                self.in_template = False
                return self._make(
                    TokenKind.TEMPLATE_STRING_START_EXPRESSION, pos, pos + 2
                )
            pos += 1

        if pos > start:
            return self._make(TokenKind.TEMPLATE_STRING_ATOM, start, pos)
        # Unterminated template: report once, then fall back to EOF.
        self.in_template = False
        return self._make(TokenKind.INVALID, start, start)

    def _regex_char_length(self, pos: int) -> int:
        """Length of one regular expression body character at `pos`, or 0 if none fits."""
        source = self.source
        if pos >= len(source):
            return 0
        ch = source[pos]
        if ch == "[":
            return self._regex_class_length(pos)
        if ch == "\\":
            if pos + 1 >= len(source) or line_terminator_length(source, pos + 1):
                return 0
            return 2
        if ch == "/" or line_terminator_length(source, pos):
            return 0
        return 1

    def _regex_class_length(self, pos: int) -> int:
        source = self.source
        end = pos + 1
        while end < len(source):
            ch = source[end]
            if ch == "]":
                return end + 1 - pos
            if ch == "\\":
                if end + 1 >= len(source) or line_terminator_length(source, end + 1):
                    return 0
                end += 2
                continue
            if line_terminator_length(source, end):
                return 0
            end += 1
        return 0

    def _scan_regular_expression(self, start: int) -> Token | None:
        source = self.source
        pos = start + 1
        first = self._regex_char_length(pos)
        if not first:
            return None
        pos += first

        while pos < len(source):
            if source[pos] == "/":
                pos += 1
                # Flags: identifier parts, unicode escapes included.
                while pos < len(source):
                    if source[pos].isascii() and (source[pos].isalnum() or source[pos] in "_$"):
                        pos += 1
                        continue
                    escape = _unicode_escape_length(source, pos)
                    if not escape:
                        break
                    pos += escape
                return self._make(TokenKind.REGULAR_EXPRESSION_LITERAL, start, pos)
            length = self._regex_char_length(pos)
            if not length:
                return self._make(TokenKind.INVALID, start, pos)
            pos += length

        return self._make(TokenKind.INVALID, start, pos)


_SINGLE_ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
}


def decode_escapes(text: str) -> str:
    """Decodes the escape sequences of a string literal body or template atom.

    Line continuations are elided. Malformed `\\x` / `\\u` escapes are kept verbatim,
    since the lexer has already reported them as invalid tokens.
    """
    out: list[str] = []
    pos = 0
    while pos < len(text):
        ch = text[pos]
        if ch != "\\" or pos + 1 >= len(text):
            out.append(ch)
            pos += 1
            continue

        length = line_terminator_length(text, pos + 1)
        if length:
            pos += 1
            while length:
                pos += length
                length = line_terminator_length(text, pos)
            continue

        escape = text[pos + 1]
        if escape == "x":
            digits = text[pos + 2 : pos + 4]
            if len(digits) == 2 and all(d in HEX_DIGITS for d in digits):
                out.append(chr(int(digits, 16)))
                pos += 4
                continue
        elif escape == "u":
            length = _unicode_escape_length(text, pos)
            if length:
                digits = text[pos + 2 : pos + length].strip("{}")
                code_point = int(digits, 16)
                if code_point <= 0x10FFFF:
                    out.append(chr(code_point))
                    pos += length
                    continue
        elif escape in _SINGLE_ESCAPES:
            out.append(_SINGLE_ESCAPES[escape])
            pos += 2
            continue
        elif escape in "1234567":
            out.append(chr(int(escape, 8)))
            pos += 2
            continue
        else:
            out.append(escape)
            pos += 2
            continue

        out.append(text[pos : pos + 2])
        pos += 2
    return "".join(out)


def decode_string_literal(raw: str) -> str:
    """Strips the quotes from a STRING_LITERAL token's text and decodes its escapes."""
    if len(raw) >= 2 and raw[0] in "\"'" and raw[-1] == raw[0]:
        raw = raw[1:-1]
    return decode_escapes(raw)


def tokenize(source: str, strict: bool = False) -> Iterator[Token]:
    """Yields every token of `source` up to, but not including, EOF.

    Without a parser to drive template mode, braces are counted so that the `}`
    closing a `${` substitution resumes template scanning.
    """
    lexer = Lexer(source, strict)
    braces: list[bool] = []
    while True:
        token = lexer.next_token()
        if token.kind is TokenKind.EOF:
            return
        if token.kind is TokenKind.LBRACE:
            braces.append(False)
        elif token.kind is TokenKind.TEMPLATE_STRING_START_EXPRESSION:
            braces.append(True)
        elif token.kind is TokenKind.RBRACE and braces and braces.pop():
            lexer.process_template_close_brace()
        yield token


__all__ = [
    "Lexer",
    "LexerState",
    "Token",
    "decode_escapes",
    "decode_string_literal",
    "line_terminator_length",
    "tokenize",
]
