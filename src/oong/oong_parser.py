"""
oong Language Parser

Parses oong source text into an abstract syntax tree (AST).

This module implements a backtracking recursive-descent parser over the pull-based
`Lexer`. The parser keeps exactly one lookahead token (`cur`) and backtracks by
saving and restoring a `Checkpoint`; since the lexer is re-entrant from any saved
offset, restoring a checkpoint simply re-lexes from there.

Supported Constructs
--------------------
- Statements:
    * Declarations: `var` / `let` / `const` with optional `: Type` and initializer,
      classes (fields, methods, accessors, private names, static blocks), functions
    * Control flow: `if` / `else`, `while`, `do` / `while`, `for` (three-clause,
      `in`, `of`, `await`), `switch`, `try` / `catch` / `finally`, `with`
    * Jumps: `break`, `continue`, `return`, `yield`, `throw` (ASI aware)
    * Modules: `import` and `export` in all their declaration forms
    * Output: `print(...)` and `console.log/error/warn/info/success(...)`
- Expressions: literals, templates, array and object literals, functions, arrow
  functions, classes, `new`, prefix / postfix / binary / assignment operators,
  conditionals, member chains and calls, `as` / `satisfies` assertions.
- Type annotations: unions, intersections, generics, arrays, parenthesized,
  literal and function types; object and tuple shapes are kept verbatim.

Parser Behavior
---------------
- Permissive and best-effort: function bodies, parameter lists and destructuring
  patterns are skipped as balanced groups.
- Only `Program`, `PrintStmt` and `VarDeclStmt` nodes are produced. Every other
  statement is validated and then discarded.
- Productions return `None` (or `False`) for "no match" after restoring their
  checkpoint. A missing mandatory token raises `OongSyntaxError`, which
  `Parser.parse()` turns into a failed `ParseResult`. Input nested deeper than
  the interpreter stack allows fails the same way with "nesting too deep".

Entry Points
------------
- `Parser.parse()`: Parse a full program into a `ParseResult`; never raises.
- `parse_source()`: Convenience wrapper around `Parser(source).parse()`.
- `Parser.parse_type()`: Parse a single type annotation.

Raises
------
OongSyntaxError
    Only from `ParseResult.unwrap()` and from the individual productions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NamedTuple

from oong.oong_ast import (
    ArrayType,
    CallExpr,
    Expr,
    GenericType,
    IdentifierExpr,
    IntersectionType,
    LiteralExpr,
    NamedType,
    PrintStmt,
    Program,
    RawType,
    Stmt,
    Type,
    UnionType,
    VarDeclStmt,
)
from oong.oong_constants import (
    ASSIGNMENT_OPERATORS,
    BINARY_OPERATORS,
    CONTEXTUAL_KEYWORD_KINDS,
    LITERAL_KINDS,
    NUMERIC_KINDS,
    PREFIX_OPERATORS,
    PRINT_KINDS,
    RESERVED_WORD_KINDS,
    VAR_MODIFIER_KINDS,
    TokenKind,
)
from oong.oong_lexer import Lexer, LexerState, Token, decode_escapes, decode_string_literal

logger = logging.getLogger(__name__)

CLASS_MEMBER_MODIFIERS = frozenset(
    {
        "static",
        "public",
        "private",
        "protected",
        "readonly",
        "abstract",
        "declare",
        "override",
        "accessor",
        "async",
    }
)

TYPE_OPERATORS = frozenset({"keyof", "unique", "readonly", "infer"})

# Tokens that follow a member name when the preceding word is the name itself,
# not a modifier (e.g. `static() {}`, `get = 1`).
_MEMBER_NAME_FOLLOWERS = frozenset(
    {
        TokenKind.LPAREN,
        TokenKind.ASSIGN,
        TokenKind.SEMI,
        TokenKind.COLON,
        TokenKind.COMMA,
        TokenKind.RBRACE,
        TokenKind.QUESTION,
        TokenKind.NOT,
        TokenKind.LESS_THAN,
        TokenKind.EOF,
    }
)

# Operators starting with `>` that can close a type argument list by their first character.
_SPLITTABLE_CLOSERS = frozenset(
    {
        TokenKind.RIGHT_SHIFT_ARITHMETIC,
        TokenKind.RIGHT_SHIFT_LOGICAL,
        TokenKind.GREATER_THAN_EQUALS,
        TokenKind.RIGHT_SHIFT_ARITHMETIC_ASSIGN,
        TokenKind.RIGHT_SHIFT_LOGICAL_ASSIGN,
    }
)

_CLOSERS = {
    TokenKind.LPAREN: TokenKind.RPAREN,
    TokenKind.LBRACKET: TokenKind.RBRACKET,
    TokenKind.LBRACE: TokenKind.RBRACE,
}

_CLOSER_TEXT = {
    TokenKind.RPAREN: "')'",
    TokenKind.RBRACKET: "']'",
    TokenKind.RBRACE: "'}'",
}


class OongSyntaxError(SyntaxError):
    """
    A mandatory token or production is missing.

    Attributes:
        message (str): The bare diagnostic, without position.
        offset (int): Source offset of the offending token.
        line (int): 1-based line of the offending token.
        col (int): 1-based column of the offending token.
    """

    def __init__(self, message: str, offset: int = 0, line: int = 1, col: int = 1) -> None:
        super().__init__(f"{message} at line {line}, col {col}")
        self.message = message
        self.offset = offset
        self.line = line
        self.col = col


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of `Parser.parse()`.

    Attributes:
        ok (bool): Whether the whole input parsed.
        error (str): The diagnostic text when `ok` is False.
        tree (Program | None): The AST root; None on failure and for programs
            without surviving statements (empty, directive-only, ...).
    """

    ok: bool
    error: str = ""
    tree: Program | None = None
    exception: OongSyntaxError | None = field(default=None, repr=False, compare=False)

    def unwrap(self) -> Program | None:
        """Returns the tree, or raises the error that made the parse fail."""
        if self.ok:
            return self.tree
        if self.exception is not None:
            raise self.exception
        raise OongSyntaxError(self.error)


class Checkpoint(NamedTuple):
    """Saved lookahead: the current token, the lexer state after it, and the end of the previous token."""

    token: Token
    lexer_state: LexerState
    prev_end: int


def is_identifier(token: Token) -> bool:
    """True for tokens usable as a binding name."""
    return token.kind is TokenKind.IDENTIFIER or token.kind in CONTEXTUAL_KEYWORD_KINDS


def is_identifier_name(token: Token) -> bool:
    """True for tokens usable as a property name (reserved words included)."""
    return (
        token.kind is TokenKind.IDENTIFIER
        or token.kind in RESERVED_WORD_KINDS
        or token.kind in PRINT_KINDS
    )


def describe(token: Token) -> str:
    if token.kind is TokenKind.EOF:
        return "end of input"
    if token.kind is TokenKind.INVALID:
        return f"invalid token {token.text!r}" if token.text else "unterminated template"
    return repr(token.text)


def numeric_text(token: Token) -> str:
    return str(token.int_value) if token.int_value is not None else token.text


class Parser:
    """
    oong Parser Class

    Transforms oong source text into a `Program` AST, driving a `Lexer` one token
    at a time.

    Attributes
    ----------
    source : str
        The source text being parsed.
    lexer : Lexer
        The scanner; its `strict` flag is switched on by a "use strict" directive.
    cur : Token
        The single lookahead token.
    prev_end : int
        Offset just past the previously consumed token, used by the ASI checks.
    advances : int
        Number of tokens consumed so far, backtracked work included.

    Methods
    -------
    parse() -> ParseResult
        Parse a complete program.
    parse_statement() -> list[Stmt] | None
        Parse one statement; the list holds the surviving AST nodes.
    parse_type() -> Type | None
        Parse a type annotation.
    checkpoint() -> Checkpoint / restore(checkpoint)
        Save and rewind the lookahead.
    """

    def __init__(self, source: str, strict: bool = False) -> None:
        self.source = source
        self.lexer = Lexer(source, strict)
        self.prev_end = 0
        self.advances = 0
        self.cur: Token = self.lexer.next_token()

    # Lookahead

    def advance(self) -> Token:
        """Consumes the lookahead token and returns it."""
        token = self.cur
        self.prev_end = token.end
        self.cur = self.lexer.next_token()
        self.advances += 1
        return token

    def at(self, *kinds: TokenKind) -> bool:
        return self.cur.kind in kinds

    def is_contextual(self, word: str) -> bool:
        return self.cur.kind is TokenKind.IDENTIFIER and self.cur.text == word

    def match(self, *kinds: TokenKind) -> Token | None:
        if self.cur.kind in kinds:
            return self.advance()
        return None

    def expect(self, kind: TokenKind, what: str) -> Token:
        if self.cur.kind is kind:
            return self.advance()
        raise self.error(f"expected {what}, got {describe(self.cur)}")

    def error(self, message: str, token: Token | None = None) -> OongSyntaxError:
        token = self.cur if token is None else token
        line, col = self.lexer.line_col(token.pos)
        return OongSyntaxError(message, token.pos, line, col)

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(self.cur, self.lexer.state(), self.prev_end)

    def restore(self, checkpoint: Checkpoint) -> None:
        if checkpoint.token is not self.cur:
            logger.debug("backtracking to offset %d", checkpoint.token.pos)
        self.cur, state, self.prev_end = checkpoint
        self.lexer.reset(state)

    def speculate(self, production: Callable[[], bool]) -> bool:
        """Runs `production`; on no-match or on a syntax error, rewinds and returns False."""
        start = self.checkpoint()
        try:
            if production():
                return True
        except OongSyntaxError as exc:
            logger.debug("speculative parse abandoned: %s", exc)
        self.restore(start)
        return False

    def line_break_before(self) -> bool:
        """True when a line terminator separates the previous token from the lookahead."""
        return self.lexer.contains_line_terminator_between(self.prev_end, self.cur.pos)

    def eos(self) -> bool:
        """Consumes a `;`, or accepts an automatically inserted one."""
        if self.match(TokenKind.SEMI):
            return True
        return self.at(TokenKind.RBRACE, TokenKind.EOF) or self.line_break_before()

    def expect_eos(self, what: str) -> None:
        if not self.eos():
            raise self.error(f"expected ';' after {what}, got {describe(self.cur)}")

    def force_advance(self, region: str) -> None:
        """Skips one unrecognized token inside a bounded region."""
        logger.debug("skipping %s in %s", describe(self.cur), region)
        self.advance()

    def skip_balanced(self) -> None:
        """
        Consumes a `(`, `[` or `{` group through its matching closer.

        Template substitutions inside the group are tracked too, so the lexer is
        switched back to template atoms at each `}` that closes a `${`.
        """
        opener = self.cur
        if opener.kind not in _CLOSERS:
            raise self.error(f"expected '(', '[' or '{{', got {describe(opener)}")
        stack: list[tuple[TokenKind, bool]] = []
        while True:
            token = self.cur
            kind = token.kind
            if kind in _CLOSERS:
                stack.append((_CLOSERS[kind], False))
            elif kind is TokenKind.TEMPLATE_STRING_START_EXPRESSION:
                self.lexer.process_template_open_brace()
                stack.append((TokenKind.RBRACE, True))
            elif kind in _CLOSER_TEXT:
                closer, in_template = stack[-1]
                if kind is not closer:
                    raise self.error(
                        f"unbalanced {describe(token)}, expected {_CLOSER_TEXT[closer]}"
                    )
                stack.pop()
                if in_template:
                    self.lexer.process_template_close_brace()
            elif kind is TokenKind.EOF:
                raise self.error(f"unterminated {opener.text!r} group", opener)
            self.advance()
            if not stack:
                return

    # Program

    def parse(self) -> ParseResult:
        """Parses the whole source. Never raises: failures come back as a ParseResult."""
        logger.debug("parsing %d characters (strict=%s)", len(self.source), self.lexer.strict)
        try:
            tree = self.parse_program()
        except OongSyntaxError as exc:
            logger.debug("parse failed: %s", exc)
            return ParseResult(False, str(exc), None, exc)
        except RecursionError:
            error = self.error("nesting too deep")
            logger.debug("parse failed: %s", error)
            return ParseResult(False, str(error), None, error)
        logger.debug("parse finished after %d token advances", self.advances)
        return ParseResult(True, "", tree)

    def parse_program(self) -> Program | None:
        self.parse_directive_prologue()
        statements = self.parse_statement_list()
        return Program(tuple(statements)) if statements else None

    def parse_directive_prologue(self) -> None:
        """Consumes leading string directives; "use strict" switches the lexer to strict mode."""
        while self.at(TokenKind.STRING_LITERAL):
            start = self.checkpoint()
            directive = self.advance()
            if not self.eos():
                self.restore(start)
                return
            if directive.text[1:-1] == "use strict" and not self.lexer.strict:
                logger.debug("'use strict' directive at offset %d", directive.pos)
                self.lexer.strict = True
                # The lookahead was scanned in sloppy mode.
                self.lexer.reset(self.cur.pos)
                self.cur = self.lexer.next_token()

    def parse_statement_list(self, *terminators: TokenKind) -> list[Stmt]:
        statements: list[Stmt] = []
        while not self.at(TokenKind.EOF, *terminators):
            result = self.parse_statement()
            if result is None:
                raise self.error(f"unexpected token {describe(self.cur)}")
            statements.extend(result)
        return statements

    # Statements

    def parse_statement(self) -> list[Stmt] | None:
        """Tries each statement production in priority order; None when none applies."""
        productions = (
            self.parse_block,
            self.parse_variable_statement,
            self.parse_class_declaration,
            self.parse_function_declaration,
            self.parse_empty_statement,
            self.parse_import_statement,
            self.parse_export_statement,
            self.parse_print_statement,
            self.parse_labelled_statement,
            self.parse_expression_statement,
            self.parse_if_statement,
            self.parse_iteration_statement,
            self.parse_continue_statement,
            self.parse_break_statement,
            self.parse_return_statement,
            self.parse_yield_statement,
            self.parse_with_statement,
            self.parse_switch_statement,
            self.parse_throw_statement,
            self.parse_try_statement,
            self.parse_debugger_statement,
        )
        for production in productions:
            result = production()
            if result is not None:
                return result
        return None

    def parse_required_statement(self, after: str) -> None:
        if self.parse_statement() is None:
            raise self.error(f"expected statement after {after}, got {describe(self.cur)}")

    def parse_block(self) -> list[Stmt] | None:
        if not self.match(TokenKind.LBRACE):
            return None
        self.parse_statement_list(TokenKind.RBRACE)
        self.expect(TokenKind.RBRACE, "'}' to close block")
        return []

    def parse_required_block(self, after: str) -> None:
        if self.parse_block() is None:
            raise self.error(f"expected '{{' after {after}, got {describe(self.cur)}")

    def parse_variable_statement(self) -> list[Stmt] | None:
        declarations = self.parse_variable_declaration_list()
        if declarations is None:
            return None
        self.expect_eos("variable declaration")
        return declarations

    def parse_variable_declaration_list(self, no_in: bool = False) -> list[Stmt] | None:
        if self.cur.kind not in VAR_MODIFIER_KINDS:
            return None
        start = self.checkpoint()
        modifier = self.advance()
        if modifier.kind is TokenKind.NON_STRICT_LET and not (
            is_identifier(self.cur) or self.at(TokenKind.LBRACKET, TokenKind.LBRACE)
        ):
            # Sloppy-mode `let` used as a plain identifier.
            self.restore(start)
            return None
        declarations: list[Stmt] = []
        while True:
            declarations.extend(self.parse_variable_declaration(modifier.kind, no_in))
            if not self.match(TokenKind.COMMA):
                return declarations

    def parse_variable_declaration(self, kind: TokenKind, no_in: bool) -> list[Stmt]:
        """Parses one binding. Destructuring patterns are skipped and yield no node."""
        name: str | None = None
        if is_identifier(self.cur):
            name = self.advance().text
        elif self.at(TokenKind.LBRACKET, TokenKind.LBRACE):
            self.skip_balanced()
        else:
            raise self.error(f"expected variable name, got {describe(self.cur)}")

        if self.at(TokenKind.NOT) and not self.line_break_before():
            self.advance()  # definite assignment `x!: T`
        declared_type = None
        if self.match(TokenKind.COLON):
            declared_type = self.parse_required_type("':'")
        value = None
        if self.match(TokenKind.ASSIGN):
            value = self.parse_value_expression(no_in)

        if name is None:
            return []
        return [VarDeclStmt(name, value, declared_type, kind)]

    def parse_class_declaration(self) -> list[Stmt] | None:
        if not self.match(TokenKind.CLASS):
            return None
        self.parse_class_tail()
        return []

    def parse_class_tail(self) -> None:
        """Parses everything after `class`: name, heritage clauses and body."""
        if is_identifier(self.cur) and not self.is_contextual("implements"):
            self.advance()
        if self.at(TokenKind.LESS_THAN):
            self.parse_type_parameters()
        if self.match(TokenKind.EXTENDS):
            if not self.parse_unary_expression():
                raise self.error(f"expected base class after 'extends', got {describe(self.cur)}")
            if self.at(TokenKind.LESS_THAN):
                self.parse_type_arguments()
        if self.at(TokenKind.IMPLEMENTS) or self.is_contextual("implements"):
            self.advance()
            self.parse_required_type("'implements'")
            while self.match(TokenKind.COMMA):
                self.parse_required_type("','")

        self.expect(TokenKind.LBRACE, "'{' to open class body")
        while not self.at(TokenKind.RBRACE, TokenKind.EOF):
            if not self.parse_class_element():
                self.force_advance("class body")
        self.expect(TokenKind.RBRACE, "'}' to close class body")

    def parse_class_element(self) -> bool:
        if self.match(TokenKind.SEMI):
            return True
        modifiers = self.skip_member_modifiers(CLASS_MEMBER_MODIFIERS)
        if "static" in modifiers and self.at(TokenKind.LBRACE):
            self.skip_balanced()
            return True
        self.match(TokenKind.MULTIPLY)
        self.skip_accessor_keyword()
        if not self.parse_property_name():
            return False

        self.match(TokenKind.QUESTION, TokenKind.NOT)
        if self.at(TokenKind.LPAREN, TokenKind.LESS_THAN):
            self.parse_function_rest(body_required=False)
            return True
        if self.match(TokenKind.COLON):
            self.parse_required_type("':'")
        if self.match(TokenKind.ASSIGN):
            self.require_assignment("after '=' in class field")
        self.eos()
        return True

    def skip_member_modifiers(self, allowed: frozenset[str]) -> set[str]:
        """Consumes modifier words, leaving a word that is really the member's name."""
        seen: set[str] = set()
        while self.cur.text in allowed:
            start = self.checkpoint()
            modifier = self.advance()
            if self.cur.kind in _MEMBER_NAME_FOLLOWERS or self.line_break_before():
                self.restore(start)
                break
            seen.add(modifier.text)
        return seen

    def skip_accessor_keyword(self) -> None:
        """Consumes a contextual `get` / `set` that introduces an accessor on the same line."""
        if not (self.is_contextual("get") or self.is_contextual("set")):
            return
        start = self.checkpoint()
        self.advance()
        if self.cur.kind in _MEMBER_NAME_FOLLOWERS or self.line_break_before():
            self.restore(start)

    def parse_property_name(self) -> bool:
        if is_identifier_name(self.cur) or self.at(TokenKind.STRING_LITERAL, *NUMERIC_KINDS):
            self.advance()
            return True
        if self.match(TokenKind.HASHTAG):
            self.parse_member_name("'#'")
            return True
        if self.match(TokenKind.LBRACKET):
            self.require_assignment("in computed property name")
            self.expect(TokenKind.RBRACKET, "']' to close computed property name")
            return True
        return False

    def parse_function_declaration(self) -> list[Stmt] | None:
        start = self.checkpoint()
        if self.match(TokenKind.ASYNC):
            if not self.at(TokenKind.FUNCTION) or self.line_break_before():
                self.restore(start)
                return None
        if not self.match(TokenKind.FUNCTION):
            return None
        self.match(TokenKind.MULTIPLY)
        if is_identifier(self.cur):
            self.advance()
        self.parse_function_rest(body_required=False)
        return []

    def parse_function_rest(self, body_required: bool = True) -> None:
        """Skips type parameters, the parameter list, the return type and the body."""
        if self.at(TokenKind.LESS_THAN):
            self.parse_type_parameters()
        if not self.at(TokenKind.LPAREN):
            raise self.error(f"expected '(' to open parameter list, got {describe(self.cur)}")
        self.skip_balanced()
        if self.match(TokenKind.COLON):
            self.parse_required_type("':' in return type")
        if self.at(TokenKind.LBRACE):
            self.skip_balanced()
        elif body_required or not self.eos():
            raise self.error(f"expected '{{' to open function body, got {describe(self.cur)}")

    def parse_empty_statement(self) -> list[Stmt] | None:
        return [] if self.match(TokenKind.SEMI) else None

    def parse_import_statement(self) -> list[Stmt] | None:
        if not self.at(TokenKind.IMPORT):
            return None
        start = self.checkpoint()
        self.advance()
        if self.at(TokenKind.LPAREN, TokenKind.DOT):
            # `import(...)` and `import.meta` are expressions.
            self.restore(start)
            return None
        if not self.match(TokenKind.STRING_LITERAL):
            self.parse_import_clause()
            self.expect(TokenKind.FROM, "'from' in import statement")
            self.expect(TokenKind.STRING_LITERAL, "module specifier string")
        self.skip_import_attributes()
        self.expect_eos("import statement")
        return []

    def parse_import_clause(self) -> None:
        if self.is_contextual("type"):
            start = self.checkpoint()
            self.advance()
            if not (
                self.at(TokenKind.LBRACE, TokenKind.MULTIPLY)
                or (is_identifier(self.cur) and not self.at(TokenKind.FROM))
            ):
                self.restore(start)
        if is_identifier(self.cur):
            self.advance()  # default binding
            if not self.match(TokenKind.COMMA):
                return
        if self.match(TokenKind.MULTIPLY):
            if self.match(TokenKind.AS):
                if not is_identifier(self.cur):
                    raise self.error(f"expected namespace name, got {describe(self.cur)}")
                self.advance()
            return
        if self.at(TokenKind.LBRACE):
            self.parse_module_items("import")
            return
        raise self.error(f"expected import specifier, got {describe(self.cur)}")

    def parse_module_items(self, kind: str) -> None:
        """Parses `{ a, b as c, "d" as e }` of an import or export clause."""
        self.advance()
        while not self.at(TokenKind.RBRACE, TokenKind.EOF):
            name = self.parse_module_export_name(kind)
            if name.text == "type" and is_identifier_name(self.cur) and not self.at(TokenKind.AS):
                self.parse_module_export_name(kind)  # `type T`
            if self.match(TokenKind.AS):
                self.parse_module_export_name(kind)
            if not self.match(TokenKind.COMMA):
                break
        self.expect(TokenKind.RBRACE, f"'}}' to close {kind} list")

    def parse_module_export_name(self, kind: str) -> Token:
        if not (is_identifier_name(self.cur) or self.at(TokenKind.STRING_LITERAL)):
            raise self.error(f"expected {kind} name, got {describe(self.cur)}")
        return self.advance()

    def skip_import_attributes(self) -> None:
        if (self.at(TokenKind.WITH) or self.is_contextual("assert")) and not self.line_break_before():
            self.advance()
            self.skip_balanced()

    def parse_export_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.EXPORT):
            return None
        if self.match(TokenKind.DEFAULT):
            if self.parse_function_declaration() is None and self.parse_class_declaration() is None:
                self.require_assignment("after 'export default'")
                self.expect_eos("export default")
            return []
        if self.match(TokenKind.MULTIPLY):
            if self.match(TokenKind.AS):
                self.parse_module_export_name("export")
            self.expect(TokenKind.FROM, "'from' after 'export *'")
            self.expect(TokenKind.STRING_LITERAL, "module specifier string")
            self.skip_import_attributes()
            self.expect_eos("export statement")
            return []
        if self.is_contextual("type"):
            start = self.checkpoint()
            self.advance()
            if not self.at(TokenKind.LBRACE):
                self.restore(start)
        if self.at(TokenKind.LBRACE):
            self.parse_module_items("export")
            if self.match(TokenKind.FROM):
                self.expect(TokenKind.STRING_LITERAL, "module specifier string")
                self.skip_import_attributes()
            self.expect_eos("export statement")
            return []

        declarations = self.parse_variable_statement()
        if declarations is not None:
            return declarations
        if self.parse_class_declaration() is not None or self.parse_function_declaration() is not None:
            return []
        raise self.error(f"expected declaration after 'export', got {describe(self.cur)}")

    def parse_print_statement(self) -> list[Stmt] | None:
        """Parses `print(...)` or `console.<method>(...)`, the statements the backend executes."""
        if self.cur.kind not in PRINT_KINDS:
            return None
        origin = self.advance()
        self.expect(TokenKind.LPAREN, f"'(' after {origin.text!r}")
        args: list[Expr] = []
        while not self.at(TokenKind.RPAREN, TokenKind.EOF):
            args.append(self.parse_value_expression())
            if not self.match(TokenKind.COMMA):
                break
        self.expect(TokenKind.RPAREN, f"')' to close {origin.text}(...)")
        self.expect_eos("print statement")
        return [PrintStmt(tuple(args), origin.kind)]

    def parse_labelled_statement(self) -> list[Stmt] | None:
        if not is_identifier(self.cur):
            return None
        start = self.checkpoint()
        label = self.advance()
        if not self.match(TokenKind.COLON):
            self.restore(start)
            return None
        self.parse_required_statement(f"label {label.text!r}")
        return []

    def parse_expression_statement(self) -> list[Stmt] | None:
        if not self.parse_expression_sequence():
            return None
        self.expect_eos("expression")
        return []

    def parse_if_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.IF):
            return None
        self.parse_parenthesized_condition("if")
        self.parse_required_statement("if condition")
        # The else binds to the innermost if, which is the one being parsed here.
        if self.match(TokenKind.ELSE):
            self.parse_required_statement("'else'")
        return []

    def parse_parenthesized_condition(self, keyword: str) -> None:
        self.expect(TokenKind.LPAREN, f"'(' after {keyword!r}")
        self.require_expression_sequence(f"in {keyword!r} condition")
        self.expect(TokenKind.RPAREN, f"')' to close {keyword!r} condition")

    def parse_iteration_statement(self) -> list[Stmt] | None:
        if self.match(TokenKind.DO):
            self.parse_required_statement("'do'")
            self.expect(TokenKind.WHILE, "'while' after do-while body")
            self.parse_parenthesized_condition("while")
            self.match(TokenKind.SEMI)
            return []
        if self.match(TokenKind.WHILE):
            self.parse_parenthesized_condition("while")
            self.parse_required_statement("while condition")
            return []
        if self.match(TokenKind.FOR):
            self.parse_for_rest()
            return []
        return None

    def parse_for_rest(self) -> None:
        """Parses the header and body of a three-clause, for-in or for-of loop."""
        self.match(TokenKind.AWAIT)
        self.expect(TokenKind.LPAREN, "'(' after 'for'")
        if self.parse_variable_declaration_list(no_in=True) is None and not self.at(TokenKind.SEMI):
            self.require_expression_sequence("in for-loop initializer", no_in=True)

        if self.match(TokenKind.IN):
            self.require_expression_sequence("after 'in'")
        elif self.match(TokenKind.OF):
            self.require_assignment("after 'of'")
        else:
            self.expect(TokenKind.SEMI, "';' after for-loop initializer")
            if not self.at(TokenKind.SEMI):
                self.require_expression_sequence("in for-loop condition")
            self.expect(TokenKind.SEMI, "';' after for-loop condition")
            if not self.at(TokenKind.RPAREN):
                self.require_expression_sequence("in for-loop update")
        self.expect(TokenKind.RPAREN, "')' to close for-loop header")
        self.parse_required_statement("for-loop header")

    def parse_continue_statement(self) -> list[Stmt] | None:
        return self.parse_jump_statement(TokenKind.CONTINUE)

    def parse_break_statement(self) -> list[Stmt] | None:
        return self.parse_jump_statement(TokenKind.BREAK)

    def parse_jump_statement(self, kind: TokenKind) -> list[Stmt] | None:
        keyword = self.match(kind)
        if keyword is None:
            return None
        if is_identifier(self.cur) and not self.line_break_before():
            self.advance()  # label
        self.expect_eos(repr(keyword.text))
        return []

    def parse_return_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.RETURN):
            return None
        # ASI: a line break right after `return` ends the statement.
        if not self.line_break_before() and not self.at(
            TokenKind.SEMI, TokenKind.RBRACE, TokenKind.EOF
        ):
            self.require_expression_sequence("after 'return'")
        self.expect_eos("return statement")
        return []

    def parse_yield_statement(self) -> list[Stmt] | None:
        keyword = self.match(TokenKind.YIELD, TokenKind.YIELD_STAR)
        if keyword is None:
            return None
        if keyword.kind is TokenKind.YIELD_STAR:
            self.require_assignment("after 'yield*'")
        elif not self.line_break_before() and not self.at(
            TokenKind.SEMI, TokenKind.RBRACE, TokenKind.EOF
        ):
            self.require_expression_sequence("after 'yield'")
        self.expect_eos("yield statement")
        return []

    def parse_with_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.WITH):
            return None
        self.parse_parenthesized_condition("with")
        self.parse_required_statement("with object")
        return []

    def parse_switch_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.SWITCH):
            return None
        self.parse_parenthesized_condition("switch")
        self.expect(TokenKind.LBRACE, "'{' to open switch body")
        while not self.at(TokenKind.RBRACE, TokenKind.EOF):
            if self.match(TokenKind.CASE):
                self.require_expression_sequence("after 'case'")
            elif not self.match(TokenKind.DEFAULT):
                raise self.error(f"expected 'case' or 'default', got {describe(self.cur)}")
            self.expect(TokenKind.COLON, "':' after case label")
            self.parse_statement_list(TokenKind.CASE, TokenKind.DEFAULT, TokenKind.RBRACE)
        self.expect(TokenKind.RBRACE, "'}' to close switch body")
        return []

    def parse_throw_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.THROW):
            return None
        if self.line_break_before():
            raise self.error("line break is not allowed after 'throw'")
        self.require_expression_sequence("after 'throw'")
        self.expect_eos("throw statement")
        return []

    def parse_try_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.TRY):
            return None
        self.parse_required_block("'try'")
        handled = False
        if self.match(TokenKind.CATCH):
            handled = True
            if self.match(TokenKind.LPAREN):
                if self.at(TokenKind.LBRACKET, TokenKind.LBRACE):
                    self.skip_balanced()
                elif is_identifier(self.cur):
                    self.advance()
                else:
                    raise self.error(f"expected catch binding, got {describe(self.cur)}")
                if self.match(TokenKind.COLON):
                    self.parse_required_type("':'")
                self.expect(TokenKind.RPAREN, "')' after catch binding")
            self.parse_required_block("'catch'")
        if self.match(TokenKind.FINALLY):
            handled = True
            self.parse_required_block("'finally'")
        if not handled:
            raise self.error("expected 'catch' or 'finally' after try block")
        return []

    def parse_debugger_statement(self) -> list[Stmt] | None:
        if not self.match(TokenKind.DEBUGGER):
            return None
        self.expect_eos("'debugger'")
        return []

    # Values kept in the AST

    def parse_value_expression(self, no_in: bool = False) -> Expr:
        """
        Parses an initializer or print argument into an Expr.

        The full expression grammar decides where the value ends. When the same
        span is a single literal, identifier or simple call it is returned as that
        node; any other value is kept as a LiteralExpr of its raw source text.
        """
        start = self.checkpoint()
        if not self.parse_assignment_expression(no_in):
            raise self.error(f"expected expression, got {describe(self.cur)}")
        end = self.checkpoint()

        self.restore(start)
        simple = self.parse_simple_value()
        exact = self.prev_end == end.prev_end
        self.restore(end)

        if simple is not None and exact:
            return simple
        return LiteralExpr(self.source[start.token.pos : end.prev_end])

    def parse_simple_value(self) -> Expr | None:
        """Parses a literal, identifier or `name(args)` call; the caller rewinds on None."""
        token = self.cur
        kind = token.kind
        if kind is TokenKind.STRING_LITERAL:
            self.advance()
            return LiteralExpr(decode_string_literal(token.text))
        if kind is TokenKind.BACKTICK:
            return self.parse_plain_template()
        if kind is TokenKind.MINUS:
            self.advance()
            if self.cur.kind in NUMERIC_KINDS:
                return LiteralExpr("-" + numeric_text(self.advance()))
            return None
        if kind in NUMERIC_KINDS:
            self.advance()
            return LiteralExpr(numeric_text(token))
        if kind in (TokenKind.BOOLEAN_LITERAL, TokenKind.NULL_LITERAL):
            self.advance()
            return LiteralExpr(token.text)
        if is_identifier(token) or kind in PRINT_KINDS:
            return self.parse_simple_reference()
        return None

    def parse_simple_reference(self) -> Expr | None:
        parts = [self.advance().text]
        while self.match(TokenKind.DOT):
            if not is_identifier_name(self.cur):
                return None
            parts.append(self.advance().text)
        callee = ".".join(parts)
        if not self.match(TokenKind.LPAREN):
            return IdentifierExpr(callee) if len(parts) == 1 else None

        args: list[Expr] = []
        while not self.at(TokenKind.RPAREN):
            arg = self.parse_simple_value()
            if arg is None:
                return None
            args.append(arg)
            if not self.match(TokenKind.COMMA):
                break
        if not self.match(TokenKind.RPAREN):
            return None
        return CallExpr(callee, tuple(args))

    def parse_plain_template(self) -> Expr | None:
        """A template literal without substitutions, as decoded text."""
        self.advance()
        text = ""
        if self.at(TokenKind.TEMPLATE_STRING_ATOM):
            text = decode_escapes(self.advance().text)
        if self.match(TokenKind.BACKTICK):
            return LiteralExpr(text)
        return None

    # Expressions (validated, not kept)

    def require_expression_sequence(self, where: str, no_in: bool = False) -> None:
        if not self.parse_expression_sequence(no_in):
            raise self.error(f"expected expression {where}, got {describe(self.cur)}")

    def require_assignment(self, where: str, no_in: bool = False) -> None:
        if not self.parse_assignment_expression(no_in):
            raise self.error(f"expected expression {where}, got {describe(self.cur)}")

    def parse_expression_sequence(self, no_in: bool = False) -> bool:
        if not self.parse_assignment_expression(no_in):
            return False
        while self.match(TokenKind.COMMA):
            self.require_assignment("after ','", no_in)
        return True

    def parse_assignment_expression(self, no_in: bool = False) -> bool:
        """
        Parses one assignment-level expression.

        Returns False without consuming anything when the lookahead cannot start
        an expression. When `no_in` is set, `in` is not treated as an operator
        (for-loop initializers).
        """
        if self.parse_arrow_function(no_in):
            return True
        if not self.parse_conditional_expression(no_in):
            return False
        if self.cur.kind in ASSIGNMENT_OPERATORS:
            operator = self.advance()
            self.require_assignment(f"after {operator.text!r}", no_in)
        return True

    def parse_arrow_function(self, no_in: bool) -> bool:
        if not (is_identifier(self.cur) or self.at(TokenKind.LPAREN, TokenKind.LESS_THAN)):
            return False
        if not self.speculate(self.parse_arrow_head):
            return False
        if self.at(TokenKind.LBRACE):
            self.skip_balanced()
        else:
            self.require_assignment("after '=>'", no_in)
        return True

    def parse_arrow_head(self) -> bool:
        """Parameters, optional return type and the `=>` of an arrow function."""
        if self.match(TokenKind.ASYNC):
            if self.at(TokenKind.ARROW):  # `async` names the single parameter
                return self.parse_arrow_token()
            if self.line_break_before():
                return False
        if self.at(TokenKind.LESS_THAN):
            self.parse_type_parameters()
        if is_identifier(self.cur):
            self.advance()
        elif self.at(TokenKind.LPAREN):
            self.skip_balanced()
            if self.match(TokenKind.COLON) and self.parse_type() is None:
                return False
        else:
            return False
        return self.parse_arrow_token()

    def parse_arrow_token(self) -> bool:
        if not self.at(TokenKind.ARROW) or self.line_break_before():
            return False
        self.advance()
        return True

    def parse_conditional_expression(self, no_in: bool) -> bool:
        if not self.parse_binary_expression(no_in):
            return False
        if self.match(TokenKind.QUESTION):
            self.require_assignment("after '?'")
            self.expect(TokenKind.COLON, "':' in conditional expression")
            self.require_assignment("after ':'", no_in)
        return True

    def parse_binary_expression(self, no_in: bool) -> bool:
        """Parses operands joined by binary operators; precedence is not modeled."""
        if not self.parse_unary_expression():
            return False
        while True:
            kind = self.cur.kind
            if kind in BINARY_OPERATORS and not (no_in and kind is TokenKind.IN):
                operator = self.advance()
                if not self.parse_unary_expression():
                    raise self.error(
                        f"expected expression after {operator.text!r}, got {describe(self.cur)}"
                    )
            elif (kind is TokenKind.AS or self.is_contextual("satisfies")) and not self.line_break_before():
                keyword = self.advance()
                if not self.match(TokenKind.CONST):
                    self.parse_required_type(repr(keyword.text))
            else:
                return True

    def parse_unary_expression(self) -> bool:
        if self.cur.kind in PREFIX_OPERATORS:
            operator = self.advance()
            if not self.parse_unary_expression():
                raise self.error(
                    f"expected expression after {operator.text!r}, got {describe(self.cur)}"
                )
            return True
        if not self.parse_primary_expression():
            return False
        self.parse_postfix_chain()
        return True

    def parse_primary_expression(self) -> bool:
        token = self.cur
        kind = token.kind
        if kind is TokenKind.NEW:
            self.parse_new_expression()
            return True
        if kind is TokenKind.FUNCTION:
            self.parse_function_expression()
            return True
        if kind is TokenKind.ASYNC:
            start = self.checkpoint()
            self.advance()
            if self.at(TokenKind.FUNCTION) and not self.line_break_before():
                self.parse_function_expression()
                return True
            self.restore(start)
        if kind is TokenKind.CLASS:
            self.advance()
            self.parse_class_tail()
            return True
        if kind is TokenKind.IMPORT:
            self.advance()
            if self.match(TokenKind.DOT):
                self.parse_member_name("'import.'")
            elif not self.at(TokenKind.LPAREN):
                raise self.error(f"expected '(' or '.' after 'import', got {describe(self.cur)}")
            return True
        if kind is TokenKind.BACKTICK:
            self.parse_template_literal()
            return True
        if kind is TokenKind.LPAREN:
            self.advance()
            self.require_expression_sequence("after '('")
            self.expect(TokenKind.RPAREN, "')' to close parenthesized expression")
            return True
        if kind is TokenKind.LBRACKET:
            self.parse_array_literal()
            return True
        if kind is TokenKind.LBRACE:
            self.parse_object_literal()
            return True
        if kind is TokenKind.HASHTAG:
            self.advance()
            self.parse_member_name("'#'")  # `#field in obj`
            return True
        if (
            is_identifier(token)
            or kind in PRINT_KINDS
            or kind in LITERAL_KINDS
            or kind in (TokenKind.THIS, TokenKind.SUPER)
        ):
            self.advance()
            return True
        return False

    def parse_function_expression(self) -> None:
        self.advance()  # `function`
        self.match(TokenKind.MULTIPLY)
        if is_identifier(self.cur):
            self.advance()
        self.parse_function_rest()

    def parse_new_expression(self) -> None:
        self.advance()  # `new`
        if self.match(TokenKind.DOT):
            self.parse_member_name("'new.'")  # `new.target`
            return
        if self.at(TokenKind.NEW):
            self.parse_new_expression()
        elif not self.parse_primary_expression():
            raise self.error(f"expected constructor after 'new', got {describe(self.cur)}")
        self.parse_postfix_chain(calls=False)
        if self.at(TokenKind.LPAREN):
            self.parse_arguments()

    def parse_postfix_chain(self, calls: bool = True) -> None:
        """Applies `.`, `?.`, `[...]`, calls, tagged templates and postfix operators left to right."""
        while True:
            kind = self.cur.kind
            if kind is TokenKind.DOT:
                self.advance()
                if self.match(TokenKind.HASHTAG):
                    self.parse_member_name("'.#'")
                else:
                    self.parse_member_name("'.'")
            elif kind is TokenKind.LBRACKET:
                self.advance()
                self.require_expression_sequence("in index")
                self.expect(TokenKind.RBRACKET, "']' to close index")
            elif not calls:
                return
            elif kind is TokenKind.QUESTION_DOT:
                self.advance()
                if self.at(TokenKind.LPAREN):
                    self.parse_arguments()
                elif self.match(TokenKind.LBRACKET):
                    self.require_expression_sequence("in index")
                    self.expect(TokenKind.RBRACKET, "']' to close index")
                else:
                    self.parse_member_name("'?.'")
            elif kind is TokenKind.LPAREN:
                self.parse_arguments()
            elif kind is TokenKind.BACKTICK:
                self.parse_template_literal()
            elif (
                kind in (TokenKind.PLUS_PLUS, TokenKind.MINUS_MINUS, TokenKind.NOT)
                and not self.line_break_before()
            ):
                self.advance()  # postfix update or non-null assertion
            else:
                return

    def parse_member_name(self, after: str) -> None:
        if not is_identifier_name(self.cur):
            raise self.error(f"expected property name after {after}, got {describe(self.cur)}")
        self.advance()

    def parse_arguments(self) -> None:
        self.advance()  # `(`
        while not self.at(TokenKind.RPAREN, TokenKind.EOF):
            self.match(TokenKind.ELLIPSIS)
            self.require_assignment("in argument list")
            if not self.match(TokenKind.COMMA):
                break
        self.expect(TokenKind.RPAREN, "')' to close argument list")

    def parse_template_literal(self) -> None:
        """Parses a template literal, switching the lexer in and out of template mode."""
        self.advance()  # opening backtick; the lexer now scans atoms
        while True:
            kind = self.cur.kind
            if kind is TokenKind.TEMPLATE_STRING_ATOM:
                self.advance()
            elif kind is TokenKind.TEMPLATE_STRING_START_EXPRESSION:
                self.lexer.process_template_open_brace()
                self.advance()
                self.require_expression_sequence("in template substitution")
                if not self.at(TokenKind.RBRACE):
                    raise self.error(
                        f"expected '}}' to close template substitution, got {describe(self.cur)}"
                    )
                self.lexer.process_template_close_brace()
                self.advance()
            elif kind is TokenKind.BACKTICK:
                self.advance()
                return
            else:
                raise self.error(f"unterminated template literal, got {describe(self.cur)}")

    def parse_array_literal(self) -> None:
        self.advance()  # `[`
        while not self.at(TokenKind.RBRACKET, TokenKind.EOF):
            if self.match(TokenKind.COMMA):
                continue  # hole
            self.match(TokenKind.ELLIPSIS)
            if self.parse_assignment_expression():
                if not self.at(TokenKind.RBRACKET) and not self.match(TokenKind.COMMA):
                    raise self.error(f"expected ',' or ']' in array literal, got {describe(self.cur)}")
            else:
                self.force_advance("array literal")
        self.expect(TokenKind.RBRACKET, "']' to close array literal")

    def parse_object_literal(self) -> None:
        self.advance()  # `{`
        while not self.at(TokenKind.RBRACE, TokenKind.EOF):
            if self.parse_property_assignment():
                if not self.at(TokenKind.RBRACE) and not self.match(TokenKind.COMMA):
                    raise self.error(f"expected ',' or '}}' in object literal, got {describe(self.cur)}")
            else:
                self.force_advance("object literal")
        self.expect(TokenKind.RBRACE, "'}' to close object literal")

    def parse_property_assignment(self) -> bool:
        if self.match(TokenKind.ELLIPSIS):
            self.require_assignment("after '...'")
            return True
        self.skip_member_modifiers(frozenset({"async"}))
        self.match(TokenKind.MULTIPLY)
        self.skip_accessor_keyword()
        if not self.parse_property_name():
            return False
        if self.match(TokenKind.COLON):
            self.require_assignment("after ':' in object literal")
        elif self.at(TokenKind.LPAREN, TokenKind.LESS_THAN):
            self.parse_function_rest()
        elif self.match(TokenKind.ASSIGN):
            self.require_assignment("after '=' in object pattern")
        return True

    # Types

    def parse_required_type(self, after: str) -> Type:
        type_ = self.parse_type()
        if type_ is None:
            raise self.error(f"expected type after {after}, got {describe(self.cur)}")
        return type_

    def parse_type(self) -> Type | None:
        """
        Parses a type annotation: a union of intersections of primary types.

        Returns:
            Type | None: The parsed type, or None (with nothing consumed) when the
            lookahead cannot start a type.
        """
        start = self.checkpoint()
        self.match(TokenKind.BIT_OR)
        options: list[Type] = []
        while True:
            option = self.parse_intersection_type()
            if option is None:
                if not options:
                    self.restore(start)
                    return None
                raise self.error(f"expected type after '|', got {describe(self.cur)}")
            if isinstance(option, UnionType):
                options.extend(option.options)
            else:
                options.append(option)
            if not self.match(TokenKind.BIT_OR):
                break
        return options[0] if len(options) == 1 else UnionType(tuple(options))

    def parse_intersection_type(self) -> Type | None:
        start = self.checkpoint()
        self.match(TokenKind.BIT_AND)
        parts: list[Type] = []
        while True:
            part = self.parse_primary_type()
            if part is None:
                if not parts:
                    self.restore(start)
                    return None
                raise self.error(f"expected type after '&', got {describe(self.cur)}")
            if isinstance(part, IntersectionType):
                parts.extend(part.parts)
            else:
                parts.append(part)
            if not self.match(TokenKind.BIT_AND):
                break
        return parts[0] if len(parts) == 1 else IntersectionType(tuple(parts))

    def parse_primary_type(self) -> Type | None:
        token = self.cur
        kind = token.kind
        start = token.pos
        type_: Type
        if kind in (TokenKind.LPAREN, TokenKind.LESS_THAN, TokenKind.NEW):
            type_ = self.parse_parenthesized_or_function_type()
        elif kind in (TokenKind.LBRACE, TokenKind.LBRACKET):
            self.skip_balanced()
            type_ = RawType(self.source[start : self.prev_end])
        elif kind is TokenKind.TYPEOF or (kind is TokenKind.IDENTIFIER and token.text in TYPE_OPERATORS):
            self.advance()
            if self.parse_primary_type() is None:
                raise self.error(f"expected type after {token.text!r}, got {describe(self.cur)}")
            type_ = RawType(self.source[start : self.prev_end])
        elif kind is TokenKind.MINUS:
            self.advance()
            if self.cur.kind not in NUMERIC_KINDS:
                raise self.error(f"expected number after '-' in type, got {describe(self.cur)}")
            type_ = NamedType("-" + self.advance().text)
        elif kind in LITERAL_KINDS and kind is not TokenKind.REGULAR_EXPRESSION_LITERAL:
            self.advance()
            type_ = NamedType(token.text)
        elif is_identifier(token) or kind in (TokenKind.VOID, TokenKind.THIS):
            type_ = self.parse_type_reference()
        else:
            return None
        return self.parse_array_suffixes(type_, start)

    def parse_parenthesized_or_function_type(self) -> Type:
        start = self.cur.pos
        if self.speculate(self.skip_function_type):
            return RawType(self.source[start : self.prev_end])
        self.expect(TokenKind.LPAREN, "'(' or function type")
        inner = self.parse_required_type("'('")
        self.expect(TokenKind.RPAREN, "')' to close parenthesized type")
        return inner

    def skip_function_type(self) -> bool:
        """Skips `[new] [<T>] (params) => ReturnType`."""
        self.match(TokenKind.NEW)
        if self.at(TokenKind.LESS_THAN):
            self.parse_type_parameters()
        if not self.at(TokenKind.LPAREN):
            return False
        self.skip_balanced()
        if not self.match(TokenKind.ARROW):
            return False
        self.parse_required_type("'=>'")
        return True

    def parse_type_reference(self) -> Type:
        """Parses a dotted type name with optional `<...>` arguments."""
        parts = [self.advance().text]
        while self.match(TokenKind.DOT):
            if not is_identifier_name(self.cur):
                raise self.error(f"expected name after '.' in type, got {describe(self.cur)}")
            parts.append(self.advance().text)
        named = NamedType(".".join(parts))
        if self.at(TokenKind.LESS_THAN) and not self.line_break_before():
            return GenericType(named, self.parse_type_arguments())
        return named

    def parse_array_suffixes(self, type_: Type, start: int) -> Type:
        while self.at(TokenKind.LBRACKET) and not self.line_break_before():
            bracket = self.checkpoint()
            self.advance()
            if self.match(TokenKind.RBRACKET):
                type_ = ArrayType(type_)
                continue
            # Indexed access `T["key"]` is not modeled.
            self.restore(bracket)
            self.skip_balanced()
            type_ = RawType(self.source[start : self.prev_end])
        return type_

    def parse_type_arguments(self) -> tuple[Type, ...]:
        self.advance()  # `<`
        args: list[Type] = []
        while not self.at_type_arguments_close():
            args.append(self.parse_required_type("','" if args else "'<'"))
            if not self.match(TokenKind.COMMA):
                break
        self.close_type_arguments()
        return tuple(args)

    def parse_type_parameters(self) -> None:
        """Skips `<T extends U = V, ...>` of a generic declaration."""
        self.advance()  # `<`
        while not self.at_type_arguments_close():
            self.match(TokenKind.CONST)
            if not is_identifier(self.cur):
                raise self.error(f"expected type parameter name, got {describe(self.cur)}")
            self.advance()
            if self.match(TokenKind.EXTENDS):
                self.parse_required_type("'extends'")
            if self.match(TokenKind.ASSIGN):
                self.parse_required_type("'='")
            if not self.match(TokenKind.COMMA):
                break
        self.close_type_arguments()

    def at_type_arguments_close(self) -> bool:
        return self.cur.kind is TokenKind.MORE_THAN or self.cur.kind in _SPLITTABLE_CLOSERS

    def close_type_arguments(self) -> None:
        """Consumes the `>` closing a type argument list, splitting `>>`, `>>>` and `>=`."""
        if self.match(TokenKind.MORE_THAN):
            return
        if self.cur.kind not in _SPLITTABLE_CLOSERS:
            raise self.error(f"expected '>' to close type arguments, got {describe(self.cur)}")
        split = self.cur.pos + 1
        self.prev_end = split
        self.lexer.reset(LexerState(split, False))
        self.cur = self.lexer.next_token()
        self.advances += 1


def parse_source(source: str, strict: bool = False) -> ParseResult:
    """Parses `source` and returns its ParseResult."""
    return Parser(source, strict).parse()


__all__ = [
    "Checkpoint",
    "OongSyntaxError",
    "ParseResult",
    "Parser",
    "describe",
    "is_identifier",
    "is_identifier_name",
    "parse_source",
]
