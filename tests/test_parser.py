import pytest
from hypothesis import given, settings, strategies as st

from oong.oong_ast import (
    CallExpr,
    IdentifierExpr,
    LiteralExpr,
    NamedType,
    PrintStmt,
    Program,
    Stmt,
    VarDeclStmt,
)
from oong.oong_constants import TokenKind
from oong.oong_parser import OongSyntaxError, ParseResult, Parser, parse_source


def parse(source: str, strict: bool = False) -> ParseResult:
    return Parser(source, strict).parse()


def statements(source: str) -> tuple[Stmt, ...]:
    result = parse(source)
    assert result.ok, result.error
    assert result.tree is not None
    return result.tree.statements


# Print statements


@given(n=st.integers(min_value=0, max_value=2**53))  # type: ignore[misc]
def test_print_integer_round_trip(n: int) -> None:
    assert statements(f"print({n})") == (
        PrintStmt((LiteralExpr(str(n)),), TokenKind.PRINT),
    )


@given(  # type: ignore[misc]
    st.text(
        alphabet=st.characters(
            exclude_characters="\"\\\r\n\u2028\u2029", exclude_categories=("Cs",)
        ),
        max_size=30,
    )
)
def test_print_string_is_decoded(text: str) -> None:
    (stmt,) = statements(f'print("{text}");')
    assert stmt == PrintStmt((LiteralExpr(text),))


def test_print_arguments_keep_simple_values() -> None:
    (stmt,) = statements('print("hi", x, 1.5, -2, true, null, f(1, "a"))')
    assert isinstance(stmt, PrintStmt)
    assert stmt.args == (
        LiteralExpr("hi"),
        IdentifierExpr("x"),
        LiteralExpr("1.5"),
        LiteralExpr("-2"),
        LiteralExpr("true"),
        LiteralExpr("null"),
        CallExpr("f", (LiteralExpr("1"), LiteralExpr("a"))),
    )


def test_print_of_compound_expression_keeps_source_text() -> None:
    assert statements("print(a + 1);") == (PrintStmt((LiteralExpr("a + 1"),)),)


def test_print_templates() -> None:
    assert statements("print(`hi there`)") == (PrintStmt((LiteralExpr("hi there"),)),)
    assert statements("print(`a${b}`)") == (PrintStmt((LiteralExpr("`a${b}`"),)),)


def test_print_without_arguments() -> None:
    assert statements("print();") == (PrintStmt(),)


@pytest.mark.parametrize(  # type: ignore[misc]
    "member, origin",
    [
        ("log", TokenKind.CONSOLE_LOG),
        ("error", TokenKind.CONSOLE_ERROR),
        ("warn", TokenKind.CONSOLE_WARN),
        ("info", TokenKind.CONSOLE_INFO),
        ("success", TokenKind.CONSOLE_SUCCESS),
    ],
)
def test_console_methods_become_print_statements(member: str, origin: TokenKind) -> None:
    assert statements(f'console.{member}("x");') == (PrintStmt((LiteralExpr("x"),), origin),)


def test_print_missing_close_paren() -> None:
    result = parse("print(1")
    assert not result.ok
    assert result.tree is None
    assert result.error == "expected ')' to close print(...), got end of input at line 1, col 8"


def test_print_needs_parentheses() -> None:
    result = parse("print 1;")
    assert not result.ok
    assert result.error.startswith("expected '(' after 'print'")


# Variable declarations


def test_typed_let_declaration() -> None:
    assert statements("let x: number = 5;") == (
        VarDeclStmt("x", LiteralExpr("5"), NamedType("number"), TokenKind.NON_STRICT_LET),
    )


def test_declaration_list_yields_one_node_per_binding() -> None:
    assert statements('const a = 1, b = "s";') == (
        VarDeclStmt("a", LiteralExpr("1"), None, TokenKind.CONST),
        VarDeclStmt("b", LiteralExpr("s"), None, TokenKind.CONST),
    )


def test_declaration_without_initializer() -> None:
    assert statements("let y;") == (VarDeclStmt("y", None, None, TokenKind.NON_STRICT_LET),)


def test_object_initializer_is_kept_as_source_text() -> None:
    assert statements("var o = { a: 1 };") == (VarDeclStmt("o", LiteralExpr("{ a: 1 }")),)


def test_hex_initializer_keeps_its_spelling() -> None:
    assert statements("var h = 0x1F;") == (VarDeclStmt("h", LiteralExpr("0x1F")),)


def test_destructuring_declaration_yields_no_node() -> None:
    result = parse("var [a, b] = arr; const { c } = obj;")
    assert result.ok
    assert result.tree is None


def test_declarations_without_semicolons_on_separate_lines() -> None:
    assert statements("var a = 1\nvar b = 2") == (
        VarDeclStmt("a", LiteralExpr("1")),
        VarDeclStmt("b", LiteralExpr("2")),
    )


def test_use_strict_relexes_let() -> None:
    assert statements('"use strict"; let x = 1;') == (
        VarDeclStmt("x", LiteralExpr("1"), None, TokenKind.STRICT_LET),
    )


def test_strict_words_are_names_only_in_sloppy_mode() -> None:
    assert parse("var static = 1;").ok
    result = parse('"use strict"; var static = 1;')
    assert not result.ok
    assert result.error.startswith("expected variable name, got 'static'")


def test_let_as_identifier_in_sloppy_mode() -> None:
    assert parse("let;").ok
    assert not parse("let = ;").ok


def test_directive_only_program_has_no_tree() -> None:
    result = parse('"use strict";')
    assert result == ParseResult(True, "", None)


def test_empty_program() -> None:
    assert parse("") == ParseResult(True)
    assert parse("  // nothing\n").tree is None


# Statement forms that are validated and dropped


def test_dangling_else_binds_to_inner_if() -> None:
    source = "if (a) if (b) print(1); else print(2); print(3);"
    assert statements(source) == (PrintStmt((LiteralExpr("3"),)),)


def test_return_line_break_ends_statement() -> None:
    parser = Parser("return\n1;")
    assert parser.parse_return_statement() == []
    assert parser.cur.kind is TokenKind.INTEGER

    parser = Parser("return 1;")
    assert parser.parse_return_statement() == []
    assert parser.cur.kind is TokenKind.EOF

    assert parse("return\n1;").ok


@pytest.mark.parametrize("separator", ["\n", "\r\n", "\u2028", "\u2029"])  # type: ignore[misc]
def test_any_line_terminator_after_return_ends_it(separator: str) -> None:
    parser = Parser(f"return{separator}1;")
    assert parser.parse_return_statement() == []
    assert parser.cur.kind is TokenKind.INTEGER
    assert parse(f"return{separator}1;").ok


def test_unrecognised_class_element_still_terminates() -> None:
    parser = Parser("class { ( } }")
    result = parser.parse()
    assert not result.ok
    assert result.error == "unexpected token '}' at line 1, col 13"
    assert parser.advances < 10


def test_export_default_and_bare_import_have_no_tree() -> None:
    for source in ("export default 5;", 'import "mod";'):
        result = parse(source)
        assert result.ok, result.error
        assert result.tree is None


def test_exported_declarations_survive() -> None:
    assert statements("export const x = 1;") == (
        VarDeclStmt("x", LiteralExpr("1"), None, TokenKind.CONST),
    )


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        'import x from "m";',
        'import * as ns from "m";',
        'import * from "m";',
        'import { a, b as c } from "m";',
        'import x, { y } from "m";',
        'import type { T } from "m";',
        'import { type T, "s" as s } from "m";',
        'import data from "./d.json" with { type: "json" };',
        "export { a, b as c };",
        'export * from "m";',
        'export * as ns from "m";',
        'export { x } from "m";',
        "export function f() {}",
        "export async function g() {}",
        "export class A {}",
        "export default class {}",
        "export default function () {}",
        "export type { T };",
    ],
)
def test_module_statements(source: str) -> None:
    result = parse(source)
    assert result.ok, result.error


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "class A extends B implements C, D { static x = 1; #y; get z() { return 1 } "
        "set z(v) {} static { init(); } [k]() {} async *gen() {} }",
        "class Box<T> { value?: T; constructor(v: T) { this.value = v; } }",
        "class P { private readonly n: number = 1; static() {} get = 2; }",
        "function f(a, b = {}) { return a; }",
        "async function* g() {}",
        "function h<T>(x: T): T[] { return [x]; }",
        "function overload(x: string): void;",
        "for (let i = 0; i < 10; i++) { print(i); }",
        "for (const k in obj) {}",
        "for (x of xs) ;",
        "for await (const c of stream) {}",
        "for (;;) {}",
        "do x++; while (x < 5)",
        "while (true) continue;",
        "switch (x) { case 1: print(1); break; default: print(0); }",
        "try { a(); } catch (e) { b(); } finally { c(); }",
        "try {} catch {}",
        "try {} catch ({ message }) {}",
        "try {} finally {}",
        "outer: for (;;) { break outer; }",
        'throw new Error("x");',
        "debugger;",
        "with (obj) { a; }",
        "function* gen() { yield; yield 1; yield* other(); }",
        "{ ; }",
    ],
)
def test_statements_parse(source: str) -> None:
    result = parse(source)
    assert result.ok, result.error


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "x = a ? b : c;",
        "f(...args, 1);",
        "obj?.a?.[0]?.(1);",
        "new Foo;",
        "new Foo.Bar(1).baz();",
        "new.target;",
        "const add = (a, b) => a + b;",
        "const id = <T>(x: T): T => x;",
        "const f = async x => await x;",
        "const g = async (a) => { return a; };",
        "items.map(x => console.log(x));",
        "const o = { a, b: 2, [c]: 3, ...d, m() {}, get g() { return 1; }, async *h() {} };",
        "const arr = [1, , ...rest];",
        "let s = `a${b}c${`nested${d}`}`;",
        "const r = /ab+c/i.test(s);",
        "x ??= y || z && !w;",
        'let v = typeof x === "string" ? 1 : 2;',
        "const n = value as unknown as string;",
        "const c = { k: 1 } satisfies Record<string, number>;",
        "const t = [1, 2] as const;",
        "tag`hello ${world}`;",
        "a = b, c = d;",
        "const big = 10n ** 2n;",
        "delete obj[key];",
        "void 0;",
        "const fn = function* named() { yield 1; };",
        "const K = class extends Base {};",
        'import("./mod").then(m => m);',
        "const meta = import.meta.url;",
        "el!.focus();",
        "i++\n--j",
        "x = y\n(z)",
        "const cb = () => { const s = `${a}}`; };",
    ],
)
def test_expressions_parse(source: str) -> None:
    result = parse(source)
    assert result.ok, result.error


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "print 1;",
        "print(1",
        "if (x",
        "x y;",
        "a +;",
        "{",
        "class A {",
        "function f( {",
        "`unterminated",
        "'unterminated",
        "let x: = 1;",
        "for (;;",
        "switch (x) { foo }",
        "@",
        "import { a from 'm';",
        "try {}",
        "throw\nx;",
        "f(1, 2",
        "const = 1;",
        ")",
    ],
)
def test_invalid_programs_fail(source: str) -> None:
    result = parse(source)
    assert not result.ok
    assert result.tree is None
    assert " at line " in result.error


def test_error_messages_carry_positions() -> None:
    assert parse("x y").error == "expected ';' after expression, got 'y' at line 1, col 3"
    assert parse("let a = 1;\n  )").error == "unexpected token ')' at line 2, col 3"
    assert parse("throw\nx;").error == "line break is not allowed after 'throw' at line 2, col 1"
    assert parse("try {}").error.startswith("expected 'catch' or 'finally' after try block")


def test_unwrap_raises_the_syntax_error() -> None:
    result = parse_source("x y")
    with pytest.raises(OongSyntaxError) as excinfo:
        result.unwrap()
    assert excinfo.value.message == "expected ';' after expression, got 'y'"
    assert (excinfo.value.line, excinfo.value.col, excinfo.value.offset) == (1, 3, 2)
    assert isinstance(excinfo.value, SyntaxError)


def test_unwrap_returns_the_tree() -> None:
    tree = parse_source("print(1)").unwrap()
    assert tree == Program((PrintStmt((LiteralExpr("1"),)),))


@pytest.mark.parametrize(  # type: ignore[misc]
    "source",
    [
        "print(" + "(" * 3000 + "1" + ")" * 3000 + ");",
        "let a = " + "[" * 3000 + "]" * 3000 + ";",
        "{" * 3000 + "}" * 3000,
        "if (a) " * 3000 + "print(1);",
    ],
)
def test_deep_nesting_fails_without_raising(source: str) -> None:
    result = parse(source)
    assert not result.ok
    assert result.tree is None
    assert result.error.startswith("nesting too deep at line 1, col ")
    with pytest.raises(OongSyntaxError):
        result.unwrap()


def test_moderate_nesting_still_parses() -> None:
    assert parse("print(" + "(" * 40 + "1" + ")" * 40 + ");").ok
    assert parse("{" * 40 + "}" * 40).ok


def test_backtracking_is_logged(parser_debug_log: pytest.LogCaptureFixture) -> None:
    assert parse("let x = (1);").ok
    assert "backtracking to offset" in parser_debug_log.text


def test_checkpoint_restore_rewinds_lookahead() -> None:
    parser = Parser("a b c")
    start = parser.checkpoint()
    parser.advance()
    parser.advance()
    assert parser.cur.text == "c"
    parser.restore(start)
    assert parser.cur.text == "a"
    assert parser.prev_end == 0


_FRAGMENTS = [
    "class", "{", "(", "}", ")", "[", "]", "print", "console.log", "let", "x",
    "=", "1", ";", "=>", "`", "${", "if", "else", "for", "<", ">", ">>", ":",
    ",", "\n", "function", "import", "export", "default", '"s"', "/", "?", "...",
    "async", "new", "return", "of", "in", "|", "&", "#", "@",
]


@settings(max_examples=200, deadline=None)  # type: ignore[misc]
@given(st.lists(st.sampled_from(_FRAGMENTS), max_size=30).map(" ".join))  # type: ignore[misc]
def test_parser_terminates_on_token_soup(source: str) -> None:
    parser = Parser(source)
    result = parser.parse()
    assert isinstance(result, ParseResult)
    assert result.ok or result.tree is None
    assert parser.advances <= 64 * (len(source) + 1)


@settings(max_examples=200, deadline=None)  # type: ignore[misc]
@given(st.text(alphabet="(){}[];,.=<>+-*/`$'\"\\ \nabc1:?!#@", max_size=50))  # type: ignore[misc]
def test_parser_terminates_on_character_soup(source: str) -> None:
    parser = Parser(source)
    result = parser.parse()
    assert isinstance(result, ParseResult)
    assert parser.advances <= 64 * (len(source) + 1)
