"""
Defines the abstract syntax tree (AST) produced by the oong parser.

Three closed hierarchies, each a union of frozen dataclasses:

    Expr:  LiteralExpr | IdentifierExpr | CallExpr
    Stmt:  VarDeclStmt | PrintStmt | Program
    Type:  NamedType | GenericType | ArrayType | UnionType | IntersectionType | RawType

Nodes carry no behavior beyond construction and serialisation. Sequences are
tuples, so a tree is immutable once the parser hands it over and no node is ever
shared between two parents.

Consumers inspect nodes with exhaustive `match` statements over the unions
(see `expr_to_string`, `stmt_to_string` and `type_to_string`).

Usage:
    Program is the root handed to the code generation backend. PrintStmt is the
    only statement with an executable payload; VarDeclStmt feeds the backend's
    variable environment.

Example:
    Program((PrintStmt((LiteralExpr("42"),), TokenKind.PRINT),))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypedDict, Union, assert_never

from oong.oong_constants import TokenKind


class ASTDict(TypedDict, total=False):
    """
    Plain-dict form of any AST or type node, suitable for JSON output.

    Fields:
        node (str): The node class name (e.g. "PrintStmt", "UnionType").
        value (str): LiteralExpr text.
        name (str): IdentifierExpr / VarDeclStmt / NamedType name.
        callee (str): CallExpr callee.
        args (list[ASTDict]): CallExpr / PrintStmt arguments, GenericType arguments.
        origin (str): PrintStmt origin token kind name.
        kind (str): VarDeclStmt introducer token kind name.
        initializer (ASTDict | None): VarDeclStmt initializer.
        declared_type (ASTDict | None): VarDeclStmt type annotation.
        statements (list[ASTDict]): Program statements.
        base (ASTDict): GenericType base.
        element (ASTDict): ArrayType element.
        options (list[ASTDict]): UnionType options.
        parts (list[ASTDict]): IntersectionType parts.
        raw (str): RawType captured text.
    """

    node: str
    value: str
    name: str
    callee: str
    args: list["ASTDict"]
    origin: str
    kind: str
    initializer: "ASTDict | None"
    declared_type: "ASTDict | None"
    statements: list["ASTDict"]
    base: "ASTDict"
    element: "ASTDict"
    options: list["ASTDict"]
    parts: list["ASTDict"]
    raw: str


# Expressions


@dataclass(frozen=True)
class LiteralExpr:
    """Literal text: decoded strings, numbers, booleans, null, or raw initializer source."""

    value: str

    def to_dict(self) -> ASTDict:
        return {"node": "LiteralExpr", "value": self.value}


@dataclass(frozen=True)
class IdentifierExpr:
    name: str

    def to_dict(self) -> ASTDict:
        return {"node": "IdentifierExpr", "name": self.name}


@dataclass(frozen=True)
class CallExpr:
    """A call of a (possibly dotted) name with ordered arguments."""

    callee: str
    args: tuple[Expr, ...] = ()

    def to_dict(self) -> ASTDict:
        return {
            "node": "CallExpr",
            "callee": self.callee,
            "args": [a.to_dict() for a in self.args],
        }


Expr = Union[LiteralExpr, IdentifierExpr, CallExpr]


# Types


@dataclass(frozen=True)
class NamedType:
    name: str

    def to_dict(self) -> ASTDict:
        return {"node": "NamedType", "name": self.name}


@dataclass(frozen=True)
class GenericType:
    base: Type
    args: tuple[Type, ...] = ()

    def to_dict(self) -> ASTDict:
        return {
            "node": "GenericType",
            "base": self.base.to_dict(),
            "args": [a.to_dict() for a in self.args],
        }


@dataclass(frozen=True)
class ArrayType:
    element: Type

    def to_dict(self) -> ASTDict:
        return {"node": "ArrayType", "element": self.element.to_dict()}


@dataclass(frozen=True)
class UnionType:
    options: tuple[Type, ...] = ()

    def to_dict(self) -> ASTDict:
        return {"node": "UnionType", "options": [o.to_dict() for o in self.options]}


@dataclass(frozen=True)
class IntersectionType:
    parts: tuple[Type, ...] = ()

    def to_dict(self) -> ASTDict:
        return {"node": "IntersectionType", "parts": [p.to_dict() for p in self.parts]}


@dataclass(frozen=True)
class RawType:
    """Verbatim source of a type shape that is not modeled precisely (objects, tuples, functions)."""

    raw: str

    def to_dict(self) -> ASTDict:
        return {"node": "RawType", "raw": self.raw}


Type = Union[NamedType, GenericType, ArrayType, UnionType, IntersectionType, RawType]


# Statements


@dataclass(frozen=True)
class VarDeclStmt:
    """
    One binding of a `var` / `let` / `const` statement.

    Attributes:
        name (str): The bound identifier.
        value (Expr | None): The initializer, if any.
        declared_type (Type | None): The `: Type` annotation, if any.
        kind (TokenKind): The introducing keyword's token kind.
    """

    name: str
    value: Expr | None = None
    declared_type: Type | None = None
    kind: TokenKind = TokenKind.VAR

    def to_dict(self) -> ASTDict:
        return {
            "node": "VarDeclStmt",
            "name": self.name,
            "kind": self.kind.name,
            "initializer": self.value.to_dict() if self.value is not None else None,
            "declared_type": (
                self.declared_type.to_dict() if self.declared_type is not None else None
            ),
        }


@dataclass(frozen=True)
class PrintStmt:
    """
    A `print(...)` or `console.<method>(...)` statement.

    Attributes:
        args (tuple[Expr, ...]): Arguments in source order.
        origin (TokenKind): The introducing token kind; the backend picks the output style from it.
    """

    args: tuple[Expr, ...] = ()
    origin: TokenKind = TokenKind.PRINT

    def to_dict(self) -> ASTDict:
        return {
            "node": "PrintStmt",
            "origin": self.origin.name,
            "args": [a.to_dict() for a in self.args],
        }


@dataclass(frozen=True)
class Program:
    """The AST root: top-level statements in source order."""

    statements: tuple[Stmt, ...] = field(default_factory=tuple)

    def to_dict(self) -> ASTDict:
        return {
            "node": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }


Stmt = Union[VarDeclStmt, PrintStmt, Program]


def expr_to_string(expr: Expr) -> str:
    match expr:
        case LiteralExpr(value=value):
            return value
        case IdentifierExpr(name=name):
            return name
        case CallExpr(callee=callee, args=args):
            return f"{callee}({', '.join(expr_to_string(a) for a in args)})"
        case _:
            assert_never(expr)


def type_to_string(type_: Type | None) -> str:
    """Renders a type annotation back to compact TypeScript-like text."""
    match type_:
        case None:
            return "<null-type>"
        case NamedType(name=name):
            return name
        case GenericType(base=base, args=args):
            return f"{type_to_string(base)}<{','.join(type_to_string(a) for a in args)}>"
        case ArrayType(element=element):
            inner = type_to_string(element)
            if isinstance(element, (UnionType, IntersectionType)):
                inner = f"({inner})"
            return f"{inner}[]"
        case UnionType(options=options):
            return "|".join(type_to_string(o) for o in options)
        case IntersectionType(parts=parts):
            return "&".join(type_to_string(p) for p in parts)
        case RawType(raw=raw):
            return f"raw({raw})"
        case _:
            assert_never(type_)


def stmt_to_string(stmt: Stmt | None) -> str:
    """Debug rendering of a statement, e.g. `Print(1, x)` or `VarDecl(x: number = 5)`."""
    match stmt:
        case None:
            return "<null>"
        case PrintStmt(args=args, origin=origin):
            label = "Print" if origin is TokenKind.PRINT else f"Print[{origin.name}]"
            return f"{label}({', '.join(expr_to_string(a) for a in args)})"
        case VarDeclStmt(name=name, value=value, declared_type=declared_type):
            text = name
            if declared_type is not None:
                text += f": {type_to_string(declared_type)}"
            if value is not None:
                text += f" = {expr_to_string(value)}"
            return f"VarDecl({text})"
        case Program(statements=statements):
            return "\n".join(stmt_to_string(s) for s in statements)
        case _:
            assert_never(stmt)


def to_json_ready(node: Stmt | Expr | Type | None) -> Any:
    """Serialises an optional node (e.g. a parse result's tree) to JSON-ready data."""
    return None if node is None else node.to_dict()


__all__ = [
    "ASTDict",
    "ArrayType",
    "CallExpr",
    "Expr",
    "GenericType",
    "IdentifierExpr",
    "IntersectionType",
    "LiteralExpr",
    "NamedType",
    "PrintStmt",
    "Program",
    "RawType",
    "Stmt",
    "Type",
    "UnionType",
    "VarDeclStmt",
    "expr_to_string",
    "stmt_to_string",
    "to_json_ready",
    "type_to_string",
]
