"""PHP syntax tree nodes consumed by the purity analysis.

Immutable node kinds. The parser front end builds these; analysis code
only reads them and dispatches with structural pattern matching.
Constructs the analysis has no rule for arrive as OtherExpr / OtherStmt,
which keep their sub-nodes so nothing below them is lost.

Layout follows the PHP grammar loosely:
- Expressions (Expr): variables, literals, operators, fetches, calls, closures
- Statements (Stmt): expression statement, return, global/static declarations,
  if, function/class/method definitions
- Auxiliary nodes: Name, Param, ClosureUse, StaticVar
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields
from enum import Enum

from inlinecheck.domain.exceptions import InvalidNodeError


class BinaryOperator(Enum):
    """Binary operators. Compound assignment reuses the arithmetic subset."""

    CONCAT = "."
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "**"
    BITWISE_AND = "&"
    BITWISE_OR = "|"
    BITWISE_XOR = "^"
    SHIFT_LEFT = "<<"
    SHIFT_RIGHT = ">>"
    COALESCE = "??"
    EQUAL = "=="
    NOT_EQUAL = "!="
    IDENTICAL = "==="
    NOT_IDENTICAL = "!=="
    SMALLER = "<"
    SMALLER_OR_EQUAL = "<="
    GREATER = ">"
    GREATER_OR_EQUAL = ">="
    SPACESHIP = "<=>"
    BOOLEAN_AND = "&&"
    BOOLEAN_OR = "||"
    LOGICAL_AND = "and"
    LOGICAL_OR = "or"
    LOGICAL_XOR = "xor"


# Operators with a compound assignment form ($a .= $b, $a += $b, ...)
COMPOUND_OPERATORS = frozenset(
    {
        BinaryOperator.CONCAT,
        BinaryOperator.PLUS,
        BinaryOperator.MINUS,
        BinaryOperator.MUL,
        BinaryOperator.DIV,
        BinaryOperator.MOD,
        BinaryOperator.POW,
        BinaryOperator.BITWISE_AND,
        BinaryOperator.BITWISE_OR,
        BinaryOperator.BITWISE_XOR,
        BinaryOperator.SHIFT_LEFT,
        BinaryOperator.SHIFT_RIGHT,
        BinaryOperator.COALESCE,
    }
)


class CastKind(Enum):
    """Target of a type-coercion expression: (string) $x, (int) $x, ..."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    ARRAY = "array"
    OBJECT = "object"
    UNSET = "unset"


class UnaryOperator(Enum):
    """Prefix operators without a side effect of their own: -$a, +$a, !$a, ~$a."""

    MINUS = "-"
    PLUS = "+"
    BOOLEAN_NOT = "!"
    BITWISE_NOT = "~"


@dataclass(frozen=True, slots=True)
class Node:
    """Base of all node kinds."""


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base of expression nodes."""


@dataclass(frozen=True, slots=True)
class Stmt(Node):
    """Base of statement nodes."""


def _require(node: Node, field: str, value: object, kinds: tuple[type, ...], expected: str) -> None:
    """Validate a node field. FAIL-FIRST."""
    if not isinstance(value, kinds):
        raise InvalidNodeError(
            node_kind=type(node).__name__,
            field=field,
            expected=expected,
            got=type(value),
        )


def _require_all(
    node: Node,
    field: str,
    values: tuple[object, ...],
    kinds: tuple[type, ...],
    expected: str,
) -> None:
    """Validate every element of a tuple field. FAIL-FIRST."""
    _require(node, field, values, (tuple,), "tuple")
    for value in values:
        _require(node, field, value, kinds, expected)


# =============================================================================
# AUXILIARY NODES
# =============================================================================


@dataclass(frozen=True, slots=True)
class Name(Node):
    """Literal (possibly qualified) name: strlen, Foo\\Bar, self.

    Attributes:
        value: Name as written in source (after name resolution)
    """

    value: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.value:
            raise ValueError("name must not be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Param(Node):
    """Callable parameter.

    Attributes:
        name: Parameter name without the leading $
        declared_type: Type declaration as written, None if untyped
        by_ref: Declared as &$name
        variadic: Declared as ...$name
        default: Default value expression, None if required
    """

    name: str
    declared_type: str | None = None
    by_ref: bool = False
    variadic: bool = False
    default: Expr | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("parameter name must not be empty")
        if self.declared_type is not None and not self.declared_type:
            raise ValueError("declared_type must be non-empty string or None")
        if self.variadic and self.default is not None:
            raise ValueError("variadic parameter cannot have a default value")


@dataclass(frozen=True, slots=True)
class ClosureUse(Node):
    """Closure capture: use ($name) or use (&$name).

    Attributes:
        name: Captured variable name without the leading $
        by_ref: Captured by reference
    """

    name: str
    by_ref: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("capture name must not be empty")


@dataclass(frozen=True, slots=True)
class StaticVar(Node):
    """Single entry of a static declaration: static $name = default.

    Attributes:
        name: Variable name without the leading $
        default: Initial value expression
    """

    name: str
    default: Expr | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("static variable name must not be empty")


# =============================================================================
# EXPRESSIONS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Variable(Expr):
    """Variable reference: $name, or $$expr when the name is computed.

    Attributes:
        name: Literal name without the leading $, or expression yielding it
    """

    name: str | Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "name", self.name, (str, Expr), "str or Expr")
        if self.name == "":
            raise ValueError("variable name must not be empty")

    @property
    def is_dynamic(self) -> bool:
        """Name is computed at runtime ($$name)."""
        return not isinstance(self.name, str)


@dataclass(frozen=True, slots=True)
class Literal(Expr):
    """Scalar literal: 'baz', 1, 1.5, true, null."""

    value: str | int | float | bool | None


@dataclass(frozen=True, slots=True)
class ArrayLiteral(Expr):
    """Array construction: [$a, 'b', ...]."""

    items: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_all(self, "items", self.items, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class Assign(Expr):
    """Plain assignment: var = expr."""

    var: Expr
    expr: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "var", self.var, (Expr,), "Expr")
        _require(self, "expr", self.expr, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class AssignOp(Expr):
    """Compound assignment: var op= expr."""

    op: BinaryOperator
    var: Expr
    expr: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "op", self.op, (BinaryOperator,), "BinaryOperator")
        if self.op not in COMPOUND_OPERATORS:
            raise ValueError(f"operator '{self.op.value}' has no compound assignment form")
        _require(self, "var", self.var, (Expr,), "Expr")
        _require(self, "expr", self.expr, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class BinaryOp(Expr):
    """Binary operation: left op right."""

    op: BinaryOperator
    left: Expr
    right: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "op", self.op, (BinaryOperator,), "BinaryOperator")
        _require(self, "left", self.left, (Expr,), "Expr")
        _require(self, "right", self.right, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class UnaryOp(Expr):
    """Prefix operation: op expr."""

    op: UnaryOperator
    expr: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "op", self.op, (UnaryOperator,), "UnaryOperator")
        _require(self, "expr", self.expr, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class Cast(Expr):
    """Type coercion: (kind) expr."""

    kind: CastKind
    expr: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "kind", self.kind, (CastKind,), "CastKind")
        _require(self, "expr", self.expr, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class ArrayDimFetch(Expr):
    """Indexed element access: var[dim], or var[] when dim is None."""

    var: Expr
    dim: Expr | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "var", self.var, (Expr,), "Expr")
        if self.dim is not None:
            _require(self, "dim", self.dim, (Expr,), "Expr or None")


@dataclass(frozen=True, slots=True)
class PropertyFetch(Expr):
    """Property access: var->name."""

    var: Expr
    name: str | Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "var", self.var, (Expr,), "Expr")
        _require(self, "name", self.name, (str, Expr), "str or Expr")


@dataclass(frozen=True, slots=True)
class FuncCall(Expr):
    """Function call: name(args), where name may be any callable expression."""

    name: Name | Expr
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "name", self.name, (Name, Expr), "Name or Expr")
        _require_all(self, "args", self.args, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class MethodCall(Expr):
    """Instance method call: var->name(args)."""

    var: Expr
    name: str | Expr
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "var", self.var, (Expr,), "Expr")
        _require(self, "name", self.name, (str, Expr), "str or Expr")
        _require_all(self, "args", self.args, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class StaticCall(Expr):
    """Static method call: class_::name(args)."""

    class_: Name | Expr
    name: str | Expr
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "class_", self.class_, (Name, Expr), "Name or Expr")
        _require(self, "name", self.name, (str, Expr), "str or Expr")
        _require_all(self, "args", self.args, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class Closure(Expr):
    """Anonymous function: function (params) use (uses) { stmts }.

    Attributes:
        params: Declared parameters, in order
        uses: Captured variables, in order
        stmts: Body statements
        by_ref: Returns by reference (function &() ...)
        is_static: Declared static (no bound $this)
        return_type: Return type declaration, None if untyped
    """

    params: tuple[Param, ...] = ()
    uses: tuple[ClosureUse, ...] = ()
    stmts: tuple[Stmt, ...] = ()
    by_ref: bool = False
    is_static: bool = False
    return_type: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_all(self, "params", self.params, (Param,), "Param")
        _require_all(self, "uses", self.uses, (ClosureUse,), "ClosureUse")
        _require_all(self, "stmts", self.stmts, (Stmt,), "Stmt")


@dataclass(frozen=True, slots=True)
class New(Expr):
    """Object instantiation: new class_(args), class_ may be an anonymous ClassDef."""

    class_: Name | Expr | ClassDef
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "class_", self.class_, (Name, Expr, ClassDef), "Name, Expr or ClassDef")
        _require_all(self, "args", self.args, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class OtherExpr(Expr):
    """Any expression kind without a dedicated node: ternary, isset, $a++, ...

    The analysis knows nothing about its semantics, so a variable directly
    below it is treated as side-effecting.

    Attributes:
        kind: Front-end name of the construct (e.g. "Ternary", "PreInc")
        children: Sub-nodes in source order
    """

    kind: str
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.kind:
            raise ValueError("expression kind must not be empty")
        _require_all(self, "children", self.children, (Node,), "Node")


# =============================================================================
# STATEMENTS
# =============================================================================


@dataclass(frozen=True, slots=True)
class Expression(Stmt):
    """Expression used as a statement: expr;"""

    expr: Expr

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "expr", self.expr, (Expr,), "Expr")


@dataclass(frozen=True, slots=True)
class Return(Stmt):
    """Return statement: return expr;"""

    expr: Expr | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.expr is not None:
            _require(self, "expr", self.expr, (Expr,), "Expr or None")


@dataclass(frozen=True, slots=True)
class Global(Stmt):
    """Global declaration: global $a, $b;"""

    vars: tuple[Variable, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_all(self, "vars", self.vars, (Variable,), "Variable")


@dataclass(frozen=True, slots=True)
class Static(Stmt):
    """Static variable declaration: static $a = 1, $b;"""

    vars: tuple[StaticVar, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require_all(self, "vars", self.vars, (StaticVar,), "StaticVar")


@dataclass(frozen=True, slots=True)
class If(Stmt):
    """Conditional: if (cond) { stmts } else { else_stmts }.

    elseif chains nest as a single If inside else_stmts.
    """

    cond: Expr
    stmts: tuple[Stmt, ...] = ()
    else_stmts: tuple[Stmt, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        _require(self, "cond", self.cond, (Expr,), "Expr")
        _require_all(self, "stmts", self.stmts, (Stmt,), "Stmt")
        _require_all(self, "else_stmts", self.else_stmts, (Stmt,), "Stmt")


@dataclass(frozen=True, slots=True)
class OtherStmt(Stmt):
    """Any statement kind without a dedicated node: loops, echo, unset, try, ...

    Attributes:
        kind: Front-end name of the construct (e.g. "Foreach", "Echo")
        children: Sub-nodes in source order, expressions and statements mixed
    """

    kind: str
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.kind:
            raise ValueError("statement kind must not be empty")
        _require_all(self, "children", self.children, (Node,), "Node")


@dataclass(frozen=True, slots=True)
class FunctionDef(Stmt):
    """Named function declaration.

    Attributes:
        name: Function name
        params: Declared parameters, in order
        stmts: Body statements
        by_ref: Returns by reference (function &name() ...)
        return_type: Return type declaration, None if untyped
    """

    name: str
    params: tuple[Param, ...] = ()
    stmts: tuple[Stmt, ...] = ()
    by_ref: bool = False
    return_type: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("function name must not be empty")
        _require_all(self, "params", self.params, (Param,), "Param")
        _require_all(self, "stmts", self.stmts, (Stmt,), "Stmt")


@dataclass(frozen=True, slots=True)
class ClassMethod(Stmt):
    """Method declaration inside a class body.

    Attributes:
        name: Method name
        params: Declared parameters, in order
        stmts: Body statements
        by_ref: Returns by reference
        is_static: Declared static
        return_type: Return type declaration, None if untyped
    """

    name: str
    params: tuple[Param, ...] = ()
    stmts: tuple[Stmt, ...] = ()
    by_ref: bool = False
    is_static: bool = False
    return_type: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("method name must not be empty")
        _require_all(self, "params", self.params, (Param,), "Param")
        _require_all(self, "stmts", self.stmts, (Stmt,), "Stmt")


@dataclass(frozen=True, slots=True)
class ClassDef(Stmt):
    """Class declaration; name is None for an anonymous class (new class {...})."""

    name: str | None = None
    stmts: tuple[Stmt, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.name is not None and not self.name:
            raise ValueError("class name must be non-empty string or None")
        _require_all(self, "stmts", self.stmts, (Stmt,), "Stmt")


# Definitions the purity analysis accepts as its subject
CallableDef = FunctionDef | ClassMethod | Closure

# Call expression kinds the call-target resolver understands
CallExpr = FuncCall | MethodCall | StaticCall


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield direct child nodes in field declaration order.

    Counterpart of ast.iter_child_nodes for this node model: scalar fields
    (names as str, flags, enums) are skipped, tuples are flattened.
    """
    for f in fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, tuple):
            for item in value:
                if isinstance(item, Node):
                    yield item
