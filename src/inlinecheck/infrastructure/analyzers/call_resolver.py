"""Call-target resolver: call expression → FunctionReference, best effort.

Resolves only what is statically certain:
- strlen($x)            → strlen
- $fn($x), $fn = 'f'    → f (literal value known for $fn)
- Foo::bar()            → Foo::bar
- $foo->bar(), $foo: Foo → Foo::bar
Everything else (computed names, unknown receivers) → None.
Callers must treat None conservatively.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from inlinecheck.domain.model.configuration import DEFAULT_CONFIG, AnalysisConfig
from inlinecheck.domain.model.function_reference import FunctionReference
from inlinecheck.domain.model.nodes import (
    ArrayDimFetch,
    Assign,
    AssignOp,
    CallExpr,
    Closure,
    Expression,
    FuncCall,
    Global,
    Literal,
    MethodCall,
    Name,
    New,
    Node,
    OtherExpr,
    OtherStmt,
    Static,
    StaticCall,
    Variable,
)
from inlinecheck.infrastructure.analyzers.base import walk_scope

# Class names bound late or relative to the enclosing class
_RELATIVE_CLASS_NAMES = frozenset({"self", "parent", "static"})

# Declared types that name no particular class
_NON_CLASS_TYPES = frozenset(
    {"mixed", "object", "callable", "iterable", "void", "null", *_RELATIVE_CLASS_NAMES}
)


def resolve_call(
    call: CallExpr,
    types: Mapping[str, str | None],
    values: Mapping[str, str] | None = None,
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> FunctionReference | None:
    """Resolve a call expression to a statically known target.

    Args:
        call: Function, method or static call expression
        types: Declared types of variables in scope
        values: Statically known literal string values of variables
        config: Used to tell scalar/collection types from class types

    Returns:
        FunctionReference, or None if the target is not statically known
    """
    match call:
        case FuncCall():
            return _resolve_function_call(call, values or {})
        case StaticCall():
            return _resolve_static_call(call)
        case MethodCall():
            return _resolve_instance_call(call, types, config)
    return None


def _resolve_function_call(call: FuncCall, values: Mapping[str, str]) -> FunctionReference | None:
    match call.name:
        case Name(value=name):
            return FunctionReference.from_function_name(name)
        case Variable(name=str() as variable) if values.get(variable):
            return FunctionReference.from_function_name(values[variable])
    return None


def _resolve_static_call(call: StaticCall) -> FunctionReference | None:
    # no expression evaluation: literal class and literal member only
    match call:
        case StaticCall(class_=Name(value=class_name), name=str() as method_name):
            if class_name.lower() in _RELATIVE_CLASS_NAMES:
                return None
            return FunctionReference.from_class_and_method_name(class_name, method_name)
    return None


def _resolve_instance_call(
    call: MethodCall,
    types: Mapping[str, str | None],
    config: AnalysisConfig,
) -> FunctionReference | None:
    match call:
        case MethodCall(var=Variable(name=str() as receiver), name=str() as method_name):
            class_name = _concrete_class_name(types.get(receiver), config)
            if class_name is None:
                return None
            return FunctionReference.from_class_and_method_name(class_name, method_name)
    return None


def _concrete_class_name(declared_type: str | None, config: AnalysisConfig) -> str | None:
    """Single class name of a declared type, None for unknown, scalar or union types."""
    if declared_type is None or config.is_scalar_like(declared_type):
        return None

    class_name = declared_type.strip().removeprefix("?")
    if "|" in class_name or class_name.lower() in _NON_CLASS_TYPES:
        return None
    return class_name


# =============================================================================
# LITERAL BINDINGS
# =============================================================================


class _LiteralBindingCollector:
    """Visitor collecting `$name = 'literal'` bindings and anything spoiling them.

    Source order matters: a read of the name before its assignment spoils it.
    Only assignments that are whole top-level statements count.
    """

    def __init__(self, bound: Iterable[str] = ()) -> None:
        self._bound = frozenset(bound)
        self._assigned: dict[str, list[str]] = {}
        self._spoiled: set[str] = set()
        self._has_dynamic_variable = False
        self._top_level: set[int] = set()
        self._write_target: Variable | None = None

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        self._assigned = {}
        self._spoiled = set(self._bound)
        self._has_dynamic_variable = False
        self._top_level = {id(node.expr) for node in nodes if isinstance(node, Expression)}
        self._write_target = None

    def enter_node(self, node: Node) -> None:
        match node:
            case Assign(
                var=Variable(name=str() as name) as written, expr=Literal(value=str() as value)
            ):
                if id(node) not in self._top_level:
                    self._spoiled.add(name)
                self._assigned.setdefault(name, []).append(value)
                self._write_target = written

            case Assign(var=target) | AssignOp(var=target):
                self._spoil_target(target)

            case (
                FuncCall(args=args) | MethodCall(args=args) | StaticCall(args=args) | New(args=args)
            ):
                # arguments may be taken by reference
                for arg in args:
                    self._spoil_target(arg)

            case OtherExpr(children=children) | OtherStmt(children=children):
                # $a++, unset($a), foreach (... as $a) write without an Assign
                for child in children:
                    self._spoil_target(child)

            case Closure(uses=uses):
                self._spoiled.update(use.name for use in uses if use.by_ref)

            case Global(vars=variables):
                for variable in variables:
                    self._spoil_target(variable)

            case Static(vars=static_vars):
                self._spoiled.update(static_var.name for static_var in static_vars)

            case Variable(name=str() as name):
                if node is self._write_target:
                    self._write_target = None
                elif name not in self._assigned:
                    # read before assignment
                    self._spoiled.add(name)

            case Variable():
                self._has_dynamic_variable = True

    def leave_node(self, node: Node) -> None:
        pass

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        pass

    @property
    def bindings(self) -> dict[str, str]:
        if self._has_dynamic_variable:
            return {}
        return {
            name: values[0]
            for name, values in self._assigned.items()
            if len(values) == 1 and name not in self._spoiled
        }

    def _spoil_target(self, target: Node) -> None:
        match target:
            case Variable(name=str() as name):
                self._spoiled.add(name)
            case ArrayDimFetch(var=inner):
                self._spoil_target(inner)


def literal_string_bindings(stmts: Sequence[Node], bound: Iterable[str] = ()) -> dict[str, str]:
    """Infer statically known string values of variables in a callable body.

    A variable qualifies when it is assigned exactly once, directly from a
    string literal, by a top-level expression statement that precedes every
    read of it, and is never otherwise written: no other assignment, no
    offset write, no by-reference capture, no passing as a call argument,
    no global/static declaration, no use by an unmodeled construct.
    Names in bound (parameters, captures) hold a caller-supplied value on
    entry and never qualify. Any $$name in the body disables inference.

    Used for resolving `$fn()` call targets; the purity verdict itself
    never depends on it, since a variable used as a callee is already a
    side-effecting access.

    Args:
        stmts: Body statements of the callable
        bound: Names bound before the body runs

    Returns:
        Mapping of variable name to its literal value
    """
    collector = _LiteralBindingCollector(bound)
    walk_scope(stmts, collector)
    return collector.bindings
