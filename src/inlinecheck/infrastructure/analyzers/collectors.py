"""Scope-isolated collectors for return statements and call expressions."""

from __future__ import annotations

from collections.abc import Sequence

from inlinecheck.domain.model.nodes import CallExpr, FuncCall, MethodCall, Node, Return, StaticCall
from inlinecheck.infrastructure.analyzers.base import walk_scope


class ReturnStatementLocator:
    """Visitor collecting return statements, in source order.

    Wrap in ScopeIsolatingVisitor (or use locate_return_statements) so
    returns of nested closures and classes are not collected.
    """

    def __init__(self) -> None:
        self._returns: list[Return] = []

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        self._returns = []

    def enter_node(self, node: Node) -> None:
        if isinstance(node, Return):
            self._returns.append(node)

    def leave_node(self, node: Node) -> None:
        pass

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        pass

    @property
    def returns(self) -> tuple[Return, ...]:
        return tuple(self._returns)


class CallLocator:
    """Visitor collecting function, method and static calls, in source order."""

    def __init__(self) -> None:
        self._calls: list[CallExpr] = []

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        self._calls = []

    def enter_node(self, node: Node) -> None:
        match node:
            case FuncCall() | MethodCall() | StaticCall():
                self._calls.append(node)

    def leave_node(self, node: Node) -> None:
        pass

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        pass

    @property
    def calls(self) -> tuple[CallExpr, ...]:
        return tuple(self._calls)


def locate_return_statements(stmts: Sequence[Node]) -> tuple[Return, ...]:
    """Find return statements of a callable body, ignoring nested scopes."""
    locator = ReturnStatementLocator()
    walk_scope(stmts, locator)
    return locator.returns


def locate_calls(stmts: Sequence[Node]) -> tuple[CallExpr, ...]:
    """Find call expressions of a callable body, ignoring nested scopes."""
    locator = CallLocator()
    walk_scope(stmts, locator)
    return locator.calls
