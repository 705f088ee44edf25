"""Scoped tree walking for callable bodies."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from inlinecheck.domain.model.nodes import ClassDef, Closure, FunctionDef, Node, iter_child_nodes

if TYPE_CHECKING:
    from inlinecheck.domain.ports.visitor import NodeVisitor


def traverse(nodes: Sequence[Node], visitor: NodeVisitor) -> None:
    """Walk nodes depth-first, calling visitor hooks around every node.

    Args:
        nodes: Root nodes, visited in order
        visitor: Receives before/enter/leave/after calls
    """
    visitor.before_traverse(nodes)
    for node in nodes:
        _visit(node, visitor)
    visitor.after_traverse(nodes)


def _visit(node: Node, visitor: NodeVisitor) -> None:
    visitor.enter_node(node)
    for child in iter_child_nodes(node):
        _visit(child, visitor)
    visitor.leave_node(node)


def is_scope_boundary(node: Node) -> bool:
    """Check if node opens its own variable scope.

    Closures, nested function declarations and (anonymous) classes
    have their own variables; their internals never belong to the
    enclosing callable.
    """
    match node:
        case Closure() | FunctionDef() | ClassDef():
            return True
    return False


class ScopeIsolatingVisitor:
    """Visitor wrapper that hides nested scopes from the wrapped visitor.

    The boundary node itself is delivered (enter and leave), its
    descendants are not, until that exact node is left again.
    Composition, not inheritance: wraps any NodeVisitor.
    """

    def __init__(self, wrapped: NodeVisitor) -> None:
        self._wrapped = wrapped
        self._current_sub_scope: Node | None = None

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        self._current_sub_scope = None
        self._wrapped.before_traverse(nodes)

    def enter_node(self, node: Node) -> None:
        if self._current_sub_scope is not None:
            # inside a nested closure/class: not our scope
            return

        if is_scope_boundary(node):
            self._current_sub_scope = node

        self._wrapped.enter_node(node)

    def leave_node(self, node: Node) -> None:
        if node is self._current_sub_scope:
            self._current_sub_scope = None
        elif self._current_sub_scope is not None:
            return

        self._wrapped.leave_node(node)

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        self._wrapped.after_traverse(nodes)


def walk_scope(nodes: Sequence[Node], visitor: NodeVisitor) -> None:
    """Traverse a callable body without descending into nested scopes.

    Args:
        nodes: Body statements of the callable
        visitor: Visitor to feed with same-scope nodes only
    """
    traverse(nodes, ScopeIsolatingVisitor(visitor))
