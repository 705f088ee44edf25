"""Variable access locator.

Collects every variable reference and static variable declaration of a
callable body, each paired with the chain of operations enclosing it.
Nested closures and classes are excluded via scope isolation.
"""

from __future__ import annotations

from collections.abc import Sequence

from inlinecheck.domain.model.nodes import Expression, Node, StaticVar, Variable
from inlinecheck.domain.model.variable_access import VariableAccess
from inlinecheck.infrastructure.analyzers.base import walk_scope


class VariableAccessLocator:
    """Visitor recording a VariableAccess for each variable it enters.

    Keeps the stack of entered ancestors; the access chain is that stack
    minus expression-statement wrappers, so a bare `$a;` has no operations.
    State is reset in before_traverse - one locator serves many traversals.
    """

    def __init__(self) -> None:
        self._ancestors: list[Node] = []
        self._accesses: list[VariableAccess] = []

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        self._ancestors = []
        self._accesses = []

    def enter_node(self, node: Node) -> None:
        match node:
            case Variable():
                self._accesses.append(VariableAccess.from_variable(node, *self._operations()))
            case StaticVar():
                self._accesses.append(
                    VariableAccess.from_static_variable(node, *self._operations())
                )

        self._ancestors.append(node)

    def leave_node(self, node: Node) -> None:
        self._ancestors.pop()

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        pass

    @property
    def accesses(self) -> tuple[VariableAccess, ...]:
        """Accesses found by the last traversal, in source order."""
        return tuple(self._accesses)

    def _operations(self) -> tuple[Node, ...]:
        return tuple(node for node in self._ancestors if not isinstance(node, Expression))


def locate_variable_accesses(stmts: Sequence[Node]) -> tuple[VariableAccess, ...]:
    """Find all variable accesses in a callable body, scope-isolated.

    Args:
        stmts: Body statements of the callable

    Returns:
        Accesses in depth-first source order
    """
    locator = VariableAccessLocator()
    walk_scope(stmts, locator)
    return locator.accesses
