"""Visitor protocol for node tree traversal.

Analyzers and users plug into traversal by implementing this Protocol.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from inlinecheck.domain.model.nodes import Node


class NodeVisitor(Protocol):
    """Contract for node tree visitors.

    The traversal calls before_traverse once, then enter_node / leave_node
    around every visited node in depth-first order, then after_traverse.
    Visitors keep per-traversal state and must reset it in before_traverse.

    Example:
        class ReturnCounter:
            def __init__(self) -> None:
                self.count = 0

            def before_traverse(self, nodes: Sequence[Node]) -> None:
                self.count = 0

            def enter_node(self, node: Node) -> None:
                if isinstance(node, Return):
                    self.count += 1

            def leave_node(self, node: Node) -> None:
                pass

            def after_traverse(self, nodes: Sequence[Node]) -> None:
                pass
    """

    def before_traverse(self, nodes: Sequence[Node]) -> None:
        """Called once before the first node is entered.

        Args:
            nodes: Root nodes of the traversal
        """
        ...

    def enter_node(self, node: Node) -> None:
        """Called when traversal enters a node, before its children."""
        ...

    def leave_node(self, node: Node) -> None:
        """Called when traversal leaves a node, after its children."""
        ...

    def after_traverse(self, nodes: Sequence[Node]) -> None:
        """Called once after the last node is left.

        Args:
            nodes: Root nodes of the traversal
        """
        ...
