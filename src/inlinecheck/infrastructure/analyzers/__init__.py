"""Analyzers over the node tree of a callable body."""

from inlinecheck.infrastructure.analyzers.base import (
    ScopeIsolatingVisitor,
    is_scope_boundary,
    traverse,
    walk_scope,
)
from inlinecheck.infrastructure.analyzers.call_resolver import literal_string_bindings, resolve_call
from inlinecheck.infrastructure.analyzers.collectors import (
    CallLocator,
    ReturnStatementLocator,
    locate_calls,
    locate_return_statements,
)
from inlinecheck.infrastructure.analyzers.side_effect_classifier import can_cause_side_effects
from inlinecheck.infrastructure.analyzers.variable_locator import (
    VariableAccessLocator,
    locate_variable_accesses,
)

__all__ = [
    # Traversal
    "ScopeIsolatingVisitor",
    "is_scope_boundary",
    "traverse",
    "walk_scope",
    # Locators
    "CallLocator",
    "ReturnStatementLocator",
    "VariableAccessLocator",
    "locate_calls",
    "locate_return_statements",
    "locate_variable_accesses",
    # Classification and resolution
    "can_cause_side_effects",
    "literal_string_bindings",
    "resolve_call",
]
