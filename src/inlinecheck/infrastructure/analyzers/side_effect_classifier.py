"""Side-effect classifier: the purity decision table.

Decides, for one variable access, whether it could affect or observe
state outside the callable's own activation. Purely syntactic: uses
declared types only, never runtime values.

Decision order:
1. Superglobal or computed ($$x) name → side-effecting
2. global/static declaration → side-effecting
3. Innermost operation decides (see _chain_has_side_effects)
"""

from __future__ import annotations

from collections.abc import Mapping

from inlinecheck.domain.model.configuration import DEFAULT_CONFIG, AnalysisConfig
from inlinecheck.domain.model.nodes import (
    ArrayDimFetch,
    Assign,
    AssignOp,
    BinaryOp,
    BinaryOperator,
    Cast,
    CastKind,
    Global,
    If,
    Node,
    Return,
    Static,
    UnaryOp,
)
from inlinecheck.domain.model.variable_access import VariableAccess


def can_cause_side_effects(
    access: VariableAccess,
    types: Mapping[str, str | None],
    config: AnalysisConfig = DEFAULT_CONFIG,
) -> bool:
    """Check if a variable access may cause a side effect outside the callable.

    Args:
        access: Variable access with its operation chain
        types: Declared types of the callable's parameters and captures
        config: Scalar/collection/superglobal definitions

    Returns:
        True if the access may be observable outside the callable
    """
    name = access.name

    # $$name can reach any variable, superglobals included
    if name is None or config.is_superglobal(name):
        return True

    if access.declares_persistent_state:
        return True

    return _chain_has_side_effects(access.operations, types.get(name), config)


def _chain_has_side_effects(
    chain: tuple[Node, ...],
    declared_type: str | None,
    config: AnalysisConfig,
) -> bool:
    """Classify the value flowing into the innermost operation of chain.

    Recursion peels one ArrayDimFetch at a time; depth is bounded by the
    chain length.
    """
    if not chain:
        return False

    match chain[-1]:
        case Global() | Static():
            return True

        # stringifying an object may run __toString()
        case Cast(kind=CastKind.STRING):
            return not config.is_scalar_like(declared_type)

        case Cast():
            return False

        case ArrayDimFetch():
            # offsetGet() of an ArrayAccess object is foreign code
            if not config.is_scalar_like(declared_type):
                return True
            return _chain_has_side_effects(chain[:-1], _element_type(declared_type, config), config)

        case BinaryOp(op=BinaryOperator.CONCAT) | AssignOp(op=BinaryOperator.CONCAT):
            return not config.is_scalar_like(declared_type)

        case BinaryOp() | AssignOp() | UnaryOp():
            return False

        case Return() | Assign():
            return False

        # truth test of the condition, or a discarded statement value in a branch
        case If():
            return False

    # deny by default: fetches, calls, OtherExpr / OtherStmt
    return True


def _element_type(declared_type: str | None, config: AnalysisConfig) -> str | None:
    """Type of an element read from a value of declared_type.

    Offsets of scalars are scalars (string offsets are strings, others null);
    collection elements are unknown.
    """
    if config.is_scalar(declared_type):
        return declared_type
    return None
