"""Variable access record: a variable plus the operations enclosing it."""

from __future__ import annotations

from dataclasses import dataclass

from inlinecheck.domain.exceptions import InvalidVariableAccessError
from inlinecheck.domain.model.nodes import (
    Global,
    Node,
    OtherExpr,
    OtherStmt,
    Static,
    StaticVar,
    Variable,
)


@dataclass(frozen=True, slots=True)
class VariableAccess:
    """Single access to a variable inside a callable body.

    Operations are ordered outer-to-inner: the last one is the operation
    nearest to the variable. Created while walking a body and consumed
    immediately by the side-effect classifier.

    Attributes:
        subject: Variable reference or static variable declaration
        operations: Enclosing operation nodes, outer-to-inner
    """

    subject: Variable | StaticVar
    operations: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.subject, Variable | StaticVar):
            raise InvalidVariableAccessError(
                got=type(self.subject),
                reason="subject must be Variable or StaticVar",
            )
        if not isinstance(self.operations, tuple):
            raise InvalidVariableAccessError(
                got=type(self.operations),
                reason="operations must be a tuple",
            )
        for operation in self.operations:
            if not isinstance(operation, Node):
                raise InvalidVariableAccessError(
                    got=type(operation),
                    reason="operations must be nodes",
                )

    @classmethod
    def from_variable(cls, variable: Variable, *operations: Node) -> VariableAccess:
        """Access through a variable reference, operations outer-to-inner."""
        if not isinstance(variable, Variable):
            raise InvalidVariableAccessError(got=type(variable), reason="expected Variable")
        return cls(variable, operations)

    @classmethod
    def from_static_variable(cls, static_var: StaticVar, *operations: Node) -> VariableAccess:
        """Access through a static variable declaration, operations outer-to-inner."""
        if not isinstance(static_var, StaticVar):
            raise InvalidVariableAccessError(got=type(static_var), reason="expected StaticVar")
        return cls(static_var, operations)

    @property
    def name(self) -> str | None:
        """Variable name, None when computed at runtime ($$name)."""
        match self.subject:
            case StaticVar(name=name):
                return name
            case Variable(name=str() as name):
                return name
        return None

    @property
    def nearest_operation(self) -> Node | None:
        """Operation closest to the variable, None for a bare reference."""
        return self.operations[-1] if self.operations else None

    @property
    def declares_persistent_state(self) -> bool:
        """Check if access is a global or static variable declaration."""
        if isinstance(self.subject, StaticVar):
            return True
        return isinstance(self.nearest_operation, Global | Static)

    def describe(self) -> str:
        """Human-readable form: $name in NearestOperation."""
        subject = f"${self.name}" if self.name is not None else "$<dynamic>"
        match self.nearest_operation:
            case None:
                return f"{subject} (bare reference)"
            case OtherExpr(kind=kind) | OtherStmt(kind=kind):
                return f"{subject} in {kind}"
            case operation:
                return f"{subject} in {type(operation).__name__}"
