"""Callable purity analysis result."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PurityReport:
    """Purity verdict for a callable, with the reasons behind it.

    A callable is pure if calling it cannot touch state outside its own
    parameters, captures and return value, so a call may be inlined.

    Attributes:
        is_pure: True if callable is pure
        has_by_ref_binding: Binds caller storage (&$param, use (&$var), function &f)
        has_global_state: Touches superglobals, global or static variables
        has_side_effecting_access: Some variable access may run foreign code
        has_impure_call: Calls a callable that is impure or cannot be resolved
        violations: Human-readable violation descriptions
    """

    is_pure: bool
    has_by_ref_binding: bool = False
    has_global_state: bool = False
    has_side_effecting_access: bool = False
    has_impure_call: bool = False
    violations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        has_any_impurity = (
            self.has_by_ref_binding
            or self.has_global_state
            or self.has_side_effecting_access
            or self.has_impure_call
        )

        if self.is_pure and (has_any_impurity or self.violations):
            raise ValueError(
                "is_pure=True contradicts impurity flags: "
                f"by_ref={self.has_by_ref_binding}, global={self.has_global_state}, "
                f"access={self.has_side_effecting_access}, call={self.has_impure_call}, "
                f"violations={len(self.violations)}"
            )

        if not self.is_pure and not has_any_impurity:
            raise ValueError("is_pure=False requires at least one impurity flag")

        if not self.is_pure and not self.violations:
            raise ValueError("is_pure=False requires at least one violation")

    @classmethod
    def pure(cls) -> PurityReport:
        """Report for a callable with no impurity found."""
        return cls(is_pure=True)
