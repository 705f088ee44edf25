"""Statically resolved identity of a call target."""

from __future__ import annotations

from dataclasses import dataclass

_MEMBER_SEPARATOR = "::"


@dataclass(frozen=True, slots=True)
class FunctionReference:
    """Resolved call target: a function name, or a type name + member name.

    Attributes:
        function_name: Function or method name
        class_name: Declaring type name, None for plain functions
    """

    function_name: str
    class_name: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.function_name:
            raise ValueError("function_name must not be empty")
        if self.class_name is not None and not self.class_name:
            raise ValueError("class_name must be non-empty string or None")

    @classmethod
    def from_function_name(cls, function_name: str) -> FunctionReference:
        """Reference to a plain function."""
        return cls(function_name=function_name)

    @classmethod
    def from_class_and_method_name(cls, class_name: str, method_name: str) -> FunctionReference:
        """Reference to a method of a named type."""
        return cls(function_name=method_name, class_name=class_name)

    @property
    def is_method(self) -> bool:
        """Check if reference points to a type member."""
        return self.class_name is not None

    @property
    def name(self) -> str:
        """Qualified name: TypeName::memberName, or the bare function name."""
        if self.class_name is None:
            return self.function_name
        return f"{self.class_name}{_MEMBER_SEPARATOR}{self.function_name}"

    def __str__(self) -> str:
        return self.name
