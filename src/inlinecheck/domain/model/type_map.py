"""Declared types of a callable's parameters and captures."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from inlinecheck.domain.model.nodes import CallableDef, ClassMethod, Closure

# Variadic parameters (...$args) always hold a collection
VARIADIC_TYPE = "array"

THIS_VARIABLE = "this"


@dataclass(frozen=True, slots=True)
class TypeMap(Mapping[str, "str | None"]):
    """Variable name → declared type name, None meaning unknown/mixed.

    A name without an entry is unknown too: absence never implies scalar.
    Built once per callable and never mutated during analysis.

    Attributes:
        types: Read-only mapping of variable name to declared type
    """

    types: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate invariants and freeze the mapping. FAIL-FIRST."""
        for name in self.types:
            if not name:
                raise ValueError("variable name must not be empty")
        object.__setattr__(self, "types", MappingProxyType(dict(self.types)))

    def __getitem__(self, name: str) -> str | None:
        return self.types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    @classmethod
    def from_callable(cls, callable_: CallableDef, *, this_type: str | None = None) -> TypeMap:
        """Build the type map of a callable definition.

        Args:
            callable_: Function, method or closure definition
            this_type: Class name bound to $this, for instance methods only

        Returns:
            TypeMap with one entry per parameter and capture
        """
        types: dict[str, str | None] = {}

        if this_type is not None and _binds_this(callable_):
            types[THIS_VARIABLE] = this_type

        if isinstance(callable_, Closure):
            for use in callable_.uses:
                types[use.name] = None

        for param in callable_.params:
            types[param.name] = VARIADIC_TYPE if param.variadic else param.declared_type

        return cls(types)


def _binds_this(callable_: CallableDef) -> bool:
    match callable_:
        case ClassMethod(is_static=False) | Closure(is_static=False):
            return True
    return False
