"""Analysis configuration.

Immutable knobs of the purity heuristic: which declared types count as
scalar or collection, which variables are process-wide superglobals, and
how far transitive call checking may go.
"""

from __future__ import annotations

from dataclasses import dataclass

# Primitive value kinds; coercing or indexing them never runs user code
SCALAR_TYPES = frozenset({"int", "float", "string", "bool", "integer", "double", "boolean"})

# Generic ordered/keyed collection kind
COLLECTION_TYPES = frozenset({"array"})

SUPERGLOBALS = frozenset(
    {
        "GLOBALS",
        "_SERVER",
        "_GET",
        "_POST",
        "_FILES",
        "_COOKIE",
        "_SESSION",
        "_REQUEST",
        "_ENV",
    }
)

# Builtins known to be free of side effects, consulted by transitive checking only
KNOWN_PURE_FUNCTIONS = frozenset(
    {
        # Math
        "abs",
        "ceil",
        "floor",
        "round",
        "intdiv",
        "max",
        "min",
        "pow",
        "sqrt",
        # Strings
        "strlen",
        "strtolower",
        "strtoupper",
        "ucfirst",
        "lcfirst",
        "trim",
        "ltrim",
        "rtrim",
        "substr",
        "str_repeat",
        "str_pad",
        "sprintf",
        "implode",
        "explode",
        # Arrays
        "count",
        "array_keys",
        "array_values",
        "array_merge",
        "array_slice",
        "array_key_exists",
        "in_array",
        # Type checks
        "is_int",
        "is_float",
        "is_string",
        "is_bool",
        "is_array",
        "is_null",
        "intval",
        "floatval",
        "strval",
        "boolval",
    }
)

_NULL_TYPE = "null"


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Configuration of the purity heuristic.

    Immutable configuration object with FAIL-FIRST validation.
    Type names are matched case-insensitively.

    Attributes:
        scalar_types: Declared types treated as primitive values.
        collection_types: Declared types treated as plain collections.
        superglobals: Variable names that always denote process-wide state.
        known_pure_functions: Function names assumed pure when checking calls
            transitively. Ignored unless a callable lookup is configured.
        max_call_depth: Max nesting of transitive call checks (>= 1).
    """

    scalar_types: frozenset[str] = SCALAR_TYPES
    collection_types: frozenset[str] = COLLECTION_TYPES
    superglobals: frozenset[str] = SUPERGLOBALS
    known_pure_functions: frozenset[str] = KNOWN_PURE_FUNCTIONS
    max_call_depth: int = 8

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.scalar_types:
            raise ValueError("scalar_types must not be empty")

        if "GLOBALS" not in self.superglobals:
            raise ValueError("superglobals must contain GLOBALS")

        overlap = _lowered(self.scalar_types) & _lowered(self.collection_types)
        if overlap:
            raise ValueError(f"types cannot be both scalar and collection: {sorted(overlap)}")

        if self.max_call_depth < 1:
            raise ValueError(f"max_call_depth must be >= 1, got {self.max_call_depth}")

    def is_scalar(self, declared_type: str | None) -> bool:
        """Check if every member of the declared type is a scalar kind.

        Unknown (None) is never scalar. Nullable (?int) and union (int|string)
        forms are accepted; null members are ignored.
        """
        members = _type_members(declared_type)
        return bool(members) and members <= _lowered(self.scalar_types)

    def is_collection(self, declared_type: str | None) -> bool:
        """Check if every member of the declared type is a collection kind."""
        members = _type_members(declared_type)
        return bool(members) and members <= _lowered(self.collection_types)

    def is_scalar_like(self, declared_type: str | None) -> bool:
        """Check if the declared type mixes only scalar and collection kinds."""
        members = _type_members(declared_type)
        known = _lowered(self.scalar_types) | _lowered(self.collection_types)
        return bool(members) and members <= known

    def is_superglobal(self, name: str) -> bool:
        """Check if variable name denotes a superglobal. Case-sensitive, as in PHP."""
        return name in self.superglobals

    def is_known_pure_function(self, name: str) -> bool:
        """Check if a bare function name is whitelisted as pure."""
        return name.lstrip("\\").lower() in _lowered(self.known_pure_functions)


def _lowered(names: frozenset[str]) -> frozenset[str]:
    return frozenset(name.lower() for name in names)


def _type_members(declared_type: str | None) -> frozenset[str]:
    """Split a declared type into lower-cased members, dropping null."""
    if declared_type is None:
        return frozenset()

    text = declared_type.strip()
    if text.startswith("?"):
        text = text[1:]

    members = {part.strip().lstrip("\\").lower() for part in text.split("|")}
    members.discard(_NULL_TYPE)
    members.discard("")
    return frozenset(members)


DEFAULT_CONFIG = AnalysisConfig()
