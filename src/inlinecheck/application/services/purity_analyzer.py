"""Purity verdict engine.

Decides whether a callable can be inlined: a call to it must be
replaceable by a copy of its body without the caller noticing.

Algorithm:
1. By-reference parameters, captures or return → impure (fast reject)
2. Build the type map of parameters and captures
3. Classify every scope-isolated variable access; first side effect → impure
4. Optional: resolve calls and check their targets transitively
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from inlinecheck.domain.model.configuration import DEFAULT_CONFIG, AnalysisConfig
from inlinecheck.domain.model.function_reference import FunctionReference
from inlinecheck.domain.model.nodes import CallableDef, ClassMethod, Closure, FunctionDef
from inlinecheck.domain.model.purity import PurityReport
from inlinecheck.domain.model.type_map import TypeMap
from inlinecheck.domain.model.variable_access import VariableAccess
from inlinecheck.infrastructure.analyzers.call_resolver import resolve_call
from inlinecheck.infrastructure.analyzers.collectors import locate_calls
from inlinecheck.infrastructure.analyzers.side_effect_classifier import can_cause_side_effects
from inlinecheck.infrastructure.analyzers.variable_locator import locate_variable_accesses

log = logging.getLogger(__name__)

# Finds the definition behind a resolved call target, None if unknown
CallableLookup = Callable[[FunctionReference], CallableDef | None]


@dataclass(frozen=True, slots=True)
class _Visit:
    """Transitive analysis state: callables on the current path and depth."""

    in_progress: frozenset[str] = frozenset()
    depth: int = 0


class PurityAnalyzer:
    """Decides whether callables are pure.

    Stateless between calls apart from immutable config and lookup;
    safe to share, every analysis starts from scratch.

    Without a lookup, calls are judged only through the variables they
    touch (the minimal verdict). With a lookup, every call must resolve
    to a pure callable or a known pure function.
    """

    def __init__(
        self,
        config: AnalysisConfig | None = None,
        lookup: CallableLookup | None = None,
    ) -> None:
        """Initialize analyzer.

        Args:
            config: Heuristic configuration. Uses defaults if None.
            lookup: Resolves call targets to definitions. None disables
                transitive call checking.
        """
        self._config = config or DEFAULT_CONFIG
        self._lookup = lookup

    def is_pure(self, callable_: CallableDef, *, this_type: str | None = None) -> bool:
        """Check if a callable is pure.

        Args:
            callable_: Function, method or closure definition
            this_type: Class bound to $this, for instance methods

        Returns:
            True if calls to callable_ can be inlined safely
        """
        return self.analyze(callable_, this_type=this_type).is_pure

    def analyze(self, callable_: CallableDef, *, this_type: str | None = None) -> PurityReport:
        """Analyze a callable and explain the verdict.

        Args:
            callable_: Function, method or closure definition
            this_type: Class bound to $this, for instance methods

        Returns:
            PurityReport with verdict, impurity flags and violations
        """
        identity = _identity(callable_, this_type)
        visit = _Visit(in_progress=frozenset({identity}) if identity else frozenset())
        return self._analyze(callable_, this_type, visit)

    def _analyze(
        self,
        callable_: CallableDef,
        this_type: str | None,
        visit: _Visit,
    ) -> PurityReport:
        by_ref = _by_ref_bindings(callable_)
        if by_ref:
            log.debug("impure: by-reference bindings %s", ", ".join(by_ref))
            return PurityReport(is_pure=False, has_by_ref_binding=True, violations=by_ref)

        types = TypeMap.from_callable(callable_, this_type=this_type)

        for access in locate_variable_accesses(callable_.stmts):
            if can_cause_side_effects(access, types, self._config):
                return self._impure_access(access)

        if self._lookup is None:
            return PurityReport.pure()

        return self._check_calls(callable_, types, visit, self._lookup)

    def _impure_access(self, access: VariableAccess) -> PurityReport:
        description = access.describe()
        log.debug("impure: side-effecting access %s", description)

        if _touches_global_state(access, self._config):
            return PurityReport(
                is_pure=False,
                has_global_state=True,
                violations=(f"global state access: {description}",),
            )

        return PurityReport(
            is_pure=False,
            has_side_effecting_access=True,
            violations=(f"side-effecting access: {description}",),
        )

    def _check_calls(
        self,
        callable_: CallableDef,
        types: TypeMap,
        visit: _Visit,
        lookup: CallableLookup,
    ) -> PurityReport:
        """Check every call of the body against its resolved target.

        Variable callees are not resolved here: the access classifier has
        already rejected any callable using one.
        """
        for call in locate_calls(callable_.stmts):
            reference = resolve_call(call, types, config=self._config)
            violation = self._check_reference(reference, visit, lookup)
            if violation is not None:
                log.debug("impure: %s", violation)
                return PurityReport(is_pure=False, has_impure_call=True, violations=(violation,))

        return PurityReport.pure()

    def _check_reference(
        self,
        reference: FunctionReference | None,
        visit: _Visit,
        lookup: CallableLookup,
    ) -> str | None:
        """Return a violation for one resolved call, None if the call is pure."""
        if reference is None:
            return f"unresolvable call target (at depth {visit.depth})"

        is_function = not reference.is_method
        if is_function and self._config.is_known_pure_function(reference.function_name):
            return None

        # recursion: assume pure, the rest of the cycle decides
        key = _identity_key(reference.name)
        if key in visit.in_progress:
            return None

        if visit.depth + 1 > self._config.max_call_depth:
            return f"call depth limit {self._config.max_call_depth} reached at {reference.name}"

        target = lookup(reference)
        if target is None:
            return f"unknown callable {reference.name}"

        report = self._analyze(
            target,
            reference.class_name,
            _Visit(in_progress=visit.in_progress | {key}, depth=visit.depth + 1),
        )
        if not report.is_pure:
            return f"calls impure {reference.name}: {report.violations[0]}"

        return None


def is_pure(callable_: CallableDef) -> bool:
    """Check if a callable is pure with the default configuration.

    Args:
        callable_: Function, method or closure definition

    Returns:
        True if calls to callable_ can be inlined safely
    """
    return PurityAnalyzer().is_pure(callable_)


def _by_ref_bindings(callable_: CallableDef) -> tuple[str, ...]:
    """Describe every binding that aliases caller storage."""
    bindings: list[str] = []

    if callable_.by_ref:
        bindings.append("returns by reference")

    bindings.extend(
        f"by-reference parameter ${param.name}" for param in callable_.params if param.by_ref
    )

    if isinstance(callable_, Closure):
        bindings.extend(
            f"by-reference capture ${use.name}" for use in callable_.uses if use.by_ref
        )

    return tuple(bindings)


def _touches_global_state(access: VariableAccess, config: AnalysisConfig) -> bool:
    name = access.name
    return name is None or config.is_superglobal(name) or access.declares_persistent_state


def _identity(callable_: CallableDef, this_type: str | None) -> str | None:
    """Key used to detect recursion, None for closures."""
    match callable_:
        case FunctionDef(name=name):
            return _identity_key(name)
        case ClassMethod(name=name) if this_type is not None:
            reference = FunctionReference.from_class_and_method_name(this_type, name)
            return _identity_key(reference.name)
    return None


def _identity_key(qualified_name: str) -> str:
    # PHP function, method and class names are case-insensitive;
    # a leading \ only marks the name fully qualified
    return qualified_name.lstrip("\\").lower()
