"""Domain model: immutable node tree and analysis value objects."""

from inlinecheck.domain.model.configuration import DEFAULT_CONFIG, AnalysisConfig
from inlinecheck.domain.model.function_reference import FunctionReference
from inlinecheck.domain.model.purity import PurityReport
from inlinecheck.domain.model.type_map import TypeMap
from inlinecheck.domain.model.variable_access import VariableAccess

__all__ = [
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "FunctionReference",
    "PurityReport",
    "TypeMap",
    "VariableAccess",
]
