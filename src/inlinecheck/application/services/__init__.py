"""Application services."""

from inlinecheck.application.services.purity_analyzer import (
    CallableLookup,
    PurityAnalyzer,
    is_pure,
)

__all__ = ["CallableLookup", "PurityAnalyzer", "is_pure"]
