"""inlinecheck - purity analysis of PHP callables for safe code inlining."""

__version__ = "0.1.0"

from inlinecheck.application.services.purity_analyzer import PurityAnalyzer, is_pure
from inlinecheck.domain.model.configuration import DEFAULT_CONFIG, AnalysisConfig

__all__ = ["AnalysisConfig", "DEFAULT_CONFIG", "PurityAnalyzer", "is_pure", "__version__"]
