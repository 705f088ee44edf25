"""Reporters for purity analysis results.

ConsoleReporter renders with rich; JSONReporter uses stdlib only.
"""

from inlinecheck.application.reporters.console import ConsoleConfig, ConsoleReporter
from inlinecheck.application.reporters.json_reporter import JSONReporter
from inlinecheck.application.reporters.protocol import ReporterProtocol

__all__ = [
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
    "ReporterProtocol",
]
