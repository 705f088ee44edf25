"""Reporter protocol: contract for all reporters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Mapping

    from inlinecheck.domain.model.purity import PurityReport


class ReporterProtocol(Protocol):
    """Protocol for purity report renderers.

    Output is str, not print(). Caller decides destination.
    """

    def report(self, reports: Mapping[str, PurityReport]) -> str:
        """Format purity reports as string.

        Args:
            reports: Callable label → its purity report, in display order.

        Returns:
            Formatted string representation.
        """
        ...
