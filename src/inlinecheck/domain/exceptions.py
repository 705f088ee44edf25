"""Domain exceptions: all public errors of inlinecheck.

Hexagonal architecture: all exceptions visible to users defined in domain.
Infrastructure/Application use these, not define their own public exceptions.
"""


class InlineCheckError(Exception):
    """Base for all inlinecheck error exceptions.

    Allows: except InlineCheckError to catch all library errors.
    """


class InvalidNodeError(InlineCheckError, TypeError):
    """Node constructed with a field of the wrong kind.

    Raised by the front end integration, never by the analyzed program.
    Inherits TypeError for semantic correctness (expected kind X, got Y).

    Attributes:
        node_kind: Name of the node class being constructed.
        field: Offending field name.
        expected: Description of accepted values.
        got: Actual type received.
    """

    def __init__(self, *, node_kind: str, field: str, expected: str, got: type) -> None:
        """Initialize with node kind, field and expected/actual types."""
        self.node_kind = node_kind
        self.field = field
        self.expected = expected
        self.got = got
        super().__init__(f"{node_kind}.{field} must be {expected}, got {got.__name__}")


class InvalidVariableAccessError(InlineCheckError, TypeError):
    """Variable access built around something that is not a variable.

    The subject of an access must be a plain variable or a static variable
    declaration; anything else signals a caller/integration bug.

    Attributes:
        got: Actual type received.
        reason: What was wrong.
    """

    def __init__(self, *, got: type, reason: str) -> None:
        """Initialize with offending type and reason."""
        self.got = got
        self.reason = reason
        super().__init__(f"invalid variable access: {reason}, got {got.__name__}")
