"""
Exceptions raised by the analytics core.
"""


class AnalyticsError(Exception):
    """Base class for analytics failures that should reject a request."""


class RowParseError(AnalyticsError):
    """A collaborator returned a value that cannot be read as the expected type."""

    def __init__(self, field: str, value):
        self.field = field
        self.value = value
        super().__init__(f"Cannot parse {field} from collaborator value {value!r}")


class InvalidRangeError(AnalyticsError):
    """A caller-supplied range boundary is not a usable date."""

    def __init__(self, field: str, value, reason: str = "is not an ISO calendar date"):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value!r} {reason}")
