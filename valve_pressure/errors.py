class ParseError(ValueError):
    """Raised when a valve description or record is malformed."""


class StructuralViolation(RuntimeError):
    """Raised when a valve table refers to an id outside of the table."""
