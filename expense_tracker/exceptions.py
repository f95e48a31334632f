"""Domain-specific exceptions for the expense tracker."""


class ValidationError(ValueError):
    """Raised when user input does not meet validation requirements."""


class PersistenceError(IOError):
    """Raised when a value cannot be read from or written to device storage."""
