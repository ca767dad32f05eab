# src/accessibility_checker/errors.py


class AccessibilityCheckerError(Exception):
    """Base class for all errors raised by the accessibility checker."""


class ConfigurationError(AccessibilityCheckerError):
    """
    Raised when the rule configuration is incomplete or malformed.

    Always fatal: the engine refuses to start with an undefined gate.
    """

    def __init__(self, message: str, missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class AggregationError(AccessibilityCheckerError):
    """Raised when a diagnostic without a code reaches the aggregator."""
