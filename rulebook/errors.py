"""Exceptions raised by the rule book engine."""


class RuleBookError(Exception):
    """Base class for rule book errors."""


class RuleConfigurationError(RuleBookError, ValueError):
    """Raised when a rule or rule book is assembled incorrectly."""
