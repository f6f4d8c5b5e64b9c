"""Ordered condition/action rule books with grouped rules and trace hooks."""

from .core import RuleBook
from .errors import RuleBookError, RuleConfigurationError
from .outcome import Outcome
from .rule import Group, Proceed, Rule, RuleBuilder, Stop
from .trace import TraceFn, TraceSink, logging_trace_sink, no_op_trace

__all__ = [
    "Group",
    "Outcome",
    "Proceed",
    "Rule",
    "RuleBook",
    "RuleBookError",
    "RuleBuilder",
    "RuleConfigurationError",
    "Stop",
    "TraceFn",
    "TraceSink",
    "logging_trace_sink",
    "no_op_trace",
]
