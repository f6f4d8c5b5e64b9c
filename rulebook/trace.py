"""Trace callables invoked while a rule book is evaluated."""

from __future__ import annotations

import logging
from typing import Callable, NamedTuple, Optional

from .settings import TraceSettings, load_trace_settings

TraceFn = Callable[[str, bool], None]


def no_op_trace(description: str, value: bool) -> None:
    return None


class TraceSink(NamedTuple):
    """Pair of when/then trace callables, unpackable into RuleBook.evaluate."""

    when: TraceFn = no_op_trace
    then: TraceFn = no_op_trace


def logging_trace_sink(
    logger: Optional[logging.Logger] = None,
    settings: Optional[TraceSettings] = None,
) -> TraceSink:
    """
    Build a trace sink that writes every condition and action to a logger.

    When lines read ``WHEN "<description>" was <bool>`` and then lines read
    ``THEN "<description>" stop <bool>`` with the default settings.
    """
    settings = settings or load_trace_settings()
    target = logger or logging.getLogger(settings.logger_name)
    level = settings.level_number

    def log_when(description: str, value: bool) -> None:
        target.log(level, settings.when_format, description, value)

    def log_then(description: str, value: bool) -> None:
        target.log(level, settings.then_format, description, value)

    return TraceSink(when=log_when, then=log_then)
