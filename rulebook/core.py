"""Ordered rule book and its evaluation algorithm."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .errors import RuleConfigurationError
from .outcome import Outcome
from .rule import Group, Rule, RuleBuilder
from .settings import TraceSettings, load_trace_settings
from .trace import TraceFn, no_op_trace

logger = logging.getLogger(__name__)


@dataclass
class _StopSignal:
    """Stop flag shared by every frame of one top-level evaluation."""

    stopped: bool = False


class RuleBook:
    """Append-only sequence of rules evaluated in insertion order."""

    def __init__(self, rules: Optional[Iterable[Union[Rule, RuleBuilder]]] = None) -> None:
        self._rules: List[Rule] = []
        if rules is not None:
            self.add_rules(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def add_rule(self, rule: Union[Rule, RuleBuilder]) -> "RuleBook":
        """Append a rule; builders are finalized here so incomplete rules fail early."""
        if isinstance(rule, RuleBuilder):
            rule = rule.build()
        if not isinstance(rule, Rule):
            raise RuleConfigurationError(f"Expected a Rule or RuleBuilder, got {type(rule).__name__}")
        self._rules.append(rule)
        return self

    def add_rules(self, rules: Iterable[Union[Rule, RuleBuilder]]) -> "RuleBook":
        for rule in rules:
            self.add_rule(rule)
        return self

    def evaluate(
        self,
        facts,
        result,
        when_trace: Optional[TraceFn] = None,
        then_trace: Optional[TraceFn] = None,
        settings: Optional[TraceSettings] = None,
    ) -> Outcome:
        """
        Apply the rules to the facts, mutating result through matching actions.

        Both trace callables receive ``(description, value)``: when_trace for
        every evaluated condition, then_trace for every executed action with
        ``value`` telling whether the action stopped evaluation. Group labels
        join descriptions with ``settings.group_conjunction``; without settings
        the cached packaged configuration is used. Exceptions from conditions,
        actions and trace callables propagate unchanged.
        """
        conjunction = (settings or load_trace_settings()).group_conjunction
        outcome = Outcome(facts, result)
        signal = _StopSignal()
        logger.debug("Evaluating rule book with %d rules", len(self._rules))
        self._evaluate(
            outcome,
            signal,
            "",
            when_trace or no_op_trace,
            then_trace or no_op_trace,
            conjunction,
        )
        logger.debug("Rule book evaluation finished (stopped=%s)", signal.stopped)
        return outcome

    def _evaluate(
        self,
        outcome: Outcome,
        signal: _StopSignal,
        group_prefix: str,
        when_trace: TraceFn,
        then_trace: TraceFn,
        conjunction: str,
    ) -> None:
        for rule in self._rules:
            if signal.stopped:
                return
            if not self._matches(rule, outcome, group_prefix, when_trace):
                continue

            consequence = rule.consequence
            if isinstance(consequence, Group):
                consequence.rules._evaluate(
                    outcome,
                    signal,
                    (rule.when_description or "") + conjunction,
                    when_trace,
                    then_trace,
                    conjunction,
                )
                continue

            consequence.action(outcome)
            then_trace(rule.then_description or "", consequence.stops)
            signal.stopped = consequence.stops

    @staticmethod
    def _matches(rule: Rule, outcome: Outcome, group_prefix: str, when_trace: TraceFn) -> bool:
        matched = bool(rule.when(outcome.facts))
        when_trace(group_prefix + (rule.when_description or ""), matched)
        if matched and rule.when_result is not None:
            matched = bool(rule.when_result(outcome.result))
            when_trace(rule.when_result_description or "", matched)
        return matched
