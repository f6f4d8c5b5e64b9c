"""Rules: a facts-condition, an optional result-condition and one consequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from .errors import RuleConfigurationError
from .outcome import Outcome

if TYPE_CHECKING:  # pragma: no cover
    from .core import RuleBook

FactsCondition = Callable[[Any], bool]
ResultCondition = Callable[[Any], bool]
Action = Callable[[Outcome], None]


@dataclass(frozen=True)
class Stop:
    """Run the action, then halt the rest of the evaluation."""

    action: Action

    @property
    def stops(self) -> bool:
        return True


@dataclass(frozen=True)
class Proceed:
    """Run the action and continue with the next rule."""

    action: Action

    @property
    def stops(self) -> bool:
        return False


@dataclass(frozen=True)
class Group:
    """Evaluate a nested rule book in place, gated by the owning rule."""

    rules: "RuleBook"


Consequence = Union[Stop, Proceed, Group]


@dataclass(frozen=True)
class Rule:
    when: FactsCondition
    consequence: Consequence
    when_result: Optional[ResultCondition] = None
    when_description: Optional[str] = None
    when_result_description: Optional[str] = None
    then_description: Optional[str] = None

    def __post_init__(self) -> None:
        if not callable(self.when):
            raise RuleConfigurationError("Rule facts-condition must be callable")
        if self.when_result is not None and not callable(self.when_result):
            raise RuleConfigurationError("Rule result-condition must be callable")
        if isinstance(self.consequence, (Stop, Proceed)):
            if not callable(self.consequence.action):
                raise RuleConfigurationError("Rule action must be callable")
        elif isinstance(self.consequence, Group):
            from .core import RuleBook

            if not isinstance(self.consequence.rules, RuleBook):
                raise RuleConfigurationError(
                    f"Group must wrap a RuleBook, got {type(self.consequence.rules).__name__}"
                )
        else:
            raise RuleConfigurationError(
                f"Rule consequence must be Stop, Proceed or Group, got {type(self.consequence).__name__}"
            )

    @staticmethod
    def builder() -> "RuleBuilder":
        return RuleBuilder()


class RuleBuilder:
    """
    Fluent construction of a Rule.

    Exactly one of then_proceed, then_stop or then_group may be called; a
    second call raises RuleConfigurationError instead of replacing the first.
    build() returns the immutable Rule.
    """

    def __init__(self) -> None:
        self._when: Optional[FactsCondition] = None
        self._when_result: Optional[ResultCondition] = None
        self._consequence: Optional[Consequence] = None
        self._when_description: Optional[str] = None
        self._when_result_description: Optional[str] = None
        self._then_description: Optional[str] = None

    def when(self, condition: FactsCondition) -> "RuleBuilder":
        if self._when is not None:
            raise RuleConfigurationError("Facts-condition already set for this rule")
        self._when = condition
        return self

    def and_when_result(self, condition: ResultCondition) -> "RuleBuilder":
        if self._when_result is not None:
            raise RuleConfigurationError("Result-condition already set for this rule")
        self._when_result = condition
        return self

    def when_description(self, description: str) -> "RuleBuilder":
        self._when_description = description
        return self

    def and_when_result_description(self, description: str) -> "RuleBuilder":
        self._when_result_description = description
        return self

    def then_description(self, description: str) -> "RuleBuilder":
        self._then_description = description
        return self

    def then_proceed(self, action: Action) -> "RuleBuilder":
        return self._set_consequence(Proceed(action))

    def then_stop(self, action: Action) -> "RuleBuilder":
        return self._set_consequence(Stop(action))

    def then_group(self, group: Union["RuleBook", Callable[["RuleBook"], Any]]) -> "RuleBuilder":
        """Nest a rule book, either given directly or populated by a callable."""
        from .core import RuleBook

        # The populator must not run for a rule that already has a consequence.
        self._check_no_consequence(Group.__name__)
        if isinstance(group, RuleBook):
            nested = group
        elif callable(group):
            nested = RuleBook()
            group(nested)
        else:
            raise RuleConfigurationError("then_group expects a RuleBook or a callable populating one")
        return self._set_consequence(Group(nested))

    def _check_no_consequence(self, requested: str) -> None:
        if self._consequence is not None:
            existing = type(self._consequence).__name__
            raise RuleConfigurationError(
                f"Rule already has a {existing} consequence; cannot also set {requested}"
            )

    def _set_consequence(self, consequence: Consequence) -> "RuleBuilder":
        self._check_no_consequence(type(consequence).__name__)
        self._consequence = consequence
        return self

    def build(self) -> Rule:
        if self._when is None:
            raise RuleConfigurationError("Rule is missing a facts-condition; call when() first")
        if self._consequence is None:
            raise RuleConfigurationError("Rule has neither an action nor a group")
        return Rule(
            when=self._when,
            consequence=self._consequence,
            when_result=self._when_result,
            when_description=self._when_description,
            when_result_description=self._when_result_description,
            then_description=self._then_description,
        )
