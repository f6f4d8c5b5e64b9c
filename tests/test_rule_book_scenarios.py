import pytest

from _animals import AnimalFacts, Result, flat_rule_book, grouped_rule_book
from rulebook import RuleBook, RuleBuilder, logging_trace_sink

ANIMAL_CASES = [
    ("virus", True, 0, "A virus cannot be analyzed.", "You must set a positive weight."),
    ("sea hawk", False, 9, "A sea hawk does not produce milk.", None),
    ("cow", True, 750, "A cow cannot fly.", None),
    ("whale", True, 200000, "A whale must live in water. A whale cannot fly.", None),
]


@pytest.mark.parametrize("name,mammal,weight,expected_conclusion,expected_hint", ANIMAL_CASES)
def test_flat_rule_book_conclusions(name, mammal, weight, expected_conclusion, expected_hint):
    facts = AnimalFacts(name, mammal, weight)
    result = Result()

    outcome = flat_rule_book().evaluate(facts, result)

    assert outcome.facts is facts
    assert outcome.result is result
    assert result.conclusion == expected_conclusion
    assert result.hint == expected_hint


@pytest.mark.parametrize("name,mammal,weight,expected_conclusion,expected_hint", ANIMAL_CASES)
def test_flat_rule_book_with_logging_trace(name, mammal, weight, expected_conclusion, expected_hint):
    result = Result()

    flat_rule_book().evaluate(AnimalFacts(name, mammal, weight), result, *logging_trace_sink())

    assert result.conclusion == expected_conclusion
    assert result.hint == expected_hint


@pytest.mark.parametrize("name,mammal,weight,expected_conclusion,expected_hint", ANIMAL_CASES)
def test_grouped_rule_book_matches_flat(name, mammal, weight, expected_conclusion, expected_hint):
    flat = flat_rule_book().evaluate(AnimalFacts(name, mammal, weight), Result()).result
    grouped = grouped_rule_book().evaluate(AnimalFacts(name, mammal, weight), Result()).result

    assert grouped == flat
    assert grouped.conclusion == expected_conclusion
    assert grouped.hint == expected_hint


def _result_condition_book() -> RuleBook:
    def heavy(outcome):
        outcome.result.add_conclusion(f"A {outcome.facts.name} is not a fish.")
        outcome.result.hint = "super-heavy"

    def wrong(outcome):
        outcome.result.conclusion = f"The weight for {outcome.facts.name} is wrong!"

    return RuleBook().add_rules(
        [
            RuleBuilder()
            .when_description("If animal weights more than 20 tons?")
            .when(lambda facts: facts.weight_kg > 20000)
            .then_proceed(heavy),
            RuleBuilder()
            .when_description("If animal is not a mammal?")
            .when(lambda facts: not facts.mammal)
            .and_when_result_description("and if it is super heavy, like whales only")
            .and_when_result(lambda result: result.hint == "super-heavy")
            .then_description("then something with the data is wrong!")
            .then_stop(wrong),
        ]
    )


@pytest.mark.parametrize(
    "name,mammal,expected_conclusion",
    [
        ("whale", True, "A whale is not a fish."),
        ("whale shark", False, "The weight for whale shark is wrong!"),
    ],
)
def test_result_condition_sees_earlier_actions(name, mammal, expected_conclusion):
    result = Result()

    _result_condition_book().evaluate(AnimalFacts(name, mammal, 200000), result)

    assert result.conclusion == expected_conclusion
    assert result.hint == "super-heavy"


def test_empty_rule_book_returns_untouched_inputs():
    facts = AnimalFacts("cow", True, 750)
    result = Result()
    calls = []

    outcome = RuleBook().evaluate(facts, result, lambda d, v: calls.append(d), lambda d, v: calls.append(d))

    assert outcome.facts is facts
    assert outcome.result is result
    assert result == Result()
    assert calls == []
