"""BDD step definitions for event translation features."""

import io
from collections.abc import Iterator
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from teamcity_bdd.core.escaping import unescape
from teamcity_bdd.core.models import (
    ExceptionRaised,
    FeatureNamed,
    MatchedStep,
    ScenarioNamed,
    StepExecuted,
    TranslatorConfig,
)
from teamcity_bdd.core.translator import TeamCityTranslator
from tests.conftest import fixed_clock, output_lines


@dataclass
class TranslationContext:
    """Shared state between steps in a translation scenario."""

    stream: io.StringIO = field(default_factory=io.StringIO)
    expand_outlines: bool = False
    translator: TeamCityTranslator | None = None
    exit_text: str = ""

    def get_translator(self) -> TeamCityTranslator:
        """Return the translator, creating it on first use."""
        if self.translator is None:
            self.translator = TeamCityTranslator(
                self.stream,
                TranslatorConfig(expand_outlines=self.expand_outlines),
                clock=fixed_clock,
                exit_stream=io.StringIO(),
            )
        return self.translator

    def lines(self) -> list[str]:
        return output_lines(self.stream)


def _kind(line: str) -> str:
    return line.split("[", 1)[1].split(" ", 1)[0]


def _name(line: str) -> str:
    marker = " name='"
    if marker not in line:
        return ""
    rest = line.split(marker, 1)[1]
    end = 0
    while rest[end] != "'" or (end > 0 and rest[end - 1] == "|"):
        end += 1
    return unescape(rest[:end])


@pytest.fixture
def ctx() -> Iterator[TranslationContext]:
    """Fresh scenario context for each test."""
    context = TranslationContext()
    yield context
    if context.translator is not None:
        context.translator.finalize()


# === Given ===


@given("a translator that expands outlines")
def given_expanding_translator(ctx: TranslationContext) -> None:
    ctx.expand_outlines = True


@given(parsers.parse('feature "{feature}" with scenario "{scenario}"'))
def given_feature_with_scenario(ctx: TranslationContext, feature: str, scenario: str) -> None:
    translator = ctx.get_translator()
    translator.handle(FeatureNamed(feature))
    translator.handle(ScenarioNamed("Scenario", scenario))


# === When ===


@when(parsers.parse('the engine reports features "{names}"'))
def when_features_reported(ctx: TranslationContext, names: str) -> None:
    translator = ctx.get_translator()
    for name in names.split(", "):
        translator.handle(FeatureNamed(name))


@when(parsers.parse('the engine reports scenario "{name}"'))
def when_scenario_reported(ctx: TranslationContext, name: str) -> None:
    ctx.get_translator().handle(ScenarioNamed("Scenario", name))


@when(parsers.parse('step "{keyword}" "{text}" passes'))
def when_step_passes(ctx: TranslationContext, keyword: str, text: str) -> None:
    ctx.get_translator().handle(
        StepExecuted(keyword=keyword, step=MatchedStep(text=text), status="passed")
    )


@when(parsers.parse('step "{keyword}" "{text}" fails with "{message}"'))
def when_step_fails(ctx: TranslationContext, keyword: str, text: str, message: str) -> None:
    translator = ctx.get_translator()
    translator.handle(StepExecuted(keyword=keyword, step=MatchedStep(text=text), status="failed"))
    translator.handle(ExceptionRaised(AssertionError(message), "failed"))


@when("the run ends")
def when_run_ends(ctx: TranslationContext) -> None:
    ctx.exit_text = ctx.get_translator().finalize()


# === Then ===


@then("the protocol lines are:")
def then_protocol_lines(ctx: TranslationContext, datatable: list[list[str]]) -> None:
    expected = [(row[0], row[1]) for row in datatable[1:]]
    actual = [(_kind(line), _name(line)) for line in ctx.lines()]
    assert actual == expected


@then(parsers.parse("the message line contains {count:d} steps"))
def then_message_step_count(ctx: TranslationContext, count: int) -> None:
    message = next(line for line in ctx.lines() if _kind(line) == "message")
    text = message.split("text='", 1)[1].removesuffix("']")
    steps = [part for part in text.split("|n") if part]
    assert len(steps) == count


@then(parsers.parse("{count:d} {kind} line is written"))
def then_kind_count(ctx: TranslationContext, count: int, kind: str) -> None:
    assert [_kind(line) for line in ctx.lines()].count(kind) == count


@then(parsers.parse('the failure mentions "{text}"'))
def then_failure_mentions(ctx: TranslationContext, text: str) -> None:
    failure = next(line for line in ctx.lines() if _kind(line) == "testFailed")
    assert text in failure


@then(parsers.parse('the exit text closes scenario "{scenario}" and feature "{feature}"'))
def then_exit_closes(ctx: TranslationContext, scenario: str, feature: str) -> None:
    lines = ctx.exit_text.splitlines()
    assert (_kind(lines[-2]), _name(lines[-2])) == ("testFinished", f'"{scenario}"')
    assert (_kind(lines[-1]), _name(lines[-1])) == ("testSuiteFinished", feature)


@then(parsers.parse('the exit text mentions "{text}"'))
def then_exit_mentions(ctx: TranslationContext, text: str) -> None:
    assert text in ctx.exit_text
