"""Shared test fixtures for all test modules."""

import io
from collections.abc import Callable, Iterator
from datetime import datetime

import pytest

from teamcity_bdd.core.models import TranslatorConfig
from teamcity_bdd.core.translator import TeamCityTranslator

pytest_plugins = ["pytester"]

FIXED_MOMENT = datetime(2024, 1, 2, 3, 4, 5, 678901)
SHORT_TS = "03:04:05.678"
FULL_TS = "2024-01-02T03:04:05.678"


def fixed_clock() -> datetime:
    """Clock that always returns FIXED_MOMENT."""
    return FIXED_MOMENT


def output_lines(stream: io.StringIO) -> list[str]:
    """Return the non-empty lines written to a stream."""
    return [line for line in stream.getvalue().splitlines() if line]


@pytest.fixture
def stream() -> io.StringIO:
    """Provide an in-memory sink for protocol lines."""
    return io.StringIO()


@pytest.fixture
def exit_stream() -> io.StringIO:
    """Provide an in-memory sink for the exit callback."""
    return io.StringIO()


@pytest.fixture
def make_translator(
    stream: io.StringIO, exit_stream: io.StringIO
) -> Iterator[Callable[..., TeamCityTranslator]]:
    """Factory fixture for translators writing to the shared stream.

    Every translator created is finalized at teardown so that no exit
    callback outlives the test.
    """
    created: list[TeamCityTranslator] = []

    def _make(expand_outlines: bool = False) -> TeamCityTranslator:
        translator = TeamCityTranslator(
            stream,
            TranslatorConfig(expand_outlines=expand_outlines),
            clock=fixed_clock,
            exit_stream=exit_stream,
        )
        created.append(translator)
        return translator

    yield _make
    for translator in created:
        translator.finalize()


@pytest.fixture
def translator(make_translator: Callable[..., TeamCityTranslator]) -> TeamCityTranslator:
    """Translator with default configuration and a fixed clock."""
    return make_translator()
