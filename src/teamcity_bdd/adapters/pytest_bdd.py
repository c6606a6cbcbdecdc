"""pytest-bdd adapter for the TeamCity translator.

pytest-bdd reports scenarios and steps through pytest hooks. This adapter
maps those hooks onto the callback surface, so the translator sees the same
name-driven event stream as with any other engine.
"""

import logging
import sys
from dataclasses import replace
from typing import Any

import pytest

from teamcity_bdd.adapters.callbacks import CallbackAdapter
from teamcity_bdd.adapters.logging import TeamCityLogHandler
from teamcity_bdd.core.formatting import FAILED, PASSED
from teamcity_bdd.core.models import MatchedStep, OutlineTable, StepExecuted, TableRow
from teamcity_bdd.core.translator import TeamCityTranslator

UNDEFINED = "undefined"

# pytest-bdd parametrizes outline rows with this argument
_EXAMPLE_PARAM = "_pytest_bdd_example"


class TerminalStream:
    """Writes whole lines to the terminal with pytest's output capture suspended.

    TeamCity only reads a service message at the start of a line, so the
    terminal reporter's progress line is ended before each write.

    Args:
        capture_manager: pytest's "capturemanager" plugin, or None when
            capturing is disabled.
        terminal_reporter: pytest's "terminalreporter" plugin, or None when
            it is disabled. Without it, text goes to sys.stdout.
    """

    def __init__(self, capture_manager: Any = None, terminal_reporter: Any = None) -> None:
        self._capture_manager = capture_manager
        self._terminal_reporter = terminal_reporter

    def write(self, text: str) -> int:
        """Write text at the start of a terminal line."""
        if self._capture_manager is None:
            self._write(text)
        else:
            with self._capture_manager.global_and_fixture_disabled():
                self._write(text)
        return len(text)

    def _write(self, text: str) -> None:
        if self._terminal_reporter is None:
            sys.stdout.write(text)
            sys.stdout.flush()
            return
        self._terminal_reporter.ensure_newline()
        self._terminal_reporter.write(text, flush=True)

    def flush(self) -> None:
        """Flush sys.stdout."""
        sys.stdout.flush()


def _location(feature: Any, line_number: int | None) -> str:
    path = getattr(feature, "rel_filename", None) or getattr(feature, "filename", "")
    return f"{path}:{line_number}" if line_number is not None else str(path)


def _example_row(request: pytest.FixtureRequest) -> dict[str, str]:
    """Return the outline example values of the running test, if any."""
    callspec = getattr(request.node, "callspec", None)
    if callspec is None:
        return {}
    return dict(callspec.params.get(_EXAMPLE_PARAM) or {})


def row_text(example: dict[str, str]) -> str:
    """Render example values as a table row, e.g. "| 12 | 5 |"."""
    return "| " + " | ".join(str(value) for value in example.values()) + " |"


class PytestBddReporter:
    """pytest plugin object forwarding pytest-bdd hooks to a translator.

    Args:
        translator: Translator receiving the events.
        expand_outlines: Fold outline rows into their parent scenario and
            report each row as table output.
        capture_log: Route log records into the open scenario's output.
    """

    def __init__(
        self,
        translator: TeamCityTranslator,
        expand_outlines: bool = False,
        capture_log: bool = False,
    ) -> None:
        self.translator = translator
        self._callbacks = CallbackAdapter(translator)
        self._expand_outlines = expand_outlines
        self._log_handler = TeamCityLogHandler(translator) if capture_log else None
        self._outline: str | None = None
        self._row: TableRow | None = None
        self._row_error: BaseException | None = None

    def _step_executed(self, feature: Any, step: Any, status: str) -> StepExecuted:
        matched = MatchedStep(text=step.name, location=_location(feature, step.line_number))
        return self._callbacks.step_executed(
            step.keyword.strip(),
            matched,
            status,
            background=getattr(step, "background", None) is not None,
        )

    def _step_failed(
        self, feature: Any, step: Any, status: str, exception: BaseException
    ) -> None:
        event = self._step_executed(feature, step, status)
        self._callbacks.exception(exception, FAILED, step=event)
        if self._row is not None and self._row_error is None:
            self._row_error = exception

    @pytest.hookimpl
    def pytest_sessionstart(self, session: pytest.Session) -> None:
        if self._log_handler is not None:
            logging.getLogger().addHandler(self._log_handler)

    @pytest.hookimpl
    def pytest_bdd_before_scenario(
        self, request: pytest.FixtureRequest, feature: Any, scenario: Any
    ) -> None:
        self._callbacks.feature_name(feature.name)
        keyword = getattr(scenario, "keyword", "Scenario")
        location = _location(feature, scenario.line_number)
        example = _example_row(request)
        self._row = None
        self._row_error = None

        if not example:
            self._outline = None
            self._callbacks.scenario_name(keyword, scenario.name, location)
            return

        row = row_text(example)
        if not self._expand_outlines:
            self._callbacks.scenario_name(keyword, f"{scenario.name} {row}", location)
            return

        self._callbacks.scenario_name(keyword, scenario.name, location)
        if self._outline != location:
            self._outline = location
            self._callbacks.before_outline_table(OutlineTable(headings=tuple(example)))
        self._callbacks.scenario_name(keyword, row, location)
        self._row = TableRow(name=row, location=location)

    @pytest.hookimpl
    def pytest_bdd_after_step(self, feature: Any, step: Any) -> None:
        self._step_executed(feature, step, PASSED)

    @pytest.hookimpl
    def pytest_bdd_step_error(
        self, feature: Any, step: Any, exception: BaseException
    ) -> None:
        self._step_failed(feature, step, FAILED, exception)

    @pytest.hookimpl
    def pytest_bdd_step_func_lookup_error(
        self, feature: Any, step: Any, exception: BaseException
    ) -> None:
        self._step_failed(feature, step, UNDEFINED, exception)

    @pytest.hookimpl
    def pytest_bdd_after_scenario(self) -> None:
        if self._row is None:
            return
        self._callbacks.after_table_row(replace(self._row, exception=self._row_error))
        self._row = None
        self._row_error = None

    @pytest.hookimpl
    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        self.close()

    def close(self) -> None:
        """Detach the log handler and write the trailing messages."""
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
        self.translator.close()
