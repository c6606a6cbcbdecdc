"""Translation of lifecycle events into TeamCity service messages."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from teamcity_bdd.core.boundaries import BoundaryTracker
from teamcity_bdd.core.buffer import OutputBuffer
from teamcity_bdd.core.emitter import Emitter
from teamcity_bdd.core.encoding import teamcity
from teamcity_bdd.core.exit import ExitFlusher
from teamcity_bdd.core.failures import FailureRegistry
from teamcity_bdd.core.formatting import (
    FAILED,
    PASSED,
    format_exception,
    format_step,
    format_table_row,
)
from teamcity_bdd.core.models import (
    ExceptionRaised,
    FeatureNamed,
    LifecycleEvent,
    OutlineTableStarted,
    ScenarioNamed,
    Severity,
    StepExecuted,
    TableRowExecuted,
    TranslatorConfig,
)
from teamcity_bdd.core.ports import WritableStream
from teamcity_bdd.core.timestamps import Clock, timestamp_full, timestamp_short

logger = logging.getLogger(__name__)


class TeamCityTranslator:
    """Translates a lifecycle event stream into TeamCity service messages.

    Implements LifecycleListener. Host engine adapters call handle() for
    every event, strictly in order, from a single thread.

    Example:
        ```python
        translator = TeamCityTranslator(sys.stdout)
        translator.handle(FeatureNamed("Login"))
        translator.handle(ScenarioNamed("Scenario", "should succeed"))
        ...
        translator.close()
        ```
    """

    def __init__(
        self,
        stream: WritableStream,
        config: TranslatorConfig | None = None,
        clock: Clock = datetime.now,
        exit_stream: WritableStream | None = None,
    ) -> None:
        """Initialize the translator.

        Args:
            stream: Primary sink for protocol lines.
            config: Translator options (default TranslatorConfig()).
            clock: Source of the current local time.
            exit_stream: Sink used by the exit callback. Defaults to
                sys.stdout at exit time.
        """
        self.config = config or TranslatorConfig()
        self._clock = clock
        self.emitter = Emitter(stream, clock)
        self.buffer = OutputBuffer()
        self.failures = FailureRegistry()
        self.tracker = BoundaryTracker(self, expand_outlines=self.config.expand_outlines)
        self._current_step: str | None = None
        self._last_step: StepExecuted | None = None
        self._handlers: dict[type, Callable[[Any], None]] = {
            FeatureNamed: self._on_feature,
            ScenarioNamed: self._on_scenario,
            StepExecuted: self._on_step,
            ExceptionRaised: self._on_exception,
            OutlineTableStarted: self._on_outline_table,
            TableRowExecuted: self._on_table_row,
        }
        self._exit = ExitFlusher(exit_stream)

    @property
    def current_step(self) -> str | None:
        """The formatted line of the most recent step, if any."""
        return self._current_step

    @property
    def trailing_text(self) -> str | None:
        """Text that would close the open scenario and feature at exit."""
        return self._exit.pending

    @property
    def scenario_key(self) -> tuple[str | None, str | None]:
        """Key of the open scenario in the failure registry."""
        return (self.tracker.current_feature, self.tracker.current_scenario)

    def handle(self, event: LifecycleEvent) -> None:
        """Route a lifecycle event and refresh the trailing exit text.

        Raises:
            TypeError: If the event type is not a lifecycle event.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"unsupported lifecycle event: {type(event).__name__}")
        handler(event)
        self._exit.update(self._compose_trailing())

    def log_message(self, message: str, severity: Severity = Severity.NORMAL) -> None:
        """Append a free-form line to the open scenario's output."""
        self._append(message, severity)
        self._exit.update(self._compose_trailing())

    def finalize(self) -> str:
        """Return the trailing text and disarm the exit callback.

        Only the first call returns text; later calls return "".
        """
        return self._exit.take()

    def close(self) -> None:
        """Write the trailing text to the primary sink."""
        self.emitter.write(self.finalize())

    # === BoundaryListener ===

    def feature_started(self, name: str) -> None:
        self.emitter.suite_started(name)

    def feature_finished(self, name: str) -> None:
        self.emitter.suite_finished(name)

    def scenario_started(self, name: str) -> None:
        self._current_step = None
        self._last_step = None
        self.emitter.test_started(name)

    def scenario_finished(self, name: str) -> None:
        self.emitter.write(self.buffer.drain(purge=True))
        self.emitter.test_finished(name)

    # === Event handlers ===

    def _short_timestamp(self) -> str:
        return timestamp_short(self._clock())

    def _on_feature(self, event: FeatureNamed) -> None:
        self.tracker.observe_feature(event.name)

    def _on_scenario(self, event: ScenarioNamed) -> None:
        self.tracker.observe_scenario(event.name)

    def _on_step(self, event: StepExecuted) -> None:
        line = format_step(self._short_timestamp(), event)
        self._current_step = line
        self._last_step = event
        severity = Severity.NORMAL if event.status == PASSED else Severity.WARNING
        self._append(line, severity)

    def _on_exception(self, event: ExceptionRaised) -> None:
        if event.status != FAILED:
            logger.debug("Ignoring exception with status %s", event.status)
            return
        if event.step is not None and event.step != self._last_step:
            label = format_step(self._short_timestamp(), event.step)
        else:
            label = self._current_step or ""
        self._report_failure(label, format_exception(event.exception))

    def _on_outline_table(self, event: OutlineTableStarted) -> None:
        self._append(f"{self._short_timestamp()} running outline: ")

    def _on_table_row(self, event: TableRowExecuted) -> None:
        row = event.row
        if row.exception is not None:
            message = format_table_row(self._short_timestamp(), row, FAILED)
            self._report_failure(message, format_exception(row.exception))
        else:
            self._append(format_table_row(self._short_timestamp(), row))

    def _append(self, message: str, severity: Severity = Severity.NORMAL) -> None:
        # Output with no open scenario is written at once as its own message
        self.buffer.append(message, severity)
        if self.tracker.current_scenario is None:
            self.emitter.write(self.buffer.drain(purge=True))

    def _report_failure(self, message: str, details: str) -> None:
        if not self.failures.record_failure(self.scenario_key, message, details):
            return
        name = self.tracker.current_scenario or ""
        self.emitter.test_failed(name, message, details)

    def _compose_trailing(self) -> str | None:
        feature = self.tracker.current_feature
        scenario = self.tracker.current_scenario
        if feature is None and scenario is None:
            return None
        timestamp = timestamp_full(self._clock())
        lines = [self.buffer.drain(purge=False)]
        if scenario is not None:
            lines.append(teamcity.test_finished(scenario, timestamp))
        if feature is not None:
            lines.append(teamcity.suite_finished(feature, timestamp))
        return "\n".join(line for line in lines if line)
