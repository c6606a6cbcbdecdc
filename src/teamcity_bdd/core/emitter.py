"""Emitter writing TeamCity service messages to the primary sink."""

from datetime import datetime

from teamcity_bdd.core.encoding import teamcity
from teamcity_bdd.core.ports import WritableStream
from teamcity_bdd.core.timestamps import Clock, timestamp_full


class Emitter:
    """Writes one protocol line per call, flushing after every write.

    A run that dies mid-way still leaves every written line on the sink.

    Args:
        stream: Sink the lines are written to.
        clock: Source of the current local time (default datetime.now).
    """

    def __init__(self, stream: WritableStream, clock: Clock = datetime.now) -> None:
        self._stream = stream
        self._clock = clock

    def timestamp(self) -> str:
        """Return the current time formatted for protocol attributes."""
        return timestamp_full(self._clock())

    def write(self, text: str) -> None:
        """Write pre-built protocol text followed by a newline.

        Empty text is never written.
        """
        if not text:
            return
        self._stream.write(text if text.endswith("\n") else f"{text}\n")
        self._stream.flush()

    def suite_started(self, name: str) -> None:
        """Write testSuiteStarted for a feature."""
        self.write(teamcity.suite_started(name, self.timestamp()))

    def suite_finished(self, name: str) -> None:
        """Write testSuiteFinished for a feature."""
        self.write(teamcity.suite_finished(name, self.timestamp()))

    def test_started(self, name: str) -> None:
        """Write testStarted for a scenario."""
        self.write(teamcity.test_started(name, self.timestamp()))

    def test_finished(self, name: str) -> None:
        """Write testFinished for a scenario."""
        self.write(teamcity.test_finished(name, self.timestamp()))

    def test_failed(self, name: str, message: str, details: str) -> None:
        """Write testFailed for a scenario."""
        self.write(teamcity.test_failed(name, message, details, self.timestamp()))
