"""Port interfaces for the translation engine.

These protocols define the contracts between the host engine adapters, the
translation engine and the output sink. The core depends only on these
interfaces, not concrete implementations.
"""

from typing import Protocol, runtime_checkable

from teamcity_bdd.core.models import LifecycleEvent


@runtime_checkable
class LifecycleListener(Protocol):
    """Port for consumers of lifecycle events.

    Host engine adapters deliver every event through this interface.
    Examples: TeamCityTranslator.
    """

    def handle(self, event: LifecycleEvent) -> None:
        """Process a single lifecycle event."""
        ...


@runtime_checkable
class WritableStream(Protocol):
    """Port for the sink protocol lines are written to.

    Any text stream satisfies it, e.g. sys.stdout or io.StringIO.
    """

    def write(self, text: str, /) -> object:
        """Write text to the sink."""
        ...

    def flush(self) -> None:
        """Flush buffered text to the underlying transport."""
        ...


@runtime_checkable
class BoundaryListener(Protocol):
    """Port for receivers of inferred feature and scenario boundaries."""

    def feature_started(self, name: str) -> None:
        """A new feature identity was adopted."""
        ...

    def feature_finished(self, name: str) -> None:
        """The held feature identity was replaced."""
        ...

    def scenario_started(self, name: str) -> None:
        """A new scenario identity was adopted."""
        ...

    def scenario_finished(self, name: str) -> None:
        """The held scenario identity was replaced or closed."""
        ...
