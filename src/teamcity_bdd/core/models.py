"""Core domain models for lifecycle events and reporter state."""

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    """Label attached to each buffered step message."""

    NORMAL = "NORMAL"
    WARNING = "WARNING"


@dataclass(frozen=True)
class TranslatorConfig:
    """Configuration for the translation engine.

    Attributes:
        expand_outlines: Treat outline-table row expansions as part of the
            parent scenario rather than as new tests.
    """

    expand_outlines: bool = False


@dataclass(frozen=True)
class MatchedStep:
    """A step whose text has had its arguments substituted.

    Attributes:
        text: Step text without the keyword.
        location: Source location, usually "path:line".
    """

    text: str
    location: str = ""


@dataclass(frozen=True)
class OutlineTable:
    """The examples table of a scenario outline.

    Attributes:
        headings: Column names of the examples table.
    """

    headings: tuple[str, ...] = ()


@dataclass(frozen=True)
class TableRow:
    """One executed row of an outline table.

    Attributes:
        name: Row text, e.g. "| 12 | 5 | 7 |".
        location: Source location of the row.
        exception: The exception raised while running the row, if any.
    """

    name: str
    location: str = ""
    exception: BaseException | None = None


# === Lifecycle events ===


@dataclass(frozen=True)
class FeatureNamed:
    """The engine reports the name of the feature being run."""

    name: str


@dataclass(frozen=True)
class ScenarioNamed:
    """The engine reports the name of the scenario being run."""

    keyword: str
    name: str
    location: str = ""
    indent: int = 0


@dataclass(frozen=True)
class StepExecuted:
    """A step finished running with the given status."""

    keyword: str
    step: MatchedStep
    status: str
    indent: int = 0
    background: bool = False


@dataclass(frozen=True)
class ExceptionRaised:
    """An exception was raised while running a step.

    Attributes:
        exception: The raised exception.
        status: Engine status for the step; only "failed" is reported.
        step: The step that raised, when the engine knows it.
    """

    exception: BaseException
    status: str
    step: StepExecuted | None = None


@dataclass(frozen=True)
class OutlineTableStarted:
    """The engine is about to run the rows of an outline table."""

    table: OutlineTable = field(default_factory=OutlineTable)


@dataclass(frozen=True)
class TableRowExecuted:
    """An outline table row finished running."""

    row: TableRow


LifecycleEvent = (
    FeatureNamed
    | ScenarioNamed
    | StepExecuted
    | ExceptionRaised
    | OutlineTableStarted
    | TableRowExecuted
)
