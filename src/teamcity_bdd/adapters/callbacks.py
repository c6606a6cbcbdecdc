"""Named callback surface for host test engines.

Engines that report progress through fixed callbacks (feature name, scenario
name, step executed, ...) call these methods. Each call becomes one
lifecycle event delivered to a LifecycleListener.
"""

from teamcity_bdd.core.models import (
    ExceptionRaised,
    FeatureNamed,
    MatchedStep,
    OutlineTable,
    OutlineTableStarted,
    ScenarioNamed,
    StepExecuted,
    TableRow,
    TableRowExecuted,
)
from teamcity_bdd.core.ports import LifecycleListener


def _check_indent(indent: int) -> int:
    if indent < 0:
        raise ValueError(f"indent must be non-negative, got {indent}")
    return indent


class CallbackAdapter:
    """Adapts the engine callback surface to lifecycle events.

    Example:
        ```python
        translator = TeamCityTranslator(sys.stdout)
        callbacks = CallbackAdapter(translator)
        callbacks.feature_name("Login")
        callbacks.scenario_name("Scenario", "should succeed")
        ```
    """

    def __init__(self, listener: LifecycleListener) -> None:
        self._listener = listener

    def feature_name(self, name: str) -> None:
        """Report the name of the running feature."""
        self._listener.handle(FeatureNamed(name=name))

    def scenario_name(
        self, keyword: str, name: str, location: str = "", indent: int = 0
    ) -> None:
        """Report the name of the running scenario or expanded outline row.

        Raises:
            ValueError: If indent is negative.
        """
        self._listener.handle(
            ScenarioNamed(
                keyword=keyword, name=name, location=location, indent=_check_indent(indent)
            )
        )

    def step_executed(
        self,
        keyword: str,
        matched_step: MatchedStep,
        status: str,
        indent: int = 0,
        background: bool = False,
    ) -> StepExecuted:
        """Report a step that finished running.

        Returns:
            The delivered event, so callers can pair a following exception
            with it.

        Raises:
            ValueError: If indent is negative.
        """
        event = StepExecuted(
            keyword=keyword,
            step=matched_step,
            status=status,
            indent=_check_indent(indent),
            background=background,
        )
        self._listener.handle(event)
        return event

    def exception(
        self, exception: BaseException, status: str, step: StepExecuted | None = None
    ) -> None:
        """Report an exception raised while running a step."""
        self._listener.handle(ExceptionRaised(exception=exception, status=status, step=step))

    def before_outline_table(self, table: OutlineTable) -> None:
        """Report that the rows of an outline table are about to run."""
        self._listener.handle(OutlineTableStarted(table=table))

    def after_table_row(self, row: TableRow) -> None:
        """Report an outline table row that finished running."""
        self._listener.handle(TableRowExecuted(row=row))
