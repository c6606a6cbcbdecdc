"""Boundary inference for features and scenarios.

The host engine reports the name of the current feature or scenario over and
over, but never says when one begins or ends. The tracker holds the current
identities and turns name changes into finish/start transitions.
"""

import logging

from teamcity_bdd.core.ports import BoundaryListener

logger = logging.getLogger(__name__)

# Expanded outline rows are reported with the row text as the scenario name
ROW_DELIMITER = "|"


def first_line(name: str) -> str:
    """Return the first line of a possibly multi-line name."""
    return name.split("\n", 1)[0]


def is_row_expansion(name: str) -> bool:
    """Return True if a scenario name is an expanded outline table row."""
    return name.lstrip().startswith(ROW_DELIMITER)


class BoundaryTracker:
    """Tracks the current feature and scenario identities.

    Args:
        listener: Receiver of the inferred transitions.
        expand_outlines: Ignore scenario names that are outline row
            expansions.
    """

    def __init__(self, listener: BoundaryListener, expand_outlines: bool = False) -> None:
        self._listener = listener
        self._expand_outlines = expand_outlines
        self.current_feature: str | None = None
        self.current_scenario: str | None = None

    def observe_feature(self, name: str) -> None:
        """Observe a feature name and emit transitions if it changed.

        The open scenario, if any, is finished before the old feature.
        """
        key = first_line(name)
        if key == self.current_feature:
            return
        if self.current_feature is not None:
            self.close_scenario()
            logger.debug("Feature finished: %s", self.current_feature)
            self._listener.feature_finished(self.current_feature)
        self.current_feature = key
        logger.debug("Feature started: %s", key)
        self._listener.feature_started(key)

    def observe_scenario(self, name: str) -> bool:
        """Observe a scenario name and emit transitions if it changed.

        Args:
            name: Scenario name as reported by the engine.

        Returns:
            False if the name was ignored as an outline row expansion,
            True otherwise.
        """
        if self._expand_outlines and is_row_expansion(name):
            logger.debug("Ignoring outline row expansion: %s", name)
            return False
        key = f'"{first_line(name)}"'
        if key == self.current_scenario:
            return True
        self.close_scenario()
        self.current_scenario = key
        logger.debug("Scenario started: %s", key)
        self._listener.scenario_started(key)
        return True

    def close_scenario(self) -> None:
        """Finish the open scenario, if any, and forget its identity."""
        if self.current_scenario is None:
            return
        logger.debug("Scenario finished: %s", self.current_scenario)
        finished, self.current_scenario = self.current_scenario, None
        self._listener.scenario_finished(finished)
