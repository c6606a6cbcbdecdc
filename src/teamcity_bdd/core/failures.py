"""Failure registry enforcing one reported failure per scenario."""

import logging
from collections.abc import Hashable
from dataclasses import dataclass

from teamcity_bdd.core.escaping import escape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FailureRecord:
    """The first failure reported for a scenario.

    Attributes:
        message: Escaped failure message.
        details: Escaped failure details.
    """

    message: str
    details: str


class FailureRegistry:
    """Set-once mapping from scenario key to failure record.

    TeamCity accepts a single failure per test. Tests are scenarios, not
    steps, so only the first failure within a scenario is kept.
    """

    def __init__(self) -> None:
        self._records: dict[Hashable, FailureRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def is_recorded(self, key: Hashable) -> bool:
        """Return True if a failure was already recorded for key."""
        return key in self._records

    def get(self, key: Hashable) -> FailureRecord | None:
        """Return the failure recorded for key, if any."""
        return self._records.get(key)

    def record_failure(self, key: Hashable, message: str, details: str = "") -> bool:
        """Record a failure unless one is already present for key.

        Args:
            key: Scenario key.
            message: Raw failure message.
            details: Raw failure details.

        Returns:
            True if this call recorded the failure, False if it was absorbed.
        """
        if key in self._records:
            logger.debug("Failure already reported for %r, ignoring", key)
            return False
        self._records[key] = FailureRecord(message=escape(message), details=escape(details))
        return True
