"""Output buffer holding step messages for the open scenario."""

import logging

from teamcity_bdd.core.encoding.teamcity import message_text
from teamcity_bdd.core.escaping import escape
from teamcity_bdd.core.models import Severity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.NORMAL: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
}


class OutputBuffer:
    """Ordered buffer of escaped step messages.

    Messages are emitted together, as one message line, when the owning
    scenario finishes. Severity does not reach the protocol; it only picks
    the level of the diagnostic log record.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def __len__(self) -> int:
        return len(self._messages)

    @property
    def messages(self) -> tuple[str, ...]:
        """Buffered messages in arrival order, already escaped."""
        return tuple(self._messages)

    def append(self, message: str, severity: Severity = Severity.NORMAL) -> None:
        """Escape a raw message and add it to the buffer.

        Args:
            message: Raw message text.
            severity: Label for the message (default NORMAL).
        """
        logger.log(_LOG_LEVELS[severity], "%s", message)
        self._messages.append(escape(message))

    def drain(self, purge: bool = True) -> str:
        """Return all buffered messages as a single message line.

        Args:
            purge: Empty the buffer afterwards (default True). Pass False to
                preview the content without losing it.

        Returns:
            The protocol line, or an empty string if the buffer is empty.
        """
        text = message_text(self._messages)
        if purge:
            self._messages = []
        return text
