"""Python logging handler adapter for teamcity_bdd.

This adapter bridges Python's standard library logging module to the
translator's output buffer, so that application logs written while a
scenario runs are reported with that scenario's step output.
"""

import logging
import traceback
from datetime import datetime

from teamcity_bdd.core.models import Severity
from teamcity_bdd.core.timestamps import timestamp_short
from teamcity_bdd.core.translator import TeamCityTranslator

# Loggers of the reporter itself are never routed back into the buffer
_OWN_LOGGER_PREFIX = "teamcity_bdd"


class TeamCityLogHandler(logging.Handler):
    """Logging handler that appends log records to the open scenario output.

    Records at WARNING and above are buffered with Severity.WARNING, the rest
    with Severity.NORMAL.

    Example:
        ```python
        translator = TeamCityTranslator(sys.stdout)
        handler = TeamCityLogHandler(translator)
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(self, translator: TeamCityTranslator, level: int = logging.NOTSET) -> None:
        """Initialize the handler with the translator to report through.

        Args:
            translator: Translator whose output buffer receives the records.
            level: Minimum level of records to handle (default NOTSET).
        """
        super().__init__(level)
        self._translator = translator

    def format_record(self, record: logging.LogRecord) -> str:
        """Render a record as one step-aligned line plus any traceback.

        Args:
            record: The log record to render.

        Returns:
            "<time> <level> <logger>: <message>" followed by the exception
            traceback, if the record carries one.
        """
        moment = datetime.fromtimestamp(record.created)
        line = "%s %10s %s: %s" % (
            timestamp_short(moment),
            record.levelname.lower(),
            record.name,
            record.getMessage(),
        )
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                trace = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
                line = f"{line}\n{trace.rstrip()}"
        return line

    def emit(self, record: logging.LogRecord) -> None:
        """Append a log record to the translator's output buffer.

        Args:
            record: The log record to emit.
        """
        if record.name.startswith(_OWN_LOGGER_PREFIX):
            return
        try:
            message = self.format_record(record)
        except Exception:
            self.handleError(record)
            return
        severity = Severity.WARNING if record.levelno >= logging.WARNING else Severity.NORMAL
        self._translator.log_message(message, severity)
