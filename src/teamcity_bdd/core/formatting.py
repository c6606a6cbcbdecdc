"""Human-readable text for steps, table rows and exceptions."""

import traceback

from teamcity_bdd.core.models import StepExecuted, TableRow

PASSED = "passed"
FAILED = "failed"


def format_step(short_timestamp: str, step: StepExecuted) -> str:
    """Format an executed step as one aligned log line.

    Args:
        short_timestamp: Time of the step as HH:MM:SS.mmm.
        step: The executed step.

    Returns:
        "<time> <status> <keyword> <text> @ <location>"
    """
    return "%s %10s %s %-90s @ %s" % (
        short_timestamp,
        step.status,
        step.keyword,
        step.step.text,
        step.step.location,
    )


def format_table_row(short_timestamp: str, row: TableRow, status: str = PASSED) -> str:
    """Format an outline table row, aligned like format_step()."""
    return "%s %10s %-90s @ %s" % (short_timestamp, status, row.name, row.location)


def format_exception(exception: BaseException) -> str:
    """Format an exception with its class and full traceback.

    Chained causes and contexts are included.
    """
    header = f"{exception} ({type(exception).__name__})"
    trace = traceback.format_exception(type(exception), exception, exception.__traceback__)
    return "\n".join([header, "".join(trace).rstrip("\n")])
