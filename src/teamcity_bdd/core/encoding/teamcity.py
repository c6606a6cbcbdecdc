"""TeamCity service message encoder.

Each function returns a single protocol line without the trailing newline:

    ##teamcity[<kind> timestamp='<ts>' name='<escaped>' ...]
"""

from collections.abc import Iterable

from teamcity_bdd.core.escaping import escape

# Escaped newline, used to join buffered lines inside one message attribute
ESCAPED_NEWLINE = "|n"


def service_message(kind: str, timestamp: str | None = None, **attributes: object) -> str:
    """Encode one service message with escaped attribute values.

    Args:
        kind: Message kind, e.g. "testStarted".
        timestamp: Full timestamp attribute; omitted when None.
        **attributes: Attribute values, escaped in keyword order.

    Returns:
        The protocol line.
    """
    parts = [kind]
    if timestamp is not None:
        parts.append(f"timestamp='{escape(timestamp)}'")
    parts.extend(f"{key}='{escape(value)}'" for key, value in attributes.items())
    return f"##teamcity[{' '.join(parts)}]"


def suite_started(name: str, timestamp: str) -> str:
    """Encode a testSuiteStarted line."""
    return service_message("testSuiteStarted", timestamp, name=name)


def suite_finished(name: str, timestamp: str) -> str:
    """Encode a testSuiteFinished line."""
    return service_message("testSuiteFinished", timestamp, name=name)


def test_started(name: str, timestamp: str) -> str:
    """Encode a testStarted line that asks TeamCity to capture stdout."""
    return service_message(
        "testStarted", timestamp, name=name, captureStandardOutput="true"
    )


def test_finished(name: str, timestamp: str) -> str:
    """Encode a testFinished line."""
    return service_message("testFinished", timestamp, name=name)


def test_failed(name: str, message: str, details: str, timestamp: str) -> str:
    """Encode a testFailed line.

    Args:
        name: Raw test name.
        message: Raw failure message.
        details: Raw failure details, usually a traceback.
        timestamp: Full timestamp attribute.
    """
    return service_message(
        "testFailed", timestamp, name=name, message=message, details=details
    )


def message_text(escaped_lines: Iterable[str]) -> str:
    """Encode already-escaped lines as a single message line.

    Args:
        escaped_lines: Lines that have been escaped exactly once.

    Returns:
        The protocol line, or an empty string if there are no lines.
    """
    lines = list(escaped_lines)
    if not lines:
        return ""
    joined = ESCAPED_NEWLINE.join(lines)
    return f"##teamcity[message text='{ESCAPED_NEWLINE}{joined}{ESCAPED_NEWLINE}']"
