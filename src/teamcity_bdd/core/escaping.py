"""Escaping of attribute values for TeamCity service messages."""

# Applied in order; "|" must come first so later insertions are not re-escaped.
_ESCAPES = (
    ("|", "||"),
    ("\n", "|n"),
    ("\r", "|r"),
    ("'", "|'"),
    ("]", "|]"),
)

_UNESCAPES = {
    "|": "|",
    "n": "\n",
    "r": "\r",
    "'": "'",
    "]": "]",
}


def escape(text: object) -> str:
    """Escape text for use as a service message attribute value.

    Not idempotent: escaping twice double-escapes, so raw text must be
    escaped exactly once.

    Args:
        text: Raw value. Non-string values are converted with str().

    Returns:
        The value with surrounding whitespace trimmed and protocol
        metacharacters escaped.
    """
    result = str(text).strip()
    for raw, escaped in _ESCAPES:
        result = result.replace(raw, escaped)
    return result


def unescape(text: str) -> str:
    """Reverse escape() in a single left-to-right pass.

    Unknown escape sequences and a trailing lone "|" are kept verbatim.

    Args:
        text: An escaped attribute value.

    Returns:
        The unescaped value, surrounding whitespace already trimmed.
    """
    chars: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if char == "|" and i + 1 < len(text) and text[i + 1] in _UNESCAPES:
            chars.append(_UNESCAPES[text[i + 1]])
            i += 2
            continue
        chars.append(char)
        i += 1
    return "".join(chars)
