"""Exit flusher for the trailing message of a run.

The host engine never reports that the last scenario has finished. The
translator keeps the text that would close the open scenario and feature
here, and the flusher writes it at interpreter exit unless the owner
finalizes first.
"""

import atexit
import sys

from teamcity_bdd.core.ports import WritableStream


class ExitFlusher:
    """Holds the pending trailing text and writes it at most once.

    The atexit callback is registered as the last step of construction, so
    it never observes a half-built flusher.

    Args:
        stream: Where the callback writes. Defaults to the sys.stdout current
            at exit time.
    """

    def __init__(self, stream: WritableStream | None = None) -> None:
        self._stream = stream
        self._pending: str | None = None
        self._done = False
        atexit.register(self.flush)

    @property
    def pending(self) -> str | None:
        """The text that would be written at exit right now."""
        return self._pending

    @property
    def done(self) -> bool:
        """True once the text was written or taken."""
        return self._done

    def update(self, text: str | None) -> None:
        """Replace the pending text. Ignored once the flusher is done."""
        if not self._done:
            self._pending = text or None

    def take(self) -> str:
        """Return the pending text and disarm the exit callback."""
        text = "" if self._done else (self._pending or "")
        self._done = True
        self._pending = None
        atexit.unregister(self.flush)
        return text

    def flush(self) -> None:
        """Write the pending text, if any, and flush. Runs at most once."""
        if self._done:
            return
        self._done = True
        text, self._pending = self._pending, None
        stream = self._stream or sys.stdout
        if text:
            stream.write(text if text.endswith("\n") else f"{text}\n")
        stream.flush()
