"""Readable byte stream over a temporary audio file.

The file belongs to the stream: it is unlinked when the stream closes,
whichever way that happens (fully read, abandoned by the consumer, used
as a context manager, or garbage collected).
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)


class TempAudioStream(io.BufferedReader):
    """Buffered binary reader that deletes its backing file on close.

    Usage::

        with TempAudioStream(path) as stream:
            data = stream.read()
        assert not path.exists()
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._close_listeners: list[Callable[[], None]] = []
        super().__init__(io.FileIO(self._path, "rb"))

    @property
    def path(self) -> Path:
        """Location of the backing file (gone once the stream is closed)."""
        return self._path

    def on_close(self, listener: Callable[[], None]) -> None:
        """Register *listener* to run once, after the file has been removed."""
        self._close_listeners.append(listener)

    def close(self) -> None:
        if self.closed:
            return
        try:
            super().close()
        finally:
            self._path.unlink(missing_ok=True)
            logger.debug("Removed temporary audio file %s", self._path)
            listeners, self._close_listeners = self._close_listeners, []
            for listener in listeners:
                listener()
