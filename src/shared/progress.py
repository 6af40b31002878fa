"""Single-line console progress for step-wise work such as tracing frames."""

import logging
import sys
import time
from typing import TextIO

logger = logging.getLogger(__name__)

_BAR_LEN = 30


def format_eta(seconds: float | None) -> str:
    """``MM:SS`` (or ``HH:MM:SS``); unknown remaining time is ``--:--``."""
    if seconds is None or seconds == float('inf'):
        return '--:--'
    m, s = divmod(int(seconds), 60)
    h, m = divmod(m, 60)
    if h > 0:
        return f'{h:02d}:{m:02d}:{s:02d}'
    return f'{m:02d}:{s:02d}'


class ConsoleProgress:
    """
    Progress bar redrawn in place on one console line.

    Args:
        total: Expected number of steps (at least 1).
        label: Text shown before the bar.
        stream: Output stream (None = ``sys.stdout`` at the time of each write).

    """

    def __init__(
        self,
        total: int,
        label: str = 'Progress',
        stream: TextIO | None = None,
    ) -> None:
        self.total = max(1, int(total))
        self.done = 0
        self.label = label
        self.start = time.monotonic()
        self._stream = stream
        self._last_len = 0
        self._render()

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _render(self) -> None:
        elapsed = max(1e-6, time.monotonic() - self.start)
        rate = self.done / elapsed
        remaining = (self.total - self.done) / rate if rate > 0 else float('inf')
        filled = _BAR_LEN * self.done // self.total
        bar = '█' * filled + '░' * (_BAR_LEN - filled)
        msg = (
            f'{self.label}: [{bar}] {self.done}/{self.total} | {rate:4.1f}/s'
            f' | ETA {format_eta(remaining)}'
        )
        # pad to wipe the tail of a longer previous line
        pad = max(0, self._last_len - len(msg))
        self.stream.write('\r' + msg + ' ' * pad)
        self.stream.flush()
        self._last_len = len(msg)

    def step_sync(self, n: int = 1) -> None:
        self.done = min(self.total, self.done + n)
        self._render()

    def close(self) -> None:
        """End the progress line."""
        if self._last_len:
            self.stream.write('\n')
            self.stream.flush()
            self._last_len = 0
        logger.debug(
            '%s finished: %d/%d in %.2fs',
            self.label,
            self.done,
            self.total,
            time.monotonic() - self.start,
        )
