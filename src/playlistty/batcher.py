"""Sequential, size-limited playlist mutations."""

from typing import Callable, Iterator, List, Optional, Sequence

from .errors import PlaylisttyError
from .logging_config import get_logger

logger = get_logger(__name__)


class RateAwareBatcher:
    """Split IDs into windows of at most ``batch_size`` and send them one by one.

    A failed window is logged and skipped. Nothing is retried and the
    remaining windows are still sent.
    """

    def __init__(self, batch_size: int) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size

    def windows(self, ids: Sequence[str]) -> Iterator[List[str]]:
        """Yield consecutive slices of ``ids`` in order."""
        for start in range(0, len(ids), self.batch_size):
            yield list(ids[start : start + self.batch_size])

    def run(
        self,
        ids: Sequence[str],
        send: Callable[[List[str]], Optional[int]],
        label: str = "Processed",
    ) -> int:
        """Send every window through ``send``.

        Args:
            ids: Identifiers to send, in order
            send: Issues one request for one window; may return how many
                items of the window failed
            label: Verb used in the per-window log line

        Returns:
            Number of requests issued
        """
        issued = 0
        start = 0
        for window in self.windows(ids):
            first, last = start + 1, start + len(window)
            start = last
            issued += 1
            try:
                failed = send(window) or 0
            except PlaylisttyError as e:
                logger.error("Error on items %d-%d: %s", first, last, str(e))
                continue
            if failed:
                logger.warning("%s items %d-%d (%d failed)", label, first, last, failed)
            else:
                logger.info("%s items %d-%d", label, first, last)
        return issued
