"""Background frame counter for the pulsing border."""

import logging
import threading
from typing import Optional

from .constants import PagerConstants

logger = logging.getLogger(__name__)


class AnimationTicker:
    """Advances ``frame`` every ``interval`` seconds on a daemon thread.

    The counter only ever increases. The render loop reads it; nothing
    else is shared with the ticker thread.
    """

    def __init__(self, interval: float = PagerConstants.TICK_INTERVAL):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.interval = interval
        self._frame = 0
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def frame(self) -> int:
        with self._lock:
            return self._frame

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> int:
        """Advance one frame and return the new frame number."""
        with self._lock:
            self._frame += 1
            return self._frame

    def start(self):
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="manpager-ticker", daemon=True)
        self._thread.start()
        logger.debug("animation ticker started (interval %.3fs)", self.interval)

    def stop(self):
        """Stop the thread and wait for it to exit. Safe to call repeatedly."""
        self._stopped.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join()
            logger.debug("animation ticker stopped at frame %d", self.frame)

    def _run(self):
        while not self._stopped.wait(self.interval):
            self.tick()

    def __enter__(self) -> 'AnimationTicker':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
