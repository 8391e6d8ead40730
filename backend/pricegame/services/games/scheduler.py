import logging
import threading
from typing import Callable, Optional


log = logging.getLogger(__name__)


class Ticker:
    """Single per-second countdown driver.

    - At most one countdown task is alive; `start()` retires the previous one
    - Retiring is done by bumping `generation`; a task whose generation is
      stale stops after its current sleep and never calls back again
    - A tick already running when `cancel()` is called still completes, so the
      callback receives its generation and must check it
    - With `enabled=False` (tests) generations are tracked but no task is spawned
    """

    def __init__(self, start_task: Callable, sleep: Callable[[float], None],
                 interval: float = 1.0, enabled: bool = True, logger=None):
        self.start_task = start_task
        self.sleep = sleep
        self.interval = interval
        self.enabled = enabled
        self.logger = logger or log
        self.generation = 0
        self.active = False
        self._lock = threading.Lock()

    def start(self, callback: Callable[[int], None]) -> int:
        with self._lock:
            self.generation += 1
            generation = self.generation
            self.active = True
        self.logger.info(f"[timer-set] generation={generation} interval={self.interval}s")
        if self.enabled:
            self.start_task(self._worker, generation, callback)
        return generation

    def cancel(self) -> None:
        with self._lock:
            if not self.active:
                return
            self.generation += 1
            self.active = False
        self.logger.info(f"[timer-cancel] generation={self.generation}")

    def is_current(self, generation: Optional[int]) -> bool:
        return self.active and generation == self.generation

    def _worker(self, generation: int, callback: Callable[[int], None]) -> None:
        while self.is_current(generation):
            self.sleep(self.interval)
            if not self.is_current(generation):
                break
            try:
                callback(generation)
            except Exception:
                self.logger.exception(f"[timer-error] generation={generation}")
        self.logger.debug(f"[timer-exit] generation={generation}")
