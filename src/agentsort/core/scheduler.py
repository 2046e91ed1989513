"""
TickScheduler: continuous ticking for a SortEngine.

The only suspension in the system happens BETWEEN ticks: a worker thread
calls engine.step_once(), then waits tick_delay on a stop event. stop()
sets the event, so a tick in flight always completes before the loop exits.

The engine itself stays single-threaded: while the scheduler is running,
nothing else may step it.
"""

from __future__ import annotations
import logging
import threading

from agentsort.core.engine import SortEngine
from agentsort.core.events import Snapshot

logger = logging.getLogger(__name__)


class TickScheduler:
    """Start/stop/step control over one engine."""

    def __init__(self, engine: SortEngine):
        self.engine = engine
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self) -> None:
        """Begin continuous ticking (no-op if already running)."""
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop, name="agentsort-ticks", daemon=True
        )
        self._thread.start()
        logger.info("scheduler started delay=%.3fs", self.engine.tick_delay)

    def stop(self, timeout: float | None = 2.0) -> None:
        """
        Pause between ticks and wait for the worker to exit.

        If the worker is still inside a tick after `timeout`, the scheduler
        keeps reporting `running` until that tick completes.
        """
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        if thread is not None and thread.is_alive():
            # Tick still in flight: keep the handle so `running` guards the engine
            logger.warning("scheduler stopping, tick in flight at step=%d", self.engine.step)
            return
        self._thread = None
        logger.info("scheduler stopped step=%d", self.engine.step)

    def step_once(self) -> Snapshot:
        """Advance exactly one tick while paused."""
        if self.running:
            raise RuntimeError("cannot step while the scheduler is running")
        return self.engine.step_once()

    def reset(self) -> Snapshot:
        """Stop, then rebuild the engine's agent set."""
        self.stop()
        if self.running:
            raise RuntimeError("cannot reset while a tick is in flight")
        return self.engine.reset()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the run ends; returns False on timeout."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout=timeout)
        return not thread.is_alive()

    def _loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                self.engine.step_once()
                if self.engine.finished:
                    logger.info("run finished at step=%d", self.engine.step)
                    break
                # Re-read each tick: tick_rate is adjustable live
                self._stop_event.wait(self.engine.tick_delay)
        except Exception:
            logger.exception("tick loop aborted at step=%d", self.engine.step)
        finally:
            self._stop_event.set()
