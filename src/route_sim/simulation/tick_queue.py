"""TickQueue — hands ticks off the simulator thread with drop-oldest overflow handling."""

from __future__ import annotations

import contextlib
import queue

from route_sim.simulation.models import SimulationTick


class TickQueue:
    """A listener that buffers ticks for a consumer on another thread.

    Register the instance itself with ``RouteSimulator.add_listener``.  When
    the queue is full the *oldest* tick is discarded so that the consumer
    (typically a render loop) always sees the most recent position.

    Parameters
    ----------
    maxsize:
        Maximum number of ticks buffered before drop-oldest kicks in.
    """

    def __init__(self, maxsize: int = 16) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self._queue: queue.Queue[SimulationTick] = queue.Queue(maxsize=maxsize)
        self.dropped = 0

    def __call__(self, tick: SimulationTick) -> None:
        """Put *tick* in the queue; drop the oldest if full."""
        try:
            self._queue.put_nowait(tick)
        except queue.Full:
            with contextlib.suppress(queue.Empty):
                self._queue.get_nowait()
                self.dropped += 1
            with contextlib.suppress(queue.Full):
                self._queue.put_nowait(tick)

    def get_tick(self, timeout: float = 0.1) -> SimulationTick | None:
        """Return the next queued tick, or None if none arrives within *timeout* s."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def qsize(self) -> int:
        """Return the current number of buffered ticks."""
        return self._queue.qsize()
