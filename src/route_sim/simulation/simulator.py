"""RouteSimulator — drives a virtual traveler along a path and broadcasts progress."""

from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
import time
from collections.abc import Iterator, Sequence

from route_sim.errors import InvalidConfigurationError, InvalidStateError
from route_sim.geo.models import GeoPoint
from route_sim.geo.path_index import PathIndex
from route_sim.simulation.config import SimulationConfig
from route_sim.simulation.models import (
    Listener,
    ListenerHandle,
    SimulationState,
    SimulationTick,
    SimulatorStatus,
)
from route_sim.simulation.ticks import iter_ticks

_logger = logging.getLogger(__name__)

_JOIN_TIMEOUT_S = 2.0


class RouteSimulator:
    """Timed state machine ``IDLE -> RUNNING -> STOPPED`` over a single path.

    ``start()`` spawns one background thread that waits ``tick_interval_ms``
    between ticks and delivers each :class:`SimulationTick` to the registered
    listeners in registration order.  Ticks are strictly sequential: the next
    wait starts only after every listener of the current tick has returned.
    Listeners run on that thread, so slow ones should hand off through a
    :class:`~route_sim.simulation.tick_queue.TickQueue`.

    A simulator has a single logical owner.  ``start``, ``stop``,
    ``add_listener`` and ``remove_listener`` must not be called concurrently
    from several threads without external synchronisation.

    Parameters
    ----------
    path:
        A :class:`PathIndex`, or a raw path that is indexed with
        ``config.metric``.  An index may be shared between simulators but must
        have been built with ``config.metric``.
    config:
        Pace and metric; defaults to :class:`SimulationConfig()`.
    """

    def __init__(
        self,
        path: PathIndex | Sequence[GeoPoint | Sequence[float]],
        config: SimulationConfig | None = None,
    ) -> None:
        self._config = config or SimulationConfig()
        if isinstance(path, PathIndex):
            if path.metric.name != self._config.metric:
                raise InvalidConfigurationError(
                    f"Path index uses the {path.metric.name!r} metric "
                    f"but the config asks for {self._config.metric!r}"
                )
            self._index = path
        else:
            self._index = PathIndex.build(path, metric=self._config.metric)
        self._state = SimulationState()
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path_index(self) -> PathIndex:
        return self._index

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def status(self) -> SimulatorStatus:
        return self._state.status

    @property
    def is_running(self) -> bool:
        return self._state.status is SimulatorStatus.RUNNING

    @property
    def state(self) -> SimulationState:
        """A snapshot copy of the current :class:`SimulationState`."""
        with self._lock:
            return dataclasses.replace(self._state, listeners=dict(self._state.listeners))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add_listener(self, callback: Listener) -> ListenerHandle:
        """Register *callback* to receive every tick while running.

        A listener added after the simulator has stopped is never called.
        """
        handle = ListenerHandle(next(self._ids))
        with self._lock:
            if self._state.status is SimulatorStatus.STOPPED:
                _logger.warning("Listener added to a stopped simulator will never be called")
                return handle
            self._state.listeners[handle.id] = callback
        return handle

    def remove_listener(self, handle: ListenerHandle) -> None:
        """Unregister the listener behind *handle*; no-op if already removed."""
        with self._lock:
            self._state.listeners.pop(handle.id, None)

    def start(self) -> None:
        """Enter RUNNING and begin ticking on a background thread.

        Raises
        ------
        InvalidStateError
            If the simulator is not IDLE.
        InvalidConfigurationError
            If speed or tick interval is non-positive (the simulator stays IDLE).
        """
        with self._lock:
            status = self._state.status
            if status is not SimulatorStatus.IDLE:
                raise InvalidStateError(f"Cannot start a simulator that is {status.value}")
            self._config.check()
            self._state.status = SimulatorStatus.RUNNING

        ticks = iter_ticks(self._index, self._config)
        self._thread = threading.Thread(
            target=self._run, args=(ticks,), daemon=True, name="RouteSimulator"
        )
        _logger.info(
            "Route simulation started: length %.1f, %.2f/s every %d ms",
            self._index.total_length(),
            self._config.speed_mps,
            self._config.tick_interval_ms,
        )
        try:
            self._thread.start()
        except RuntimeError:
            with self._lock:
                self._state.status = SimulatorStatus.IDLE
            self._thread = None
            _logger.exception("Could not start the simulation thread")
            raise

    def stop(self) -> None:
        """Enter STOPPED: cancel the pending tick and drop all listeners.

        Idempotent.  May be called from inside a listener.
        """
        self._finish("stopped")
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=_JOIN_TIMEOUT_S)

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the tick thread to exit; return True if the simulator is STOPPED."""
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=timeout)
        return self._state.status is SimulatorStatus.STOPPED

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run(self, ticks: Iterator[SimulationTick]) -> None:
        interval = self._config.tick_interval_s
        deadline = time.monotonic()
        for tick in ticks:
            deadline += interval
            wait = deadline - time.monotonic()
            if self._stop_event.wait(max(wait, 0.0)):
                return
            self._deliver(tick)
            if tick.final:
                self._finish("completed")
                return

    def _deliver(self, tick: SimulationTick) -> None:
        with self._lock:
            if self._state.status is not SimulatorStatus.RUNNING:
                return
            self._state.tick_count = tick.tick
            self._state.distance = tick.distance
            self._state.last_position = tick.position
            listeners = list(self._state.listeners.values())

        _logger.debug(
            "Tick %d: distance %.2f at (%.6f, %.6f), segment %d",
            tick.tick,
            tick.distance,
            tick.position.lon,
            tick.position.lat,
            tick.projection.segment_index,
        )
        for callback in listeners:
            if self._stop_event.is_set():
                break
            try:
                callback(tick)
            except Exception:
                _logger.exception("Listener %r failed on tick %d", callback, tick.tick)

    def _finish(self, reason: str) -> None:
        with self._lock:
            if self._state.status is SimulatorStatus.STOPPED:
                return
            self._state.status = SimulatorStatus.STOPPED
            self._state.listeners.clear()
        self._stop_event.set()
        _logger.info(
            "Route simulation %s after %d tick(s) at distance %.1f",
            reason,
            self._state.tick_count,
            self._state.distance,
        )
