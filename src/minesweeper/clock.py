"""
Clock module for Minesweeper game.

The game only starts, stops, resets and reads a clock. Ticks are
delivered to registered listeners once per elapsed second while the
clock runs.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)

TickListener = Callable[[int], None]

# Displays show three digits
MAX_DISPLAY_SECONDS = 999


# ============================================================================
# Clock Interface
# ============================================================================

class Clock(ABC):
    """
    Abstract ticking clock.

    Subclasses decide where ticks come from and call `_advance` for
    each elapsed second.
    """

    def __init__(self) -> None:
        self._seconds = 0
        self._listeners: List[TickListener] = []

    @abstractmethod
    def start(self) -> None:
        """Start ticking. Does nothing if already running."""

    @abstractmethod
    def stop(self) -> None:
        """Stop ticking. Does nothing if already stopped."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the clock is currently ticking."""

    def reset(self) -> None:
        """Stop, zero the elapsed time and notify listeners with 0."""
        self.stop()
        self._seconds = 0
        self._notify(self._seconds)

    @property
    def seconds(self) -> int:
        """Elapsed whole seconds."""
        return self._seconds

    @property
    def formatted_time(self) -> str:
        """Elapsed seconds as a three-digit string, e.g. '007'."""
        return f"{min(self._seconds, MAX_DISPLAY_SECONDS):03d}"

    def add_tick_listener(self, listener: TickListener) -> None:
        self._listeners.append(listener)

    def remove_tick_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _advance(self) -> None:
        """Count one second and notify listeners."""
        self._seconds += 1
        self._notify(self._seconds)

    def _notify(self, seconds: int) -> None:
        for listener in list(self._listeners):
            listener(seconds)


# ============================================================================
# Host-driven Clock
# ============================================================================

class ManualClock(Clock):
    """
    Clock advanced explicitly by its host.

    Useful for tests and for step-based drivers such as the Gymnasium
    environment, where one step stands for one second.
    """

    def __init__(self) -> None:
        super().__init__()
        self._running = False

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def tick(self, count: int = 1) -> None:
        """
        Advance by `count` seconds.

        Ticks while stopped are ignored.
        """
        for _ in range(count):
            if not self._running:
                return
            self._advance()


# ============================================================================
# Wall-clock Timer
# ============================================================================

class ThreadedClock(Clock):
    """
    Clock that ticks in real time on a background thread.

    Listeners are called from the worker thread; GUI hosts should hand
    the value over to their own event loop.

    Each start() begins a new generation. A worker only ticks while its
    generation is current, and stop() waits for the worker to finish a
    delivery in progress, so once stop() or reset() returns no further
    ticks arrive from that run. A listener must not block on the thread
    that calls stop().
    """

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        super().__init__()
        self.interval = interval
        self._lock = threading.Lock()
        self._generation = 0
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        with self._lock:
            if self._stop_event is not None:
                return
            self._generation += 1
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run,
                args=(self._generation, self._stop_event),
                name="minesweeper-clock",
                daemon=True,
            )
            self._thread.start()
        logger.debug("Clock started (generation %d)", self._generation)

    def stop(self) -> None:
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            self._stop_event = None
            self._generation += 1
            thread, self._thread = self._thread, None
        # Wait out a tick that is still being delivered
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        logger.debug("Clock stopped at %d seconds", self._seconds)

    def reset(self) -> None:
        self.stop()
        with self._lock:
            self._seconds = 0
        self._notify(0)

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._stop_event is not None

    def _run(self, generation: int, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            with self._lock:
                if generation != self._generation:
                    return
                self._seconds += 1
                seconds = self._seconds
            for listener in list(self._listeners):
                if generation != self._generation:
                    return
                listener(seconds)
