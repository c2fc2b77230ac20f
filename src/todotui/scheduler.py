import signal
import threading
import time
from typing import Callable, Iterator, List, Optional

from .errors import ForcedShutdown
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_RATE = 60


class Ticker:
    """
    Fixed-cadence iterator. Each step sleeps until the next deadline; deadlines
    that already passed are dropped rather than delivered in a burst.
    """

    def __init__(self, rate: float = DEFAULT_RATE, clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        if rate <= 0:
            raise ValueError(f"tick rate must be positive, got {rate}")
        self.interval = 1.0 / rate
        self._clock = clock
        self._sleep = sleep

    def __iter__(self) -> Iterator[int]:
        n = 0
        deadline = self._clock() + self.interval
        while True:
            now = self._clock()
            if now < deadline:
                self._sleep(deadline - now)
            else:
                missed = int((now - deadline) / self.interval)
                deadline += missed * self.interval
            deadline += self.interval
            yield n
            n += 1


class Interrupts:
    """
    Counts OS interrupts. The first one requests a cooperative stop, the
    second raises ForcedShutdown on the thread that received the signal.
    Listeners registered with on_request() run when the first one arrives.
    After disarm() trips are only counted.
    """

    SIGNALS = (signal.SIGINT, signal.SIGTERM)

    def __init__(self):
        self.count = 0
        self._listeners: List[Callable[[], None]] = []
        self._armed = True
        self._previous = {}

    @property
    def requested(self) -> bool:
        return self.count > 0

    def on_request(self, fn: Callable[[], None]):
        self._listeners.append(fn)

    def trip(self, signum: Optional[int] = None, frame=None):
        self.count += 1
        name = signal.Signals(signum).name if signum else "interrupt"
        if not self._armed:
            logger.warning("%s received during shutdown, ignored", name)
            return
        if self.count == 1:
            logger.info("%s received, stopping", name)
            for fn in self._listeners:
                fn()
            return
        logger.warning("%s received again, forcing shutdown", name)
        raise ForcedShutdown(name)

    def disarm(self):
        """Later trips are counted but no longer raise ForcedShutdown."""
        self._armed = False

    def install(self):
        # signal handlers can only be set from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in self.SIGNALS:
            self._previous[sig] = signal.signal(sig, self.trip)

    def restore(self):
        for sig, handler in self._previous.items():
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)
        self._previous.clear()
