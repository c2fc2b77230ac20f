import threading
from typing import Any, Optional


class EventChannel:
    """
    Unbuffered hand-off between one producer and one consumer.

    send() blocks until a receiver has taken the value, receive() blocks until
    a sender offers one. After close() both return immediately: send() gives
    False and receive() gives None.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.RLock())
        self._item: Any = None
        self._pending = False
        self._offered = 0
        self._taken = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item) -> bool:
        with self._cond:
            while self._pending and not self._closed:
                self._cond.wait()
            if self._closed:
                return False
            self._item, self._pending = item, True
            self._offered += 1
            ticket = self._offered
            self._cond.notify_all()
            while self._taken < ticket and not self._closed:
                self._cond.wait()
            return self._taken >= ticket

    def receive(self, cancel=None) -> Optional[Any]:
        """
        Take the next value. Returns None once the channel is closed, or when
        `cancel` (anything with a `requested` flag) has been tripped.
        """
        with self._cond:
            while not self._pending:
                if self._closed or (cancel is not None and cancel.requested):
                    return None
                self._cond.wait()
            item, self._item, self._pending = self._item, None, False
            self._taken += 1
            self._cond.notify_all()
            return item

    def wake(self):
        with self._cond:
            self._cond.notify_all()

    def close(self):
        with self._cond:
            self._closed = True
            # an offer nobody took is dropped
            self._item, self._pending = None, False
            self._cond.notify_all()
