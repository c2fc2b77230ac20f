"""Shared fixtures: an in-memory terminal and a canned data client."""

import copy
import queue
import threading
from typing import List, Optional

import pytest

from todotui.errors import SyncError, TerminalInitError
from todotui.screen import ScreenBuffer
from todotui.state import Project
from todotui.terminal import Event, Key


class FakeBackend:
    """TerminalBackend that draws into a ScreenBuffer and replays scripted events."""

    def __init__(self, w: int = 40, h: int = 10, events=(), fail_init: Optional[str] = None):
        self.w, self.h = w, h
        self.buf = ScreenBuffer(w, h)
        self.events: "queue.Queue[Event]" = queue.Queue()
        for e in events:
            self.events.put(e)
        self.fail_init = fail_init
        self.inited = False
        self.closed = threading.Event()
        self.frames: List[ScreenBuffer] = []
        self.polled = 0

    def init(self) -> None:
        if self.fail_init:
            raise TerminalInitError(self.fail_init)
        self.inited = True

    def size(self):
        return self.w, self.h

    def set_cell(self, x, y, ch, fg=None, bg=None) -> None:
        self.buf.put(x, y, ch, fg, bg)

    def clear(self, fg=None, bg=None) -> None:
        self.buf.clear(fg, bg)

    def flush(self) -> None:
        self.frames.append(copy.deepcopy(self.buf))

    def poll_event(self) -> Event:
        while not self.closed.is_set():
            try:
                event = self.events.get(timeout=0.01)
            except queue.Empty:
                continue
            self.polled += 1
            return event
        return Event.interrupt("terminal closed")

    def close(self) -> None:
        self.closed.set()

    @property
    def last_frame(self) -> ScreenBuffer:
        return self.frames[-1]


class FakeClient:
    def __init__(self, names=(), fail: Optional[str] = None):
        self._projects = [Project(id=str(i), name=n, order=i) for i, n in enumerate(names)]
        self.fail = fail
        self.sync_calls = 0

    def sync(self) -> None:
        self.sync_calls += 1
        if self.fail:
            raise SyncError(self.fail)

    def projects(self) -> List[Project]:
        return list(self._projects)

    def tasks(self):
        return []


def keys(*codes: str) -> List[Event]:
    return [Event.key_press(c) for c in codes]


@pytest.fixture
def projects() -> List[Project]:
    return [Project(id=str(i), name=n) for i, n in enumerate(["Inbox", "Work", "Personal"])]


@pytest.fixture
def esc() -> Event:
    return Event.key_press(Key.ESCAPE)
