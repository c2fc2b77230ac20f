import contextlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, Tuple

from blessed import Terminal

from .errors import TerminalInitError
from .logger import get_logger
from .screen import ScreenBuffer

logger = get_logger(__name__)

DEFAULT = None
BLACK = "black"
WHITE = "white"

# how long poll_event waits on the keyboard before re-checking the terminal size
POLL_INTERVAL = 0.05


class EventType(str, Enum):
    KEY = "key"
    RESIZE = "resize"
    INTERRUPT = "interrupt"
    ERROR = "error"


class Key:
    ESCAPE = "escape"
    CTRL_C = "ctrl_c"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"


@dataclass(frozen=True)
class Event:
    type: EventType
    key: Optional[str] = None
    message: str = ""

    @classmethod
    def key_press(cls, key: str) -> "Event":
        return cls(EventType.KEY, key=key)

    @classmethod
    def error(cls, message: str) -> "Event":
        return cls(EventType.ERROR, message=message)

    @classmethod
    def interrupt(cls, message: str) -> "Event":
        return cls(EventType.INTERRUPT, message=message)


class TerminalBackend(Protocol):
    def init(self) -> None: ...
    def size(self) -> Tuple[int, int]: ...
    def set_cell(self, x: int, y: int, ch: str, fg: Optional[str], bg: Optional[str]) -> None: ...
    def clear(self, fg: Optional[str], bg: Optional[str]) -> None: ...
    def flush(self) -> None: ...
    def poll_event(self) -> Event: ...
    def close(self) -> None: ...


# blessed key names -> our key codes
_KEY_NAMES = {
    "KEY_ESCAPE": Key.ESCAPE,
    "KEY_PGUP": Key.PAGE_UP,
    "KEY_PGDOWN": Key.PAGE_DOWN,
}
_CTRL_C = "\x03"


def translate_key(keystroke) -> str:
    if str(keystroke) == _CTRL_C:
        return Key.CTRL_C
    if keystroke.is_sequence:
        return _KEY_NAMES.get(keystroke.name, keystroke.name or str(keystroke))
    return str(keystroke)


class BlessedBackend:
    """TerminalBackend on top of blessed: fullscreen, raw input, hidden cursor."""

    def __init__(self, term: Optional[Terminal] = None):
        self.term = term
        self.buf: Optional[ScreenBuffer] = None
        self._modes: Optional[contextlib.ExitStack] = None
        self._last_size: Tuple[int, int] = (0, 0)

    def init(self):
        modes = contextlib.ExitStack()
        try:
            if self.term is None:
                self.term = Terminal()
            if not self.term.is_a_tty:
                raise TerminalInitError("stdout is not a terminal")
            modes.enter_context(self.term.fullscreen())
            modes.enter_context(self.term.raw())
            modes.enter_context(self.term.hidden_cursor())
        except Exception as e:
            modes.close()
            if isinstance(e, TerminalInitError):
                raise
            raise TerminalInitError(str(e)) from e
        self._modes = modes
        self._last_size = self.size()
        self.buf = ScreenBuffer(*self._last_size)
        logger.debug("terminal ready %dx%d", *self._last_size)

    def size(self) -> Tuple[int, int]:
        return self.term.width, self.term.height

    def set_cell(self, x, y, ch, fg=DEFAULT, bg=DEFAULT):
        self.buf.put(x, y, ch, fg, bg)

    def clear(self, fg=DEFAULT, bg=DEFAULT):
        self.buf.resize(*self.size())
        self.buf.clear(fg, bg)

    def flush(self):
        self.term.stream.write(self.buf.render(self.term))
        self.term.stream.flush()

    def poll_event(self) -> Event:
        while True:
            if self._modes is None:
                return Event.interrupt("terminal closed")
            size = self.size()
            if size != self._last_size:
                self._last_size = size
                return Event(EventType.RESIZE)
            ks = self.term.inkey(timeout=POLL_INTERVAL)
            if ks:
                return Event.key_press(translate_key(ks))

    def close(self):
        if self._modes is None:
            return
        modes, self._modes = self._modes, None
        modes.close()
        logger.debug("terminal restored")
