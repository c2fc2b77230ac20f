from typing import Optional

from .logger import get_logger
from .state import ApplicationState
from .terminal import Event, EventType, Key

logger = get_logger(__name__)

STOP_KEYS = (Key.ESCAPE, Key.CTRL_C)


def next_index(cursor: int, n: int) -> int:
    return (cursor + 1) % n if n else 0


def previous_index(cursor: int, n: int) -> int:
    return (cursor - 1 + n) % n if n else 0


def handle_event(state: ApplicationState, event: Optional[Event]):
    """Apply one event. None means the event channel is gone."""
    if event is None:
        state.stop()
        return

    if event.type is EventType.KEY:
        if event.key in STOP_KEYS:
            logger.info("exit requested (%s)", event.key)
            state.stop()
        elif event.key == Key.PAGE_DOWN:
            state.cursor = next_index(state.cursor, len(state.projects))
        elif event.key == Key.PAGE_UP:
            state.cursor = previous_index(state.cursor, len(state.projects))

    elif event.type in (EventType.INTERRUPT, EventType.ERROR):
        state.stop(event.message or event.type.value)


def process_input(state: ApplicationState, cancel=None):
    """Block for exactly one event from the state's channel and apply it."""
    handle_event(state, state.events.receive(cancel=cancel))
