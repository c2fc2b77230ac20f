import threading
from typing import Iterable, Optional

from rich.console import Console

from . import render
from .client import DataClient
from .errors import ForcedShutdown, SyncError, TerminalInitError
from .events import process_input
from .logger import get_logger
from .scheduler import Interrupts, Ticker
from .state import AppState, ApplicationState
from .terminal import Event, TerminalBackend

logger = get_logger(__name__)


class TuiApp:
    """
    Owns the ApplicationState and runs the UI: load the projects once, then
    process one event and redraw on every tick until something stops it.
    """

    def __init__(self, client: DataClient, term: TerminalBackend,
                 ticker: Optional[Iterable] = None, interrupts: Optional[Interrupts] = None,
                 console: Optional[Console] = None):
        self.client = client
        self.term = term
        self.ticker = ticker if ticker is not None else Ticker()
        self.interrupts = interrupts or Interrupts()
        self.console = console
        self.state = ApplicationState()
        self._producer: Optional[threading.Thread] = None
        self._shut_down = False

    def run(self) -> ApplicationState:
        """Orchestrates all of the moving pieces. Returns the final state."""
        self.interrupts.on_request(self.state.events.wake)
        self.interrupts.install()
        try:
            self.term.init()
        except TerminalInitError:
            logger.exception("terminal init failed")
            self.interrupts.restore()
            raise

        try:
            if self.load_data():
                self.state.set_phase(AppState.READY)
                self.draw()
                self.start_producer()
                self.loop()
        except ForcedShutdown:
            logger.warning("forced shutdown, skipping remaining ticks")
        finally:
            self.stop()
            self.interrupts.restore()
        return self.state

    def load_data(self) -> bool:
        self.state.set_phase(AppState.LOADING_DATA)
        self.draw()
        logger.info("syncing projects")
        try:
            self.client.sync()
        except SyncError as e:
            self.state.stop(f"sync failed: {e}")
            return False
        self.state.load_projects(self.client.projects())
        logger.info("loaded %d projects", len(self.state.projects))
        if self.interrupts.requested:
            self.state.stop()
            return False
        return True

    def loop(self):
        for _ in self.ticker:
            if self.interrupts.requested:
                self.state.stop()
            # the last iteration may have put the app into a stop state
            if self.state.stopped:
                break
            process_input(self.state, cancel=self.interrupts)
            self.state.set_phase(AppState.RUNNING)
            self.draw()

    def draw(self):
        render.draw(self.term, self.state)

    def start_producer(self):
        self._producer = threading.Thread(target=self._produce, name="todotui-events", daemon=True)
        self._producer.start()

    def _produce(self):
        events = self.state.events
        while not events.closed:
            try:
                event = self.term.poll_event()
            except Exception as e:
                logger.exception("polling terminal events failed")
                events.send(Event.error(str(e) or type(e).__name__))
                return
            if not events.send(event):
                return

    def stop(self):
        """Shutdown tasks: release the terminal, then report any recorded error."""
        if self._shut_down:
            return
        self._shut_down = True
        # a signal arriving from here on must not cut the terminal restore short
        self.interrupts.disarm()
        self.state.stop()
        self.state.events.close()
        self.term.close()
        logger.info("shut down")

        if self.state.error_message:
            console = self.console or Console(highlight=False, soft_wrap=True)
            console.print(self.state.error_message, markup=False)
