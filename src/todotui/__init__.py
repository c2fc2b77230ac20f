"""
todotui - a terminal UI for paging through Todoist projects.

Layout:
- state: phases and the application state root
- terminal / screen: backend interface, blessed backend, cell buffer
- channel / events: event hand-off and input processing
- render: the one screen layout (project sidebar + divider)
- scheduler / app: fixed-rate run loop, interrupts, shutdown
- client / config / cli: Todoist data client and the command line
"""
from .app import TuiApp
from .state import AppState, ApplicationState, Project, Task

__version__ = "0.1.0"

__all__ = ["TuiApp", "AppState", "ApplicationState", "Project", "Task"]
