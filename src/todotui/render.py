from .screen import WIDE_TAIL, display_width, glyphs
from .state import AppState, ApplicationState
from .terminal import BLACK, DEFAULT, WHITE, TerminalBackend

TITLE = "Projects"
LOADING = "Loading..."
MARKER = "> "
# unselected names are indented to line up with the text after the marker
MARGIN = 2
LIST_TOP = 2
# columns between the longest name and the divider
GUTTER = 4


def draw(term: TerminalBackend, state: ApplicationState):
    """Clear the screen, redraw everything, then flush the result."""
    w, h = term.size()
    term.clear(DEFAULT, DEFAULT)
    try:
        draw_header(term, w)
        if state.phase is AppState.LOADING_DATA:
            draw_loading_overlay(term, w)
            return
        longest = draw_projects(term, state)
        draw_divider(term, longest + GUTTER, h)
    finally:
        term.flush()


def draw_header(term: TerminalBackend, w: int):
    for x in range(w):
        term.set_cell(x, 0, ' ', DEFAULT, WHITE)
    draw_string(term, 0, 0, TITLE, invert=True)


def draw_loading_overlay(term: TerminalBackend, w: int):
    draw_string(term, w - display_width(LOADING), 0, LOADING, invert=True)


def draw_projects(term: TerminalBackend, state: ApplicationState) -> int:
    """Draw the project list; returns the widest name in columns."""
    longest = 0
    for i, project in enumerate(state.projects):
        longest = max(longest, display_width(project.name))
        if i == state.cursor:
            draw_string(term, 0, LIST_TOP + i, MARKER + project.name, invert=True)
        else:
            draw_string(term, MARGIN, LIST_TOP + i, project.name)
    return longest


def draw_divider(term: TerminalBackend, x: int, h: int):
    # starts below the header bar, which already spans the width
    for y in range(1, h):
        term.set_cell(x, y, ' ', DEFAULT, WHITE)


def draw_string(term: TerminalBackend, x: int, y: int, text: str, invert=False) -> int:
    """Put `text` on the screen starting at cell (x, y); returns the columns used."""
    fg, bg = (BLACK, WHITE) if invert else (DEFAULT, DEFAULT)
    col = x
    for glyph, width in glyphs(text):
        term.set_cell(col, y, glyph, fg, bg)
        if width == 2:
            term.set_cell(col + 1, y, WIDE_TAIL, fg, bg)
        col += width
    return col - x
