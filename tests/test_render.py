"""Unit tests for the renderer."""

from conftest import FakeBackend
from todotui.render import GUTTER, draw, draw_string
from todotui.state import AppState, ApplicationState, Project
from todotui.terminal import BLACK, WHITE


def state_with(names, phase=AppState.READY, cursor=0) -> ApplicationState:
    state = ApplicationState(phase=phase)
    state.load_projects([Project(id=str(i), name=n) for i, n in enumerate(names)])
    state.cursor = cursor
    return state


def divider_columns(frame) -> set:
    """Columns whose every row has a white background."""
    return {x for x in range(frame.w) if all(frame.bgs[y][x] == WHITE for y in range(frame.h))}


class TestHeader:
    def test_header_bar_spans_width(self) -> None:
        term = FakeBackend(w=30, h=6)
        draw(term, state_with([]))
        frame = term.last_frame
        assert frame.row_text(0).startswith("Projects")
        assert all(frame.bgs[0][x] == WHITE for x in range(30))
        assert frame.fgs[0][0] == BLACK

    def test_loading_label_is_right_aligned(self) -> None:
        term = FakeBackend(w=30, h=6)
        draw(term, state_with([], phase=AppState.LOADING_DATA))
        row = term.last_frame.row_text(0)
        assert row.endswith("Loading...")
        assert row.startswith("Projects")

    def test_loading_hides_stale_projects(self) -> None:
        term = FakeBackend(w=30, h=6)
        draw(term, state_with(["Inbox", "Work"], phase=AppState.LOADING_DATA))
        lines = term.last_frame.lines()
        assert "Loading..." in lines[0]
        assert all(line == "" for line in lines[1:])
        assert not divider_columns(term.last_frame)

    def test_no_loading_label_when_ready(self) -> None:
        term = FakeBackend(w=30, h=6)
        draw(term, state_with(["Inbox"]))
        assert "Loading" not in term.last_frame.row_text(0)


class TestProjectList:
    def test_selected_entry_has_marker_and_inverted_style(self) -> None:
        term = FakeBackend(w=30, h=8)
        draw(term, state_with(["Inbox", "Work", "Personal"], cursor=1))
        lines = term.last_frame.lines()
        assert lines[2] == "  Inbox"
        assert lines[3].startswith("> Work")
        assert lines[4] == "  Personal"
        frame = term.last_frame
        assert frame.bgs[3][0] == WHITE and frame.fgs[3][0] == BLACK
        assert frame.bgs[2][2] is None

    def test_divider_follows_longest_name(self) -> None:
        term = FakeBackend(w=30, h=8)
        draw(term, state_with(["Inbox", "Personal"]))
        assert divider_columns(term.last_frame) == {len("Personal") + GUTTER}

    def test_empty_list_draws_divider_at_minimum_gutter(self) -> None:
        term = FakeBackend(w=30, h=8)
        draw(term, state_with([]))
        frame = term.last_frame
        assert frame.row_text(0).startswith("Projects")
        assert divider_columns(frame) == {GUTTER}
        assert all(line == "" for line in frame.lines()[1:])

    def test_short_names_leave_header_intact(self) -> None:
        term = FakeBackend(w=30, h=8)
        draw(term, state_with(["ab", "c"]))
        frame = term.last_frame
        assert frame.row_text(0).startswith("Projects")
        assert frame.fgs[0][2 + GUTTER] == BLACK
        assert divider_columns(frame) == {2 + GUTTER}

    def test_wide_names_measured_in_columns(self) -> None:
        term = FakeBackend(w=30, h=8)
        draw(term, state_with(["日本語", "abc"], cursor=1))
        frame = term.last_frame
        # three double-width glyphs = six columns
        assert divider_columns(frame) == {6 + GUTTER}
        assert frame.chars[2][2] == "日"
        assert frame.chars[2][4] == "本"
        assert frame.chars[2][6] == "語"

    def test_text_after_wide_glyph_stays_aligned(self) -> None:
        term = FakeBackend(w=20, h=3)
        used = draw_string(term, 0, 1, "é日x")
        assert used == 4
        assert term.buf.chars[1][0] == "é"
        assert term.buf.chars[1][1] == "日"
        assert term.buf.chars[1][3] == "x"


class TestFlush:
    def test_flushes_once_per_draw(self) -> None:
        term = FakeBackend()
        draw(term, state_with(["Inbox"]))
        draw(term, state_with(["Inbox"], phase=AppState.LOADING_DATA))
        draw(term, state_with([]))
        assert len(term.frames) == 3

    def test_draw_does_not_mutate_state(self) -> None:
        term = FakeBackend()
        state = state_with(["Inbox", "Work"], cursor=1)
        before = (state.phase, state.projects, state.cursor, state.error_message)
        draw(term, state)
        assert (state.phase, state.projects, state.cursor, state.error_message) == before
