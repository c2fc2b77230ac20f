from typing import Iterator, List, Optional, Tuple

from wcwidth import wcswidth, wcwidth

# placeholder for the right half of a double-width glyph
WIDE_TAIL = ""


def char_width(ch: str) -> int:
    w = wcwidth(ch)
    return w if w > 0 else 0


def display_width(text: str) -> int:
    """Number of terminal columns `text` occupies."""
    w = wcswidth(text)
    if w >= 0:
        return w
    # non-printable characters in the string; count the printable ones
    return sum(char_width(c) for c in text)


def glyphs(text: str) -> Iterator[Tuple[str, int]]:
    """
    Split `text` into (glyph, columns) pairs. Zero-width characters (combining
    marks, joiners) are attached to the glyph before them; wide glyphs report 2.
    """
    glyph, width = "", 0
    for c in text:
        w = char_width(c)
        if w == 0:
            if glyph:
                glyph += c
            continue
        if glyph:
            yield glyph, width
        glyph, width = c, w
    if glyph:
        yield glyph, width


class ScreenBuffer:
    """
    A w*h grid of cells. Each cell holds a glyph, a foreground and a background
    color (blessed color names, None for the terminal default).
    """

    def __init__(self, w, h):
        self.w, self.h = w, h
        self.chars: List[List[str]] = [[' '] * w for _ in range(h)]
        self.fgs: List[List[Optional[str]]] = [[None] * w for _ in range(h)]
        self.bgs: List[List[Optional[str]]] = [[None] * w for _ in range(h)]

    def put(self, x, y, char, fg=None, bg=None):
        if 0 <= x < self.w and 0 <= y < self.h:
            self.chars[y][x] = char
            self.fgs[y][x] = fg
            self.bgs[y][x] = bg

    def clear(self, fg=None, bg=None):
        for row in self.chars: row[:] = [' '] * self.w
        for row in self.fgs: row[:] = [fg] * self.w
        for row in self.bgs: row[:] = [bg] * self.w

    def resize(self, w, h):
        if (w, h) != (self.w, self.h):
            self.__init__(w, h)

    def row_text(self, y) -> str:
        return "".join(self.chars[y])

    def lines(self) -> List[str]:
        return [self.row_text(y).rstrip() for y in range(self.h)]

    def render(self, term) -> str:
        """Build the escape-sequence string that paints the whole buffer from home."""
        out = [term.home]
        for y in range(self.h):
            if y:
                out.append(term.move_xy(0, y))
            for x in range(self.w):
                c = self.chars[y][x]
                if c == WIDE_TAIL:
                    continue
                if x + 1 >= self.w and char_width(c[0]) == 2:
                    # no room for the right half; a wide glyph here would wrap
                    c = ' '
                fg, bg = self.fgs[y][x], self.bgs[y][x]
                parts = [fg] if fg else []
                if bg: parts.append(f"on_{bg}")
                styled = getattr(term, "_".join(parts), None) if parts else None
                out.append(styled(c) if styled else c)
        return "".join(out)
