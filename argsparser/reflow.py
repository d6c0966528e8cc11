"""Help-text reflow.

Re-wraps text so every line fits ``line_size`` columns after a left margin of
``margin_size`` spaces. Author line breaks are kept and words are never split:
a word longer than the available width ends up alone on a line that overflows.
"""

from __future__ import annotations

from typing import List

__all__ = ["BLANKS", "DEFAULT_LINE_SIZE", "reflow", "split_lines"]

DEFAULT_LINE_SIZE = 80

BLANKS = " \t\n\r\f\v"


def split_lines(text: str) -> List[str]:
    """Split ``text`` on newlines, ignoring a single trailing newline."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _rfind_blank(text: str) -> int:
    for idx in range(len(text) - 1, -1, -1):
        if text[idx] in BLANKS:
            return idx
    return -1


def _find_blank(text: str) -> int:
    for idx, ch in enumerate(text):
        if ch in BLANKS:
            return idx
    return -1


def _wrap_line(line: str, width: int) -> List[str]:
    pieces: List[str] = []
    rest = line
    while rest:
        if width <= 0 or len(rest) <= width:
            piece = rest
        else:
            head = rest[:width]
            cut = _rfind_blank(head)
            if cut < 0:
                # no room to break inside the width; run to the end of the word
                cut = _find_blank(rest)
                piece = rest if cut < 0 else rest[:cut]
            else:
                piece = head[:cut]
        rest = rest[len(piece):]
        if rest and rest[0] in BLANKS:
            rest = rest[1:]
        pieces.append(piece)
    return pieces


def reflow(text: str, margin_size: int = 0, line_size: int = DEFAULT_LINE_SIZE) -> str:
    """Return ``text`` wrapped to ``line_size`` with a ``margin_size`` indent.

    A ``line_size`` of zero, or one not wider than the margin, disables
    wrapping; lines still receive the margin.
    """

    margin = " " * margin_size
    width = line_size - margin_size if line_size > 0 else 0
    out: List[str] = []
    for line in split_lines(text):
        out.append("\n".join(margin + piece for piece in _wrap_line(line, width)))
    return "\n".join(out)
