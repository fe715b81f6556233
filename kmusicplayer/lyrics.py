"""Timed lyrics: parsing and following the playback position."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable

LINE_SEPARATOR = "\\r\\n"
_TAG = re.compile(r"\[(\d+):(\d+).(\d+)\](.*)", re.ASCII)


@dataclass(frozen=True, order=True)
class LyricLine:
    """One lyric line; ``time`` is its start in milliseconds."""

    time: int
    text: str


def parse_lyrics(text: str) -> list[LyricLine]:
    """Parse timed lyrics into lines sorted by start time.

    Lines are separated by the escaped sequence ``\\r\\n`` as it appears in
    the downloaded lyric files; lines without a time tag are dropped.
    """
    lines = []
    for chunk in text.split(LINE_SEPARATOR):
        if not chunk:
            continue
        match = _TAG.search(chunk)
        if match is None:
            continue
        minutes, seconds, millis, body = match.groups()
        time = int(minutes) * 60000 + int(seconds) * 1000 + int(millis)
        lines.append(LyricLine(time, body.strip()))
    lines.sort(key=lambda line: line.time)
    return lines


class LyricTracker:
    """Keeps the lyric line that matches the playback position.

    ``text`` is the line currently shown and ``index`` its position in
    ``lines`` (-1 before the first line has been reached).
    """

    def __init__(self, lines: Iterable[LyricLine] = ()) -> None:
        self._reset(lines)

    def _reset(self, lines: Iterable[LyricLine]) -> None:
        self.lines = sorted(lines, key=lambda line: line.time)
        self.index = -1
        self.text = self.lines[0].text if self.lines else ""

    def load(self, text: str) -> str:
        """Replace the lyrics with parsed ``text``; return the text shown."""
        self._reset(parse_lyrics(text))
        return self.text

    def advance(self, position: int) -> str | None:
        """Move forward to ``position`` ms; return new text or None."""
        start = self.index + 1
        for i, line in enumerate(self.lines[start:], start):
            if position < line.time:
                if i > 0:
                    self.index = i - 1
                    self.text = self.lines[i - 1].text
                    return self.text
                return None
        return None

    def seek(self, position: int) -> str | None:
        """Jump to ``position`` ms from the start; return new text or None."""
        for i, line in enumerate(self.lines):
            if position < line.time:
                if i > 0:
                    self.index = i - 1
                    self.text = self.lines[i - 1].text
                else:
                    self.index = -1
                    self.text = ""
                return self.text
        return None