"""Interactive console front end playing through pygame's mixer."""

from __future__ import annotations

import argparse
import io
import os
import shlex
import sys
import urllib.parse
import urllib.request
from typing import Iterable, TextIO

from .http import HttpClient, HttpError
from .player import MusicPlayer, Page, PlaybackMode, PlayerError

_MODES = {
    "sequential": PlaybackMode.SEQUENTIAL,
    "loop": PlaybackMode.LOOP_ONE,
    "random": PlaybackMode.RANDOM,
}

_HELP = """commands:
  add FILE...        add MP3 files to the local list
  online | local     show the online or the local list
  list               list the songs of the current page
  select N           select song N of the current page
  play               play or pause the selected song
  next | prev        skip to the next or previous song
  mute               toggle mute
  volume N           set the volume (0-100)
  mode NAME          sequential, loop or random
  seek TIME          jump to TIME (mm:ss or milliseconds)
  status             show the player state
  quit               leave"""


class PygameBackend:
    """Plays audio through ``pygame.mixer.music``."""

    def __init__(self, client: HttpClient | None = None) -> None:
        self._client = client or HttpClient()
        self._pygame = None
        self._started = False
        self._paused = False
        self._offset = 0
        self._volume = 1.0
        self._muted = False

    def _music(self):
        if self._pygame is None:
            os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
            import pygame

            try:
                pygame.mixer.init()
            except pygame.error as exc:
                raise PlayerError(f"audio output unavailable: {exc}") from exc
            self._pygame = pygame
        return self._pygame.mixer.music

    def _apply_volume(self) -> None:
        if self._pygame is not None:
            self._music().set_volume(0.0 if self._muted else self._volume)

    def load(self, url: str) -> None:
        music = self._music()
        parsed = urllib.parse.urlparse(url)
        try:
            if parsed.scheme == "file":
                music.load(urllib.request.url2pathname(parsed.path))
            else:
                music.load(io.BytesIO(self._client.get(url)), "mp3")
        except self._pygame.error as exc:
            raise PlayerError(f"cannot load {url}: {exc}") from exc
        self._started = False
        self._paused = False
        self._offset = 0
        self._apply_volume()

    def play(self) -> None:
        music = self._music()
        if self._paused:
            music.unpause()
        elif not music.get_busy():
            music.play(start=self._offset / 1000)
        self._paused = False
        self._started = True

    def pause(self) -> None:
        self._music().pause()
        self._paused = True

    def set_position(self, ms: int) -> None:
        self._offset = ms
        if self._started:
            music = self._music()
            music.play(start=ms / 1000)
            if self._paused:
                music.pause()

    def set_volume(self, volume: int) -> None:
        self._volume = volume / 100
        self._apply_volume()

    def set_muted(self, muted: bool) -> None:
        self._muted = muted
        self._apply_volume()

    def _elapsed(self) -> int:
        pos = self._music().get_pos()
        return -1 if pos < 0 else pos + self._offset

    def _ended(self) -> bool:
        return self._started and not self._paused and not self._music().get_busy()


def _pump(player: MusicPlayer, backend: PygameBackend) -> None:
    """Pass backend progress and end of media on to the player."""
    if not backend._started:
        return
    if backend._ended():
        backend._started = False
        backend._offset = 0
        player.media_finished()
    else:
        position = backend._elapsed()
        if position >= 0:
            player.position_changed(position)


def _one_arg(args: list[str]) -> str:
    if len(args) != 1:
        raise ValueError("expected exactly one argument")
    return args[0]


def _parse_time(text: str) -> int:
    if ":" in text:
        minutes, seconds = text.split(":", 1)
        return int((int(minutes) * 60 + float(seconds)) * 1000)
    return int(text)


class Shell:
    """Line-oriented commands acting on a :class:`MusicPlayer`."""

    PROMPT = "> "

    def __init__(self, player: MusicPlayer, out: TextIO | None = None) -> None:
        self.player = player
        self.out = out if out is not None else sys.stdout
        self._commands = {
            "help": self._help,
            "add": self._add,
            "online": lambda args: self._page(Page.ONLINE),
            "local": lambda args: self._page(Page.LOCAL),
            "list": self._list,
            "select": self._select,
            "play": self._play,
            "next": self._next,
            "prev": self._prev,
            "mute": self._mute,
            "volume": self._volume,
            "mode": self._mode,
            "seek": self._seek,
            "status": self._status,
        }

    def _say(self, text: str) -> None:
        print(text, file=self.out)

    def execute(self, line: str) -> bool:
        """Run one command; return False when the shell should stop."""
        try:
            words = shlex.split(line)
        except ValueError as exc:
            self._say(f"error: {exc}")
            return True
        if not words:
            return True
        name, args = words[0].lower(), words[1:]
        if name in ("quit", "exit"):
            return False
        handler = self._commands.get(name)
        if handler is None:
            self._say(f"unknown command: {name}")
            return True
        try:
            handler(args)
        except PlayerError as exc:
            self._say(f"warning: {exc}")
        except (ValueError, IndexError, HttpError) as exc:
            self._say(f"error: {exc}")
        return True

    def run(self, lines: Iterable[str]) -> bool:
        """Run commands until one asks to stop; return False if it did."""
        for line in lines:
            if not self.execute(line):
                return False
        return True

    def _help(self, args: list[str]) -> None:
        self._say(_HELP)

    def _add(self, args: list[str]) -> None:
        if not args:
            raise ValueError("no files given")
        names = self.player.add_local_files(args)
        self._say(f"added {len(names)} song(s)")

    def _page(self, page: Page) -> None:
        self.player.show_page(page)
        self._say(f"page: {page.name.lower()}")

    def _list(self, args: list[str]) -> None:
        player = self.player
        if player.page is Page.ONLINE:
            rows = [f"{name}  {album}  {length}" for name, album, length in player.online_rows]
        else:
            rows = list(player.local_names)
        if not rows:
            self._say("no songs")
        for number, row in enumerate(rows, 1):
            marker = "*" if number - 1 == player.selected_row else " "
            self._say(f"{marker}{number:3d}. {row}")

    def _select(self, args: list[str]) -> None:
        self.player.select(int(_one_arg(args)) - 1)

    def _report_track(self) -> None:
        state = "playing" if self.player.playing else "paused"
        self._say(f"{state}: {self.player.current_title}")

    def _play(self, args: list[str]) -> None:
        self.player.play_pressed()
        self._report_track()

    def _next(self, args: list[str]) -> None:
        self.player.next_pressed()
        self._report_track()

    def _prev(self, args: list[str]) -> None:
        self.player.previous_pressed()
        self._report_track()

    def _mute(self, args: list[str]) -> None:
        self._say("muted" if self.player.toggle_mute() else "unmuted")

    def _volume(self, args: list[str]) -> None:
        self.player.set_volume(int(_one_arg(args)))
        self._say(f"volume: {self.player.volume_label}")

    def _mode(self, args: list[str]) -> None:
        name = _one_arg(args).lower()
        mode = _MODES.get(name)
        if mode is None:
            raise ValueError(f"unknown mode: {name}")
        self.player.set_mode(mode)
        self._say(f"mode: {name}")

    def _seek(self, args: list[str]) -> None:
        self.player.seek(_parse_time(_one_arg(args)))

    def _status(self, args: list[str]) -> None:
        player = self.player
        self._say(f"page: {player.page.name.lower()}")
        self._say(f"mode: {player.mode.value}")
        self._say(f"song: {player.current_title}")
        self._say(f"state: {'playing' if player.playing else 'stopped'}")
        self._say(f"time: {player.current_time} / {player.total_time}")
        self._say(f"volume: {player.volume_label}{' (muted)' if player.muted else ''}")
        lyric = player.local_lyrics_text if player.page is Page.LOCAL else player.lyrics_text
        self._say(f"lyrics: {lyric}")


def main(argv: list[str] | None = None) -> int:
    """Start the interactive player."""
    parser = argparse.ArgumentParser(prog="kmusicplayer", description="Console music player.")
    parser.add_argument("files", nargs="*", help="MP3 files to add to the local list")
    args = parser.parse_args(argv)

    backend = PygameBackend()
    player = MusicPlayer(backend)
    shell = Shell(player)
    if args.files:
        player.add_local_files(args.files)
        player.show_page(Page.LOCAL)
    shell.execute("help")
    while True:
        try:
            line = input(Shell.PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        try:
            _pump(player, backend)
        except PlayerError as exc:
            print(f"warning: {exc}")
        if not shell.execute(line):
            break
    return 0


if __name__ == "__main__":
    sys.exit(main())