"""Playback state of the music player: playlists, modes, lyrics and timing."""

from __future__ import annotations

import enum
import os
import random
from pathlib import Path
from typing import Callable, Iterable, Protocol, Sequence

from .http import HttpClient, HttpError
from .lyrics import LyricTracker
from .musicinfo import MusicInformation

NO_SELECTION = "Please select a song!"
FIRST_SONG = "This is the first song!"
LAST_SONG = "This is the last song!"
NO_LOCAL_LYRICS = "No local song lyrics found"
LOCAL_ALBUM_COVER = "images/localmusic.png"
ROTATION_STEP = 5
ROTATION_INTERVAL_MS = 200
DEFAULT_VOLUME = 100


class PlaybackMode(enum.Enum):
    """What happens when a song reaches its end."""

    SEQUENTIAL = "sequential"
    LOOP_ONE = "loop_one"
    RANDOM = "random"


class Page(enum.IntEnum):
    """The song list currently shown."""

    ONLINE = 0
    LOCAL = 1


class PlayerError(Exception):
    """A user action cannot be carried out."""


class NoSelectionError(PlayerError):
    """Play was requested while no song is selected."""


class BoundaryError(PlayerError):
    """Previous or next was requested at the edge of the list."""


class MediaBackend(Protocol):
    """The audio output the player drives."""

    def load(self, url: str) -> None: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def set_position(self, ms: int) -> None: ...

    def set_volume(self, volume: int) -> None: ...

    def set_muted(self, muted: bool) -> None: ...


def format_time(ms: int) -> str:
    """Format a time in milliseconds as ``mm:ss`` on a 24-hour clock face."""
    seconds = (int(ms) // 1000) % 86400
    return f"{seconds // 60 % 60:02d}:{seconds % 60:02d}"


class MusicPlayer:
    """Online and local song lists with play, skip, mode and lyric handling."""

    def __init__(
        self,
        backend: MediaBackend,
        fetch: Callable[[str], bytes] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.backend = backend
        self._fetch = fetch if fetch is not None else HttpClient().get
        self._rng = rng if rng is not None else random.Random()
        self.page = Page.ONLINE
        self.online: list[MusicInformation] = []
        self.local_paths: list[str] = []
        self.local_names: list[str] = []
        self._selection = {Page.ONLINE: -1, Page.LOCAL: -1}
        self.current_index = -1
        self.current_url = ""
        self.playing = False
        self.muted = False
        self.volume = DEFAULT_VOLUME
        self.mode = PlaybackMode.SEQUENTIAL
        self.lyrics = LyricTracker()
        self.local_lyrics_text = ""
        self.album_cover: bytes | str | None = None
        self.rotation_angle = 0
        self.rotating = False
        self.slider_maximum = 0
        self.slider_value = 0
        self.current_time = "00:00"
        self.total_time = "00:00"

    @property
    def lyrics_text(self) -> str:
        """The lyric line currently shown for online songs."""
        return self.lyrics.text

    @property
    def volume_label(self) -> str:
        return str(self.volume)

    @property
    def volume_enabled(self) -> bool:
        return not self.muted

    @property
    def selected_row(self) -> int:
        """The selected row of the current page, -1 if none."""
        return self._selection[self.page]

    @property
    def online_rows(self) -> list[tuple[str, str, str]]:
        """Song name, album name and duration of every online song."""
        return [
            (info.music_name, info.album_name, str(info.duration))
            for info in self.online
        ]

    @property
    def current_title(self) -> str:
        """Name of the song at the current index of the current page."""
        index = self.current_index
        if self.page is Page.ONLINE and 0 <= index < len(self.online):
            return self.online[index].music_name
        if self.page is Page.LOCAL and 0 <= index < len(self.local_names):
            return self.local_names[index]
        return ""

    def row_count(self, page: Page | None = None) -> int:
        page = self.page if page is None else Page(page)
        return len(self.online) if page is Page.ONLINE else len(self.local_paths)

    def show_music_info(self, infos: Sequence[MusicInformation]) -> None:
        """Replace the online song list."""
        self.online = list(infos)
        if self._selection[Page.ONLINE] >= len(self.online):
            self._selection[Page.ONLINE] = -1

    def add_local_files(self, paths: Iterable[str]) -> list[str]:
        """Append files to the local list; return the song names added."""
        added = []
        for path in paths:
            name = Path(path).name.split(".", 1)[0]
            self.local_paths.append(str(path))
            self.local_names.append(name)
            added.append(name)
        return added

    def show_page(self, page: Page | int) -> None:
        self.page = Page(page)

    def select(self, row: int) -> None:
        """Select ``row`` of the current page."""
        if not 0 <= row < self.row_count():
            raise IndexError(f"no song at row {row}")
        self._selection[self.page] = row

    def _select_quietly(self, row: int) -> None:
        if 0 <= row < self.row_count():
            self._selection[self.page] = row

    def play_pressed(self) -> bool:
        """Start, resume or pause the selected song; return whether playing."""
        row = self.selected_row
        if not 0 <= row < self.row_count():
            raise NoSelectionError(NO_SELECTION)
        self.current_index = row
        if self.page is Page.ONLINE:
            info = self.online[row]
            if self.current_url != info.music_mp3_url:
                self.current_url = info.music_mp3_url
                self.backend.load(info.music_mp3_url)
                self.playing = False
            self._toggle()
            self._update_total_time(info.duration)
            self._load_lyrics(info.music_lrc_url)
            self._load_cover(info.music_album_url)
        else:
            url = Path(os.path.abspath(self.local_paths[row])).as_uri()
            if self.current_url != url:
                self.current_url = url
                self.backend.load(url)
                self._update_total_time(0)
                self.playing = False
            self._toggle()
            self.album_cover = LOCAL_ALBUM_COVER
            self.local_lyrics_text = NO_LOCAL_LYRICS
        return self.playing

    def _toggle(self) -> None:
        if self.playing:
            self.backend.pause()
            self.rotating = False
        else:
            self.backend.play()
            self.rotating = True
        self.playing = not self.playing

    def _download(self, url: str) -> bytes:
        try:
            return self._fetch(url)
        except HttpError:
            return b""

    def _load_lyrics(self, url: str) -> None:
        self.lyrics.load(self._download(url).decode("utf-8", errors="replace"))

    def _load_cover(self, url: str) -> None:
        data = self._download(url)
        if data:
            self.album_cover = data

    def _update_total_time(self, seconds: int) -> None:
        ms = seconds * 1000
        if ms > 0:
            self.slider_maximum = ms
            self.total_time = format_time(ms)
        else:
            self.total_time = "00:00"

    def _restart_at(self, index: int) -> None:
        self.current_index = index
        self._select_quietly(index)
        self.playing = False
        self.play_pressed()

    def _play_next(self) -> None:
        last = self.row_count() - 1
        self._restart_at(self.current_index + 1 if self.current_index < last else 0)

    def _play_previous(self) -> None:
        index = self.current_index
        self._restart_at(index - 1 if index > 0 else self.row_count() - 1)

    def previous_pressed(self) -> None:
        if self.current_index <= 0:
            raise BoundaryError(FIRST_SONG)
        self._play_previous()

    def next_pressed(self) -> None:
        if self.current_index >= self.row_count() - 1:
            raise BoundaryError(LAST_SONG)
        self._play_next()

    def media_finished(self) -> None:
        """React to the end of the current song according to the mode."""
        if self.mode is PlaybackMode.SEQUENTIAL:
            self._play_next()
        elif self.mode is PlaybackMode.LOOP_ONE:
            self.backend.set_position(0)
            self.backend.play()
        else:
            count = self.row_count()
            self._restart_at(self._rng.randint(0, count - 1) if count else 0)

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        self.backend.set_muted(self.muted)
        return self.muted

    def set_volume(self, volume: int) -> None:
        if not 0 <= volume <= 100:
            raise ValueError("volume must be between 0 and 100")
        self.backend.set_volume(volume)
        self.volume = volume

    def set_mode(self, mode: PlaybackMode | str) -> None:
        self.mode = PlaybackMode(mode)

    def position_changed(self, position: int) -> None:
        """Follow the playback position reported by the backend."""
        self.slider_value = position
        self.current_time = format_time(position)
        self.lyrics.advance(position)

    def duration_changed(self, duration: int) -> None:
        self.slider_maximum = duration
        self.total_time = format_time(duration)

    def seek(self, position: int) -> None:
        """Jump to ``position`` ms and show the matching lyric line."""
        self.backend.set_position(position)
        self.lyrics.seek(position)

    def rotate_cover(self) -> int:
        """Turn the album cover one step; return the new angle in degrees."""
        self.rotation_angle = (self.rotation_angle + ROTATION_STEP) % 360
        return self.rotation_angle