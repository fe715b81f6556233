"""Metadata describing one song of the online catalogue."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MusicInformation:
    """Names, locations and length of one song.

    ``duration`` is the length of the song in whole seconds.
    """

    body_url: str = ""
    music_url: str = ""
    music_mp3_url: str = ""
    music_lrc_url: str = ""
    music_album_url: str = ""
    music_name: str = ""
    album_name: str = ""
    duration: int = 0
    music_lrc_name: str = ""
    music_local_mp3_path: str = ""
    music_local_lrc_path: str = ""
    music_local_alm_path: str = ""

    def duration_ms(self) -> int:
        """Return the song length in milliseconds."""
        return self.duration * 1000