import random

import pytest

from kmusicplayer.http import HttpError
from kmusicplayer.musicinfo import MusicInformation
from kmusicplayer.player import (
    DEFAULT_VOLUME,
    LOCAL_ALBUM_COVER,
    NO_LOCAL_LYRICS,
    ROTATION_STEP,
    BoundaryError,
    MusicPlayer,
    NoSelectionError,
    Page,
    PlaybackMode,
    format_time,
)

LYRICS = b"[00:01.00]first\\r\\n[00:05.00]second\\r\\n[00:09.00]third\\r\\n"


class FakeBackend:
    def __init__(self):
        self.calls = []

    def load(self, url):
        self.calls.append(("load", url))

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def set_position(self, ms):
        self.calls.append(("set_position", ms))

    def set_volume(self, volume):
        self.calls.append(("set_volume", volume))

    def set_muted(self, muted):
        self.calls.append(("set_muted", muted))


def make_info(n):
    return MusicInformation(
        music_name=f"song{n}",
        album_name=f"album{n}",
        music_mp3_url=f"http://example.com/{n}.mp3",
        music_lrc_url=f"http://example.com/{n}.lrc",
        music_album_url=f"http://example.com/{n}.jpg",
        duration=90 + n,
    )


def make_player(count=3, rng=None, resources=None):
    if resources is None:
        resources = {}
        for n in range(count):
            resources[f"http://example.com/{n}.lrc"] = LYRICS
            resources[f"http://example.com/{n}.jpg"] = f"cover{n}".encode()

    def fetch(url):
        if url not in resources:
            raise HttpError(url, "missing")
        return resources[url]

    backend = FakeBackend()
    player = MusicPlayer(backend, fetch, rng or random.Random(1))
    player.show_music_info([make_info(n) for n in range(count)])
    return player, backend


def test_format_time():
    assert format_time(0) == "00:00"
    assert format_time(61_000) == "01:01"
    assert format_time(-500) == "59:59"
    assert format_time(3_600_000) == format_time(0)


def test_online_rows():
    player, _ = make_player(2)
    assert player.online_rows == [("song0", "album0", "90"), ("song1", "album1", "91")]


def test_play_online_song():
    player, backend = make_player()
    player.select(1)
    assert player.play_pressed() is True
    info = player.online[1]
    assert backend.calls == [("load", info.music_mp3_url), ("play",)]
    assert player.current_index == 1
    assert player.current_title == "song1"
    assert player.slider_maximum == info.duration_ms()
    assert player.total_time == format_time(info.duration_ms())
    assert player.lyrics_text == "first"
    assert player.album_cover == b"cover1"
    assert player.rotating is True


def test_second_press_pauses_without_reloading():
    player, backend = make_player()
    player.select(0)
    player.play_pressed()
    assert player.play_pressed() is False
    assert backend.calls[-1] == ("pause",)
    assert [c for c in backend.calls if c[0] == "load"] == [("load", player.online[0].music_mp3_url)]
    assert player.rotating is False


def test_play_without_selection():
    player, _ = make_player()
    with pytest.raises(NoSelectionError):
        player.play_pressed()


def test_select_out_of_range():
    player, _ = make_player(2)
    with pytest.raises(IndexError):
        player.select(2)
    assert player.selected_row == -1


def test_next_moves_forward():
    player, backend = make_player()
    player.select(0)
    player.play_pressed()
    player.next_pressed()
    assert player.current_index == 1
    assert player.selected_row == 1
    assert backend.calls[-2:] == [("load", player.online[1].music_mp3_url), ("play",)]
    assert player.playing is True


def test_next_at_last_song():
    player, _ = make_player()
    player.select(2)
    player.play_pressed()
    with pytest.raises(BoundaryError):
        player.next_pressed()
    assert player.current_index == 2


def test_previous_at_first_song():
    player, _ = make_player()
    with pytest.raises(BoundaryError):
        player.previous_pressed()
    player.select(0)
    player.play_pressed()
    with pytest.raises(BoundaryError):
        player.previous_pressed()


def test_previous_moves_back():
    player, _ = make_player()
    player.select(2)
    player.play_pressed()
    player.previous_pressed()
    assert player.current_index == 1
    assert player.selected_row == 1


def test_sequential_end_wraps_around():
    player, backend = make_player()
    player.select(2)
    player.play_pressed()
    player.media_finished()
    assert player.current_index == 0
    assert backend.calls[-2] == ("load", player.online[0].music_mp3_url)


def test_loop_one_restarts_song():
    player, backend = make_player()
    player.set_mode(PlaybackMode.LOOP_ONE)
    player.select(1)
    player.play_pressed()
    player.media_finished()
    assert backend.calls[-2:] == [("set_position", 0), ("play",)]
    assert player.current_index == 1


def test_random_end_picks_valid_row():
    player, _ = make_player(5, rng=random.Random(7))
    player.set_mode("random")
    player.select(0)
    player.play_pressed()
    for _ in range(10):
        player.media_finished()
        assert 0 <= player.current_index < 5
        assert player.selected_row == player.current_index
        assert player.playing is True


def test_local_files():
    player, backend = make_player()
    names = player.add_local_files(["/music/alpha.live.mp3", "beta.mp3"])
    assert names == ["alpha", "beta"]
    player.show_page(Page.LOCAL)
    player.select(0)
    player.play_pressed()
    kind, url = backend.calls[0]
    assert kind == "load"
    assert url.startswith("file:")
    assert url.endswith("alpha.live.mp3")
    assert player.local_lyrics_text == NO_LOCAL_LYRICS
    assert player.album_cover == LOCAL_ALBUM_COVER
    assert player.total_time == "00:00"
    assert player.current_title == "alpha"


def test_pages_keep_their_selection():
    player, _ = make_player()
    player.select(2)
    player.add_local_files(["a.mp3"])
    player.show_page(Page.LOCAL)
    assert player.selected_row == -1
    player.show_page(Page.ONLINE)
    assert player.selected_row == 2


def test_toggle_mute():
    player, backend = make_player()
    assert player.toggle_mute() is True
    assert player.volume_enabled is False
    assert player.toggle_mute() is False
    assert backend.calls == [("set_muted", True), ("set_muted", False)]


def test_set_volume():
    player, backend = make_player()
    assert player.volume == DEFAULT_VOLUME
    player.set_volume(30)
    assert backend.calls == [("set_volume", 30)]
    assert player.volume_label == "30"
    with pytest.raises(ValueError):
        player.set_volume(101)
    with pytest.raises(ValueError):
        player.set_volume(-1)
    assert player.volume == 30


def test_set_mode_rejects_unknown():
    player, _ = make_player()
    with pytest.raises(ValueError):
        player.set_mode("shuffle")
    assert player.mode is PlaybackMode.SEQUENTIAL


def test_rotate_cover_full_turn():
    player, _ = make_player()
    assert player.rotate_cover() == ROTATION_STEP
    for _ in range(360 // ROTATION_STEP - 1):
        player.rotate_cover()
    assert player.rotation_angle == 0


def test_position_changed_follows_lyrics():
    player, _ = make_player()
    player.select(0)
    player.play_pressed()
    player.position_changed(6000)
    assert player.lyrics_text == "second"
    assert player.slider_value == 6000
    assert player.current_time == format_time(6000)


def test_seek_moves_lyrics():
    player, backend = make_player()
    player.select(0)
    player.play_pressed()
    player.seek(0)
    assert backend.calls[-1] == ("set_position", 0)
    assert player.lyrics_text == ""
    player.seek(2000)
    assert player.lyrics_text == "first"


def test_failed_downloads_leave_empty_lyrics():
    player, _ = make_player(2, resources={})
    player.select(0)
    player.play_pressed()
    assert player.lyrics_text == ""
    assert player.album_cover is None
    assert player.playing is True


def test_duration_changed():
    player, _ = make_player()
    player.duration_changed(125_000)
    assert player.slider_maximum == 125_000
    assert player.total_time == format_time(125_000)