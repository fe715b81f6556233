# kmusicplayer

A small music player for the terminal. It plays MP3 files from your disk, or songs described by online catalogue entries. It shows timed lyrics for online songs and supports sequential, loop-one and random playback.

## Installation

```
pip install .
```

Audio output uses `pygame`, which is installed as a dependency.

## Running

```
kmusicplayer [FILE ...]
```

This opens an interactive shell. Any MP3 files named on the command line are added to the local list, and the local page is shown.

There are two pages:

- the **online** page, which lists `MusicInformation` entries (name, album, duration in seconds, MP3, lyrics and album cover addresses);
- the **local** page, which lists MP3 files added from disk.

Shell commands:

| command | effect |
| --- | --- |
| `add FILE...` | add MP3 files to the local list |
| `online`, `local` | show the online or the local list |
| `list` | list the songs of the current page; `*` marks the selection |
| `select N` | select song N (counting from 1) of the current page |
| `play` | play or pause the selected song |
| `next`, `prev` | skip to the next or previous song |
| `mute` | toggle mute |
| `volume N` | set the volume, 0 to 100 |
| `mode NAME` | `sequential`, `loop` or `random` |
| `seek TIME` | jump to `mm:ss` or to a number of milliseconds |
| `status` | show page, mode, song, state, time, volume and lyric line |
| `help` | show the command list |
| `quit`, `exit` | leave |

`next` and `prev` refuse to go past the last or first song. When a song ends, the next one is chosen by the mode:

- **sequential**: the next row, wrapping back to the first;
- **loop**: the same song again from the start;
- **random**: a random row of the current page.

Playback progress and the end of a song are picked up each time a command is entered, so `status` shows the time as of the last command.

## Using it from Python

`kmusicplayer.player.MusicPlayer` holds the player state and works with any object that follows `kmusicplayer.player.MediaBackend` (`load`, `play`, `pause`, `set_position`, `set_volume`, `set_muted`). `kmusicplayer.console.PygameBackend` is the backend the shell uses.

```python
from kmusicplayer.console import PygameBackend
from kmusicplayer.musicinfo import MusicInformation
from kmusicplayer.player import MusicPlayer, Page, PlaybackMode

player = MusicPlayer(PygameBackend())
player.show_page(Page.LOCAL)
player.add_local_files(["/music/song.mp3"])
player.select(0)
player.play_pressed()
player.set_mode(PlaybackMode.RANDOM)

player.show_music_info([
    MusicInformation(
        music_name="Song",
        album_name="Album",
        duration=215,
        music_mp3_url="http://localhost/song.mp3",
        music_lrc_url="http://localhost/song.lrc",
        music_album_url="http://localhost/song.jpg",
    )
])
```

Actions that cannot be carried out raise `PlayerError` subclasses: `NoSelectionError` when play is pressed with no song selected, `BoundaryError` at either end of the list. `format_time` turns milliseconds into `mm:ss`.

When an online song starts, its lyrics and album cover are downloaded with `kmusicplayer.http.HttpClient`, which raises `HttpError` when a request fails; the player treats a failed download as empty. The cover is kept as raw bytes in `album_cover`.

Timed lyrics can be parsed on their own. Each line carries a `[mm:ss.xx]` tag, and lines are separated by the literal four-character sequence `\r\n` as it appears in the downloaded lyric files:

```python
from kmusicplayer.lyrics import LyricTracker, parse_lyrics

lines = parse_lyrics(text)
tracker = LyricTracker(lines)
tracker.advance(12_000)
print(tracker.text)
```

## What it does not do

- It has no catalogue search: the shell's online page stays empty unless entries are supplied from Python with `MusicPlayer.show_music_info`.
- It has no graphical window or tray icon, and does not draw album covers; it only downloads them and keeps a rotation angle (`rotate_cover`).
- Local songs have no lyrics; `status` shows "No local song lyrics found" for them.

## Tests

```
pip install .[test]
pytest
```