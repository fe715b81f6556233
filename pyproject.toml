[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kmusicplayer"
version = "0.1.0"
description = "A console music player for local and online MP3 songs with synced lyrics and playback modes"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["music", "player", "mp3", "lyrics", "lrc", "playlist"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players :: MP3",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
kmusicplayer = "kmusicplayer.console:main"

[tool.hatch.build.targets.wheel]
packages = ["kmusicplayer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
