"""Console music player for local and online MP3 songs with timed lyrics."""

__version__ = "0.1.0"
__all__ = ["__version__"]