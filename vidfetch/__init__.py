"""Extract downloadable media streams from web pages, with HTTP, parsing and ffmpeg helpers."""

__version__ = "0.1.0"