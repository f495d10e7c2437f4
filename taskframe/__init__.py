"""Framed codecs over async byte streams and a single-threaded asyncio runtime."""

__version__ = "0.1.0"