"""
Transfer Layer.

This package handles HTTP downloads and writing downloaded archives to disk.
"""

from .downloader import Downloader, open_session

__all__ = ["Downloader", "open_session"]
