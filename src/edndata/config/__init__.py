"""Configuration module using Pydantic Settings.

Usage:
    from edndata.config import ReaderSettings

    settings = ReaderSettings(max_depth=64)
"""

from edndata.config.settings import ReaderSettings

__all__ = [
    "ReaderSettings",
]
