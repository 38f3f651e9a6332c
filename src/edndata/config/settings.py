"""Configuration settings using Pydantic Settings.

Usage:
    from edndata.config import ReaderSettings

    # Load from environment variables (EDNDATA_*)
    settings = ReaderSettings()

    # Or override with explicit values
    settings = ReaderSettings(builtin_tags=False, max_depth=64)
"""

from __future__ import annotations

try:
    from pydantic import Field
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install pydantic-settings"
    ) from e


class ReaderSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for the EDN reader.

    Attributes:
        builtin_tags: Install the #inst and #uuid readers on new Reader instances.
        max_depth: Deepest collection nesting the parser accepts.

    Environment Variables:
        EDNDATA_BUILTIN_TAGS
        EDNDATA_MAX_DEPTH
    """

    model_config = SettingsConfigDict(
        env_prefix="EDNDATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    builtin_tags: bool = True
    max_depth: int = Field(default=256, ge=1)
