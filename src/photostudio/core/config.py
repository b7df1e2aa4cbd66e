"""Configuration management for the Photo Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PHOTOSTUDIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (PHOTOSTUDIO_* prefix)
2. .env file in the project root
3. Default values defined in StudioConfig

The Gemini credential is the one exception to the prefix rule: it is read from
``PHOTOSTUDIO_GEMINI_API_KEY`` or, failing that, the conventional
``GEMINI_API_KEY`` variable.

Example .env file:
    GEMINI_API_KEY=your-key
    PHOTOSTUDIO_GEMINI_MODEL=gemini-2.5-flash-image
    PHOTOSTUDIO_DATA_DIR=data
    PHOTOSTUDIO_API_BASE_URL=http://localhost:3000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The credential it carries is handed to the generation client at construction
time; nothing reads the environment ad hoc during a generation call.

Usage Example
-------------
    from photostudio.core.config import config

    print(config.db_path)
    print(config.api_base_url)

A missing credential is not a startup failure.  The generation client raises
:class:`~photostudio.core.errors.ConfigurationError` when it is asked to
generate without one.
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StudioConfig(BaseSettings):
    """Main configuration for the Photo Studio.

    Attributes
    ----------
    Generation Settings:
        gemini_api_key : str | None
            Credential for the Gemini API (None means "not configured")
        gemini_model : str
            Image-capable Gemini model used for every shot

    Storage:
        data_dir : Path
            Directory holding the SQLite database and the history cache
        outputs_dir : Path
            Directory for downloadable portrait files
        db_path : Path | None
            SQLite database file (defaults to ``data_dir/history.db``)
        cache_path : Path | None
            Client-side history cache (defaults to
            ``data_dir/history_cache.json``)

    API Settings:
        api_base_url : str
            Base URL the UI uses to reach the history API
        server_host : str
            Bind address for the API server
        server_port : int
            Port for the API server

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for internal use)

    Examples
    --------
        >>> custom_config = StudioConfig(
        ...     gemini_api_key="test-key",
        ...     data_dir="/tmp/studio",
        ... )
        >>> custom_config.db_path
        PosixPath('/tmp/studio/history.db')
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PHOTOSTUDIO_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Generation settings
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("PHOTOSTUDIO_GEMINI_API_KEY", "GEMINI_API_KEY"),
        description="Gemini API credential (required at generation time only)",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini image model used for every shot",
    )

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for the history database and cache",
    )
    outputs_dir: Path = Field(
        default=Path("outputs"),
        description="Directory for downloadable portrait files",
    )
    db_path: Path | None = Field(
        default=None,
        description="SQLite database path (defaults to data_dir/history.db)",
    )
    cache_path: Path | None = Field(
        default=None,
        description="History cache path (defaults to data_dir/history_cache.json)",
    )

    # API settings
    api_base_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the history API used by the UI",
    )
    server_host: str = Field(
        default="0.0.0.0",
        description="API server bind address",
    )
    server_port: int = Field(
        default=3000,
        description="API server port",
        ge=1024,
        le=65535,
    )

    # UI settings
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for internal use)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration, resolve derived paths and create directories.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        if self.db_path is None:
            self.db_path = self.data_dir / "history.db"
        if self.cache_path is None:
            self.cache_path = self.data_dir / "history_cache.json"

        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.outputs_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank Gemini credential is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.strip())


# Global configuration instance
# Loads values from environment variables (PHOTOSTUDIO_* prefix) and .env file.
config = StudioConfig()
