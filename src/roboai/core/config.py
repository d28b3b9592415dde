"""Configuration management for Robo AI Story Creator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ROBOAI_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (ROBOAI_* prefix)
2. .env file in the project root
3. Default values defined in RoboConfig

The API credential is the one exception to the prefix rule. The hosting
environment usually injects it as ``API_KEY`` or ``GEMINI_API_KEY``, so those
names (and ``GOOGLE_API_KEY``) are accepted alongside ``ROBOAI_API_KEY``.

Example .env file:
    ROBOAI_API_KEY=your-gemini-key
    ROBOAI_MODEL_ID=gemini-2.5-flash-image
    ROBOAI_MAX_PROMPTS=10
    ROBOAI_DOWNLOADS_DIR=downloads

Usage Example
-------------
    from roboai.core.config import config

    print(config.model_id)
    print(config.downloads_dir)
"""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RoboConfig(BaseSettings):
    """Main configuration for Robo AI Story Creator.

    Attributes
    ----------
    Model Adapter Settings:
        api_key : str
            Credential passed unmodified to the hosted image API
        default_model_adapter : str
            Registered adapter used for generation
        model_id : str
            Hosted model name sent with each request
        request_timeout_ms : int
            HTTP timeout for a single generation call

    Form Settings:
        default_aspect_ratio : str
            Aspect-ratio preset selected on startup
        max_prompts : int
            Upper bound on scene prompts per batch
        character_slots : int
            Number of fixed character reference slots

    Paths:
        downloads_dir : Path
            Directory that downloaded images are written to

    UI Settings:
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)

    Notes
    -----
    - The downloads directory is created automatically if it doesn't exist
    - To modify config, set environment variables and restart the application
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ROBOAI_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Credential and model settings
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("ROBOAI_API_KEY", "API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
        description="API key for the hosted image model",
    )
    default_model_adapter: str = Field(
        default="Gemini-Flash-Image",
        description="Default model adapter to use",
    )
    model_id: str = Field(
        default="gemini-2.5-flash-image",
        description="Hosted model used for image generation",
    )
    request_timeout_ms: int = Field(
        default=300_000,
        description="Timeout for a single generation request in milliseconds",
        ge=1_000,
    )

    # Form settings
    default_aspect_ratio: str = Field(
        default="16:9",
        description="Aspect ratio preset selected when the page loads",
    )
    max_prompts: int = Field(
        default=10,
        description="Maximum number of scene prompts in one batch",
        ge=1,
        le=50,
    )
    character_slots: int = Field(
        default=4,
        description="Number of character reference slots",
        ge=1,
        le=8,
    )

    # Paths
    downloads_dir: Path = Field(
        default=Path("downloads"),
        description="Directory to write downloaded images",
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
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.downloads_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (ROBOAI_* prefix) and .env file.
config = RoboConfig()
