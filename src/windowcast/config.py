"""
WindowCast Configuration
========================

This module handles configuration loading for WindowCast.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    WINDOWCAST_WINDOW_TITLES    -> window.candidate_titles (comma-separated)
    WINDOWCAST_TITLE_KEYWORD    -> window.title_keyword
    WINDOWCAST_INTERVAL_MS      -> capture.interval_ms
    WINDOWCAST_JPEG_QUALITY     -> capture.jpeg_quality
    WINDOWCAST_HOST             -> server.host
    WINDOWCAST_PORT             -> server.port
    WINDOWCAST_MAX_CONNECTIONS  -> server.max_connections
    WINDOWCAST_LOG_LEVEL        -> logging.level
    PORT                        -> server.port

Example:
    from windowcast.config import load_config

    settings = load_config()
    print(settings.server.port)
    print(settings.window.candidate_titles)
"""

import os
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class WindowConfig(BaseModel):
    """Target window lookup configuration."""

    candidate_titles: List[str] = Field(
        default_factory=lambda: [
            "Minecraft",
            "Minecraft Bedrock",
            "Minecraft for Windows 10",
            "Minecraft: Bedrock Edition",
        ],
        description="Exact window titles to try, in order",
    )
    title_keyword: str = Field(
        default="minecraft",
        description="Case-insensitive substring fallback",
    )


class CaptureConfig(BaseModel):
    """Capture loop configuration."""

    interval_ms: int = Field(
        default=33,
        ge=1,
        description="Target tick period in milliseconds (~30 Hz)",
    )
    jpeg_quality: int = Field(
        default=70,
        ge=1,
        le=100,
        description="JPEG encoder quality",
    )
    error_backoff_ms: int = Field(
        default=100,
        ge=0,
        description="Pause after a failed capture tick",
    )
    stats_interval_s: float = Field(
        default=10.0,
        ge=0,
        description="Seconds between capture stats log lines (0 = off)",
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8080, ge=0, le=65535, description="Bind port")
    backlog: int = Field(default=5, ge=1, description="Listen backlog")
    max_connections: int = Field(
        default=64,
        ge=1,
        description="Concurrent connection limit (503 beyond it)",
    )
    max_header_bytes: int = Field(
        default=16384,
        ge=1024,
        description="Maximum request head size",
    )
    image_path: str = Field(default="/image", description="Image endpoint path prefix")
    refresh_interval_ms: int = Field(
        default=33,
        ge=1,
        description="Client-side polling interval of the control page",
    )
    page_title: str = Field(default="WindowCast Live View", description="Control page title")

    @field_validator("image_path")
    @classmethod
    def _image_path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("image_path must start with '/'")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for WindowCast.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    window: WindowConfig = Field(default_factory=WindowConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    shutdown_timeout_s: float = Field(
        default=5.0,
        gt=0,
        description="Maximum wait for each service thread on shutdown",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to config.yaml. If None, searches common locations.

    Returns:
        Settings: Loaded configuration
    """
    # Find config file
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path.home() / ".windowcast.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    # Load from YAML if exists
    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    elif config_path:
        logger.warning(f"Config file not found: {config_path}, using defaults")
    else:
        logger.info("No config file found, using defaults and environment variables")

    # Apply environment variable overrides
    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Window settings
    if env_titles := os.environ.get("WINDOWCAST_WINDOW_TITLES"):
        titles = [t.strip() for t in env_titles.split(",") if t.strip()]
        config_data.setdefault("window", {})["candidate_titles"] = titles
    if env_keyword := os.environ.get("WINDOWCAST_TITLE_KEYWORD"):
        config_data.setdefault("window", {})["title_keyword"] = env_keyword

    # Capture settings
    if env_interval := os.environ.get("WINDOWCAST_INTERVAL_MS"):
        config_data.setdefault("capture", {})["interval_ms"] = int(env_interval)
    if env_quality := os.environ.get("WINDOWCAST_JPEG_QUALITY"):
        config_data.setdefault("capture", {})["jpeg_quality"] = int(env_quality)

    # Server settings
    if env_host := os.environ.get("WINDOWCAST_HOST"):
        config_data.setdefault("server", {})["host"] = env_host
    if env_port := os.environ.get("PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    elif env_port := os.environ.get("WINDOWCAST_PORT"):
        config_data.setdefault("server", {})["port"] = int(env_port)
    if env_conns := os.environ.get("WINDOWCAST_MAX_CONNECTIONS"):
        config_data.setdefault("server", {})["max_connections"] = int(env_conns)

    # Logging settings
    if env_log := os.environ.get("WINDOWCAST_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        force=True,
    )
