"""
Generator Configuration

Loads the service configuration from config.yaml. Every section is
optional; missing keys fall back to the dataclass defaults.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import yaml

from .codec import EMPTY_PLACEHOLDER, ERROR_PLACEHOLDER

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SPRING_YAML_CONFIG"


@dataclass
class CatalogConfig:
    """Where the property catalog comes from."""

    path: str | None = None  # None = bundled Spring Boot catalog
    cache_ttl_seconds: float = 300.0


@dataclass
class SessionConfig:
    max_sessions: int = 256


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class OutputConfig:
    """Text shown in the YAML view when there is nothing to render."""

    empty_placeholder: str = EMPTY_PLACEHOLDER
    error_placeholder: str = ERROR_PLACEHOLDER


@dataclass
class GeneratorConfig:
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    sessions: SessionConfig = field(default_factory=SessionConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        logger.warning("Config section '%s' is not a mapping, ignoring it", key)
        return {}
    return value


def _apply_env_overrides(config: GeneratorConfig) -> GeneratorConfig:
    host = os.getenv("HOST")
    if host:
        config.server.host = host
    port = os.getenv("PORT")
    if port:
        try:
            config.server.port = int(port)
        except ValueError:
            logger.warning("Ignoring non-numeric PORT=%r", port)
    return config


def load_generator_config(config_path: str | None = None) -> GeneratorConfig:
    """
    Load generator configuration from config.yaml.

    The path defaults to $SPRING_YAML_CONFIG, then ./config.yaml. Falls back
    to defaults if the file is missing or unreadable. HOST and PORT from the
    environment win over the file.
    """
    config_path = config_path or os.getenv(CONFIG_ENV_VAR) or "config.yaml"
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file not found at %s, using defaults", config_path)
        return _apply_env_overrides(GeneratorConfig())
    except Exception as e:
        logger.error("Failed to load config: %s", e)
        return _apply_env_overrides(GeneratorConfig())

    if not isinstance(data, dict):
        logger.error("Config %s must be a mapping, using defaults", config_path)
        return _apply_env_overrides(GeneratorConfig())

    catalog_data = _section(data, "catalog")
    catalog = CatalogConfig(
        path=catalog_data.get("path", CatalogConfig.path),
        cache_ttl_seconds=float(
            catalog_data.get("cache_ttl_seconds", CatalogConfig.cache_ttl_seconds)
        ),
    )

    session_data = _section(data, "sessions")
    sessions = SessionConfig(
        max_sessions=int(session_data.get("max_sessions", SessionConfig.max_sessions)),
    )

    server_data = _section(data, "server")
    origins = server_data.get("cors_origins", ["*"])
    if isinstance(origins, str):
        origins = [o.strip() for o in origins.split(",") if o.strip()]
    server = ServerConfig(
        host=str(server_data.get("host", ServerConfig.host)),
        port=int(server_data.get("port", ServerConfig.port)),
        cors_origins=list(origins),
    )

    output_data = _section(data, "output")
    output = OutputConfig(
        empty_placeholder=str(
            output_data.get("empty_placeholder", OutputConfig.empty_placeholder)
        ),
        error_placeholder=str(
            output_data.get("error_placeholder", OutputConfig.error_placeholder)
        ),
    )

    return _apply_env_overrides(
        GeneratorConfig(catalog=catalog, sessions=sessions, server=server, output=output)
    )
