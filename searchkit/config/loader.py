"""Configuration loading utilities."""

import json
import os
from pathlib import Path

from loguru import logger

from searchkit.config.schema import Config

# Beats the config file.
_OVERRIDE_ENV_KEYS = ("API_KEY", "SEARCH_ENGINE_ID")
# Used only when the config file has no complete pair.
_FALLBACK_ENV_KEYS = ("GOOGLE_API_KEY", "GOOGLE_SEARCH_ENGINE_ID")


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".searchkit" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from file or create default.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded configuration object with environment overrides applied.
    """
    path = config_path or get_config_path()
    config = Config()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            data = _migrate_config(data)
            config = Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Failed to load config from {}: {}", path, e)
            logger.warning("Using default configuration.")

    return apply_env_overrides(config)


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Optional path to save to. Uses default if not provided.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(by_alias=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def apply_env_overrides(config: Config) -> Config:
    """
    Resolve search credentials.

    Precedence: ``API_KEY``/``SEARCH_ENGINE_ID`` in the environment, then a
    complete pair from the config file, then ``GOOGLE_API_KEY``/
    ``GOOGLE_SEARCH_ENGINE_ID``. A pair is only used when both values are set.
    """
    search = config.tools.search
    override = _env_pair(*_OVERRIDE_ENV_KEYS)
    fallback = _env_pair(*_FALLBACK_ENV_KEYS)
    if override:
        search.api_key, search.search_engine_id = override
        logger.debug("Search credentials loaded from {} / {}", *_OVERRIDE_ENV_KEYS)
    elif fallback and not (search.api_key and search.search_engine_id):
        search.api_key, search.search_engine_id = fallback
        logger.debug("Search credentials loaded from {} / {}", *_FALLBACK_ENV_KEYS)

    if not search.api_key or not search.search_engine_id:
        logger.warning(
            "Search API key or engine id not configured "
            "(set GOOGLE_API_KEY and GOOGLE_SEARCH_ENGINE_ID or tools.search.apiKey/searchEngineId)"
        )
    return config


def _env_pair(key_var: str, engine_var: str) -> tuple[str, str] | None:
    api_key = os.environ.get(key_var, "")
    engine_id = os.environ.get(engine_var, "")
    if api_key and engine_id:
        return api_key, engine_id
    return None


def _migrate_config(data: dict) -> dict:
    """Migrate old config formats to current."""
    # Move legacy api-keys.json shape {api_key, search_engine_id} -> tools.search.*
    legacy_key = data.pop("api_key", None)
    legacy_engine = data.pop("search_engine_id", None)

    tools = data.setdefault("tools", {})
    search_cfg = tools.setdefault("search", {})
    if legacy_key and not search_cfg.get("apiKey"):
        search_cfg["apiKey"] = legacy_key
    if legacy_engine and not search_cfg.get("searchEngineId"):
        search_cfg["searchEngineId"] = legacy_engine

    # Fill default search base URL when empty
    if "baseUrl" in search_cfg and not search_cfg["baseUrl"]:
        search_cfg.pop("baseUrl")

    return data
