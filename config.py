import json
import os
from typing import Any, Dict, Optional

CONFIG_PATH = "config.json"

# Default configuration values
DEFAULT_CONFIG = {
    # Spotify Web API
    "spotify_api_prefix": "https://api.spotify.com/v1/",
    "spotify_request_timeout": 30,

    # Authentication: either a static access token, or client id + secret
    # for the client-credentials flow.
    "spotify_access_token": "",
    "spotify_client_id": "",
    "spotify_client_secret": "",
    "spotify_cache_tokens": False,
    "spotify_token_cache_path": "data/spotify_client_token.json",

    # Logging
    "log_level": "INFO",
    "log_file": "",
}

# Validation rules for config fields
CONFIG_SCHEMA = {
    "spotify_api_prefix": {"type": str, "required": True},
    "spotify_request_timeout": {"type": (int, float), "required": False, "min": 1, "max": 300},
    "spotify_access_token": {"type": str, "required": False},
    "spotify_client_id": {"type": str, "required": False},
    "spotify_client_secret": {"type": str, "required": False},
    "spotify_cache_tokens": {"type": bool, "required": False},
    "spotify_token_cache_path": {"type": str, "required": False},
    "log_level": {"type": str, "required": False, "choices": ["DEBUG", "INFO", "WARNING", "ERROR"]},
    "log_file": {"type": str, "required": False},
}


def load_config(path: str = CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from file, applying defaults for missing fields."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file {path} not found.")

    with open(path, "r", encoding="utf-8") as f:
        config = json.load(f)

    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = value

    return config


def save_config(config: Dict[str, Any], path: str = CONFIG_PATH) -> bool:
    """Save configuration to file."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        raise IOError(f"Failed to save config: {e}") from e


def validate_config(config: Dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate configuration against schema.
    Returns (is_valid, list_of_errors).
    """
    errors = []

    for key, rules in CONFIG_SCHEMA.items():
        if rules.get("required", False) and key not in config:
            errors.append(f"Missing required field: {key}")
            continue

        if key not in config:
            continue

        value = config[key]

        expected_type = rules.get("type")
        # bool is an int subclass; don't let True pass as a timeout
        if expected_type and (not isinstance(value, expected_type) or (isinstance(value, bool) and bool not in _as_tuple(expected_type))):
            type_names = expected_type.__name__ if not isinstance(expected_type, tuple) else "/".join(t.__name__ for t in expected_type)
            errors.append(f"Field '{key}' must be {type_names}, got {type(value).__name__}")
            continue

        if "choices" in rules and value not in rules["choices"]:
            errors.append(f"Field '{key}' must be one of {rules['choices']}, got '{value}'")

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if "min" in rules and value < rules["min"]:
                errors.append(f"Field '{key}' must be >= {rules['min']}, got {value}")
            if "max" in rules and value > rules["max"]:
                errors.append(f"Field '{key}' must be <= {rules['max']}, got {value}")

    has_token = bool(str(config.get("spotify_access_token") or "").strip())
    has_credentials = bool(str(config.get("spotify_client_id") or "").strip()) and bool(
        str(config.get("spotify_client_secret") or "").strip()
    )
    if not has_token and not has_credentials:
        errors.append("Set spotify_access_token, or both spotify_client_id and spotify_client_secret")

    return len(errors) == 0, errors


def _as_tuple(t: Any) -> tuple:
    return t if isinstance(t, tuple) else (t,)


def get_config_value(key: str, default: Any = None, path: str = CONFIG_PATH) -> Any:
    """Get a single config value with optional default."""
    try:
        config = load_config(path)
    except (OSError, json.JSONDecodeError):
        return default
    return config.get(key, default)


def get_log_file(config: Dict[str, Any]) -> Optional[str]:
    value = str(config.get("log_file") or "").strip()
    return value or None


def get_request_timeout(config: Dict[str, Any], default: float = 30.0) -> float:
    """Request timeout in seconds; a missing or null value falls back to default."""
    value = (config or {}).get("spotify_request_timeout")
    if value is None:
        return float(default)
    return float(value)
