"""
Configuration for the market-cap index and cost basis tooling.
"""

import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def load_yaml_config(file_path: str) -> dict:
    """Load YAML configuration from a file safely."""
    try:
        with open(file_path, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file {file_path} not found.")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {file_path}: {e}")


def _parse_blacklist(raw: str) -> List[str]:
    return [s.strip().upper() for s in raw.split(",") if s.strip()]


# Index parameters
SMOOTHING_FACTOR = float(os.getenv("SMOOTHING_FACTOR", "0.3"))  # 0 < alpha < 1
INDEX_SIZE = int(os.getenv("INDEX_SIZE", "20"))                 # Number of constituents
LOOKBACK_DAYS = int(os.getenv("LOOKBACK_DAYS", "20"))           # Daily market caps per asset
CASH_BUFFER = float(os.getenv("CASH_BUFFER", "0.0"))            # Fraction held as cash
BLACKLIST: List[str] = _parse_blacklist(os.getenv("BLACKLIST", ""))

# Logging configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "")


def _validate_params(params: Dict[str, Any]) -> None:
    if not 0.0 < params["smoothing_factor"] < 1.0:
        raise ValueError(
            f"smoothing_factor must be between 0 and 1 (exclusive), got {params['smoothing_factor']}"
        )
    if params["index_size"] <= 0:
        raise ValueError(f"index_size must be positive, got {params['index_size']}")
    if params["lookback"] <= 0:
        raise ValueError(f"lookback must be positive, got {params['lookback']}")
    if not 0.0 <= params["cash_buffer"] < 1.0:
        raise ValueError(f"cash_buffer must be in [0, 1), got {params['cash_buffer']}")


def _setting(yaml_config: dict, key: str, default: Any, cast) -> Any:
    value = yaml_config.get(key)
    if value is None:
        return default
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {key}: {value!r}") from e


def resolve_allocation_params(yaml_config: Optional[dict] = None) -> Dict[str, Any]:
    """
    Overlay YAML settings on the environment defaults.

    Args:
        yaml_config: Parsed YAML mapping, e.g. from load_yaml_config

    Returns:
        Dictionary with smoothing_factor, index_size, lookback, cash_buffer
        and blacklist keys
    """
    yaml_config = yaml_config or {}

    # Empty YAML keys load as None and fall back to the defaults
    if isinstance(yaml_config.get("blacklist"), str):
        blacklist = _parse_blacklist(yaml_config["blacklist"])
    else:
        blacklist = _setting(yaml_config, "blacklist", BLACKLIST, list)

    params = {
        "smoothing_factor": _setting(yaml_config, "smoothing_factor", SMOOTHING_FACTOR, float),
        "index_size": _setting(yaml_config, "index_size", INDEX_SIZE, int),
        "lookback": _setting(yaml_config, "lookback", LOOKBACK_DAYS, int),
        "cash_buffer": _setting(yaml_config, "cash_buffer", CASH_BUFFER, float),
        "blacklist": [str(s).upper() for s in blacklist],
    }
    _validate_params(params)
    return params


# Validation
def validate_config():
    """Validate configuration settings."""
    _validate_params({
        "smoothing_factor": SMOOTHING_FACTOR,
        "index_size": INDEX_SIZE,
        "lookback": LOOKBACK_DAYS,
        "cash_buffer": CASH_BUFFER,
    })
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Unknown LOG_LEVEL {LOG_LEVEL}")


if __name__ == "__main__":
    validate_config()
    print("✓ Configuration validated")
    print(f"  - Smoothing factor: {SMOOTHING_FACTOR}")
    print(f"  - Index size: {INDEX_SIZE}")
    print(f"  - Lookback: {LOOKBACK_DAYS} days")
    print(f"  - Cash buffer: {CASH_BUFFER * 100}%")
