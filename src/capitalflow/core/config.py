import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from capitalflow.core.errors import ConfigError

BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_PATH = BASE_DIR / "config.yaml"
ENV_PATH = BASE_DIR / ".env"

ALPHAVANTAGE_QUERY_URL = "https://www.alphavantage.co/query"
PLACEHOLDER_API_KEY = "YOUR_ALPHA_VANTAGE_API_KEY"


class Settings(BaseModel):
    api_key: str = Field("", description="Alpha Vantage API key")
    quotes_base_url: str = ALPHAVANTAGE_QUERY_URL
    # None = wait for the provider indefinitely
    timeout_seconds: Optional[float] = Field(None, gt=0)
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    page_title: str = "Capital Flow Advisory"


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Build Settings from config.yaml, then let the environment override the key.

    config keys:
      - api_key, quotes_base_url, timeout_seconds
      - host, port, log_level, log_dir, page_title
    """
    load_dotenv(ENV_PATH)

    if config_path is None:
        config_path = Path(os.getenv("CAPITALFLOW_CONFIG", CONFIG_PATH))

    config = {}
    if Path(config_path).exists():
        with open(config_path, "r") as f:
            try:
                config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"{config_path} is not valid YAML: {e}") from e
    if not isinstance(config, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(config).__name__}")

    env_key = os.getenv("ALPHAVANTAGE_API_KEY", "").strip()
    if env_key:
        config["api_key"] = env_key

    try:
        return Settings(**config)
    except ValidationError as e:
        raise ConfigError(f"{config_path}: {e}") from e


def check_credential(api_key: str) -> None:
    if not api_key:
        raise ConfigError("Alpha Vantage API key not configured. Set ALPHAVANTAGE_API_KEY in .env.")
    if api_key == PLACEHOLDER_API_KEY:
        raise ConfigError(
            f'Please replace "{PLACEHOLDER_API_KEY}" with a valid key from Alpha Vantage.'
        )
