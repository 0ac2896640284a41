"""Configuration for the ZIP utility lookup."""

import os
from dataclasses import dataclass
from pathlib import Path


_ROOT = Path(__file__).parent.parent


@dataclass
class Config:
    # Geocoder
    geocoder_base_url: str = "https://api.zippopotam.us/us"
    geocode_timeout: float = 10.0
    user_agent: str = "zip-utility-lookup/1.0"

    # API
    batch_max_zips: int = 100

    # Optional .env file read by the API on startup
    env_file: Path = _ROOT / ".env"

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config, overriding defaults from environment variables."""
        config = cls()
        base_url = os.environ.get("GEOCODER_BASE_URL", "")
        if base_url:
            config.geocoder_base_url = base_url.rstrip("/")
        timeout = os.environ.get("GEOCODE_TIMEOUT", "")
        if timeout:
            config.geocode_timeout = float(timeout)
        user_agent = os.environ.get("GEOCODER_USER_AGENT", "")
        if user_agent:
            config.user_agent = user_agent
        return config


def load_dotenv(env_path: Path):
    """Load KEY=VALUE lines from env_path into os.environ without overriding."""
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if line and not line.startswith("#") and "=" in line:
            key, val = line.split("=", 1)
            os.environ.setdefault(key.strip(), val.strip())
