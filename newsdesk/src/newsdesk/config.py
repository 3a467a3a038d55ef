import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDERS = ["newsdata", "thenewsapi"]
DEFAULT_TIMEOUT = 8.0
DEFAULT_LIMIT = 20
DEFAULT_ANALYSIS_URL = "http://localhost:8000"

# Env var holding each provider's API key
PROVIDER_KEY_ENV = {
    "newsdata": "NEWSDATA_API_KEY",
    "thenewsapi": "THENEWSAPI_KEY",
}

def load_env_file(path: str = ".env"):
    """
    Load environment variables from a .env file into os.environ.
    Does not override existing strings.
    """
    p = Path(path)
    if not p.exists():
        return

    try:
        with open(p) as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' in line:
                    key, val = line.split('=', 1)
                    key = key.strip()
                    val = val.strip().strip('"').strip("'")
                    if key not in os.environ:
                        os.environ[key] = val
    except Exception as e:
        logger.warning(f"Failed to load .env: {e}")

# Load on import
load_env_file()

def get_provider_key(provider: str) -> Optional[str]:
    """Get a provider API key, or None when missing."""
    env_name = PROVIDER_KEY_ENV.get(provider)
    if not env_name:
        return None
    key = os.environ.get(env_name)
    # Handle the template default left by user
    if not key or key == "your_key_here":
        return None
    return key

def get_provider_timeout() -> float:
    raw = os.environ.get("NEWSDESK_PROVIDER_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid NEWSDESK_PROVIDER_TIMEOUT={raw!r}")
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT

def get_analysis_url() -> str:
    return os.environ.get("ANALYSIS_API_URL") or DEFAULT_ANALYSIS_URL

def load_feed_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load feed config from YAML. A missing file yields the defaults.
    Expected shape:
      feed:
        providers: [newsdata, thenewsapi]
        timeout: 8
        limit: 20
    """
    path = path or os.environ.get("NEWSDESK_FEED_CONFIG") or "feed.yaml"
    defaults = {
        "providers": list(DEFAULT_PROVIDERS),
        "timeout": get_provider_timeout(),
        "limit": DEFAULT_LIMIT,
    }

    p = Path(path)
    if not p.exists():
        return defaults

    try:
        data = yaml.safe_load(p.read_text()) or {}
    except Exception as e:
        raise ValidationError(f"Invalid feed YAML: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("feed"), dict):
        raise ValidationError("Feed file must contain a 'feed' object.")

    feed = data["feed"]
    providers = feed.get("providers", defaults["providers"])
    if not isinstance(providers, list):
        raise ValidationError("'feed.providers' must be a list.")

    norm = []
    for name in providers:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("All provider names must be non-empty strings.")
        norm.append(name.strip().lower())

    timeout = feed.get("timeout", defaults["timeout"])
    limit = feed.get("limit", defaults["limit"])
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ValidationError("'feed.timeout' must be a positive number.")
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValidationError("'feed.limit' must be a positive integer.")

    return {"providers": norm, "timeout": float(timeout), "limit": limit}
