import logging
from typing import Dict, List, Optional, Type

from ..config import DEFAULT_LIMIT, DEFAULT_TIMEOUT, get_provider_key
from ..errors import ValidationError
from .base import NewsProvider
from .newsdata import NewsDataProvider
from .thenewsapi import TheNewsApiProvider

logger = logging.getLogger(__name__)

PROVIDERS: Dict[str, Type[NewsProvider]] = {
    NewsDataProvider.name: NewsDataProvider,
    TheNewsApiProvider.name: TheNewsApiProvider,
}


def list_providers() -> List[str]:
    return sorted(PROVIDERS.keys())


def build_providers(
    names: List[str],
    *,
    timeout: float = DEFAULT_TIMEOUT,
    limit: int = DEFAULT_LIMIT,
    keys: Optional[Dict[str, str]] = None,
) -> List[NewsProvider]:
    """
    Instantiate the named providers that have an API key.
    Unknown names are a configuration error; missing keys only skip the provider.
    """
    providers = []
    for name in names:
        provider_cls = PROVIDERS.get(name)
        if provider_cls is None:
            raise ValidationError(
                f"Unknown provider '{name}'. Registered: {list_providers()}",
                {"provider": name},
            )
        api_key = (keys or {}).get(name) or get_provider_key(name)
        if not api_key:
            logger.warning(f"Skipping provider {name}: API key not configured")
            continue
        providers.append(provider_cls(api_key, timeout=timeout, limit=limit))
    return providers
