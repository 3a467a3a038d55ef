import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from ..config import DEFAULT_LIMIT, DEFAULT_TIMEOUT
from ..errors import ProviderError
from ..models.article import DateRange
from ..models.provider import ProviderShape

logger = logging.getLogger(__name__)


class NewsProvider(ABC):
    """
    Common interface for third-party news APIs.

    Subclasses describe their endpoint (``base_url``, ``key_param``,
    ``results_key``), their field names (``shape``) and how a region filter
    and a date range map onto native query parameters.
    """

    name: str = ""
    base_url: str = ""
    key_param: str = ""
    results_key: str = ""
    shape: ProviderShape = ProviderShape()

    def __init__(self, api_key: str, timeout: float = DEFAULT_TIMEOUT, limit: int = DEFAULT_LIMIT):
        self.api_key = api_key
        self.timeout = timeout
        self.limit = limit

    def base_params(self) -> Dict[str, Any]:
        return {}

    @abstractmethod
    def region_params(self, region: str) -> Dict[str, Any]:
        """Native query parameters for a region filter."""

    def range_params(self, date_range: Optional[DateRange]) -> Dict[str, Any]:
        # Providers without range support ignore it
        return {}

    def build_params(self, region: str, date_range: Optional[DateRange] = None) -> Dict[str, Any]:
        params = {self.key_param: self.api_key}
        params.update(self.base_params())
        params.update(self.region_params(region))
        params.update(self.range_params(date_range))
        return params

    def fetch(self, region: str, date_range: Optional[DateRange] = None) -> List[Dict[str, Any]]:
        """
        Fetch raw article dicts for a region.
        Raises ProviderError on transport, HTTP or payload-shape failures.
        """
        params = self.build_params(region, date_range)
        start = time.time()
        try:
            resp = requests.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            # Never echo the request URL, it carries the API key
            status = getattr(getattr(e, "response", None), "status_code", None)
            raise ProviderError(
                f"{self.name} request failed: {e.__class__.__name__}",
                {"provider": self.name, "status_code": status},
            )
        except ValueError as e:
            raise ProviderError(f"{self.name} returned malformed JSON: {e}", {"provider": self.name})

        items = data.get(self.results_key) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ProviderError(
                f"{self.name} payload has no '{self.results_key}' list",
                {"provider": self.name},
            )

        articles = [item for item in items if isinstance(item, dict)]
        logger.info(f"{self.name}: {len(articles)} raw articles for region={region} ({time.time() - start:.2f}s)")
        return articles
