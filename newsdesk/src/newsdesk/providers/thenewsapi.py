from typing import Any, Dict, Optional

from ..models.article import DateRange
from ..models.provider import ProviderShape
from .base import NewsProvider


class TheNewsApiProvider(NewsProvider):
    """
    TheNewsAPI.com all-news endpoint.
    Reference: https://www.thenewsapi.com/documentation
    """

    name = "thenewsapi"
    base_url = "https://api.thenewsapi.com/v1/news/all"
    key_param = "api_token"
    results_key = "data"
    shape = ProviderShape(
        title="title",
        description="description",
        published="published_at",
        source="source",
        image="image_url",
        url="url",
        default_source="TheNewsAPI",
    )

    def base_params(self) -> Dict[str, Any]:
        return {
            "language": "en,es",
            "categories": "business,finance",
            "limit": str(self.limit),
        }

    def region_params(self, region: str) -> Dict[str, Any]:
        # No country filter on this endpoint, the region name goes into search
        return {"search": region} if region != "all" else {}

    def range_params(self, date_range: Optional[DateRange]) -> Dict[str, Any]:
        params = {}
        if date_range is None:
            return params
        if date_range.start:
            params["published_after"] = date_range.start.isoformat()
        if date_range.end:
            params["published_before"] = date_range.end.isoformat()
        return params
