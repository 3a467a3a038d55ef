from typing import Any, Dict

from ..models.provider import ProviderShape
from .base import NewsProvider

COUNTRY_MAP = {
    "us": "us",
    "china": "cn",
    "asia": "jp,kr,sg,in",
    "europe": "gb,de,fr,es,it",
    "all": "",
}


class NewsDataProvider(NewsProvider):
    """
    NewsData.io latest-news endpoint.
    Reference: https://newsdata.io/documentation
    """

    name = "newsdata"
    base_url = "https://newsdata.io/api/1/news"
    key_param = "apikey"
    results_key = "results"
    shape = ProviderShape(
        title="title",
        description="description",
        published="pubDate",
        source="source_id",
        image="image_url",
        url="link",
        default_source="NewsData.io",
    )

    def base_params(self) -> Dict[str, Any]:
        return {"language": "en,es", "category": "business"}

    def region_params(self, region: str) -> Dict[str, Any]:
        country = COUNTRY_MAP.get(region, "")
        return {"country": country} if country else {}
