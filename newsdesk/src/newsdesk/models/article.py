from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

class Category(str, Enum):
    STOCKS = "Stocks"
    FOREX = "Forex"
    COMMODITIES = "Commodities"
    BONDS = "Bonds"
    ENERGY = "Energy"
    CRYPTO = "Crypto"
    MARKETS = "Markets"

class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"

REGIONS = ("all", "us", "china", "asia", "europe")

class DateRange(BaseModel):
    """Optional publish-date window forwarded to providers that support it."""
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

class Article(BaseModel):
    """
    Canonical article, merged across providers.
    """
    id: str  # Stable hash
    title: str
    category: Category = Category.MARKETS
    sentiment: Sentiment = Sentiment.NEUTRAL
    published_relative: str = Field(..., alias="publishedRelative")
    published_at: Optional[datetime] = Field(None, alias="publishedAt")
    source: str
    image_url: Optional[str] = Field(None, alias="imageUrl")
    url: Optional[str] = None
    region: str
    provider: str = "unknown"

    class Config:
        populate_by_name = True
        use_enum_values = True

class FeedResponse(BaseModel):
    """Feed payload. ``status`` is the HTTP status and never serialized."""
    articles: List[Article] = Field(default_factory=list)
    error: Optional[str] = None
    status: int = Field(200, exclude=True)

    def to_payload(self) -> dict:
        payload = {"articles": [a.model_dump(mode="json", by_alias=True) for a in self.articles]}
        if self.error is not None:
            payload["error"] = self.error
        return payload
