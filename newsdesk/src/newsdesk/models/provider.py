from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

class ProviderShape(BaseModel):
    """Field names a provider uses for each canonical article attribute."""
    title: str = "title"
    description: str = "description"
    published: str = "published_at"
    source: str = "source"
    image: str = "image_url"
    url: str = "url"
    default_source: str = "Unknown"

class ProviderResult(BaseModel):
    """
    Tagged outcome of a single provider call. Lives for one aggregation pass.
    """
    provider: str
    ok: bool
    articles: List[Dict[str, Any]] = Field(default_factory=list)
    shape: ProviderShape = Field(default_factory=ProviderShape)
    error: Optional[str] = None
    # ProviderError details (provider, status_code, ...) for failed calls
    details: Dict[str, Any] = Field(default_factory=dict)
    duration: float = 0.0
