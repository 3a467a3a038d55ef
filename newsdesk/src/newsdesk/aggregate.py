import datetime
import logging
import re
from typing import List, Optional

from .classify import is_crypto
from .models.article import Article
from .models.provider import ProviderResult
from .normalize import is_valid_url, normalize

logger = logging.getLogger(__name__)

SORT_MODES = ("timestamp", "bucket")

_NUMBER_RE = re.compile(r"\d+")
_UNKNOWN_BUCKET = float("inf")
_OLDEST = datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)


def bucket_value(published_relative: str) -> float:
    """First number in a relative-time label; unparseable labels sort last."""
    m = _NUMBER_RE.search(published_relative or "")
    return int(m.group(0)) if m else _UNKNOWN_BUCKET


def sort_articles(articles: List[Article], sort_mode: str = "timestamp") -> List[Article]:
    if sort_mode == "bucket":
        # Legacy ordering by the number in the label, units are ignored
        return sorted(articles, key=lambda a: bucket_value(a.published_relative))
    if sort_mode != "timestamp":
        raise ValueError(f"Unknown sort mode '{sort_mode}'. Expected one of {SORT_MODES}")
    # Newest first, missing timestamps last
    return sorted(
        articles,
        key=lambda a: (a.published_at is None, -(a.published_at or _OLDEST).timestamp()),
    )


def deduplicate(articles: List[Article]) -> List[Article]:
    seen = set()
    unique = []
    for article in articles:
        keys = {article.title.strip().lower()}
        if article.url:
            keys.add(article.url.rstrip("/"))
        if keys & seen:
            continue
        seen.update(keys)
        unique.append(article)
    return unique


def aggregate(
    results: List[ProviderResult],
    region: str,
    now: Optional[datetime.datetime] = None,
    sort_mode: str = "timestamp",
) -> List[Article]:
    """
    Merge provider results into one filtered, classified and sorted feed.
    Crypto stories and stories without a valid link are dropped.
    """
    merged: List[Article] = []
    for result in results:
        if not result.ok:
            continue
        shape = result.shape
        kept = 0
        for raw in result.articles:
            title = raw.get(shape.title) or ""
            description = raw.get(shape.description) or ""
            if not isinstance(title, str) or not isinstance(description, str):
                continue
            if is_crypto(title, description):
                continue
            if not is_valid_url(raw.get(shape.url)):
                continue
            try:
                article = normalize(raw, shape, region, now=now, provider=result.provider)
            except Exception as e:
                logger.warning(f"Skipping {result.provider} item: {e.__class__.__name__}: {e}")
                continue
            merged.append(article)
            kept += 1
        logger.info(f"{result.provider}: kept {kept}/{len(result.articles)} articles")

    unique = deduplicate(merged)
    if len(unique) < len(merged):
        logger.info(f"Removed {len(merged) - len(unique)} duplicate articles")
    return sort_articles(unique, sort_mode)
