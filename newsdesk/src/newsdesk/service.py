import datetime
import logging
import re
from typing import List, Optional, Union

from .aggregate import SORT_MODES, aggregate
from .config import load_feed_config
from .errors import ValidationError
from .fetcher import fetch_all
from .models.article import REGIONS, Article, DateRange, FeedResponse
from .models.provider import ProviderResult
from .providers.base import NewsProvider
from .providers.registry import build_providers

logger = logging.getLogger(__name__)

NO_PROVIDERS_MESSAGE = "No news providers configured"
ALL_FAILED_MESSAGE = "All news providers failed"

# Plain date, or a full ISO timestamp whose date part is used
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}(T\S+)?")


def validate_region(region: Optional[str]) -> str:
    region = (region or "all").strip().lower()
    if region not in REGIONS:
        raise ValidationError(
            f"Unknown region '{region}'. Expected one of {list(REGIONS)}",
            {"region": region},
        )
    return region


def _parse_date(value: Union[str, datetime.date, None], name: str) -> Optional[datetime.date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value).strip()
    if not _DATE_RE.fullmatch(text):
        raise ValidationError(f"'{name}' must be in YYYY-MM-DD format.", {name: value})
    try:
        if len(text) == 10:
            return datetime.date.fromisoformat(text)
        return datetime.datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError(f"'{name}' must be in YYYY-MM-DD format.", {name: value})


def build_date_range(date_from=None, date_to=None) -> Optional[DateRange]:
    start = _parse_date(date_from, "from")
    end = _parse_date(date_to, "to")
    if start and end and start > end:
        raise ValidationError("'from' must not be after 'to'.", {"from": str(start), "to": str(end)})
    date_range = DateRange(start=start, end=end)
    return None if date_range.is_empty else date_range


def describe_failure(result: ProviderResult) -> str:
    """One-line account of a failed provider call, e.g. ``newsdata (HTTP 401): ...``."""
    status = result.details.get("status_code")
    label = f"{result.provider} (HTTP {status})" if status else result.provider
    return f"{label}: {result.error}"


def filter_by_query(articles: List[Article], query: Optional[str]) -> List[Article]:
    """Case-insensitive match on title or source."""
    needle = (query or "").strip().lower()
    if not needle:
        return articles
    return [a for a in articles if needle in a.title.lower() or needle in a.source.lower()]


def get_feed(
    region: Optional[str] = "all",
    date_from=None,
    date_to=None,
    query: Optional[str] = None,
    *,
    providers: Optional[List[NewsProvider]] = None,
    config_path: Optional[str] = None,
    sort_mode: str = "timestamp",
    now: Optional[datetime.datetime] = None,
) -> FeedResponse:
    """
    Build the unified feed for a region.

    Never raises: validation problems come back with status 400, unexpected
    faults with status 500, both as ``{error, articles: []}``.
    """
    try:
        region = validate_region(region)
        date_range = build_date_range(date_from, date_to)
        if sort_mode not in SORT_MODES:
            raise ValidationError(f"Unknown sort mode '{sort_mode}'.", {"sort": sort_mode})
    except ValidationError as e:
        logger.warning(f"Rejected feed request: {e.message}")
        return FeedResponse(error=e.message, status=400)

    try:
        logger.info(f"Fetching news for region={region}")
        timeout = None
        if providers is None:
            config = load_feed_config(config_path)
            timeout = config["timeout"]
            providers = build_providers(config["providers"], timeout=timeout, limit=config["limit"])

        if not providers:
            logger.warning(NO_PROVIDERS_MESSAGE)
            return FeedResponse(error=NO_PROVIDERS_MESSAGE)

        results = fetch_all(providers, region, date_range, timeout=timeout)
        failures = [describe_failure(r) for r in results if not r.ok]
        if len(failures) == len(results):
            logger.error(f"{ALL_FAILED_MESSAGE}: {'; '.join(failures)}")
            return FeedResponse(error=ALL_FAILED_MESSAGE)
        if failures:
            logger.warning(f"Serving partial feed without {'; '.join(failures)}")

        articles = aggregate(results, region, now=now, sort_mode=sort_mode)
        articles = filter_by_query(articles, query)
        logger.info(f"Feed for region={region}: {len(articles)} articles")
        return FeedResponse(articles=articles)
    except Exception as e:
        logger.exception(f"Error fetching news: {e}")
        message = getattr(e, "message", None) or str(e) or "Failed to fetch news"
        return FeedResponse(error=message, status=500)
