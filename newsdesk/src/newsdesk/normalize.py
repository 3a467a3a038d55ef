"""
Provider payload -> canonical Article.
"""
import datetime
import hashlib
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlparse

from .classify import categorize, sentiment
from .models.article import Article
from .models.provider import ProviderShape

UNKNOWN_TIME = "unknown"

# Syndication redirectors and loopback hosts never make it into the feed
BLOCKED_URL_PARTS: Tuple[str, ...] = (
    "feedburner",
    "feedproxy.google.com",
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "[::1]",
)


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime.datetime]:
    """
    Parse a provider timestamp into an aware UTC datetime.
    Accepts datetimes, unix seconds and ISO-8601 strings ("Z" suffix,
    offsets, space separator). Naive values are taken as UTC.
    """
    dt = None
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, bool):
        return None
    elif isinstance(value, (int, float)):
        try:
            dt = datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    try:
        return dt.astimezone(datetime.timezone.utc)
    except (OverflowError, ValueError):
        # Offsets that push year 1 or 9999 out of range
        return None


def format_time_ago(published: Optional[datetime.datetime], now: Optional[datetime.datetime] = None) -> str:
    published = parse_timestamp(published)
    if published is None:
        return UNKNOWN_TIME
    now = parse_timestamp(now) if now is not None else _utcnow()
    # Future timestamps clamp to zero
    diff_minutes = max(0, int((now - published).total_seconds() // 60))

    if diff_minutes < 60:
        return f"{diff_minutes} min ago"
    if diff_minutes < 1440:
        return f"{diff_minutes // 60} hours ago"
    return f"{diff_minutes // 1440} days ago"


def is_valid_url(url: Optional[str]) -> bool:
    if not url or not isinstance(url, str):
        return False
    url = url.strip()
    lowered = url.lower()
    if any(part in lowered for part in BLOCKED_URL_PARTS):
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def article_id(url: Optional[str], title: str) -> str:
    unique_string = url or title
    return hashlib.md5(unique_string.encode("utf-8")).hexdigest()


def _field(raw: Dict[str, Any], name: str) -> Optional[str]:
    value = raw.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        # NewsData sends some fields as lists
        value = value[0] if value else None
        if value is None:
            return None
    text = str(value).strip()
    return text or None


def normalize(
    raw: Dict[str, Any],
    shape: ProviderShape,
    region: str,
    now: Optional[datetime.datetime] = None,
    provider: str = "unknown",
) -> Article:
    """
    Build a classified Article from one raw provider item.
    Raises ValueError when the item carries no title.
    """
    title = _field(raw, shape.title)
    if not title:
        raise ValueError(f"article without '{shape.title}' field")
    description = _field(raw, shape.description) or ""
    url = _field(raw, shape.url)
    published_at = parse_timestamp(raw.get(shape.published))

    return Article(
        id=article_id(url, title),
        title=title,
        category=categorize(title, description),
        sentiment=sentiment(title, description),
        published_relative=format_time_ago(published_at, now),
        published_at=published_at,
        source=_field(raw, shape.source) or shape.default_source,
        image_url=_field(raw, shape.image),
        url=url if is_valid_url(url) else None,
        region=region,
        provider=provider,
    )
