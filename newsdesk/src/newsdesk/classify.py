import re
from typing import FrozenSet, Pattern, Tuple

from .models.article import Category, Sentiment

# Checked in order, first match wins
CATEGORY_RULES: Tuple[Tuple[Category, Pattern], ...] = (
    (Category.CRYPTO, re.compile(r"bitcoin|crypto|blockchain|ethereum")),
    (Category.STOCKS, re.compile(r"stock|equity|shares|dow|nasdaq")),
    (Category.FOREX, re.compile(r"forex|currency|exchange rate|dollar|euro")),
    (Category.COMMODITIES, re.compile(r"gold|silver|commodity|oil|copper")),
    (Category.BONDS, re.compile(r"bond|treasury|yield")),
    (Category.ENERGY, re.compile(r"energy|petroleum|gas")),
)

POSITIVE_WORDS: FrozenSet[str] = frozenset({
    "surge", "gain", "rise", "jump", "rally", "boost", "soar", "record high",
})
NEGATIVE_WORDS: FrozenSet[str] = frozenset({
    "fall", "drop", "plunge", "decline", "crash", "slump", "loss", "tumble",
})

# Excluded from the feed. Short tickers only match as whole words.
CRYPTO_PATTERN: Pattern = re.compile(
    r"bitcoin|crypto|blockchain|ethereum|\bbtc\b|\beth\b"
)


def _text(title: str, description: str) -> str:
    return f"{title or ''} {description or ''}".lower()


def categorize(
    title: str,
    description: str = "",
    rules: Tuple[Tuple[Category, Pattern], ...] = CATEGORY_RULES,
) -> Category:
    """Topic category for an article; ``Markets`` when nothing matches."""
    text = _text(title, description)
    for category, pattern in rules:
        if pattern.search(text):
            return category
    return Category.MARKETS


def sentiment(
    title: str,
    description: str = "",
    positive: FrozenSet[str] = POSITIVE_WORDS,
    negative: FrozenSet[str] = NEGATIVE_WORDS,
) -> Sentiment:
    text = _text(title, description)
    has_positive = any(word in text for word in positive)
    has_negative = any(word in text for word in negative)
    if has_positive and not has_negative:
        return Sentiment.POSITIVE
    if has_negative and not has_positive:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


def is_crypto(title: str, description: str = "", pattern: Pattern = CRYPTO_PATTERN) -> bool:
    return bool(pattern.search(_text(title, description)))
