import unittest
from unittest.mock import patch

from fakes import NOW, raw_item

from newsdesk.aggregate import aggregate, bucket_value, sort_articles
from newsdesk.classify import is_crypto
from newsdesk.models.article import Category, Sentiment
from newsdesk.models.provider import ProviderResult, ProviderShape
from newsdesk.normalize import is_valid_url, normalize


def _result(name, items, ok=True):
    return ProviderResult(provider=name, ok=ok, articles=items, shape=ProviderShape(default_source=name))


class TestAggregate(unittest.TestCase):
    def test_no_results(self):
        self.assertEqual(aggregate([], "all", now=NOW), [])

    def test_failed_results_are_skipped(self):
        failed = _result("a", [raw_item("Stocks surge", "https://reuters.com/a")], ok=False)
        self.assertEqual(aggregate([failed], "all", now=NOW), [])

    def test_filters_crypto_invalid_urls_and_untitled(self):
        items = [
            raw_item("Bitcoin jumps past record", "https://reuters.com/btc"),
            raw_item("Markets wrap", "https://reuters.com/x", description="Ethereum upgrade lifts sentiment"),
            raw_item("Gold rallies", "http://feeds.feedburner.com/x"),
            raw_item("Copper slips", None),
            raw_item("", "https://reuters.com/untitled"),
            raw_item("Treasury yields fall", "https://reuters.com/bonds"),
        ]
        articles = aggregate([_result("a", items)], "us", now=NOW)

        self.assertEqual([a.title for a in articles], ["Treasury yields fall"])
        self.assertEqual(articles[0].category, Category.BONDS)
        self.assertEqual(articles[0].sentiment, Sentiment.NEGATIVE)
        self.assertEqual(articles[0].region, "us")
        self.assertEqual(articles[0].provider, "a")

    def test_output_is_filtered_subset(self):
        items = [
            raw_item("Stocks surge", "https://reuters.com/1"),
            raw_item("BTC miners expand", "https://reuters.com/2"),
            raw_item("Dollar firms", "ftp://reuters.com/3"),
            raw_item("Oil prices tumble", "https://reuters.com/4", description="Crypto funds unaffected"),
            raw_item("Euro steadies", "https://reuters.com/5"),
        ]
        articles = aggregate([_result("a", items[:3]), _result("b", items[3:])], "all", now=NOW)

        self.assertEqual(len(articles), 2)
        for article in articles:
            self.assertFalse(is_crypto(article.title))
            self.assertTrue(is_valid_url(article.url))
            self.assertIn(article.category, list(Category))
            self.assertIn(article.sentiment, list(Sentiment))

    def test_merges_and_sorts_newest_first(self):
        a = [raw_item("Stocks surge", "https://reuters.com/1", minutes_ago=125)]
        b = [
            raw_item("Gold rallies", "https://ft.com/2", minutes_ago=5),
            raw_item("Euro steadies", "https://ft.com/3", minutes_ago=None),
            raw_item("Oil drops", "https://ft.com/4", minutes_ago=3 * 1440),
        ]
        articles = aggregate([_result("a", a), _result("b", b)], "all", now=NOW)

        self.assertEqual(
            [a.title for a in articles],
            ["Gold rallies", "Stocks surge", "Oil drops", "Euro steadies"],
        )
        self.assertEqual(articles[1].published_relative, "2 hours ago")
        self.assertEqual(articles[-1].published_relative, "unknown")

    def test_bucket_sort_mode(self):
        items = [
            raw_item("Stocks surge", "https://reuters.com/1", minutes_ago=5),
            raw_item("Gold rallies", "https://ft.com/2", minutes_ago=125),
            raw_item("Euro steadies", "https://ft.com/3", minutes_ago=None),
        ]
        articles = aggregate([_result("a", items)], "all", now=NOW, sort_mode="bucket")

        # "2 hours ago" sorts ahead of "5 min ago" on the bare number
        self.assertEqual([a.title for a in articles], ["Gold rallies", "Stocks surge", "Euro steadies"])

    def test_deduplicates_across_providers(self):
        a = [raw_item("Stocks surge", "https://reuters.com/1")]
        b = [
            raw_item("Stocks surge at the open", "https://reuters.com/1/"),
            raw_item("STOCKS SURGE", "https://ft.com/other"),
            raw_item("Gold rallies", "https://ft.com/2"),
        ]
        articles = aggregate([_result("a", a), _result("b", b)], "all", now=NOW)
        self.assertEqual(sorted(a.title for a in articles), ["Gold rallies", "Stocks surge"])

    def test_out_of_range_timestamp_keeps_item(self):
        bad = raw_item("Stocks surge", "https://reuters.com/1")
        bad["published_at"] = "0001-01-01T00:00:00+01:00"
        good = [raw_item("Gold rallies", "https://ft.com/2", minutes_ago=5)]
        articles = aggregate([_result("a", [bad]), _result("b", good)], "all", now=NOW)

        self.assertEqual([a.title for a in articles], ["Gold rallies", "Stocks surge"])
        self.assertIsNone(articles[1].published_at)
        self.assertEqual(articles[1].published_relative, "unknown")

    def test_item_that_fails_to_normalize_is_skipped(self):
        def flaky(raw, shape, region, now=None, provider="unknown"):
            if raw["title"] == "Broken":
                raise OverflowError("date value out of range")
            return normalize(raw, shape, region, now=now, provider=provider)

        items = [raw_item("Broken", "https://reuters.com/1"), raw_item("Gold rallies", "https://ft.com/2")]
        with patch("newsdesk.aggregate.normalize", side_effect=flaky):
            articles = aggregate([_result("a", items)], "all", now=NOW)
        self.assertEqual([a.title for a in articles], ["Gold rallies"])


class TestSorting(unittest.TestCase):
    def test_bucket_value(self):
        self.assertEqual(bucket_value("15 min ago"), 15)
        self.assertEqual(bucket_value("2 days ago"), 2)
        self.assertEqual(bucket_value("unknown"), float("inf"))
        self.assertEqual(bucket_value(""), float("inf"))

    def test_unknown_sort_mode(self):
        with self.assertRaises(ValueError):
            sort_articles([], "alphabetical")


if __name__ == "__main__":
    unittest.main()
