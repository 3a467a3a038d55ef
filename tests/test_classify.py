import re
import unittest
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "newsdesk" / "src"
sys.path.insert(0, str(SRC))

from newsdesk.classify import categorize, sentiment, is_crypto
from newsdesk.models.article import Category, Sentiment


class TestCategorize(unittest.TestCase):
    def test_commodities(self):
        self.assertEqual(categorize("Gold hits record high", ""), Category.COMMODITIES)

    def test_default_is_markets(self):
        self.assertEqual(categorize("Central bank holds rates", ""), Category.MARKETS)
        self.assertEqual(categorize("", ""), Category.MARKETS)

    def test_first_group_wins(self):
        self.assertEqual(categorize("Bitcoin miners' shares rally", ""), Category.CRYPTO)
        self.assertEqual(categorize("Dollar slips as oil climbs", ""), Category.FOREX)
        self.assertEqual(categorize("Nasdaq gains while gold steadies", ""), Category.STOCKS)

    def test_each_group(self):
        self.assertEqual(categorize("Treasury yields climb", ""), Category.BONDS)
        self.assertEqual(categorize("Natural gas prices spike", ""), Category.ENERGY)

    def test_description_is_used(self):
        self.assertEqual(categorize("Markets update", "The Nasdaq closed higher"), Category.STOCKS)

    def test_case_insensitive(self):
        self.assertEqual(categorize("COPPER DEMAND", None), Category.COMMODITIES)

    def test_total_and_deterministic(self):
        samples = [
            ("Euro rebounds", "ECB comments"),
            ("Oil majors report", ""),
            ("Something else entirely", "no keywords here"),
            ("", ""),
        ]
        for title, desc in samples:
            first = categorize(title, desc)
            self.assertIn(first, list(Category))
            self.assertEqual(first, categorize(title, desc))

    def test_custom_rules(self):
        rules = ((Category.ENERGY, re.compile(r"solar")),)
        self.assertEqual(categorize("Solar installs grow", "", rules=rules), Category.ENERGY)
        self.assertEqual(categorize("Gold rallies", "", rules=rules), Category.MARKETS)


class TestSentiment(unittest.TestCase):
    def test_positive_only(self):
        self.assertEqual(sentiment("Stocks surge", ""), Sentiment.POSITIVE)
        self.assertEqual(sentiment("Gold hits record high", ""), Sentiment.POSITIVE)

    def test_negative_only(self):
        self.assertEqual(sentiment("Oil prices tumble", ""), Sentiment.NEGATIVE)

    def test_both_is_neutral(self):
        self.assertEqual(sentiment("Stocks surge then plunge", ""), Sentiment.NEUTRAL)

    def test_neither_is_neutral(self):
        self.assertEqual(sentiment("Fed holds rates steady", ""), Sentiment.NEUTRAL)

    def test_description_counts(self):
        self.assertEqual(sentiment("Quarterly update", "Revenue loss widens"), Sentiment.NEGATIVE)


class TestCrypto(unittest.TestCase):
    def test_keywords(self):
        self.assertTrue(is_crypto("Bitcoin ETF approved", ""))
        self.assertTrue(is_crypto("Markets", "Cryptocurrency exchanges brace"))
        self.assertTrue(is_crypto("ETH slides below support", ""))
        self.assertTrue(is_crypto("BTC miners expand", ""))

    def test_short_tickers_need_word_boundary(self):
        self.assertFalse(is_crypto("Markets move together", "A new method for pricing"))
        self.assertFalse(is_crypto("Oil steadies", ""))


if __name__ == "__main__":
    unittest.main()
