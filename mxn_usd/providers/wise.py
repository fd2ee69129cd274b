"""
Wise rate providers: the public rates API and the currency converter page
"""
import logging
import re
from typing import List

from bs4 import BeautifulSoup

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import QuoteKind, RawQuote

from .base import RateProvider

logger = logging.getLogger(__name__)


class WiseRatesProvider(RateProvider):
    """Reads the mid-market rate from ``/v1/rates?source=MXN&target=USD``"""

    def parse_payload(self, response) -> List[RawQuote]:
        data = self._json(response)

        # Wise returns an array of rates, the first one is the requested pair
        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            raise ParseFailure("Wise payload is not a non-empty list of rates")

        entry = data[0]
        if entry.get("rate") is None:
            raise ParseFailure("missing 'rate' field in Wise payload")

        return [RawQuote(value=entry["rate"], raw_date=entry.get("time"), kind=QuoteKind.MID_MARKET)]


class WiseConverterScraper(RateProvider):
    """Scrapes the rate shown on the Wise MXN to USD converter page"""

    RATE_PATTERN = re.compile(r"(?<![\d.,])1\s*MXN\s*\|\s*([\d.,]+)\s*USD")

    def parse_payload(self, response) -> List[RawQuote]:
        soup = BeautifulSoup(response.text, "html.parser")
        # Adjacent text nodes are joined with "|", so "<span>1 MXN</span><span>0.05 USD</span>"
        # and a literal "1 MXN|0.05 USD" read the same
        text = soup.get_text(separator="|", strip=True)

        match = self.RATE_PATTERN.search(text)
        if not match:
            logger.warning("Rate text not found on Wise converter page")
            raise ParseFailure("rate text '1 MXN|<rate> USD' not found on Wise converter page")

        return [RawQuote(value=match.group(1), raw_date=None, kind=QuoteKind.MID_MARKET)]
