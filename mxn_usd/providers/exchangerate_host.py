"""
exchangerate.host mid-market rate provider
"""
from typing import List

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import QuoteKind, RawQuote

from .base import RateProvider


class ExchangeRateHostProvider(RateProvider):
    """Reads ``rates.USD`` from ``/latest?base=MXN&symbols=USD``"""

    def parse_payload(self, response) -> List[RawQuote]:
        data = self._json(response)

        rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(rates, dict):
            raise ParseFailure("missing 'rates' mapping in exchangerate.host payload")
        if rates.get("USD") is None:
            raise ParseFailure("missing 'rates.USD' field in exchangerate.host payload")

        return [RawQuote(value=rates["USD"], raw_date=data.get("date"), kind=QuoteKind.MID_MARKET)]
