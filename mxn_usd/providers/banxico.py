"""
Banxico SIE API providers (``/series/<ids>/datos/oportuno``)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import QuoteKind, RawQuote

from .base import RateProvider

logger = logging.getLogger(__name__)


class BanxicoProvider(RateProvider):
    """Shared payload navigation for the SIE ``bmx.series`` envelope."""

    def _series_list(self, response) -> List[Dict[str, Any]]:
        data = self._json(response)
        bmx = data.get("bmx") if isinstance(data, dict) else None
        series = bmx.get("series") if isinstance(bmx, dict) else None

        if not isinstance(series, list) or not series:
            raise ParseFailure("missing 'bmx.series' in Banxico payload")
        items = [item for item in series if isinstance(item, dict)]
        for item in items:
            if not isinstance(item.get("idSerie"), str):
                raise ParseFailure(f"invalid 'idSerie' {item.get('idSerie')!r} in Banxico payload")
        return items

    @staticmethod
    def _first_observation(series: Dict[str, Any], kind: QuoteKind) -> RawQuote:
        series_id = series.get("idSerie")
        datos = series.get("datos")
        if not isinstance(datos, list) or not datos or not isinstance(datos[0], dict):
            raise ParseFailure(f"missing 'datos' for Banxico series {series_id}")

        observation = datos[0]
        if observation.get("dato") is None:
            raise ParseFailure(f"missing 'dato' for Banxico series {series_id}")

        return RawQuote(
            value=observation["dato"],
            raw_date=observation.get("fecha"),
            kind=kind,
            series_id=series_id,
        )


class BanxicoSeriesProvider(BanxicoProvider):
    """Reads the latest observation of a single series, usually the FIX rate."""

    def parse_payload(self, response) -> List[RawQuote]:
        series = self._series_list(response)
        if not series:
            raise ParseFailure("missing 'bmx.series' in Banxico payload")

        first = series[0]
        kind = self.config.series.get(first.get("idSerie"), QuoteKind.FIX)
        return [self._first_observation(first, kind)]


class BanxicoBuySellProvider(BanxicoProvider):
    """Reads a buy and a sell series requested together in one call.

    Series are matched by ``idSerie``, never by their position in the payload.
    """

    def parse_payload(self, response) -> List[RawQuote]:
        by_id = {item.get("idSerie"): item for item in self._series_list(response)}

        quotes: List[RawQuote] = []
        for series_id, kind in self.config.series.items():
            series = by_id.get(series_id)
            if series is None:
                logger.warning("Banxico payload has no series %s (%s)", series_id, kind.value)
                raise ParseFailure(f"missing {kind.value} series {series_id} in Banxico payload")
            quotes.append(self._first_observation(series, kind))

        return quotes
