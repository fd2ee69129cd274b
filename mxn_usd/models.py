"""Value objects passed between the adapters, the derivation step and the API layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class QuoteKind(str, Enum):
    """What a single provider quote represents."""

    MID_MARKET = "mid-market"
    FIX = "fix"
    BUY = "buy"
    SELL = "sell"


class AdapterKind(str, Enum):
    """Payload shapes understood by the provider adapters."""

    AGGREGATOR_JSON = "aggregator-json"
    AGGREGATOR_HTML = "aggregator-html"
    MID_MARKET_JSON = "mid-market-json"
    CENTRAL_BANK_SINGLE = "central-bank-single"
    CENTRAL_BANK_DUAL = "central-bank-dual"


class DerivationMode(str, Enum):
    """How the quotes of one provider are turned into the published value."""

    PASS_THROUGH = "pass-through"
    FEE_ADJUSTED = "fee-adjusted"
    BUY_SELL_MID = "buy-sell-mid"


@dataclass(frozen=True)
class RawQuote:
    """A quote exactly as the provider reported it."""

    value: Union[str, float]
    raw_date: Optional[str]
    kind: QuoteKind
    series_id: Optional[str] = None


@dataclass(frozen=True)
class ProviderResult:
    provider_id: str
    quotes: Tuple[RawQuote, ...]


@dataclass(frozen=True)
class NormalizedRate:
    value: float
    date: Optional[str]


@dataclass(frozen=True)
class PassThroughRate:
    mid: float
    kind: QuoteKind = QuoteKind.MID_MARKET


@dataclass(frozen=True)
class CustomerRate:
    reference: float
    customer_rate: float
    fee: float
    date: Optional[str] = None
    kind: QuoteKind = QuoteKind.FIX


@dataclass(frozen=True)
class BuySellRate:
    buy: float
    sell: float
    mid: float
    date: Optional[str] = None
    kind: QuoteKind = QuoteKind.MID_MARKET


DerivedRate = Union[PassThroughRate, CustomerRate, BuySellRate]


@dataclass(frozen=True)
class ProviderConfig:
    """Everything an adapter needs to perform its single outbound call.

    ``series`` maps central-bank series identifiers to the quote kind they
    carry; it is empty for providers that do not publish series.
    """

    provider_id: str
    provider_name: str
    kind: AdapterKind
    url: str
    mode: DerivationMode
    params: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    series: Dict[str, QuoteKind] = field(default_factory=dict)
    timeout: Optional[float] = None


@dataclass(frozen=True)
class ResponseEnvelope:
    """JSON body plus the HTTP status it should be served with."""

    status: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return self.status < 400


__all__ = [
    "AdapterKind",
    "BuySellRate",
    "CustomerRate",
    "DerivationMode",
    "DerivedRate",
    "NormalizedRate",
    "PassThroughRate",
    "ProviderConfig",
    "ProviderResult",
    "QuoteKind",
    "RawQuote",
    "ResponseEnvelope",
]
