"""Derive the published value (pass-through, fee-adjusted or buy/sell mid) from provider quotes."""

from __future__ import annotations

import logging
import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Sequence

from mxn_usd.exceptions import ParseFailure
from mxn_usd.models import (
    BuySellRate,
    CustomerRate,
    DerivationMode,
    DerivedRate,
    PassThroughRate,
    QuoteKind,
    RawQuote,
)
from mxn_usd.parser import normalize_quote

logger = logging.getLogger(__name__)

DEFAULT_FEE = 0.0
_SIX_PLACES = Decimal("0.000001")


def round6(value: Any) -> float:
    """Round to six decimal places, ties away from zero."""

    try:
        return float(Decimal(str(value)).quantize(_SIX_PLACES, rounding=ROUND_HALF_UP))
    except InvalidOperation as exc:
        raise ParseFailure(f"rate {value} cannot be rounded to six decimal places") from exc


def coerce_fee(raw: Any) -> float:
    """Return ``raw`` as a fee in ``[0, 1)``; anything else falls back to ``DEFAULT_FEE``."""

    if raw is None or isinstance(raw, bool):
        return DEFAULT_FEE
    try:
        fee = float(raw.strip() if isinstance(raw, str) else raw)
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric fee %r", raw)
        return DEFAULT_FEE

    if not math.isfinite(fee) or not 0 <= fee < 1:
        logger.debug("Ignoring out-of-range fee %r", raw)
        return DEFAULT_FEE
    return fee


def _checked(value: float, label: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ParseFailure(f"derived {label} {value!r} is not a positive rate")
    return value


def derive(quotes: Sequence[RawQuote], mode: DerivationMode, fee: Any = None) -> DerivedRate:
    """Combine the quotes of one provider into the value the API publishes.

    Raises:
        ParseFailure: If the quotes do not fit ``mode`` or a derived value is
            not finite and positive.
    """

    if not quotes:
        raise ParseFailure("no quotes to derive a rate from")

    if mode == DerivationMode.BUY_SELL_MID:
        return _derive_mid(quotes)

    if len(quotes) != 1:
        raise ParseFailure(f"expected one quote, got {len(quotes)}")
    quote = quotes[0]
    normalized = normalize_quote(quote)

    if mode == DerivationMode.PASS_THROUGH:
        return PassThroughRate(mid=normalized.value, kind=quote.kind)

    if mode == DerivationMode.FEE_ADJUSTED:
        applied_fee = coerce_fee(fee)
        reference = Decimal(str(normalized.value))
        customer_rate = round6(reference * (1 + Decimal(str(applied_fee))))
        return CustomerRate(
            reference=normalized.value,
            customer_rate=_checked(customer_rate, "customer rate"),
            fee=applied_fee,
            date=normalized.date,
            kind=quote.kind,
        )

    raise ValueError(f"Unsupported derivation mode: {mode}")


def _derive_mid(quotes: Sequence[RawQuote]) -> BuySellRate:
    by_kind = {quote.kind: quote for quote in quotes}
    missing = [kind.value for kind in (QuoteKind.BUY, QuoteKind.SELL) if kind not in by_kind]
    if missing:
        raise ParseFailure(f"missing {' and '.join(missing)} quote")

    buy = normalize_quote(by_kind[QuoteKind.BUY])
    sell = normalize_quote(by_kind[QuoteKind.SELL])

    mid = round6((Decimal(str(buy.value)) + Decimal(str(sell.value))) / 2)

    return BuySellRate(
        buy=buy.value,
        sell=sell.value,
        mid=_checked(mid, "mid-market rate"),
        date=buy.date or sell.date,
    )
