"""Build the JSON envelopes returned by the rate endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict

from mxn_usd.exceptions import ParseFailure, RateError
from mxn_usd.models import (
    BuySellRate,
    CustomerRate,
    DerivedRate,
    PassThroughRate,
    ProviderConfig,
    QuoteKind,
    ResponseEnvelope,
)

logger = logging.getLogger(__name__)

SOURCE_MID_MARKET = "mid-market"
SOURCE_FIX = "FIX"

STATUS_OK = 200
STATUS_INTERNAL = 500
STATUS_BAD_UPSTREAM = 502

PARSE_FAILURE_MESSAGE = "Could not parse exchange rate"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def source_label(derived: DerivedRate) -> str:
    """Return ``FIX`` for official reference quotes and ``mid-market`` otherwise."""

    return SOURCE_FIX if derived.kind == QuoteKind.FIX else SOURCE_MID_MARKET


def assemble_success(config: ProviderConfig, derived: DerivedRate) -> ResponseEnvelope:
    body: Dict[str, Any]
    if isinstance(derived, PassThroughRate):
        body = {"mxn_usd": derived.mid}
    elif isinstance(derived, CustomerRate):
        body = {
            "reference": {"rate": derived.reference, "date": derived.date},
            "customer_rate": derived.customer_rate,
            "fee": derived.fee,
        }
    elif isinstance(derived, BuySellRate):
        body = {
            "mxn_usd": {"buy": derived.buy, "sell": derived.sell, "mid": derived.mid},
            "date": derived.date,
        }
    else:
        raise TypeError(f"Unsupported derived rate: {type(derived).__name__}")

    body["source"] = source_label(derived)
    body["provider"] = config.provider_name
    return ResponseEnvelope(status=STATUS_OK, body=body)


def assemble_error(error: RateError) -> ResponseEnvelope:
    """Map a pipeline failure to its error envelope.

    Payload problems are reported as a bad upstream (502) with the failing
    field named; transport and upstream status failures are reported as a
    generic internal error (500).
    """

    if isinstance(error, ParseFailure):
        return ResponseEnvelope(
            status=STATUS_BAD_UPSTREAM,
            body={"error": f"{PARSE_FAILURE_MESSAGE}: {error}"},
        )
    return ResponseEnvelope(status=STATUS_INTERNAL, body={"error": INTERNAL_ERROR_MESSAGE})
