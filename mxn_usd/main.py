"""Firebase Cloud Functions entry points for the MXN/USD exchange rate API."""

import logging
from flask import jsonify
from firebase_functions import https_fn
from firebase_admin import initialize_app

from mxn_usd.config import Config
from mxn_usd.services import RateService, UnknownProviderError

# Initialise Firebase Admin only once per cold start.
initialize_app()

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create a singleton service instance that can be reused by multiple invocations
# within the same Cloud Function instance.
rate_service = RateService()


def _serve(provider_id: str, req: https_fn.Request) -> https_fn.Response:
    fee = req.args.get("fee")
    logger.info("GET /api/mxn-usd/%s - fee=%s", provider_id, fee)

    try:
        envelope = rate_service.get_rate(provider_id, fee=fee)
        if not envelope.ok:
            logger.error("%s rate unavailable (%s): %s", provider_id, envelope.status, envelope.body["error"])
        return jsonify(envelope.body), envelope.status

    except UnknownProviderError as exc:
        logger.warning("Invalid provider requested: %s", exc)
        return (
            jsonify(
                {
                    "error": str(exc),
                    "available_providers": list(rate_service.list_supported_providers()),
                }
            ),
            400,
        )
    except Exception:  # pragma: no cover - defensive guard
        logger.error("Unexpected error serving %s", provider_id, exc_info=True)
        return jsonify({"error": "Internal server error"}), 500


@https_fn.on_request()
def mxn_usd_wise(req: https_fn.Request) -> https_fn.Response:
    """Wise mid-market rate from the rates API."""

    return _serve("wise", req)


@https_fn.on_request()
def mxn_usd_wise_scrape(req: https_fn.Request) -> https_fn.Response:
    """Wise mid-market rate scraped from the converter page."""

    return _serve("wise-scrape", req)


@https_fn.on_request()
def mxn_usd_exchangerate_host(req: https_fn.Request) -> https_fn.Response:
    """exchangerate.host mid-market rate."""

    return _serve("exchangerate-host", req)


@https_fn.on_request()
def mxn_usd_banxico_fix(req: https_fn.Request) -> https_fn.Response:
    """Banxico FIX reference rate plus the fee-adjusted customer rate (``?fee=0.02``)."""

    return _serve("banxico-fix", req)


@https_fn.on_request()
def mxn_usd_banxico_mid(req: https_fn.Request) -> https_fn.Response:
    """Banxico mid-market rate averaged from the buy and sell series."""

    return _serve("banxico-mid", req)
