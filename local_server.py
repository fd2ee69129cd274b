"""Local development server that mirrors the production Firebase API."""

import logging
from datetime import datetime, timezone
from typing import Optional

from mxn_usd.config import Config
from mxn_usd.providers import AVAILABLE_PROVIDERS
from mxn_usd.services import RateService, UnknownProviderError

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_rate_service() -> RateService:
    return RateService()


def create_app(rate_service: Optional[RateService] = None):
    from flask import Flask, jsonify, request

    app = Flask(__name__)
    rate_service = rate_service or build_rate_service()

    @app.route("/api/mxn-usd/<provider_id>")
    def get_rate(provider_id: str):
        try:
            envelope = rate_service.get_rate(provider_id, fee=request.args.get("fee"))
        except UnknownProviderError as exc:
            return (
                jsonify(
                    {
                        "error": str(exc),
                        "available_providers": list(AVAILABLE_PROVIDERS.keys()),
                    }
                ),
                400,
            )
        if not envelope.ok:
            logger.error("%s rate unavailable (%s): %s", provider_id, envelope.status, envelope.body["error"])
        return jsonify(envelope.body), envelope.status

    @app.route("/api/providers")
    def list_providers():
        return jsonify({"providers": rate_service.describe_providers()})

    @app.route("/health")
    def health():
        return jsonify(
            {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
                "available_providers": list(AVAILABLE_PROVIDERS.keys()),
            }
        )

    return app


if __name__ == "__main__":
    app = create_app()

    print("=" * 72)
    print("MXN/USD Exchange Rate API - Local Development Server")
    print("=" * 72)
    print("\nSupported providers:")
    for provider_id in AVAILABLE_PROVIDERS.keys():
        print(f"  • {provider_id}")
    print("\nAvailable endpoints:")
    print("  GET http://localhost:5000/api/mxn-usd/<provider_id>")
    print("  GET http://localhost:5000/api/mxn-usd/banxico-fix?fee=0.02")
    print("  GET http://localhost:5000/api/providers")
    print("  GET http://localhost:5000/health")
    print("\n" + "=" * 72 + "\n")

    app.run(debug=Config.DEBUG, host="0.0.0.0", port=5000)
