"""Configuration helpers for provider credentials and runtime settings."""

from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from typing import Any, Dict, Optional, Set

from dotenv import load_dotenv
from firebase_functions import params

LOGGER = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load variables from a local ``.env`` file when available."""

    env_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env")
    if not os.path.exists(env_path):
        LOGGER.debug("No .env file found at %s", env_path)
        return

    load_dotenv(env_path)
    LOGGER.info("Loaded environment variables from %s", env_path)


def _load_functions_config() -> Dict[str, Any]:
    """Return Firebase ``functions:config`` values when available."""

    raw_config = (
        os.getenv("FIREBASE_FUNCTIONS_CONFIG")
        or os.getenv("FUNCTIONS_CONFIG")
        or os.getenv("FUNCTIONS_CONFIG_JSON")
    )

    if not raw_config:
        return {}

    try:
        return json.loads(raw_config)
    except json.JSONDecodeError:
        LOGGER.warning("Failed to parse Firebase functions config JSON")
        return {}


def _read_nested(config: Dict[str, Any], *path: str) -> Optional[str]:
    """Safely read a nested value from ``config`` following ``path``."""

    current: Any = config
    for step in path:
        if not isinstance(current, dict) or step not in current:
            return None
        current = current[step]
    return current if isinstance(current, str) else None


@lru_cache
def resolve_secret(name: str, namespace: str) -> Optional[str]:
    """Resolve a provider secret from the environment, legacy config or Secret Manager.

    ``namespace`` is the key used with ``firebase functions:config:set``,
    e.g. ``wise.token``.
    """

    # 1) Explicit environment variables (preferred for local development)
    direct = os.getenv(name)
    if direct:
        return direct

    # 2) Legacy ``firebase functions:config:set <namespace>.token=...`` storage
    config = _load_functions_config()
    for candidate in ("token", "key", "api_key"):
        legacy_value = _read_nested(config, namespace, candidate)
        if legacy_value:
            return legacy_value

    # 3) Firebase secret manager via ``firebase functions:secrets:set``
    try:
        secret = params.SecretParam(name).value
    except Exception:  # pragma: no cover - runtime only
        LOGGER.warning("Firebase secret %s is not accessible", name)
        return None

    return secret or None


_WARNED_SECRETS: Set[str] = set()


def warn_missing_secret(name: str, provider_name: str) -> None:
    """Log a missing credential once per process."""

    if name in _WARNED_SECRETS:
        return
    _WARNED_SECRETS.add(name)
    LOGGER.warning("%s is not configured; %s will reject the request", name, provider_name)


def _float_or_none(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-numeric timeout %r", raw)
        return None
    return value if value > 0 else None


_load_env_file()


class Config:
    """Central access point for runtime configuration."""

    # Wise ---------------------------------------------------------------------
    WISE_RATES_URL: str = os.getenv("WISE_RATES_URL", "https://api.transferwise.com/v1/rates")
    WISE_CONVERTER_URL: str = os.getenv(
        "WISE_CONVERTER_URL", "https://wise.com/gb/currency-converter/mxn-to-usd-rate"
    )

    # exchangerate.host --------------------------------------------------------
    EXCHANGERATE_HOST_URL: str = os.getenv(
        "EXCHANGERATE_HOST_URL", "https://api.exchangerate.host/latest"
    )

    # Banxico SIE ----------------------------------------------------------------
    BANXICO_BASE_URL: str = os.getenv(
        "BANXICO_BASE_URL", "https://www.banxico.org.mx/SieAPIRest/service/v1/series"
    )
    BANXICO_FIX_SERIES: str = os.getenv("BANXICO_FIX_SERIES", "SF43718")
    BANXICO_BUY_SERIES: str = os.getenv("BANXICO_BUY_SERIES", "SF43787")
    BANXICO_SELL_SERIES: str = os.getenv("BANXICO_SELL_SERIES", "SF43784")

    # HTTP ---------------------------------------------------------------------
    REQUEST_TIMEOUT_SECONDS: Optional[float] = _float_or_none(
        os.getenv("REQUEST_TIMEOUT_SECONDS", "30")
    )
    USER_AGENT: str = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"

    # Logging ------------------------------------------------------------------
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

    @classmethod
    def get_wise_api_token(cls) -> Optional[str]:
        """Return the configured Wise API token, if any."""

        return resolve_secret("WISE_API_TOKEN", "wise")

    @classmethod
    def get_banxico_token(cls) -> Optional[str]:
        """Return the configured Banxico SIE token, if any."""

        return resolve_secret("BANXICO_TOKEN", "banxico")

    @classmethod
    def get_exchangerate_host_access_key(cls) -> Optional[str]:
        return resolve_secret("EXCHANGERATE_HOST_ACCESS_KEY", "exchangerate_host")

    @classmethod
    def get_wise_headers(cls) -> Dict[str, str]:
        """Return headers required by the Wise rates API."""

        headers = {"Content-Type": "application/json"}
        token = cls.get_wise_api_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            warn_missing_secret("WISE_API_TOKEN", "Wise")
        return headers

    @classmethod
    def get_banxico_headers(cls) -> Dict[str, str]:
        """Return headers required by the Banxico SIE API."""

        token = cls.get_banxico_token()
        if not token:
            warn_missing_secret("BANXICO_TOKEN", "Banxico")
            return {}
        return {"Bmx-Token": token}
