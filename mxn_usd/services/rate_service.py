"""Application service that runs one provider through the fetch, derive and respond pipeline."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional
import logging

from mxn_usd.exceptions import RateError
from mxn_usd.models import ProviderConfig, ResponseEnvelope
from mxn_usd.providers import AVAILABLE_PROVIDERS, PROVIDER_DETAILS, build_provider_config, get_provider

from .derivation import derive
from .responses import assemble_error, assemble_success

logger = logging.getLogger(__name__)


class UnknownProviderError(ValueError):
    """Raised when the caller references an unsupported provider."""


class RateService:
    """Facade that picks the provider adapter, derives the rate and builds the envelope."""

    def __init__(
        self,
        config_factory: Callable[[str], ProviderConfig] = build_provider_config,
        provider_factory: Callable[..., object] = get_provider,
        session: Optional[Any] = None,
    ) -> None:
        self._config_factory = config_factory
        self._provider_factory = provider_factory
        self._session = session

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_supported_providers(self) -> Iterable[str]:
        """Return the identifiers of every provider the API knows about."""

        return AVAILABLE_PROVIDERS.keys()

    def describe_providers(self) -> Dict[str, Dict[str, str]]:
        """Return display metadata for every provider without calling any of them or reading secrets."""

        described = {}
        for provider_id in self.list_supported_providers():
            details = PROVIDER_DETAILS[provider_id]
            described[provider_id] = {
                "provider": details["provider_name"],
                "kind": details["kind"].value,
                "mode": details["mode"].value,
            }
        return described

    def get_rate(self, provider_id: str, fee: Any = None) -> ResponseEnvelope:
        """Return the success or error envelope for one provider.

        ``fee`` is only used by fee-adjusted providers; invalid values are
        ignored. Every pipeline failure is converted into an error envelope.

        Raises:
            UnknownProviderError: If ``provider_id`` is not supported.
        """

        config = self._get_config(provider_id)
        provider = self._provider_factory(config, session=self._session)

        try:
            result = provider.fetch_rate()
            derived = derive(result.quotes, config.mode, fee=fee)
        except RateError as exc:
            logger.warning("Rate request for '%s' failed: %s: %s", config.provider_id, type(exc).__name__, exc)
            return assemble_error(exc)

        logger.info("Resolved %s rate via %s", config.provider_id, config.mode.value)
        return assemble_success(config, derived)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_config(self, provider_id: str) -> ProviderConfig:
        try:
            return self._config_factory((provider_id or "").strip().lower())
        except ValueError as exc:
            raise UnknownProviderError(str(exc)) from exc
