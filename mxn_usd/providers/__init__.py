"""
MXN/USD exchange rate providers
"""
from typing import Any, Callable, Dict, Optional

from mxn_usd.config import Config
from mxn_usd.models import AdapterKind, DerivationMode, ProviderConfig, QuoteKind

from .base import RateProvider

__all__ = [
    'AVAILABLE_PROVIDERS',
    'PROVIDER_DETAILS',
    'RateProvider',
    'build_provider_config',
    'get_provider',
]

# Lazy-loaded adapter registry
_ADAPTER_CACHE = {}


def _get_adapter_class(kind: AdapterKind):
    """Lazy load adapter classes to avoid import issues"""
    if kind in _ADAPTER_CACHE:
        return _ADAPTER_CACHE[kind]

    if kind == AdapterKind.AGGREGATOR_JSON:
        from .wise import WiseRatesProvider as adapter_class
    elif kind == AdapterKind.AGGREGATOR_HTML:
        from .wise import WiseConverterScraper as adapter_class
    elif kind == AdapterKind.MID_MARKET_JSON:
        from .exchangerate_host import ExchangeRateHostProvider as adapter_class
    elif kind == AdapterKind.CENTRAL_BANK_SINGLE:
        from .banxico import BanxicoSeriesProvider as adapter_class
    elif kind == AdapterKind.CENTRAL_BANK_DUAL:
        from .banxico import BanxicoBuySellProvider as adapter_class
    else:
        return None

    _ADAPTER_CACHE[kind] = adapter_class
    return adapter_class


# Display name, adapter kind and derivation mode of each provider; reading
# these never touches credentials
PROVIDER_DETAILS: Dict[str, Dict[str, Any]] = {
    'wise': {
        'provider_name': "Wise",
        'kind': AdapterKind.AGGREGATOR_JSON,
        'mode': DerivationMode.PASS_THROUGH,
    },
    'wise-scrape': {
        'provider_name': "Wise",
        'kind': AdapterKind.AGGREGATOR_HTML,
        'mode': DerivationMode.PASS_THROUGH,
    },
    'exchangerate-host': {
        'provider_name': "ExchangeRate.host",
        'kind': AdapterKind.MID_MARKET_JSON,
        'mode': DerivationMode.PASS_THROUGH,
    },
    'banxico-fix': {
        'provider_name': "Banxico",
        'kind': AdapterKind.CENTRAL_BANK_SINGLE,
        'mode': DerivationMode.FEE_ADJUSTED,
    },
    'banxico-mid': {
        'provider_name': "Banxico",
        'kind': AdapterKind.CENTRAL_BANK_DUAL,
        'mode': DerivationMode.BUY_SELL_MID,
    },
}


def _config(provider_id: str, url: str, **overrides: Any) -> ProviderConfig:
    return ProviderConfig(
        provider_id=provider_id,
        url=url,
        timeout=Config.REQUEST_TIMEOUT_SECONDS,
        **PROVIDER_DETAILS[provider_id],
        **overrides,
    )


def _wise_config() -> ProviderConfig:
    return _config(
        "wise",
        Config.WISE_RATES_URL,
        params={"source": "MXN", "target": "USD"},
        headers=Config.get_wise_headers(),
    )


def _wise_scrape_config() -> ProviderConfig:
    return _config("wise-scrape", Config.WISE_CONVERTER_URL)


def _exchangerate_host_config() -> ProviderConfig:
    params = {"base": "MXN", "symbols": "USD"}
    access_key = Config.get_exchangerate_host_access_key()
    if access_key:
        params["access_key"] = access_key

    return _config("exchangerate-host", Config.EXCHANGERATE_HOST_URL, params=params)


def _banxico_url(*series_ids: str) -> str:
    return f"{Config.BANXICO_BASE_URL.rstrip('/')}/{','.join(series_ids)}/datos/oportuno"


def _banxico_fix_config() -> ProviderConfig:
    return _config(
        "banxico-fix",
        _banxico_url(Config.BANXICO_FIX_SERIES),
        headers=Config.get_banxico_headers(),
        series={Config.BANXICO_FIX_SERIES: QuoteKind.FIX},
    )


def _banxico_mid_config() -> ProviderConfig:
    return _config(
        "banxico-mid",
        _banxico_url(Config.BANXICO_BUY_SERIES, Config.BANXICO_SELL_SERIES),
        headers=Config.get_banxico_headers(),
        series={
            Config.BANXICO_BUY_SERIES: QuoteKind.BUY,
            Config.BANXICO_SELL_SERIES: QuoteKind.SELL,
        },
    )


# Registry of all available providers
AVAILABLE_PROVIDERS: Dict[str, Callable[[], ProviderConfig]] = {
    'wise': _wise_config,
    'wise-scrape': _wise_scrape_config,
    'exchangerate-host': _exchangerate_host_config,
    'banxico-fix': _banxico_fix_config,
    'banxico-mid': _banxico_mid_config,
}


def build_provider_config(provider_id: str) -> ProviderConfig:
    """
    Build the configuration of a provider with its secrets injected

    Args:
        provider_id: Provider identifier (wise, wise-scrape, exchangerate-host,
            banxico-fix, banxico-mid)

    Raises:
        ValueError: If provider_id is not recognized
    """
    if provider_id not in AVAILABLE_PROVIDERS:
        raise ValueError(
            f"Unknown provider: {provider_id}. Available providers: {list(AVAILABLE_PROVIDERS.keys())}"
        )

    return AVAILABLE_PROVIDERS[provider_id]()


def get_provider(config: ProviderConfig, session=None) -> RateProvider:
    """
    Get the adapter instance that understands ``config.kind``

    Raises:
        ValueError: If no adapter handles the configured kind
    """
    adapter_class: Optional[type] = _get_adapter_class(config.kind)
    if not adapter_class:
        raise ValueError(f"No adapter for provider kind: {config.kind}")

    return adapter_class(config, session=session)
