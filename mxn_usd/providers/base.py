"""
Base interface for exchange rate provider adapters
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

import requests

from mxn_usd.config import Config
from mxn_usd.exceptions import ParseFailure, TransportError, UpstreamError
from mxn_usd.models import ProviderConfig, ProviderResult, RawQuote

logger = logging.getLogger(__name__)


class RateProvider(ABC):
    """Abstract base class for MXN/USD rate providers"""

    def __init__(self, config: ProviderConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.provider_id = config.provider_id
        self.provider_name = config.provider_name
        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": Config.USER_AGENT})
            # Serverless hosts inject proxy settings that some providers block
            session.trust_env = False
        self.session = session

    @abstractmethod
    def parse_payload(self, response: requests.Response) -> List[RawQuote]:
        """
        Extract the provider quotes from a successful response

        Args:
            response: Response with a 2xx status

        Returns:
            List[RawQuote]: Quotes found in the payload

        Raises:
            ParseFailure: If the expected fields are missing
        """

    def fetch_rate(self) -> ProviderResult:
        """
        Perform the outbound call and parse its payload

        Returns:
            ProviderResult: Non-empty set of raw quotes

        Raises:
            TransportError, UpstreamError, ParseFailure
        """
        response = self._request()
        quotes = self.parse_payload(response)
        if not quotes:
            raise ParseFailure(f"{self.provider_name} payload contained no rate")

        logger.info("%s returned %d quote(s)", self.provider_name, len(quotes))
        return ProviderResult(provider_id=self.provider_id, quotes=tuple(quotes))

    def _request(self) -> requests.Response:
        logger.info("Fetching %s rate from %s", self.provider_name, self.config.url)
        try:
            response = self.session.get(
                self.config.url,
                params=self.config.params or None,
                headers=self.config.headers or None,
                timeout=self.config.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("%s timed out after %ss", self.provider_name, self.config.timeout)
            raise UpstreamError(f"{self.provider_name} request timed out") from exc
        except requests.RequestException as exc:
            logger.error("Could not reach %s: %s", self.provider_name, exc)
            raise TransportError(f"Could not reach {self.provider_name}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.warning("%s responded with status %s", self.provider_name, response.status_code)
            raise UpstreamError(
                f"{self.provider_name} responded with status {response.status_code}",
                status_code=response.status_code,
            )

        return response

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ParseFailure(f"{self.provider_name} returned invalid JSON") from exc
