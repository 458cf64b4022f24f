"""CoinGecko ``/coins/markets`` provider."""

import socket
from typing import Any, Iterable, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlparse
from urllib.request import Request, urlopen

import structlog

from ..config.defaults import ProviderParams
from ..data.parsers import parse_json_payload
from ..errors import ConfigurationError, MalformedDataError, ProviderFetchError
from .base import BaseMarketDataProvider

logger = structlog.get_logger(__name__)


class CoinGeckoProvider(BaseMarketDataProvider):
    """Fetches spot price, 24h/7d change and the 7d sparkline in one call."""

    def __init__(self, config: Optional[ProviderParams] = None, name: str = "coingecko"):
        config = config or ProviderParams()
        super().__init__(name, config)
        self.config: ProviderParams = config

        parsed = urlparse(config.base_url)
        if not parsed.scheme or not parsed.netloc:
            raise ConfigurationError(f"Invalid provider URL: {config.base_url}", source="provider")

    def build_markets_url(self, coin_ids: Iterable[str]) -> str:
        """Build the markets request URL for the given coins."""
        query = urlencode({
            "vs_currency": self.config.vs_currency,
            "ids": ",".join(coin_ids),
            "order": "market_cap_desc",
            "per_page": 250,
            "page": 1,
            "sparkline": "true",
            "price_change_percentage": "24h,7d",
        })
        return f"{self.config.base_url.rstrip('/')}/coins/markets?{query}"

    def fetch_markets(self, coin_ids: Iterable[str]) -> list[dict[str, Any]]:
        """Fetch raw market entries via HTTP GET."""
        ids = list(coin_ids)
        url = self.build_markets_url(ids)

        req = Request(
            url,
            headers={
                "Accept": "application/json",
                "User-Agent": self.config.user_agent,
            },
            method="GET"
        )

        try:
            with urlopen(req, timeout=self.config.timeout_seconds) as response:
                response_code = response.getcode()
                raw_body = response.read()

        except HTTPError as e:
            self._error_count += 1
            logger.warning(
                "Market data HTTP error",
                provider=self.name,
                error_code=e.code,
                error_reason=str(e.reason)
            )
            # Rate limiting and server errors clear up on a later tick
            raise ProviderFetchError(
                f"HTTP {e.code}: {e.reason}",
                provider=self.name,
                status_code=e.code,
                retryable=e.code >= 500 or e.code == 429,
            )

        except (OSError, URLError, socket.timeout) as e:
            self._error_count += 1
            logger.warning(
                "Market data network error",
                provider=self.name,
                error=str(e)
            )
            raise ProviderFetchError(
                f"Network error: {e}",
                provider=self.name,
                retryable=True,
            )

        # Decoded only for log and error text; JSON parsing gets the raw bytes
        body = raw_body.decode("utf-8", errors="replace")

        if not 200 <= response_code < 300:
            self._error_count += 1
            raise ProviderFetchError(
                f"HTTP {response_code}: {body[:200]}",
                provider=self.name,
                status_code=response_code,
                retryable=response_code >= 500,
            )

        try:
            payload = parse_json_payload(raw_body)
        except MalformedDataError:
            self._error_count += 1
            raise

        if not isinstance(payload, list):
            self._error_count += 1
            raise MalformedDataError(
                f"Expected a list of markets, got {type(payload).__name__}",
                raw_data=body[:100],
                expected_format="list"
            )

        self._fetch_count += 1
        logger.debug(
            "Fetched market data",
            provider=self.name,
            requested=len(ids),
            received=len(payload)
        )

        return payload

    def health_check(self) -> bool:
        """Ping the API root."""
        try:
            req = Request(
                f"{self.config.base_url.rstrip('/')}/ping",
                headers={"User-Agent": self.config.user_agent},
                method="GET"
            )
            with urlopen(req, timeout=5) as response:
                return 200 <= response.getcode() < 400

        except Exception as e:
            logger.warning(
                "Health check failed",
                provider=self.name,
                error=str(e)
            )
            return False
