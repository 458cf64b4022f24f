"""Base class for market-data providers."""

from abc import ABC, abstractmethod
from typing import Any, Iterable


class BaseMarketDataProvider(ABC):
    """Base class for market-data providers."""

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self._fetch_count = 0
        self._error_count = 0

    @abstractmethod
    def fetch_markets(self, coin_ids: Iterable[str]) -> list[dict[str, Any]]:
        """
        Fetch raw market entries for the given coins.

        Args:
            coin_ids: Provider coin ids

        Returns:
            List of raw market entries

        Raises:
            ProviderFetchError: If no payload could be obtained
            MalformedDataError: If the response body is not valid JSON
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the provider is reachable."""
        pass

    def get_stats(self) -> dict[str, Any]:
        """Get fetch statistics."""
        return {
            "name": self.name,
            "fetch_count": self._fetch_count,
            "error_count": self._error_count,
            "success_rate": (
                self._fetch_count / (self._fetch_count + self._error_count)
                if (self._fetch_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset fetch statistics."""
        self._fetch_count = 0
        self._error_count = 0
