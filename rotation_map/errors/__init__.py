"""
Error classification for market data processing and dashboard refreshes.

Data quality errors are recoverable and never abort a refresh cycle on their
own; system failures describe collaborators (provider, storage, config) that
could not do their job.
"""

from .data_quality import (
    DataQualityError,
    MissingDataError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    ProviderFetchError,
    PersistenceError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MissingDataError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "ProviderFetchError",
    "PersistenceError",
    "ConfigurationError",
]
