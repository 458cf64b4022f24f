"""
System failure error classifications.

These exceptions represent failures of the collaborators around the signal
engine: the market-data provider, the preference file and the configuration.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for collaborator failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ProviderFetchError(SystemFailureError):
    """Market-data provider could not deliver a payload for this tick."""

    def __init__(self, message: str, provider: Optional[str] = None,
                 status_code: Optional[int] = None, retryable: bool = True, **kwargs):
        super().__init__(message, **kwargs)
        self.provider = provider
        self.status_code = status_code
        self.retryable = retryable
        # A failed tick keeps the previous snapshot on screen
        self.recoverable = True


class PersistenceError(SystemFailureError):
    """Preference file read or write failures."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class ConfigurationError(SystemFailureError):
    """Configuration could not be loaded or failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source
