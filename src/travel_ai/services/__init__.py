"""Provider clients for search, flight and mapping APIs."""

from .errors import ProviderConfigurationError, ProviderError, ProviderUnavailableError
from .flight_client import FlightApiClient
from .mapping_client import MappingClient
from .serpapi_client import SerpApiClient

__all__ = [
    "FlightApiClient",
    "MappingClient",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderUnavailableError",
    "SerpApiClient",
]
