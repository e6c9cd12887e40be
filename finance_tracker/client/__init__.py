"""API client package."""

from finance_tracker.client.api_client import (
    GENERIC_NETWORK_ERROR,
    FinanceApiClient,
)
from finance_tracker.client.errors import (
    ApiError,
    ApiResponseError,
    ApiTransportError,
)

__all__ = [
    "ApiError",
    "ApiResponseError",
    "ApiTransportError",
    "FinanceApiClient",
    "GENERIC_NETWORK_ERROR",
]
