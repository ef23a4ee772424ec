"""Errors raised by provider clients."""
from __future__ import annotations

from typing import Optional


class ProviderError(RuntimeError):
    """Raised when an upstream provider cannot produce a result."""

    def __init__(self, provider: str, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status

    def to_dict(self) -> dict[str, object]:
        return {"error": str(self), "provider": self.provider, "status": self.status}


class ProviderUnavailableError(ProviderError):
    """Raised on transport failures and non-2xx responses."""

    def __init__(
        self,
        provider: str,
        status: Optional[int] = None,
        body: str = "",
        *,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"{provider} request failed ({status})" if status else f"{provider} request failed"
        super().__init__(provider, message, status=status)
        self.body = body


class ProviderConfigurationError(ProviderError):
    """Raised when a provider credential is not configured."""

    def __init__(self, provider: str, setting: str) -> None:
        super().__init__(provider, f"Missing {setting} for {provider}")
        self.setting = setting
