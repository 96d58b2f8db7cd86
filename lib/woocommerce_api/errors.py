from __future__ import annotations


class WooCommerceError(Exception):
    """Base client error."""


class ConfigError(WooCommerceError, ValueError):
    """Invalid client configuration or signing setup."""


class ResponseDecodeError(WooCommerceError, ValueError):
    def __init__(self, status_code: int, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details
