from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, TextIO
from urllib.parse import urlsplit

from .errors import ConfigError

# Keys passed through to httpx.Client(...) for the call.
CLIENT_OPTION_KEYS = frozenset({"verify", "cert", "proxy", "trust_env", "http2", "transport"})
# Keys passed through to Client.request(...), applied after the client's own settings.
REQUEST_OPTION_KEYS = frozenset({"headers", "content", "timeout", "follow_redirects", "cookies", "extensions"})


@dataclass(frozen=True)
class Credentials:
    consumer_key: str
    consumer_secret: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.consumer_key or not self.consumer_secret:
            raise ConfigError("consumer_key and consumer_secret are required")


@dataclass(frozen=True)
class ClientConfig:
    url: str
    wp_api: bool = False
    version: str = "v3"
    verify_ssl: bool = True
    signature_method: str = "HMAC-SHA256"
    query_string_auth: bool = False
    debug: bool = False
    debug_stream: TextIO | None = field(default=None, repr=False, compare=False)
    timeout_s: float = 15.0
    transport_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        parts = urlsplit((self.url or "").strip())
        if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
            raise ConfigError(f"url must be an absolute http(s) URL, got {self.url!r}")
        if not str(self.version or "").strip("/ "):
            raise ConfigError("version must not be empty")

        unknown = set(self.transport_options) - CLIENT_OPTION_KEYS - REQUEST_OPTION_KEYS
        if unknown:
            raise ConfigError(f"unsupported transport options: {', '.join(sorted(unknown))}")
        override_headers = self.transport_options.get("headers") or {}
        if any(str(name).lower() == "authorization" for name in override_headers):
            raise ConfigError("credentials are attached by the client; remove Authorization from transport headers")
        # frozen: swap the caller's dict for a read-only copy
        object.__setattr__(self, "transport_options", MappingProxyType(dict(self.transport_options)))

    @property
    def is_ssl(self) -> bool:
        return urlsplit(self.url.strip()).scheme.lower() == "https"

    def client_options(self) -> dict[str, Any]:
        return {k: v for k, v in self.transport_options.items() if k in CLIENT_OPTION_KEYS}

    def request_options(self) -> dict[str, Any]:
        return {k: v for k, v in self.transport_options.items() if k in REQUEST_OPTION_KEYS}
