from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .config_types import ClientConfig, Credentials
from .oauth import OAuthSigner

WP_API_NAMESPACE = "wp-json/wc"
LEGACY_API_NAMESPACE = "wc-api"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def coerce(cls, value: HttpMethod | str) -> HttpMethod:
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


@dataclass(frozen=True)
class RequestDescriptor:
    method: HttpMethod
    endpoint: str
    query: Mapping[str, Any] | None = None
    data: Mapping[str, Any] | None = None


class RequestBuilder:
    """Turns an endpoint into the final URL for one call.

    Over HTTPS the versioned URL is returned as-is and credentials are attached
    by the dispatcher. Over plain HTTP the URL is OAuth-signed, which is then
    the only credential the request carries.
    """

    def __init__(self, cfg: ClientConfig, credentials: Credentials):
        self._cfg = cfg
        self._credentials = credentials

    @property
    def namespace(self) -> str:
        return WP_API_NAMESPACE if self._cfg.wp_api else LEGACY_API_NAMESPACE

    @property
    def is_ssl(self) -> bool:
        return self._cfg.is_ssl

    def resolve_url(self, endpoint: str) -> str:
        base = self._cfg.url.strip().rstrip("/")
        version = self._cfg.version.strip("/")
        return f"{base}/{self.namespace}/{version}/{endpoint.lstrip('/')}"

    def build_url(self, method: HttpMethod | str, endpoint: str) -> str:
        url = self.resolve_url(endpoint)
        if self.is_ssl:
            return url
        signer = OAuthSigner(
            self._credentials.consumer_key,
            self._credentials.consumer_secret,
            self._cfg.signature_method,
        )
        return signer.sign(HttpMethod.coerce(method).value, url)
