"""OAuth 1.0a query-string signing for plain HTTP stores.

Only consumer credentials take part: there is no token flow, so the signing
key is always ``<encoded consumer secret>&`` with an empty token secret.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import time
import uuid
from typing import Callable, Mapping
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from .errors import ConfigError

logger = logging.getLogger(__name__)

OAUTH_VERSION = "1.0"

SIGNATURE_METHODS: dict[str, Callable] = {
    "HMAC-SHA1": hashlib.sha1,
    "HMAC-SHA256": hashlib.sha256,
}


def percent_encode(value: object) -> str:
    """RFC 3986 encoding: everything except ``A-Z a-z 0-9 - . _ ~`` is escaped."""
    return quote(str(value).encode("utf-8"), safe="~")


def _default_nonce() -> str:
    return uuid.uuid4().hex


def _split_url(url: str) -> tuple[str, list[tuple[str, str]]]:
    parts = urlsplit(url)
    base_url = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    return base_url, parse_qsl(parts.query, keep_blank_values=True)


def normalize_params(params: Mapping[str, object] | list[tuple[str, object]]) -> list[tuple[str, str]]:
    """Encode every pair and sort byte-wise by key, then value."""
    items = params.items() if isinstance(params, Mapping) else params
    return sorted((percent_encode(k), percent_encode(v)) for k, v in items)


class OAuthSigner:
    def __init__(
            self,
            consumer_key: str,
            consumer_secret: str,
            signature_method: str = "HMAC-SHA256",
            *,
            nonce_factory: Callable[[], str] = _default_nonce,
            clock: Callable[[], float] = time.time,
    ):
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._signature_method = signature_method
        self._nonce_factory = nonce_factory
        self._clock = clock

    @property
    def signature_method(self) -> str:
        return self._signature_method

    def _digestmod(self) -> Callable:
        digestmod = SIGNATURE_METHODS.get(self._signature_method)
        if digestmod is None:
            raise ConfigError(
                f"unsupported signature method {self._signature_method!r}; "
                f"expected one of {', '.join(sorted(SIGNATURE_METHODS))}"
            )
        return digestmod

    def oauth_params(self, *, nonce: str | None = None, timestamp: int | None = None) -> dict[str, str]:
        return {
            "oauth_consumer_key": self._consumer_key,
            "oauth_nonce": nonce if nonce is not None else self._nonce_factory(),
            "oauth_signature_method": self._signature_method,
            "oauth_timestamp": str(timestamp if timestamp is not None else int(self._clock())),
            "oauth_version": OAUTH_VERSION,
        }

    def signature_base_string(self, method: str, url: str, params: Mapping[str, object]) -> str:
        """``METHOD&enc(base url)&enc(sorted params)``; the URL's own query joins ``params``."""
        base_url, existing = _split_url(url)
        pairs = normalize_params([*existing, *params.items()])
        param_string = "&".join(f"{k}={v}" for k, v in pairs)
        return "&".join([method.upper(), percent_encode(base_url), percent_encode(param_string)])

    def signing_key(self) -> str:
        return f"{percent_encode(self._consumer_secret)}&"

    def signature(self, base_string: str) -> str:
        digest = hmac.new(
            self.signing_key().encode("utf-8"),
            base_string.encode("utf-8"),
            self._digestmod(),
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def sign_params(
            self,
            method: str,
            url: str,
            *,
            nonce: str | None = None,
            timestamp: int | None = None,
    ) -> dict[str, str]:
        """Return a fresh OAuth parameter set for ``method``/``url`` including ``oauth_signature``."""
        self._digestmod()
        params = self.oauth_params(nonce=nonce, timestamp=timestamp)
        params["oauth_signature"] = self.signature(self.signature_base_string(method, url, params))
        return params

    def sign(self, method: str, url: str, *, nonce: str | None = None, timestamp: int | None = None) -> str:
        params = self.sign_params(method, url, nonce=nonce, timestamp=timestamp)
        signature = params.pop("oauth_signature")

        base_url, existing = _split_url(url)
        pairs = normalize_params([*existing, *params.items()])
        pairs.append(("oauth_signature", percent_encode(signature)))
        logger.debug("signed %s %s with %s", method.upper(), base_url, self._signature_method)
        return f"{base_url}?" + "&".join(f"{k}={v}" for k, v in pairs)
