from __future__ import annotations

import json
import logging
import sys
from typing import Any, Mapping, TextIO

import httpx

from .config_types import ClientConfig, Credentials
from .query import add_query_params
from .request import HttpMethod, RequestBuilder, RequestDescriptor
from .version import VERSION

logger = logging.getLogger(__name__)

USER_AGENT = f"WooCommerce API Client-Python/{VERSION}"
JSON_CONTENT_TYPE = "application/json;charset=utf-8"

SENSITIVE_PARAMS = ("consumer_key", "consumer_secret", "oauth_consumer_key", "oauth_signature")
REDACTED = "***"


def redact_url(url: httpx.URL | str) -> str:
    url = httpx.URL(url)
    for key in SENSITIVE_PARAMS:
        if key in url.params:
            url = url.copy_set_param(key, REDACTED)
    return str(url)


def _auth_mode(cfg: ClientConfig) -> str:
    if not cfg.is_ssl:
        return "oauth1"
    return "query_string" if cfg.query_string_auth else "basic"


class Dispatcher:
    """Single funnel for every verb: URL, headers, credentials, body, then the HTTP call."""

    def __init__(self, cfg: ClientConfig, credentials: Credentials):
        self._cfg = cfg
        self._credentials = credentials
        self._builder = RequestBuilder(cfg, credentials)

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    def prepare(self, descriptor: RequestDescriptor) -> tuple[str, dict[str, Any]]:
        """Return the final URL and the keyword arguments for ``httpx.Client.request``."""
        endpoint = add_query_params(descriptor.endpoint, descriptor.query)
        url = self._builder.build_url(descriptor.method, endpoint)

        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }
        if descriptor.data:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        kwargs: dict[str, Any] = {"headers": headers, "timeout": self._cfg.timeout_s}

        # Plain HTTP carries credentials only in the signed URL.
        if self._builder.is_ssl:
            if self._cfg.query_string_auth:
                kwargs["params"] = {
                    "consumer_key": self._credentials.consumer_key,
                    "consumer_secret": self._credentials.consumer_secret,
                }
            else:
                kwargs["auth"] = httpx.BasicAuth(
                    self._credentials.consumer_key,
                    self._credentials.consumer_secret,
                )

        if descriptor.data:
            kwargs["content"] = json.dumps(descriptor.data, ensure_ascii=False).encode("utf-8")

        for key, value in self._cfg.request_options().items():
            if key == "headers":
                headers.update(value)
            else:
                kwargs[key] = value
        return url, kwargs

    def client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"verify": self._cfg.verify_ssl}
        if self._cfg.debug:
            options["event_hooks"] = {
                "request": [self._trace_request],
                "response": [self._trace_response],
            }
        options.update(self._cfg.client_options())
        return options

    def do_request(
            self,
            method: HttpMethod | str,
            endpoint: str,
            query: Mapping[str, Any] | None = None,
            data: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        descriptor = RequestDescriptor(
            method=HttpMethod.coerce(method),
            endpoint=endpoint,
            query=query,
            data=data,
        )
        url, kwargs = self.prepare(descriptor)
        logger.debug("%s %s (auth=%s)", descriptor.method.value, redact_url(url), _auth_mode(self._cfg))

        with httpx.Client(**self.client_options()) as http:
            return http.request(descriptor.method.value, url, **kwargs)

    # --- debug tracing ---
    def _debug_stream(self) -> TextIO:
        return self._cfg.debug_stream or sys.stderr

    def _trace_request(self, request: httpx.Request) -> None:
        out = self._debug_stream()
        print(f"> {request.method} {redact_url(request.url)}", file=out)
        for name, value in request.headers.items():
            if name.lower() == "authorization":
                value = REDACTED
            print(f"> {name}: {value}", file=out)
        if request.content:
            print(request.content.decode("utf-8", errors="replace"), file=out)
        out.flush()

    def _trace_response(self, response: httpx.Response) -> None:
        response.read()
        out = self._debug_stream()
        print(f"< {response.status_code} {response.reason_phrase}", file=out)
        for name, value in response.headers.items():
            print(f"< {name}: {value}", file=out)
        if response.content:
            print(response.text, file=out)
        out.flush()
