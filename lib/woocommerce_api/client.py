from __future__ import annotations

from typing import Any, Mapping

import httpx

from .config_types import ClientConfig, Credentials
from .errors import ConfigError
from .request import HttpMethod
from .responses import parse_json
from .transport import Dispatcher


class WooCommerceClient:
    def __init__(self, cfg: ClientConfig, credentials: Credentials):
        self._cfg = cfg
        self._d = Dispatcher(cfg, credentials)

    @classmethod
    def create(cls, url: str, consumer_key: str, consumer_secret: str, **options: Any) -> WooCommerceClient:
        """Build a client from keyword options named like ``ClientConfig`` fields."""
        try:
            cfg = ClientConfig(url=url, **options)
        except TypeError as e:
            raise ConfigError(str(e)) from e
        return cls(cfg, Credentials(consumer_key, consumer_secret))

    @property
    def config(self) -> ClientConfig:
        return self._cfg

    def request(
            self,
            method: HttpMethod | str,
            endpoint: str,
            *,
            query: Mapping[str, Any] | None = None,
            data: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        return self._d.do_request(method, endpoint, query=query, data=data)

    # --- verbs ---
    def get(self, endpoint: str, query: Mapping[str, Any] | None = None) -> httpx.Response:
        return self.request(HttpMethod.GET, endpoint, query=query)

    def post(self, endpoint: str, data: Mapping[str, Any]) -> httpx.Response:
        return self.request(HttpMethod.POST, endpoint, data=data)

    def put(self, endpoint: str, data: Mapping[str, Any]) -> httpx.Response:
        return self.request(HttpMethod.PUT, endpoint, data=data)

    def delete(self, endpoint: str, query: Mapping[str, Any] | None = None) -> httpx.Response:
        return self.request(HttpMethod.DELETE, endpoint, query=query)

    def options(self, endpoint: str) -> httpx.Response:
        return self.request(HttpMethod.OPTIONS, endpoint)

    # --- products ---
    def get_product(self, product_id: int) -> Any:
        return parse_json(self.get(f"products/{int(product_id)}"))

    def get_attributes(self) -> httpx.Response:
        return self.get("products/attributes")

    def get_attributes_terms(self, attribute_id: int) -> httpx.Response:
        return self.get(f"products/attributes/{int(attribute_id)}/terms", {"per_page": 100})

    def get_variations(self, product_id: int) -> httpx.Response:
        return self.get(f"products/{int(product_id)}/variations")

    def get_variation(self, product_id: int, variation_id: int) -> httpx.Response:
        return self.get(f"products/{int(product_id)}/variations/{int(variation_id)}")

    def create_product(self, data: Mapping[str, Any]) -> httpx.Response:
        return self.post("products", data)

    def create_variation(self, product_id: int, data: Mapping[str, Any]) -> httpx.Response:
        return self.post(f"products/{int(product_id)}/variations", data)

    def create_attributes_terms(self, attribute_id: int, name: str) -> httpx.Response:
        return self.post(f"products/attributes/{int(attribute_id)}/terms", {"name": name})

    def update_product(self, product_id: int, data: Mapping[str, Any]) -> httpx.Response:
        return self.put(f"products/{int(product_id)}", data)

    def update_variation(self, product_id: int, variation_id: int, data: Mapping[str, Any]) -> httpx.Response:
        return self.put(f"products/{int(product_id)}/variations/{int(variation_id)}", data)
