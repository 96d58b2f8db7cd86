from __future__ import annotations

from woocommerce_api import WooCommerceClient
from woocommerce_api.config_types import ClientConfig, Credentials

from .config import AppConfig, normalize_url


def make_client(
    cfg: AppConfig,
    *,
    url_override: str | None = None,
    debug: bool = False,
) -> WooCommerceClient:
    url = normalize_url(url_override or cfg.url, warn=True)
    return WooCommerceClient(
        ClientConfig(
            url=url,
            wp_api=cfg.wp_api,
            version=cfg.version,
            verify_ssl=cfg.verify_ssl,
            signature_method=cfg.signature_method,
            query_string_auth=cfg.query_string_auth,
            debug=debug,
            timeout_s=cfg.timeout_s,
        ),
        Credentials(cfg.consumer_key, cfg.consumer_secret),
    )
