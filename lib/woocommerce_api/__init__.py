from .client import WooCommerceClient
from .config_types import ClientConfig, Credentials
from .errors import ConfigError, ResponseDecodeError, WooCommerceError
from .request import HttpMethod

__all__ = [
    "WooCommerceClient",
    "ClientConfig",
    "Credentials",
    "HttpMethod",
    "ConfigError",
    "ResponseDecodeError",
    "WooCommerceError",
]
