from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from . import console

APP_NAME = "woocommerce"
CONFIG_FILENAME = "config.toml"

ENV_URL = "WOOCOMMERCE_URL"
ENV_CONSUMER_KEY = "WOOCOMMERCE_CONSUMER_KEY"
ENV_CONSUMER_SECRET = "WOOCOMMERCE_CONSUMER_SECRET"

DEFAULT_VERSION = "v3"
DEFAULT_SIGNATURE_METHOD = "HMAC-SHA256"

_WARNED_URL_SCHEME = False


@dataclass
class AppConfig:
    url: str = ""
    consumer_key: str = ""
    consumer_secret: str = ""
    wp_api: bool = False
    version: str = DEFAULT_VERSION
    verify_ssl: bool = True
    signature_method: str = DEFAULT_SIGNATURE_METHOD
    query_string_auth: bool = False
    timeout_s: float = 15.0


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig()


def normalize_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"} or host.endswith(".local"):
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_URL_SCHEME
    if _WARNED_URL_SCHEME:
        return
    console.warn(f"url missing scheme, assuming {normalized}")
    _WARNED_URL_SCHEME = True


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "url": cfg.url,
        "consumer_key": cfg.consumer_key,
        "consumer_secret": cfg.consumer_secret,
        "wp_api": cfg.wp_api,
        "version": cfg.version,
        "verify_ssl": cfg.verify_ssl,
        "signature_method": cfg.signature_method,
        "query_string_auth": cfg.query_string_auth,
        "timeout_s": cfg.timeout_s,
    }


def _apply_values(cfg: AppConfig, data: dict[str, Any]) -> AppConfig:
    if "url" in data:
        cfg.url = normalize_url(str(data.get("url") or ""), warn=True)
    for key in ("consumer_key", "consumer_secret"):
        if key in data:
            setattr(cfg, key, str(data.get(key) or "").strip())
    for key in ("wp_api", "verify_ssl", "query_string_auth"):
        value = data.get(key)
        if isinstance(value, bool):
            setattr(cfg, key, value)
    version = str(data.get("version") or "").strip()
    if version:
        cfg.version = version
    signature_method = str(data.get("signature_method") or "").strip()
    if signature_method:
        cfg.signature_method = signature_method.upper()
    timeout = data.get("timeout_s")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        cfg.timeout_s = float(timeout)
    return cfg


def from_toml(data: dict[str, Any], profile: str | None = None) -> AppConfig:
    cfg = _apply_values(default_config(), data)
    if not profile:
        return cfg

    profiles_raw = data.get("profiles") or {}
    prof = profiles_raw.get(profile) if isinstance(profiles_raw, dict) else None
    if not isinstance(prof, dict):
        console.warn(f"profile {profile!r} not found in {config_path()}")
        return cfg
    return _apply_values(cfg, prof)


def _read_toml() -> dict[str, Any]:
    try:
        with open(config_path(), "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}


def apply_env(cfg: AppConfig) -> AppConfig:
    url = os.getenv(ENV_URL)
    if url:
        cfg.url = normalize_url(url, warn=True)
    key = os.getenv(ENV_CONSUMER_KEY)
    if key:
        cfg.consumer_key = key.strip()
    secret = os.getenv(ENV_CONSUMER_SECRET)
    if secret:
        cfg.consumer_secret = secret.strip()
    return cfg


def load_file_config() -> AppConfig:
    return from_toml(_read_toml())


def load_config(profile: str | None = None) -> AppConfig:
    return apply_env(from_toml(_read_toml(), profile))


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    # keep [profiles.*] tables written by hand
    data = _read_toml()
    data.update(to_toml(cfg))
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(data).encode("utf-8"))
    os.chmod(path, 0o600)
    return path


def mask_secret(value: str) -> str:
    if not value:
        return "(empty)"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…{value[-4:]}"
