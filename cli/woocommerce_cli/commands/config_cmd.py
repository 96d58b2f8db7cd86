from __future__ import annotations

import typer
from woocommerce_api.oauth import SIGNATURE_METHODS

from .. import console
from ..config import config_path, load_config, load_file_config, mask_secret, normalize_url, save_config

app = typer.Typer(help="Manage local CLI settings (~/.config/woocommerce/config.toml).")


@app.command("show")
def show_config(
        profile: str | None = typer.Option(None, "--profile", help="Show the values a profile resolves to."),
) -> None:
    cfg = load_config(profile)
    console.print(f"path={config_path()}", markup=False)
    console.print(
        f"url={cfg.url or '(empty)'} api={'wp-json/wc' if cfg.wp_api else 'wc-api'} version={cfg.version}",
        markup=False,
    )
    console.print(
        f"consumer_key={mask_secret(cfg.consumer_key)} consumer_secret={mask_secret(cfg.consumer_secret)}",
        markup=False,
    )
    console.print(
        f"verify_ssl={cfg.verify_ssl} query_string_auth={cfg.query_string_auth} "
        f"signature_method={cfg.signature_method} timeout_s={cfg.timeout_s}",
        markup=False,
    )


@app.command("set")
def set_config(
        url: str | None = typer.Option(None, "--url", help="Store URL like https://shop.example.com"),
        consumer_key: str | None = typer.Option(None, "--consumer-key", help="REST API consumer key (ck_...)."),
        consumer_secret: str | None = typer.Option(None, "--consumer-secret", help="REST API consumer secret (cs_...)."),
        wp_api: bool | None = typer.Option(None, "--wp-api/--legacy-api", help="Use wp-json/wc or legacy wc-api paths."),
        version: str | None = typer.Option(None, "--version", help="API version like v3."),
        verify_ssl: bool | None = typer.Option(None, "--verify-ssl/--no-verify-ssl", help="Verify TLS certificates."),
        query_string_auth: bool | None = typer.Option(
            None,
            "--query-string-auth/--basic-auth",
            help="Send credentials as query parameters instead of basic auth (HTTPS only).",
        ),
        signature_method: str | None = typer.Option(None, "--signature-method", help="HMAC-SHA1 or HMAC-SHA256."),
) -> None:
    cfg = load_file_config()
    if url is not None:
        cfg.url = normalize_url(url, warn=True)
    if consumer_key is not None:
        cfg.consumer_key = consumer_key.strip()
    if consumer_secret is not None:
        cfg.consumer_secret = consumer_secret.strip()
    if wp_api is not None:
        cfg.wp_api = wp_api
    if version is not None:
        cfg.version = version.strip()
    if verify_ssl is not None:
        cfg.verify_ssl = verify_ssl
    if query_string_auth is not None:
        cfg.query_string_auth = query_string_auth
    if signature_method is not None:
        method = signature_method.strip().upper()
        if method not in SIGNATURE_METHODS:
            console.err(f"Unsupported signature method: {signature_method}")
            raise typer.Exit(code=2)
        cfg.signature_method = method
    saved = save_config(cfg)
    console.ok(f"Settings updated: {saved}")
