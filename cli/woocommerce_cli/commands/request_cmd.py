from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import httpx
import typer
import yaml as pyyaml
from woocommerce_api import ConfigError, HttpMethod, WooCommerceClient

from .. import console
from ..config import load_config
from ..http import make_client


@dataclass
class CliState:
    profile: str | None = None
    url: str | None = None
    debug: bool = False


def _state(ctx: typer.Context) -> CliState:
    obj = ctx.find_root().obj
    return obj if isinstance(obj, CliState) else CliState()


def client_from_ctx(ctx: typer.Context) -> WooCommerceClient:
    state = _state(ctx)
    cfg = load_config(state.profile)
    if not (state.url or cfg.url):
        console.err("No store URL configured. Run `woo config set --url ...` or set WOOCOMMERCE_URL.")
        raise typer.Exit(code=2)
    try:
        return make_client(cfg, url_override=state.url, debug=state.debug)
    except ConfigError as e:
        console.err(str(e))
        raise typer.Exit(code=2)


def parse_query(items: list[str] | None) -> dict[str, Any]:
    """Parse repeated ``key=value`` options; ``key[]=v`` entries collect into a list."""
    query: dict[str, Any] = {}
    for item in items or []:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--query")
        if key.endswith("[]"):
            query.setdefault(key[:-2], []).append(value)
        else:
            query[key] = value
    return query


def load_body(raw: str | None) -> dict[str, Any] | None:
    if raw is None:
        return None
    source = raw
    is_yaml = False
    if raw.startswith("@"):
        path = Path(raw[1:]).expanduser()
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            raise typer.BadParameter(f"cannot read {path}: {e}", param_hint="--data")
        is_yaml = path.suffix.lower() in {".yaml", ".yml"}
    try:
        data = pyyaml.safe_load(source) if is_yaml else json.loads(source)
    except (ValueError, pyyaml.YAMLError) as e:
        raise typer.BadParameter(f"invalid body: {e}", param_hint="--data")
    if not isinstance(data, dict):
        raise typer.BadParameter("body must be a JSON/YAML object", param_hint="--data")
    return data


def emit_response(response: httpx.Response, *, raw: bool = False) -> None:
    console.info(f"{response.status_code} {response.reason_phrase}")
    if raw or not response.content:
        console.print(response.text, markup=False, highlight=False)
    else:
        try:
            console.print_json(response.json())
        except ValueError:
            console.print(response.text, markup=False, highlight=False)
    if response.status_code >= 400:
        raise typer.Exit(code=1)


def call(ctx: typer.Context, fn: Callable[[WooCommerceClient], httpx.Response], *, raw: bool = False) -> None:
    client = client_from_ctx(ctx)
    try:
        response = fn(client)
    except ConfigError as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    except httpx.RequestError as e:
        console.err(f"request failed: {e}")
        raise typer.Exit(code=2)
    emit_response(response, raw=raw)


def _query_option():
    return typer.Option(None, "-q", "--query", help="Query parameter key=value (repeatable).")


def _raw_option():
    return typer.Option(False, "--raw", help="Print the body as received.")


def get(
        ctx: typer.Context,
        endpoint: str = typer.Argument(..., help="Endpoint like products or orders/12."),
        query: list[str] | None = _query_option(),
        raw: bool = _raw_option(),
) -> None:
    """GET an endpoint."""
    params = parse_query(query)
    call(ctx, lambda c: c.request(HttpMethod.GET, endpoint, query=params), raw=raw)


def delete(
        ctx: typer.Context,
        endpoint: str = typer.Argument(..., help="Endpoint like products/12."),
        query: list[str] | None = _query_option(),
        raw: bool = _raw_option(),
) -> None:
    """DELETE an endpoint."""
    params = parse_query(query)
    call(ctx, lambda c: c.request(HttpMethod.DELETE, endpoint, query=params), raw=raw)


def post(
        ctx: typer.Context,
        endpoint: str = typer.Argument(..., help="Endpoint like products."),
        data: str = typer.Option(..., "-d", "--data", help="JSON object, or @file (.json/.yaml)."),
        raw: bool = _raw_option(),
) -> None:
    """POST a JSON body to an endpoint."""
    body = load_body(data)
    call(ctx, lambda c: c.request(HttpMethod.POST, endpoint, data=body), raw=raw)


def put(
        ctx: typer.Context,
        endpoint: str = typer.Argument(..., help="Endpoint like products/12."),
        data: str = typer.Option(..., "-d", "--data", help="JSON object, or @file (.json/.yaml)."),
        raw: bool = _raw_option(),
) -> None:
    """PUT a JSON body to an endpoint."""
    body = load_body(data)
    call(ctx, lambda c: c.request(HttpMethod.PUT, endpoint, data=body), raw=raw)


def options(
        ctx: typer.Context,
        endpoint: str = typer.Argument(..., help="Endpoint like products."),
        raw: bool = _raw_option(),
) -> None:
    """OPTIONS an endpoint (route schema)."""
    call(ctx, lambda c: c.request(HttpMethod.OPTIONS, endpoint), raw=raw)
