from __future__ import annotations

import httpx
import typer
from woocommerce_api import ConfigError, ResponseDecodeError
from woocommerce_api.responses import parse_json

from .. import console
from .request_cmd import call, client_from_ctx, emit_response, load_body

app = typer.Typer(help="Product shortcuts.")


@app.command("get")
def get_product(
        ctx: typer.Context,
        product_id: int = typer.Argument(..., help="Product ID."),
) -> None:
    client = client_from_ctx(ctx)
    try:
        response = client.get(f"products/{product_id}")
    except (ConfigError, httpx.RequestError) as e:
        console.err(str(e))
        raise typer.Exit(code=2)
    if response.status_code >= 400:
        emit_response(response)
    try:
        product = parse_json(response)
    except ResponseDecodeError as e:
        console.err(f"{e} (HTTP {e.status_code})")
        raise typer.Exit(code=1)
    console.print_json(product)


@app.command("variations")
def list_variations(
        ctx: typer.Context,
        product_id: int = typer.Argument(..., help="Product ID."),
        variation_id: int | None = typer.Option(None, "--id", help="Fetch a single variation."),
) -> None:
    if variation_id is None:
        call(ctx, lambda c: c.get_variations(product_id))
    else:
        call(ctx, lambda c: c.get_variation(product_id, variation_id))


@app.command("attributes")
def list_attributes(
        ctx: typer.Context,
        attribute_id: int | None = typer.Option(None, "--terms", help="List terms of this attribute."),
) -> None:
    if attribute_id is None:
        call(ctx, lambda c: c.get_attributes())
    else:
        call(ctx, lambda c: c.get_attributes_terms(attribute_id))


@app.command("create")
def create_product(
        ctx: typer.Context,
        data: str = typer.Option(..., "-d", "--data", help="Product JSON object, or @file (.json/.yaml)."),
) -> None:
    body = load_body(data)
    call(ctx, lambda c: c.create_product(body))


@app.command("update")
def update_product(
        ctx: typer.Context,
        product_id: int = typer.Argument(..., help="Product ID."),
        data: str = typer.Option(..., "-d", "--data", help="Fields to change, JSON object or @file."),
) -> None:
    body = load_body(data)
    call(ctx, lambda c: c.update_product(product_id, body))
