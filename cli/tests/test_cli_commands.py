from __future__ import annotations

import json

import httpx
import pytest
import typer
from typer.testing import CliRunner
from woocommerce_api import WooCommerceClient
from woocommerce_api.config_types import ClientConfig, Credentials

from woocommerce_cli import config, main
from woocommerce_cli.commands import request_cmd

runner = CliRunner()


class _Store:
    def __init__(self, status_code: int = 200, body: bytes = b'{"id": 1}') -> None:
        self.status_code = status_code
        self.body = body
        self.seen: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.seen.append(request)
        return httpx.Response(self.status_code, content=self.body)


@pytest.fixture
def store(tmp_path, monkeypatch) -> _Store:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    monkeypatch.setenv(config.ENV_URL, "https://shop.test")
    monkeypatch.setenv(config.ENV_CONSUMER_KEY, "ck_test")
    monkeypatch.setenv(config.ENV_CONSUMER_SECRET, "cs_test")

    fake = _Store()

    def _make_client(cfg, *, url_override=None, debug=False):
        return WooCommerceClient(
            ClientConfig(
                url=url_override or cfg.url,
                wp_api=True,
                debug=debug,
                transport_options={"transport": httpx.MockTransport(fake)},
            ),
            Credentials(cfg.consumer_key, cfg.consumer_secret),
        )

    monkeypatch.setattr(request_cmd, "make_client", _make_client)
    return fake


def test_parse_query_collects_lists() -> None:
    assert request_cmd.parse_query(["per_page=5", "include[]=1", "include[]=2", "search=a=b"]) == {
        "per_page": "5",
        "include": ["1", "2"],
        "search": "a=b",
    }


def test_parse_query_rejects_missing_equals() -> None:
    with pytest.raises(typer.BadParameter):
        request_cmd.parse_query(["per_page"])


def test_load_body_inline_and_files(tmp_path) -> None:
    assert request_cmd.load_body(None) is None
    assert request_cmd.load_body('{"name": "Mug"}') == {"name": "Mug"}

    yaml_file = tmp_path / "product.yaml"
    yaml_file.write_text("name: Mug\nregular_price: '9.90'\n", encoding="utf-8")
    assert request_cmd.load_body(f"@{yaml_file}") == {"name": "Mug", "regular_price": "9.90"}

    json_file = tmp_path / "product.json"
    json_file.write_text('{"name": "Cup"}', encoding="utf-8")
    assert request_cmd.load_body(f"@{json_file}") == {"name": "Cup"}


def test_load_body_requires_object() -> None:
    with pytest.raises(typer.BadParameter):
        request_cmd.load_body("[1, 2]")
    with pytest.raises(typer.BadParameter):
        request_cmd.load_body("{not json")


def test_get_command_sends_query(store) -> None:
    result = runner.invoke(main.app, ["get", "products", "-q", "per_page=5", "-q", "status=publish"])

    assert result.exit_code == 0, result.output
    req = store.seen[-1]
    assert req.method == "GET"
    assert req.url.path == "/wp-json/wc/v3/products"
    assert req.url.params["per_page"] == "5"
    assert req.url.params["status"] == "publish"
    assert '"id": 1' in result.output


def test_post_command_sends_body(store) -> None:
    result = runner.invoke(main.app, ["post", "products", "--data", '{"name": "Mug"}'])

    assert result.exit_code == 0, result.output
    req = store.seen[-1]
    assert req.method == "POST"
    assert json.loads(req.content) == {"name": "Mug"}


def test_error_status_exits_nonzero(store) -> None:
    store.status_code = 404
    store.body = b'{"code": "woocommerce_rest_product_invalid_id"}'

    result = runner.invoke(main.app, ["delete", "products/99"])

    assert result.exit_code == 1
    assert "woocommerce_rest_product_invalid_id" in result.output


def test_products_get_error_status_exits_nonzero(store) -> None:
    store.status_code = 404
    store.body = b'{"code": "woocommerce_rest_product_invalid_id"}'

    result = runner.invoke(main.app, ["products", "get", "99"])

    assert result.exit_code == 1
    assert store.seen[-1].url.path == "/wp-json/wc/v3/products/99"
    assert "woocommerce_rest_product_invalid_id" in result.output


def test_url_override_is_used(store) -> None:
    result = runner.invoke(main.app, ["--url", "https://other.test", "options", "products"])

    assert result.exit_code == 0, result.output
    assert store.seen[-1].method == "OPTIONS"
    assert store.seen[-1].url.host == "other.test"


def test_products_get_uses_lenient_decoding(store) -> None:
    store.body = b'Warning: x{"id": 7, "name": "Mug"}'

    result = runner.invoke(main.app, ["products", "get", "7"])

    assert result.exit_code == 0, result.output
    assert store.seen[-1].url.path == "/wp-json/wc/v3/products/7"
    assert '"name": "Mug"' in result.output


def test_products_attribute_terms(store) -> None:
    result = runner.invoke(main.app, ["products", "attributes", "--terms", "3"])

    assert result.exit_code == 0, result.output
    assert store.seen[-1].url.path == "/wp-json/wc/v3/products/attributes/3/terms"
    assert store.seen[-1].url.params["per_page"] == "100"


def test_missing_url_is_reported(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    monkeypatch.delenv(config.ENV_URL, raising=False)

    result = runner.invoke(main.app, ["get", "products"])

    assert result.exit_code == 2
    assert "No store URL configured" in result.output


def test_transport_error_is_reported(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    monkeypatch.setenv(config.ENV_URL, "https://shop.test")
    monkeypatch.setenv(config.ENV_CONSUMER_KEY, "ck_test")
    monkeypatch.setenv(config.ENV_CONSUMER_SECRET, "cs_test")

    class _DownClient:
        def request(self, *args, **kwargs):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(request_cmd, "make_client", lambda *_args, **_kwargs: _DownClient())

    result = runner.invoke(main.app, ["get", "products"])

    assert result.exit_code == 2
    assert "connection refused" in result.output


def test_config_set_and_show(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))
    for name in (config.ENV_URL, config.ENV_CONSUMER_KEY, config.ENV_CONSUMER_SECRET):
        monkeypatch.delenv(name, raising=False)

    result = runner.invoke(
        main.app,
        [
            "config",
            "set",
            "--url",
            "https://shop.test/",
            "--consumer-key",
            "ck_1234567890",
            "--consumer-secret",
            "cs_abcdefghijkl",
            "--wp-api",
            "--signature-method",
            "hmac-sha1",
        ],
    )
    assert result.exit_code == 0, result.output

    cfg = config.load_config()
    assert cfg.url == "https://shop.test"
    assert cfg.wp_api is True
    assert cfg.signature_method == "HMAC-SHA1"

    shown = runner.invoke(main.app, ["config", "show"])
    assert shown.exit_code == 0, shown.output
    assert "cs_abcdefghijkl" not in shown.output
    assert "wp-json/wc" in shown.output


def test_config_set_rejects_unknown_signature_method(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "user_config_dir", lambda _: str(tmp_path))

    result = runner.invoke(main.app, ["config", "set", "--signature-method", "RSA-SHA1"])

    assert result.exit_code == 2


def test_products_get_reports_undecodable_body(store) -> None:
    store.body = b"<html>maintenance</html>"

    result = runner.invoke(main.app, ["products", "get", "7"])

    assert result.exit_code == 1
