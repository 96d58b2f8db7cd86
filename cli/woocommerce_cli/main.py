from __future__ import annotations

import typer

from .commands import config_cmd, products_cmd, request_cmd
from .commands.request_cmd import CliState
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="woo",
        help="WooCommerce REST API client",
        no_args_is_help=True,
    )

    app.command("get")(request_cmd.get)
    app.command("post")(request_cmd.post)
    app.command("put")(request_cmd.put)
    app.command("delete")(request_cmd.delete)
    app.command("options")(request_cmd.options)
    app.add_typer(products_cmd.app, name="products")
    app.add_typer(config_cmd.app, name="config")

    @app.callback()
    def _main(
            ctx: typer.Context,
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
            debug: bool = typer.Option(False, "--debug", help="Trace HTTP requests and responses to stderr."),
            profile: str | None = typer.Option(None, "--profile", help="Config profile from [profiles.<name>]."),
            url: str | None = typer.Option(None, "--url", help="Override the store URL."),
    ):
        setup_logging(verbose)
        ctx.obj = CliState(profile=profile, url=url, debug=debug)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
