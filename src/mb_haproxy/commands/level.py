"""Show the session privilege level."""

import typer

from mb_haproxy.app_context import use_context


def level(ctx: typer.Context) -> None:
    """Show the privilege level granted on the stats socket."""
    app = use_context(ctx)
    with app.reporting_errors():
        result = app.connect().level()
    app.out.print_level(result)
