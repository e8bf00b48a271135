"""List configured stats sockets."""

import typer

from mb_haproxy.app_context import use_context


def sockets(ctx: typer.Context) -> None:
    """List stats sockets with their level and bound processes."""
    app = use_context(ctx)
    with app.reporting_errors():
        result = app.connect().cli_sockets()
    app.out.print_sockets(result)
