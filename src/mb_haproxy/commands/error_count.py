"""Show the captured error count."""

from typing import Annotated

import typer

from mb_haproxy.app_context import use_context
from mb_haproxy.stats import ErrorFlag
from mb_haproxy.stats.requests import parse_backend_id


def errors(
    ctx: typer.Context,
    backend: Annotated[str | None, typer.Argument(help="Backend id or name; -1 or omitted for all backends")] = None,
    *,
    flag: Annotated[ErrorFlag, typer.Option("--flag", help="Restrict to request or response errors")] = ErrorFlag.ALL,
) -> None:
    """Show how many errors HAProxy has captured."""
    app = use_context(ctx)
    try:
        backend_id = parse_backend_id(backend) if backend is not None else None
    except ValueError as e:
        app.out.print_error_and_exit("invalid_backend", str(e))

    with app.reporting_errors():
        connection = app.connect()
        # Plain `show errors` unless the caller narrowed the query.
        if backend_id is None and flag is ErrorFlag.ALL:
            count = connection.errors()
        else:
            count = connection.errors_backend(backend_id, flag)
    app.out.print_error_count(count)
