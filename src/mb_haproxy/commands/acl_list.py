"""List ACLs."""

import typer

from mb_haproxy.app_context import use_context


def acl_list(ctx: typer.Context) -> None:
    """List all ACLs known to HAProxy."""
    app = use_context(ctx)
    with app.reporting_errors():
        acls = app.connect().acl_list()
    app.out.print_acls(acls)
