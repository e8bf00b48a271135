"""Add a value to an ACL."""

from typing import Annotated

import typer

from mb_haproxy.app_context import use_context
from mb_haproxy.stats import AclId


def acl_add(
    ctx: typer.Context,
    acl_id: Annotated[int, typer.Argument(min=0, max=2**31 - 1, help="Numeric ACL id (as in `acl-list`)")],
    value: Annotated[str, typer.Argument(help="Value to add; anything after the first space is dropped")],
) -> None:
    """Add a value to an ACL."""
    app = use_context(ctx)
    word = value.split(" ", 1)[0]
    if not word:
        app.out.print_error_and_exit("invalid_value", "ACL value must not be empty.")
    with app.reporting_errors():
        app.connect().acl_add(AclId(acl_id), word)
    app.out.print_acl_added(AclId(acl_id), word)
