"""Show the entries of one ACL."""

import ipaddress
from collections.abc import Callable
from enum import StrEnum
from typing import Annotated

import typer

from mb_haproxy.app_context import use_context
from mb_haproxy.stats import AclId


class ValueType(StrEnum):
    """How to interpret ACL values, which HAProxy reports untyped."""

    STR = "str"
    IP = "ip"
    NETWORK = "network"
    INT = "int"


_VALUE_PARSERS: dict[ValueType, Callable[[str], object]] = {
    ValueType.STR: str,
    ValueType.IP: ipaddress.ip_address,
    ValueType.NETWORK: ipaddress.ip_network,
    ValueType.INT: int,
}


def acl_show(
    ctx: typer.Context,
    acl_id: Annotated[int, typer.Argument(min=0, max=2**31 - 1, help="Numeric ACL id (as in `acl-list`)")],
    *,
    as_: Annotated[ValueType, typer.Option("--as", help="Value type used to validate entries")] = ValueType.STR,
) -> None:
    """List the entries of an ACL."""
    app = use_context(ctx)
    with app.reporting_errors():
        entries = app.connect().acl_data(AclId(acl_id), _VALUE_PARSERS[as_])
    app.out.print_acl_entries(entries)
