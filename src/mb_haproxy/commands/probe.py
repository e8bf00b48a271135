"""Try to connect to every stats socket HAProxy reports."""

import typer

from mb_haproxy.app_context import use_context
from mb_haproxy.stats import HaproxyError, TcpSocketBuilder, UnixSocketBuilder
from mb_haproxy.stats.connection import ConnectionBuilder
from mb_haproxy.stats.responses import CliSocketAddr, IpSocketAddr, UnixSocketAddr, format_socket_addr


def _builder_for(address: CliSocketAddr, timeout: float) -> ConnectionBuilder | None:
    match address:
        case UnixSocketAddr(path):
            return UnixSocketBuilder(path, timeout=timeout)
        case IpSocketAddr(host, port):
            return TcpSocketBuilder(host, port, timeout=timeout)
        case _:
            return None


def probe(ctx: typer.Context) -> None:
    """Enumerate stats sockets via `show cli sockets` and test each one."""
    app = use_context(ctx)
    with app.reporting_errors():
        sockets = app.connect().cli_sockets()

    results: list[tuple[str, str]] = []
    for sock in sockets:
        address = format_socket_addr(sock.address)
        builder = _builder_for(sock.address, app.cfg.timeout)
        if builder is None:
            results.append((address, "unsupported"))
            continue
        try:
            builder.connect().close()
        except HaproxyError as e:
            results.append((address, f"failed: {e.message}"))
        else:
            results.append((address, "ok"))
    app.out.print_probe(results)
