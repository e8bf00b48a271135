"""CLI entry point for mb-haproxy."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from mb_haproxy.app_context import AppContext
from mb_haproxy.commands.acl_add import acl_add
from mb_haproxy.commands.acl_list import acl_list
from mb_haproxy.commands.acl_show import acl_show
from mb_haproxy.commands.error_count import errors
from mb_haproxy.commands.level import level
from mb_haproxy.commands.probe import probe
from mb_haproxy.commands.sockets import sockets
from mb_haproxy.config import Config
from mb_haproxy.log import setup_logging
from mb_haproxy.output import Output

app = TyperPlus(package_name="mb-haproxy")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    socket_path: Annotated[Path | None, typer.Option("--socket", help="HAProxy stats Unix socket path.")] = None,
    tcp_address: Annotated[str | None, typer.Option("--tcp", help="HAProxy stats TCP address (host:port).")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Echo socket traffic to stderr.")] = False,
) -> None:
    """Query and modify a running HAProxy through its stats socket."""
    out = Output(json_mode=json_output)
    try:
        cfg = Config.build(data_dir, socket_path=socket_path, tcp_address=tcp_address)
    except ValueError as e:
        out.print_error_and_exit("invalid_config", str(e))
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, verbose=verbose)
    ctx.obj = AppContext(out=out, cfg=cfg)


# Session
app.command()(level)
app.command(aliases=["s"])(sockets)
app.command(aliases=["e"])(errors)
app.command()(probe)

# ACLs
app.command("acl-list", aliases=["al"])(acl_list)
app.command("acl-show", aliases=["as"])(acl_show)
app.command("acl-add")(acl_add)
