"""Application context shared across CLI commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import typer

from mb_haproxy.config import Config
from mb_haproxy.output import Output
from mb_haproxy.stats import Connection, HaproxyError


@dataclass(frozen=True, slots=True)
class AppContext:
    """Shared application state passed through Typer context."""

    out: Output
    cfg: Config

    def connect(self) -> Connection:
        """Open a fresh single-use connection to the configured stats socket."""
        return self.cfg.connection_builder().connect()

    @contextmanager
    def reporting_errors(self) -> Iterator[None]:
        """Turn stats socket errors into a CLI error and exit code 1."""
        try:
            yield
        except HaproxyError as e:
            self.out.print_error_and_exit(e.code, e.message)


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
