"""Render commands into the text HAProxy expects on its stats socket.

Command functions write the command text only. The terminating newline is a
separate ``end()`` call so several writes can be batched before flushing.
"""

import io
from typing import BinaryIO

from mb_haproxy.stats.requests import (
    AclId,
    AddAcl,
    BackendId,
    Command,
    ErrorFlag,
    ShowAcl,
    ShowAclEntries,
    ShowCliLevel,
    ShowCliSockets,
    ShowErrors,
    ShowErrorsBackend,
)


def _write(w: BinaryIO, text: str) -> None:
    w.write(text.encode())


def end(w: BinaryIO) -> None:
    """Terminate the current command."""
    w.write(b"\n")


def show_acl(w: BinaryIO) -> None:
    _write(w, "show acl")


def show_acl_entries(w: BinaryIO, id_: AclId) -> None:
    _write(w, f"show acl {id_}")


def show_cli_level(w: BinaryIO) -> None:
    _write(w, "show cli level")


def show_cli_sockets(w: BinaryIO) -> None:
    _write(w, "show cli sockets")


def show_errors(w: BinaryIO) -> None:
    _write(w, "show errors")


def show_errors_backend(w: BinaryIO, backend: BackendId, flag: ErrorFlag) -> None:
    _write(w, f"show errors {backend}{flag.suffix}")


def add_acl(w: BinaryIO, id_: AclId, value: str) -> None:
    """Write ``add acl``; ``value`` must already be a single word."""
    _write(w, f"add acl {id_} {value}")


def write_command(w: BinaryIO, command: Command) -> None:
    """Write any command variant (without the terminator)."""
    match command:
        case ShowAcl():
            show_acl(w)
        case ShowAclEntries(id_):
            show_acl_entries(w, id_)
        case ShowCliLevel():
            show_cli_level(w)
        case ShowCliSockets():
            show_cli_sockets(w)
        case ShowErrors():
            show_errors(w)
        case ShowErrorsBackend(backend, flag):
            show_errors_backend(w, backend, flag)
        case AddAcl(id_, value):
            add_acl(w, id_, value)


def encode_command(command: Command) -> bytes:
    """Return the command text as bytes, without the terminator."""
    buf = io.BytesIO()
    write_command(buf, command)
    return buf.getvalue()
