"""Structured output for CLI and JSON modes."""

# This module is the output layer; print() is its sole mechanism for producing CLI output.
# ruff: noqa: T201

import json
import sys
from collections.abc import Sequence
from typing import NoReturn

import typer

from mb_haproxy.stats import Acl, AclEntry, AclId, CliSocket, Level
from mb_haproxy.stats.responses import format_socket_addr


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def _lines(self, data: dict[str, object], lines: list[str]) -> None:
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            for line in lines:
                print(line)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    # --- Session ---

    def print_level(self, level: Level) -> None:
        """Print the session privilege level."""
        self._success({"level": level.value}, level.value)

    def print_sockets(self, sockets: list[CliSocket]) -> None:
        """Print configured stats sockets, one per line."""
        rows = [
            {"address": format_socket_addr(s.address), "level": s.level.value, "processes": str(s.processes)} for s in sockets
        ]
        self._lines({"sockets": rows}, [f"{r['address']} {r['level']} {r['processes']}" for r in rows])

    def print_error_count(self, count: int) -> None:
        """Print a captured error count."""
        self._success({"errors": count}, str(count))

    # --- ACLs ---

    def print_acls(self, acls: list[Acl]) -> None:
        """Print the ACL listing."""
        rows = [{"id": a.id, "reference": a.reference, "description": a.description} for a in acls]
        self._lines({"acls": rows}, [f"{a.id} ({a.reference or ''}) {a.description}" for a in acls])

    def print_acl_entries(self, entries: Sequence[AclEntry[object]]) -> None:
        """Print ACL entries as ``0x<id> <value>``."""
        rows = [{"id": f"0x{e.id:x}", "value": str(e.value)} for e in entries]
        self._lines({"entries": rows}, [f"{r['id']} {r['value']}" for r in rows])

    def print_acl_added(self, acl_id: AclId, value: str) -> None:
        """Print ACL add confirmation."""
        self._success({"acl": str(acl_id), "value": value}, f"Added '{value}' to ACL {acl_id}.")

    # --- Probe ---

    def print_probe(self, results: list[tuple[str, str]]) -> None:
        """Print per-socket probe outcomes as ``<address>: <status>``."""
        rows = [{"address": address, "status": status} for address, status in results]
        self._lines({"sockets": rows}, [f"{address}: {status}" for address, status in results])
