"""Connections to the HAProxy stats socket over Unix or TCP sockets.

HAProxy closes a non-interactive session after one command and has no framing
between commands, so a Connection runs exactly one command. Build a new one per
command with a ConnectionBuilder.
"""

import logging
import socket
from collections.abc import Callable
from ipaddress import IPv4Address, IPv6Address
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Protocol, Self

from mb_haproxy.stats import decoder, encoder
from mb_haproxy.stats.errors import ConnectionConsumedError, IoError
from mb_haproxy.stats.requests import (
    AclId,
    AddAcl,
    AllBackends,
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
from mb_haproxy.stats.responses import Acl, AclEntry, CliSocket, Level

logger = logging.getLogger(__name__)

DEFAULT_SOCKET_PATH = Path("/var/run/haproxy.sock")


class Connection:
    """A single-use connection to HAProxy.

    Every command method consumes the connection and closes the socket when the
    response has been read. Calling a second command raises
    ConnectionConsumedError.
    """

    def __init__(self, sock: socket.socket) -> None:
        """Wrap an already connected stream socket.

        Args:
            sock: Connected socket. The connection takes ownership of it.

        """
        self._sock = sock
        self._consumed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        self.close()

    @property
    def consumed(self) -> bool:
        """Whether a command has already been issued on this connection."""
        return self._consumed

    def close(self) -> None:
        """Close the underlying socket."""
        self._sock.close()

    def _execute[T](self, command: Command, decode: Callable[[BinaryIO], T]) -> T:
        """Write ``command`` plus terminator, then decode the response."""
        if self._consumed:
            raise ConnectionConsumedError("Connection already used; create a new one per command.")
        self._consumed = True

        logger.debug("Command: %s", encoder.encode_command(command).decode())
        try:
            with self._sock, self._sock.makefile("wb") as writer, self._sock.makefile("rb") as reader:
                encoder.write_command(writer, command)
                encoder.end(writer)
                writer.flush()
                return decode(reader)
        except OSError as e:
            raise IoError(e) from e

    def acl_add(self, id_: AclId, value: object) -> None:
        """Add an entry to an ACL.

        HAProxy's ``add acl`` does not support values with spaces, so the value
        is truncated at the first space.

        Raises:
            UnknownIdError: The ACL does not exist.
            MissingParametersError: HAProxy rejected the command as incomplete.

        """
        word = str(value).split(" ", 1)[0]
        self._execute(AddAcl(id_, word), decoder.parse_acl_add)

    def acl_data[V](self, id_: AclId, value_parser: Callable[[str], V]) -> list[AclEntry[V]]:
        """List the entries of an ACL.

        HAProxy does not report the type of ACL values, so the caller picks the
        parser: ``str`` keeps the raw text, ``ipaddress.ip_address`` parses
        addresses, and so on.

        Raises:
            UnknownIdError: The ACL does not exist.

        """
        return self._execute(ShowAclEntries(id_), lambda reader: decoder.parse_acl_entries(reader, value_parser))

    def acl_list(self) -> list[Acl]:
        """List all ACLs."""
        return self._execute(ShowAcl(), decoder.parse_acl_list)

    def level(self) -> Level:
        """Query the privilege level of this session."""
        return self._execute(ShowCliLevel(), decoder.parse_level)

    def cli_sockets(self) -> list[CliSocket]:
        """List configured stats sockets."""
        return self._execute(ShowCliSockets(), decoder.parse_cli_sockets)

    def errors(self) -> int:
        """Count captured errors for all backends and error types."""
        return self._execute(ShowErrors(), decoder.parse_errors)

    def errors_backend(self, backend: BackendId | None = None, flag: ErrorFlag = ErrorFlag.ALL) -> int:
        """Count captured errors for one backend (or all) and one error side."""
        return self._execute(ShowErrorsBackend(backend or AllBackends(), flag), decoder.parse_errors)


class ConnectionBuilder(Protocol):
    """Anything that can open a fresh Connection."""

    def connect(self) -> Connection: ...


class UnixSocketBuilder:
    """Opens connections to HAProxy through a Unix domain socket."""

    def __init__(self, path: Path | str = DEFAULT_SOCKET_PATH, timeout: float | None = None) -> None:
        """Initialize the builder.

        Args:
            path: Filesystem path of the stats socket.
            timeout: Socket timeout in seconds, or None to block.

        """
        self.path = Path(path)
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"UnixSocketBuilder(path={str(self.path)!r}, timeout={self.timeout!r})"

    def connect(self) -> Connection:
        """Open a new connection.

        Raises:
            IoError: The socket could not be reached.

        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.timeout)
            sock.connect(str(self.path))
        except OSError as e:
            sock.close()
            raise IoError(e) from e
        logger.info("Connected to %s", self.path)
        return Connection(sock)


class TcpSocketBuilder:
    """Opens connections to HAProxy through a TCP stats socket."""

    def __init__(self, host: str | IPv4Address | IPv6Address, port: int, timeout: float | None = None) -> None:
        """Initialize the builder.

        Args:
            host: Hostname or IP address of the stats listener.
            port: TCP port of the stats listener.
            timeout: Socket timeout in seconds, or None to block.

        """
        self.host = str(host)
        self.port = port
        self.timeout = timeout

    def __repr__(self) -> str:
        return f"TcpSocketBuilder(host={self.host!r}, port={self.port!r}, timeout={self.timeout!r})"

    def connect(self) -> Connection:
        """Open a new connection.

        Raises:
            IoError: The listener could not be reached.

        """
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            raise IoError(e) from e
        logger.info("Connected to %s:%d", self.host, self.port)
        return Connection(sock)
