"""Typed values decoded from stats socket responses.

Each record type parses exactly one response line. Fields are split with a
bounded number of splits so trailing free text may itself contain the
delimiter. Any malformed record raises ParseFailureError.
"""

import ipaddress
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Self

from mb_haproxy.stats.errors import ParseFailureError

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1
_PORT_MAX = 65535

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _parse_uint(text: str, limit: int, what: str) -> int:
    """Parse an unsigned decimal with no sign, whitespace, or separators."""
    if not text or not (text.isascii() and text.isdigit()):
        raise ParseFailureError(f"Invalid {what}: {text!r}")
    value = int(text)
    if value > limit:
        raise ParseFailureError(f"{what.capitalize()} out of range: {text!r}")
    return value


def parse_u32(text: str, what: str = "unsigned integer") -> int:
    """Parse an unsigned 32-bit decimal integer."""
    return _parse_uint(text, _U32_MAX, what)


def _parse_i32(text: str, what: str) -> int:
    digits = text.removeprefix("-")
    value = _parse_uint(digits, _I32_MAX + 1, what)
    if text.startswith("-"):
        value = -value
    if not _I32_MIN <= value <= _I32_MAX:
        raise ParseFailureError(f"{what.capitalize()} out of range: {text!r}")
    return value


@dataclass(frozen=True, slots=True)
class Acl:
    """One row of ``show acl``."""

    id: int
    reference: str | None  # file or alias shown in parentheses; None for "()"
    description: str

    @classmethod
    def parse(cls, line: str) -> Self:
        """Parse ``<id> (<reference>|()) <description>``."""
        parts = line.split(" ", 2)
        if len(parts) != 3:
            raise ParseFailureError(f"Expected 3 fields in ACL line: {line!r}")
        id_, reference, description = parts

        if reference == "()":
            ref: str | None = None
        elif len(reference) >= 3 and reference.startswith("(") and reference.endswith(")"):
            ref = reference[1:-1]
        else:
            raise ParseFailureError(f"Invalid ACL reference: {reference!r}")

        return cls(id=_parse_i32(id_, "ACL id"), reference=ref, description=description)


@dataclass(frozen=True)
class AclEntry[V]:
    """One member of an ACL as listed by ``show acl #<id>``."""

    # Opaque element handle (a pointer inside HAProxy). Always 64 bits wide.
    id: int
    value: V

    @classmethod
    def parse(cls, line: str, value_parser: Callable[[str], V]) -> "AclEntry[V]":
        """Parse ``0x<hex> <value>``, decoding the value with ``value_parser``.

        Whatever ``value_parser`` raises is reported as ParseFailureError.
        """
        parts = line.split(" ", 1)
        if len(parts) != 2:
            raise ParseFailureError(f"Expected 2 fields in ACL entry: {line!r}")
        handle, raw_value = parts

        digits = handle.removeprefix("0x")
        if digits == handle or not digits or not _HEX_DIGITS.issuperset(digits):
            raise ParseFailureError(f"Invalid ACL entry id: {handle!r}")
        entry_id = int(digits, 16)
        if entry_id > _U64_MAX:
            raise ParseFailureError(f"ACL entry id exceeds 64 bits: {handle!r}")

        try:
            value = value_parser(raw_value)
        except Exception as e:  # noqa: BLE001
            raise ParseFailureError(f"Invalid ACL entry value: {raw_value!r}") from e

        return cls(id=entry_id, value=value)


class Level(StrEnum):
    """Privilege level of a stats socket session."""

    ADMIN = "admin"
    OPERATOR = "operator"
    USER = "user"

    @classmethod
    def parse(cls, text: str) -> Self:
        """Match ``text`` exactly; the caller strips the line terminator."""
        for level in cls:
            if level.value == text:
                return level
        raise ParseFailureError(f"Invalid level: {text!r}")


# --- Socket addresses ---


@dataclass(frozen=True, slots=True)
class UnixSocketAddr:
    """``unix@<path>``."""

    path: Path


@dataclass(frozen=True, slots=True)
class IpSocketAddr:
    """``ipv4@<addr>:<port>`` or ``ipv6@[<addr>]:<port>``."""

    host: ipaddress.IPv4Address | ipaddress.IPv6Address
    port: int

    def __str__(self) -> str:
        if self.host.version == 6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True, slots=True)
class SocketPairAddr:
    """``sockpair@<fd>``."""

    token: str


@dataclass(frozen=True, slots=True)
class AbstractSocketAddr:
    """``abns@<name>``: Linux abstract namespace socket (see unix(7))."""

    name: str


@dataclass(frozen=True, slots=True)
class UnknownSocketAddr:
    """HAProxy prints ``unknown`` for address families it cannot format."""


type CliSocketAddr = UnixSocketAddr | IpSocketAddr | SocketPairAddr | AbstractSocketAddr | UnknownSocketAddr


def _split_port(text: str) -> tuple[str, int]:
    host, sep, port = text.rpartition(":")
    if not sep:
        raise ParseFailureError(f"Missing port: {text!r}")
    return host, _parse_uint(port, _PORT_MAX, "port")


def _parse_ipv4(text: str) -> IpSocketAddr:
    host, port = _split_port(text)
    try:
        return IpSocketAddr(host=ipaddress.IPv4Address(host), port=port)
    except ValueError as e:
        raise ParseFailureError(f"Invalid IPv4 socket address: {text!r}") from e


def _parse_ipv6(text: str) -> IpSocketAddr:
    host, port = _split_port(text)
    if not (host.startswith("[") and host.endswith("]")):
        raise ParseFailureError(f"IPv6 socket address must be bracketed: {text!r}")
    try:
        return IpSocketAddr(host=ipaddress.IPv6Address(host[1:-1]), port=port)
    except ValueError as e:
        raise ParseFailureError(f"Invalid IPv6 socket address: {text!r}") from e


def parse_socket_addr(text: str) -> CliSocketAddr:
    """Parse ``<scheme>@<value>`` or the bare literal ``unknown``."""
    scheme, sep, value = text.partition("@")
    if not sep:
        if text == "unknown":
            return UnknownSocketAddr()
        raise ParseFailureError(f"Invalid socket address: {text!r}")

    match scheme:
        case "unix":
            return UnixSocketAddr(Path(value))
        case "ipv4":
            return _parse_ipv4(value)
        case "ipv6":
            return _parse_ipv6(value)
        case "sockpair":
            return SocketPairAddr(value)
        case "abns":
            return AbstractSocketAddr(value)
        case _:
            raise ParseFailureError(f"Unknown socket address scheme: {scheme!r}")


def format_socket_addr(addr: CliSocketAddr) -> str:
    """Render an address back into HAProxy's ``<scheme>@<value>`` notation."""
    match addr:
        case UnixSocketAddr(path):
            return f"unix@{path}"
        case IpSocketAddr(host, _):
            return f"ipv{host.version}@{addr}"
        case SocketPairAddr(token):
            return f"sockpair@{token}"
        case AbstractSocketAddr(name):
            return f"abns@{name}"
        case UnknownSocketAddr():
            return "unknown"


# --- Processes ---


@dataclass(frozen=True, slots=True)
class AllProcesses:
    """Socket is bound in every process (``all``)."""

    def __str__(self) -> str:
        return "all"


@dataclass(frozen=True, slots=True)
class ProcessList:
    """Socket is bound in the listed process indices."""

    ids: tuple[int, ...]

    def __str__(self) -> str:
        return ",".join(str(i) for i in self.ids)


type CliSocketProcesses = AllProcesses | ProcessList


def parse_processes(text: str) -> CliSocketProcesses:
    """Parse ``all`` or a comma-separated list of process indices."""
    if text == "all":
        return AllProcesses()
    return ProcessList(tuple(parse_u32(token, "process id") for token in text.split(",")))


@dataclass(frozen=True, slots=True)
class CliSocket:
    """One row of ``show cli sockets``."""

    address: CliSocketAddr
    level: Level
    processes: CliSocketProcesses

    @classmethod
    def parse(cls, line: str) -> Self:
        """Parse ``<address> <level> <processes>``."""
        parts = line.split(" ", 2)
        if len(parts) != 3:
            raise ParseFailureError(f"Expected 3 fields in CLI socket line: {line!r}")
        address, level, processes = parts
        return cls(address=parse_socket_addr(address), level=Level.parse(level), processes=parse_processes(processes))
