"""Decode stats socket responses into typed values.

Each decoder consumes a binary line reader positioned at the start of the
response. Listings skip blank lines and ``#`` comment headers, and a single
malformed data line fails the whole response.
"""

from collections.abc import Callable, Iterator
from typing import BinaryIO

from mb_haproxy.stats.errors import MissingParametersError, ParseFailureError, UnknownIdError
from mb_haproxy.stats.responses import Acl, AclEntry, CliSocket, Level, parse_u32

UNKNOWN_ACL_PREFIX = "Unknown ACL identifier"
ADD_ACL_MISSING_PARAMS_PREFIX = "'add acl' expects two parameters"


def _decode(raw: bytes) -> str:
    try:
        text = raw.decode()
    except UnicodeDecodeError as e:
        raise ParseFailureError(f"Response is not valid UTF-8: {raw!r}") from e
    return text.removesuffix("\n").removesuffix("\r")


def _read_line(reader: BinaryIO) -> str | None:
    """Read one line without its terminator; None at end of stream."""
    raw = reader.readline()
    if not raw:
        return None
    return _decode(raw)


def _records(reader: BinaryIO) -> Iterator[str]:
    """Yield data lines, skipping blank lines and ``#`` comments."""
    for raw in reader:
        line = _decode(raw)
        if not line or line.startswith("#"):
            continue
        yield line


def parse_errors(reader: BinaryIO) -> int:
    """Decode ``show errors``: the count after the last space of one line."""
    line = _read_line(reader)
    if line is None:
        raise ParseFailureError("Empty response to 'show errors'")
    _, sep, count = line.rpartition(" ")
    if not sep:
        raise ParseFailureError(f"No error count in line: {line!r}")
    return parse_u32(count, "error count")


def parse_acl_list(reader: BinaryIO) -> list[Acl]:
    """Decode ``show acl``."""
    return [Acl.parse(line) for line in _records(reader)]


def parse_acl_entries[V](reader: BinaryIO, value_parser: Callable[[str], V]) -> list[AclEntry[V]]:
    """Decode ``show acl #<id>``, parsing each value with ``value_parser``.

    Raises:
        UnknownIdError: HAProxy does not know the requested ACL.
        ParseFailureError: Any entry line is malformed.

    """
    records = _records(reader)
    first = next(records, None)
    if first is None:
        return []
    if first.startswith(UNKNOWN_ACL_PREFIX):
        raise UnknownIdError(first)
    entries = [AclEntry.parse(first, value_parser)]
    entries.extend(AclEntry.parse(line, value_parser) for line in records)
    return entries


def parse_acl_add(reader: BinaryIO) -> None:
    """Decode ``add acl``: a bare newline means the value was added."""
    line = _read_line(reader)
    if line is None:
        raise ParseFailureError("Empty response to 'add acl'")
    if not line:
        return
    if line.startswith(ADD_ACL_MISSING_PARAMS_PREFIX):
        raise MissingParametersError(line)
    if line.startswith(UNKNOWN_ACL_PREFIX):
        raise UnknownIdError(line)
    raise ParseFailureError(f"Unexpected response to 'add acl': {line!r}")


def parse_cli_sockets(reader: BinaryIO) -> list[CliSocket]:
    """Decode ``show cli sockets``."""
    return [CliSocket.parse(line) for line in _records(reader)]


def parse_level(reader: BinaryIO) -> Level:
    """Decode ``show cli level``."""
    line = _read_line(reader)
    if line is None:
        raise ParseFailureError("Empty response to 'show cli level'")
    return Level.parse(line)
