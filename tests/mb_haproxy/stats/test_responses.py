"""Tests for response record parsers."""

import ipaddress
from pathlib import Path

import pytest

from mb_haproxy.stats.errors import ParseFailureError
from mb_haproxy.stats.responses import (
    AbstractSocketAddr,
    Acl,
    AclEntry,
    AllProcesses,
    CliSocket,
    IpSocketAddr,
    Level,
    ProcessList,
    SocketPairAddr,
    UnixSocketAddr,
    UnknownSocketAddr,
    format_socket_addr,
    parse_processes,
    parse_socket_addr,
)

DESCRIPTION = "acl 'src' file '/usr/local/etc/haproxy/haproxy.cfg' line 20"


class TestAcl:
    """Acl.parse."""

    def test_without_reference(self):
        """() means the ACL has no file or alias reference."""
        acl = Acl.parse(f"0 () {DESCRIPTION}")
        assert acl == Acl(id=0, reference=None, description=DESCRIPTION)

    def test_with_reference(self):
        """The parentheses are stripped from the reference."""
        acl = Acl.parse(f"1 (test) {DESCRIPTION}")
        assert acl.id == 1
        assert acl.reference == "test"
        assert acl.description == DESCRIPTION

    def test_too_few_fields(self):
        """An ACL line needs id, reference, and description."""
        with pytest.raises(ParseFailureError):
            Acl.parse("1 ()")

    def test_short_reference(self):
        """A lone parenthesis is not a reference."""
        with pytest.raises(ParseFailureError):
            Acl.parse(f"1 ( {DESCRIPTION}")

    def test_unwrapped_reference(self):
        """References must be wrapped in parentheses."""
        with pytest.raises(ParseFailureError):
            Acl.parse(f"1 test {DESCRIPTION}")

    def test_non_numeric_id(self):
        """The id must be an integer."""
        with pytest.raises(ParseFailureError):
            Acl.parse(f"x () {DESCRIPTION}")


class TestAclEntry:
    """AclEntry.parse with pluggable value parsers."""

    def test_ip_value(self):
        """Values decode through the caller's parser."""
        entry = AclEntry.parse("0x1234 127.0.0.1", ipaddress.ip_address)
        assert entry == AclEntry(id=0x1234, value=ipaddress.IPv4Address("127.0.0.1"))

    def test_string_value_keeps_spaces(self):
        """Everything after the first space belongs to the value."""
        entry = AclEntry.parse("0x55d4c1f0 Mozilla/5.0 (X11)", str)
        assert entry.value == "Mozilla/5.0 (X11)"

    def test_full_64_bit_id(self):
        """Ids are 64-bit regardless of the local pointer width."""
        entry = AclEntry.parse("0xffffffffffffffff a", str)
        assert entry.id == 2**64 - 1

    def test_id_wider_than_64_bits(self):
        """Ids beyond 64 bits are rejected."""
        with pytest.raises(ParseFailureError):
            AclEntry.parse("0x1ffffffffffffffff a", str)

    def test_missing_prefix(self):
        """The id must carry the 0x prefix."""
        with pytest.raises(ParseFailureError):
            AclEntry.parse("1234 127.0.0.1", ipaddress.ip_address)

    def test_non_hex_id(self):
        """The id digits must be hexadecimal."""
        with pytest.raises(ParseFailureError):
            AclEntry.parse("0xzz 127.0.0.1", str)

    def test_missing_value(self):
        """An entry needs both id and value."""
        with pytest.raises(ParseFailureError):
            AclEntry.parse("0x1234", str)

    def test_value_parser_failure(self):
        """A value the parser rejects is a parse failure, chained to the cause."""
        with pytest.raises(ParseFailureError) as exc_info:
            AclEntry.parse("0x1234 not-an-ip", ipaddress.ip_address)
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestLevel:
    """Level.parse."""

    @pytest.mark.parametrize(("text", "level"), [("admin", Level.ADMIN), ("operator", Level.OPERATOR), ("user", Level.USER)])
    def test_known_levels(self, text, level):
        """Each wire literal maps to its level."""
        assert Level.parse(text) is level

    def test_unknown(self):
        """Anything else fails."""
        with pytest.raises(ParseFailureError):
            Level.parse("1234")

    def test_trailing_newline_not_accepted(self):
        """The caller strips the line terminator; the parser matches exactly."""
        with pytest.raises(ParseFailureError):
            Level.parse("admin\n")


class TestSocketAddr:
    """parse_socket_addr / format_socket_addr."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("unix@/var/run/haproxy.sock", UnixSocketAddr(Path("/var/run/haproxy.sock"))),
            ("ipv4@127.0.0.1:9999", IpSocketAddr(ipaddress.IPv4Address("127.0.0.1"), 9999)),
            ("ipv6@[::]:9999", IpSocketAddr(ipaddress.IPv6Address("::"), 9999)),
            ("sockpair@1234", SocketPairAddr("1234")),
            ("abns@abcd", AbstractSocketAddr("abcd")),
            ("unknown", UnknownSocketAddr()),
        ],
    )
    def test_schemes(self, text, expected):
        """Every supported scheme parses to its variant."""
        assert parse_socket_addr(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "bogus@x",
            "unix",
            "ipv4@127.0.0.1",
            "ipv4@127.0.0.1:99999",
            "ipv4@::1:80",
            "ipv6@::1:80",
            "ipv6@[::1]:port",
            "unknown@x",
        ],
    )
    def test_malformed(self, text):
        """Unknown schemes and malformed addresses fail."""
        with pytest.raises(ParseFailureError):
            parse_socket_addr(text)

    @pytest.mark.parametrize("text", ["unix@/run/haproxy.sock", "ipv4@10.0.0.1:80", "ipv6@[::1]:80", "abns@x", "unknown"])
    def test_format(self, text):
        """Formatting restores HAProxy's notation."""
        assert format_socket_addr(parse_socket_addr(text)) == text


class TestProcesses:
    """parse_processes."""

    def test_all(self):
        """The literal all means every process."""
        assert parse_processes("all") == AllProcesses()

    def test_list(self):
        """Comma-separated ids keep their order."""
        assert parse_processes("0,1,2") == ProcessList((0, 1, 2))

    @pytest.mark.parametrize("text", ["0,x,2", "", "1,", "-1", "4294967296"])
    def test_malformed(self, text):
        """Any bad token fails the whole field."""
        with pytest.raises(ParseFailureError):
            parse_processes(text)


class TestCliSocket:
    """CliSocket.parse."""

    def test_unix_socket(self):
        """A full line yields address, level, and processes."""
        sock = CliSocket.parse("unix@/var/run/haproxy.sock admin all")
        assert sock == CliSocket(
            address=UnixSocketAddr(Path("/var/run/haproxy.sock")), level=Level.ADMIN, processes=AllProcesses()
        )

    def test_process_list(self):
        """Process lists are decoded in place."""
        sock = CliSocket.parse("ipv4@127.0.0.1:9999 operator 1,2")
        assert sock.level is Level.OPERATOR
        assert sock.processes == ProcessList((1, 2))

    def test_too_few_fields(self):
        """A socket line has exactly three fields."""
        with pytest.raises(ParseFailureError):
            CliSocket.parse("unix@/var/run/haproxy.sock admin")

    def test_bad_level(self):
        """An unknown level fails the line."""
        with pytest.raises(ParseFailureError):
            CliSocket.parse("unix@/var/run/haproxy.sock root all")
