"""Tests for request-side identifiers, flags, and command variants."""

import pytest

from mb_haproxy.stats.requests import AclId, AddAcl, AllBackends, BackendIndex, BackendName, ErrorFlag, parse_backend_id


class TestAclId:
    """AclId rendering and range."""

    def test_renders_with_hash(self):
        """ACL ids are addressed as #<n>."""
        assert str(AclId(3)) == "#3"

    def test_out_of_range(self):
        """Ids beyond 32 bits are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            AclId(2**31)


class TestBackendId:
    """Backend selector rendering and parsing."""

    def test_all_renders_minus_one(self):
        """All backends is spelled -1 on the wire."""
        assert str(AllBackends()) == "-1"

    def test_index_and_name(self):
        """Numeric ids and names render as-is."""
        assert str(BackendIndex(7)) == "7"
        assert str(BackendName("www")) == "www"

    def test_name_with_space_rejected(self):
        """A space would split the name into two command words."""
        with pytest.raises(ValueError):
            BackendName("my backend")

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("-1", AllBackends()), ("", AllBackends()), ("2", BackendIndex(2)), ("app", BackendName("app"))],
    )
    def test_parse_backend_id(self, text, expected):
        """User input maps onto the matching selector."""
        assert parse_backend_id(text) == expected


class TestErrorFlag:
    """Suffixes appended to show errors."""

    def test_suffixes(self):
        """All adds nothing; the others add a leading space and keyword."""
        assert ErrorFlag.ALL.suffix == ""
        assert ErrorFlag.REQUEST.suffix == " request"
        assert ErrorFlag.RESPONSE.suffix == " response"


class TestAddAcl:
    """AddAcl value validation."""

    def test_space_in_value_rejected(self):
        """HAProxy cannot add values containing spaces."""
        with pytest.raises(ValueError, match="spaces"):
            AddAcl(AclId(0), "two words")

    def test_newline_in_value_rejected(self):
        """A newline would terminate the command early."""
        with pytest.raises(ValueError):
            AddAcl(AclId(0), "a\nshow acl")

    def test_empty_value_rejected(self):
        """An empty value would produce a command missing a parameter."""
        with pytest.raises(ValueError):
            AddAcl(AclId(0), "")
