"""Request-side value types: identifiers, flags, and the command variants."""

from dataclasses import dataclass
from enum import StrEnum

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _check_token(name: str, value: str) -> None:
    """Reject text that would split into extra command words or lines."""
    if not value:
        raise ValueError(f"{name} must not be empty")
    if " " in value or "\n" in value or "\r" in value:
        raise ValueError(f"{name} must not contain spaces or newlines: {value!r}")


@dataclass(frozen=True, slots=True)
class AclId:
    """Numeric ACL identifier, rendered as ``#<n>``."""

    id: int

    def __post_init__(self) -> None:
        if not _I32_MIN <= self.id <= _I32_MAX:
            raise ValueError(f"ACL id out of range: {self.id}")

    def __str__(self) -> str:
        return f"#{self.id}"


@dataclass(frozen=True, slots=True)
class AllBackends:
    """Every backend; HAProxy spells this ``-1``."""

    def __str__(self) -> str:
        return "-1"


@dataclass(frozen=True, slots=True)
class BackendIndex:
    """Backend selected by numeric id."""

    id: int

    def __str__(self) -> str:
        return str(self.id)


@dataclass(frozen=True, slots=True)
class BackendName:
    """Backend selected by its configured name."""

    name: str

    def __post_init__(self) -> None:
        _check_token("Backend name", self.name)

    def __str__(self) -> str:
        return self.name


type BackendId = AllBackends | BackendIndex | BackendName


def parse_backend_id(text: str) -> BackendId:
    """Interpret user input as a backend selector.

    ``-1`` (or an empty string) means all backends, other integers are ids,
    anything else is treated as a backend name.
    """
    if text in ("", "-1"):
        return AllBackends()
    try:
        return BackendIndex(int(text))
    except ValueError:
        return BackendName(text)


class ErrorFlag(StrEnum):
    """Which side of captured errors to query."""

    ALL = "all"
    REQUEST = "request"
    RESPONSE = "response"

    @property
    def suffix(self) -> str:
        """Text appended to the ``show errors`` command."""
        if self is ErrorFlag.ALL:
            return ""
        return f" {self.value}"


# --- Commands ---


@dataclass(frozen=True, slots=True)
class ShowAcl:
    """``show acl``: list all ACLs."""


@dataclass(frozen=True, slots=True)
class ShowAclEntries:
    """``show acl #<id>``: list the entries of one ACL."""

    id: AclId


@dataclass(frozen=True, slots=True)
class ShowCliLevel:
    """``show cli level``: privilege level of this session."""


@dataclass(frozen=True, slots=True)
class ShowCliSockets:
    """``show cli sockets``: configured stats sockets."""


@dataclass(frozen=True, slots=True)
class ShowErrors:
    """``show errors``: captured error count for everything."""


@dataclass(frozen=True, slots=True)
class ShowErrorsBackend:
    """``show errors <backend>[ request| response]``."""

    backend: BackendId
    flag: ErrorFlag = ErrorFlag.ALL


@dataclass(frozen=True, slots=True)
class AddAcl:
    """``add acl #<id> <value>``.

    HAProxy does not accept spaces inside the added value, so ``value`` must be
    a single word.
    """

    id: AclId
    value: str

    def __post_init__(self) -> None:
        _check_token("ACL value", self.value)


type Command = ShowAcl | ShowAclEntries | ShowCliLevel | ShowCliSockets | ShowErrors | ShowErrorsBackend | AddAcl
