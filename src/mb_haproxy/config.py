"""Centralized application configuration."""

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from mb_haproxy.stats import DEFAULT_SOCKET_PATH, ConnectionBuilder, TcpSocketBuilder, UnixSocketBuilder

DEFAULT_DATA_DIR = Path.home() / ".local" / "mb-haproxy"


def split_tcp_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` (or ``[v6]:port``) into host and port.

    Raises:
        ValueError: The address has no valid port.

    """
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdecimal():
        raise ValueError(f"Expected host:port, got {address!r}")
    port_num = int(port)
    if not 0 < port_num <= 65535:
        raise ValueError(f"Port out of range: {port_num}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, port_num


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for application data")
    socket_path: Path = Field(default=DEFAULT_SOCKET_PATH, description="HAProxy stats Unix socket")
    tcp_address: str | None = Field(default=None, description="HAProxy stats TCP listener (host:port); overrides socket_path")
    timeout: float = Field(default=10.0, gt=0, description="Socket timeout in seconds")

    @field_validator("tcp_address")
    @classmethod
    def _validate_tcp_address(cls, value: str | None) -> str | None:
        if value is not None:
            split_tcp_address(value)
        return value

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "haproxy.log"

    def connection_builder(self) -> ConnectionBuilder:
        """Build the connection factory for the configured transport."""
        if self.tcp_address is not None:
            host, port = split_tcp_address(self.tcp_address)
            return TcpSocketBuilder(host, port, timeout=self.timeout)
        return UnixSocketBuilder(self.socket_path, timeout=self.timeout)

    @staticmethod
    def build(data_dir: Path | None = None, *, socket_path: Path | None = None, tcp_address: str | None = None) -> "Config":
        """Build a Config from defaults, optional config.toml, and explicit overrides."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            if isinstance(toml_data.get("socket_path"), str):
                kwargs["socket_path"] = Path(toml_data["socket_path"])
            if isinstance(toml_data.get("tcp_address"), str):
                kwargs["tcp_address"] = toml_data["tcp_address"]
            if isinstance(toml_data.get("timeout"), int | float):
                kwargs["timeout"] = toml_data["timeout"]

        if socket_path is not None:
            kwargs["socket_path"] = socket_path
            kwargs.pop("tcp_address", None)
        if tcp_address is not None:
            kwargs["tcp_address"] = tcp_address

        return Config(**kwargs)
