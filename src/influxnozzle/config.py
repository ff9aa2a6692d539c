"""Client configuration."""

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class ClientConfig:
    """Settings for an InfluxDBClient and its flush loop.

    Attributes:
        url: Base URL of the database (e.g., http://localhost:8086).
        database: Target database name.
        user: Basic auth user name (empty disables auth).
        password: Basic auth password.
        prefix: String prepended to every measurement name.
        deployment: Deployment tag for internal metrics.
        ip: IP tag for internal metrics.
        flush_interval: Seconds between flushes.
        timeout: HTTP request timeout in seconds.
    """

    url: str
    database: str
    user: str = ""
    password: str = ""
    prefix: str = ""
    deployment: str = ""
    ip: str = ""
    flush_interval: float = 15.0
    timeout: float = 10.0

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url must not be empty")
        if not self.database:
            raise ValueError("database must not be empty")
        if self.flush_interval <= 0:
            raise ValueError("flush_interval must be positive")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ClientConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known})
