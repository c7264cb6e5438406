"""Pydantic configuration models for the stats collector."""

from enum import Enum
from typing import List, Optional
import re

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Flavor(str, Enum):
    """Which of the two mutually exclusive server distributions is installed."""

    OPEN_SOURCE = "open_source"
    ENTERPRISE = "enterprise"


class InstallationContext(BaseModel):
    """Resolved once at startup, read-only for the rest of the run."""
    model_config = ConfigDict(frozen=True)

    flavor: Flavor
    embedded_bin_path: str
    hostname: str = "localhost"

    @property
    def is_open_source(self) -> bool:
        return self.flavor is Flavor.OPEN_SOURCE


class InstallationPathsConfig(BaseModel):
    """Marker files and embedded binary directories for each flavor."""
    open_source_marker: str = "/opt/chef-server/bin/chef-server-ctl"
    open_source_embedded_bin: str = "/opt/chef-server/embedded/bin"
    enterprise_marker: str = "/opt/opscode/bin/private-chef-ctl"
    enterprise_embedded_bin: str = "/opt/opscode/embedded/bin"


class EndpointsConfig(BaseModel):
    """Local HTTP(S) endpoints polled by the HTTP probes."""
    couchdb_port: int = Field(default=5984, ge=1, le=65535)
    couchdb_path: str = "/_stats"
    authz_port: int = Field(default=9683, ge=1, le=65535)
    authz_path: str = "/_ping"
    status_path: str = "/_status"
    status_ok_token: str = "pong"
    verify_tls: bool = False

    @field_validator('couchdb_path', 'authz_path', 'status_path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Endpoint paths are absolute."""
        if not v.startswith('/'):
            raise ValueError('Endpoint path must start with /')
        return v


class ApiConfig(BaseModel):
    """Chef API access through knife."""
    knife_bin: str = "knife"
    knife_config: Optional[str] = None
    collections: List[str] = Field(default_factory=lambda: ["nodes", "cookbooks", "roles"])
    # Client listing is slow on large servers, so it is opt-in
    include_clients: bool = False


class RabbitMQConfig(BaseModel):
    """Queue statistics settings."""
    vhost: str = "/chef"
    column: str = "messages_ready"


class PostgresConfig(BaseModel):
    """Relational store statistics settings."""
    system_user: str = "opscode-pgsql"
    db_user: str = "chef"
    database: str = "opscode_chef"
    columns: List[str] = Field(default_factory=lambda: [
        "seq_scan",
        "seq_tup_read",
        "idx_scan",
        "idx_tup_fetch",
        "n_tup_ins",
        "n_tup_upd",
        "n_tup_del",
        "n_live_tup",
        "n_dead_tup",
    ])

    @field_validator('columns')
    @classmethod
    def validate_columns(cls, v: List[str]) -> List[str]:
        """Column names are interpolated into SQL, so only identifiers are allowed."""
        if not v:
            raise ValueError('At least one column is required')
        for column in v:
            if not re.match(r'^[a-z_][a-z0-9_]*$', column):
                raise ValueError(f'Invalid column name: {column}')
        return v

    @field_validator('database', 'db_user')
    @classmethod
    def validate_identifier(cls, v: str) -> str:
        if not re.match(r'^[A-Za-z0-9_-]+$', v):
            raise ValueError(f'Invalid identifier: {v}')
        return v


class RedisConfig(BaseModel):
    """Cache statistics settings."""
    cli_path: str = "/opt/opscode/embedded/bin/redis-cli"
    keyspace_db: str = "db0"


class StatsConfig(BaseModel):
    """Root configuration model for a stats run."""
    hostname: str = "localhost"
    namespace: str = "server"
    command_timeout_sec: float = Field(default=30.0, gt=0)
    http_timeout_sec: float = Field(default=10.0, gt=0)
    installation: InstallationPathsConfig = Field(default_factory=InstallationPathsConfig)
    endpoints: EndpointsConfig = Field(default_factory=EndpointsConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    rabbitmq: RabbitMQConfig = Field(default_factory=RabbitMQConfig)
    postgresql: PostgresConfig = Field(default_factory=PostgresConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)

    @field_validator('namespace')
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Namespace is a dotted prefix without leading/trailing dots."""
        if not v or v.startswith('.') or v.endswith('.'):
            raise ValueError('Namespace must be a non-empty dotted prefix')
        return v

    def metric_key(self, name: str) -> str:
        """Fully qualified report key for a probe-local metric name."""
        return f"{self.namespace}.{name}"
