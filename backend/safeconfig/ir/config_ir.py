from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class ServiceType(str, Enum):
    API = "api"
    DB = "db"
    QUEUE = "queue"
    CACHE = "cache"


class Protocol(str, Enum):
    HTTP = "http"
    HTTPS = "https"
    TCP = "tcp"


class SourceFormat(str, Enum):
    YAML = "yaml"
    JSON = "json"


@dataclass(frozen=True)
class NetworkBinding:
    host: str  # e.g. "0.0.0.0", "internal", "10.0.0.5"
    port: int
    protocol: Protocol


@dataclass(frozen=True)
class ResourceLimits:
    cpu: Optional[float] = None  # cores
    memory_mb: Optional[float] = None

    @property
    def is_fully_defined(self) -> bool:
        return self.cpu is not None and self.memory_mb is not None


@dataclass(frozen=True)
class Service:
    name: str
    type: ServiceType
    public: bool = False
    handles_pii: bool = False
    network: Tuple[NetworkBinding, ...] = ()
    depends_on: Tuple[str, ...] = ()
    resource_limits: Optional[ResourceLimits] = None

    def has_protocol(self, protocol: Protocol) -> bool:
        return any(binding.protocol == protocol for binding in self.network)


@dataclass(frozen=True)
class ConfigMetadata:
    source_format: SourceFormat
    raw_hash: Optional[str] = None  # short sha256 of the raw text


@dataclass(frozen=True)
class ConfigIR:
    """
    Canonical, syntax-independent form of a service topology.

    Service names are the join key for violation attribution and diffing;
    uniqueness and dependsOn targets are carried as data, not enforced.
    """
    services: Tuple[Service, ...] = ()
    metadata: ConfigMetadata = field(
        default_factory=lambda: ConfigMetadata(source_format=SourceFormat.YAML)
    )

    def service_names(self) -> Tuple[str, ...]:
        return tuple(s.name for s in self.services)
