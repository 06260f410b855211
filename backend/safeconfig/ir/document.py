from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    field_validator,
)
from typing import List, Optional, Literal

from .config_ir import (
    ConfigIR,
    ConfigMetadata,
    NetworkBinding,
    Protocol,
    ResourceLimits,
    Service,
    ServiceType,
    SourceFormat,
)

# ---- Raw document shape (what users write in YAML / JSON) ----
#
# Strict on required shape, permissive on additional keys.

_DOCUMENT_CONFIG = ConfigDict(extra="ignore", populate_by_name=True)


class NetworkBindingDocument(BaseModel):
    model_config = _DOCUMENT_CONFIG

    host: StrictStr
    port: StrictInt = Field(ge=0)
    protocol: Literal["http", "https", "tcp"]


class ResourceLimitsDocument(BaseModel):
    model_config = _DOCUMENT_CONFIG

    cpu: Optional[StrictFloat] = None
    memory_mb: Optional[StrictFloat] = Field(default=None, alias="memoryMb")

    @field_validator("cpu", "memory_mb", mode="wrap")
    @classmethod
    def keep_integers(cls, value, handler):
        # validated as float, but 512 stays 512 rather than 512.0
        result = handler(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return result


class ServiceDocument(BaseModel):
    model_config = _DOCUMENT_CONFIG

    name: StrictStr
    type: Literal["api", "db", "queue", "cache"]
    public: StrictBool = False
    handles_pii: StrictBool = Field(default=False, alias="handlesPII")
    network: List[NetworkBindingDocument] = Field(default_factory=list)
    depends_on: List[StrictStr] = Field(default_factory=list, alias="dependsOn")
    resource_limits: Optional[ResourceLimitsDocument] = Field(
        default=None, alias="resourceLimits"
    )

    def to_service(self) -> Service:
        limits = None
        if self.resource_limits is not None:
            limits = ResourceLimits(
                cpu=self.resource_limits.cpu,
                memory_mb=self.resource_limits.memory_mb,
            )

        return Service(
            name=self.name,
            type=ServiceType(self.type),
            public=self.public,
            handles_pii=self.handles_pii,
            network=tuple(
                NetworkBinding(
                    host=n.host,
                    port=n.port,
                    protocol=Protocol(n.protocol),
                )
                for n in self.network
            ),
            depends_on=tuple(self.depends_on),
            resource_limits=limits,
        )


# ---- Root document ----

class ConfigDocument(BaseModel):
    model_config = _DOCUMENT_CONFIG

    services: List[ServiceDocument]

    def to_ir(self, source_format: SourceFormat, raw_hash: Optional[str] = None) -> ConfigIR:
        return ConfigIR(
            services=tuple(s.to_service() for s in self.services),
            metadata=ConfigMetadata(source_format=source_format, raw_hash=raw_hash),
        )
