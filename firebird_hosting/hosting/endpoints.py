from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

from firebird_hosting.types import ErrorCategory, HostingError

from .annotations import ResourceAnnotation
from .expressions import ValueProvider

if TYPE_CHECKING:
    from .resources import Resource


class ProtocolType(str, Enum):
    TCP = "tcp"
    UDP = "udp"


class EndpointProperty(str, Enum):
    URL = "url"
    HOST = "host"
    PORT = "port"
    SCHEME = "scheme"
    TARGET_PORT = "targetPort"
    HOST_AND_PORT = "hostAndPort"


@dataclass
class AllocatedEndpoint:
    endpoint: "EndpointAnnotation"
    address: str
    port: int

    @property
    def uri_scheme(self) -> str:
        return self.endpoint.uri_scheme

    @property
    def host_and_port(self) -> str:
        return f"{self.address}:{self.port}"

    @property
    def url(self) -> str:
        return f"{self.uri_scheme}://{self.host_and_port}"


@dataclass
class EndpointAnnotation(ResourceAnnotation):
    name: str
    protocol: ProtocolType = ProtocolType.TCP
    uri_scheme: Optional[str] = None
    transport: Optional[str] = None
    port: Optional[int] = None
    target_port: Optional[int] = None
    is_external: bool = False
    is_proxied: bool = True
    allocated_endpoint: Optional[AllocatedEndpoint] = None

    def __post_init__(self) -> None:
        if self.uri_scheme is None:
            self.uri_scheme = self.protocol.value
        if self.transport is None:
            self.transport = "http" if self.uri_scheme in ("http", "https") else self.protocol.value


class EndpointReference:
    """Named endpoint on a resource; host and port are known only after allocation."""

    def __init__(self, resource: "Resource", endpoint_name: str):
        self.resource = resource
        self.endpoint_name = endpoint_name

    @property
    def annotation(self) -> Optional[EndpointAnnotation]:
        for annotation in self.resource.annotations_of(EndpointAnnotation):
            if annotation.name == self.endpoint_name:
                return annotation
        return None

    @property
    def exists(self) -> bool:
        return self.annotation is not None

    @property
    def is_allocated(self) -> bool:
        annotation = self.annotation
        return annotation is not None and annotation.allocated_endpoint is not None

    @property
    def allocated(self) -> AllocatedEndpoint:
        annotation = self._require_annotation()
        if annotation.allocated_endpoint is None:
            raise HostingError(
                ErrorCategory.UNRESOLVED,
                f"The endpoint '{self.endpoint_name}' is not allocated for the resource '{self.resource.name}'",
                resource=self.resource.name,
            )
        return annotation.allocated_endpoint

    @property
    def host(self) -> str:
        return self.allocated.address

    @property
    def port(self) -> int:
        return self.allocated.port

    @property
    def url(self) -> str:
        return self.allocated.url

    def property(self, prop: EndpointProperty) -> "EndpointReferenceExpression":
        return EndpointReferenceExpression(self, prop)

    def _require_annotation(self) -> EndpointAnnotation:
        annotation = self.annotation
        if annotation is None:
            raise HostingError(
                ErrorCategory.CONFIGURATION,
                f"The endpoint '{self.endpoint_name}' does not exist on the resource '{self.resource.name}'",
                resource=self.resource.name,
            )
        return annotation

    def __repr__(self) -> str:
        return f"EndpointReference({self.resource.name!r}, {self.endpoint_name!r})"


class EndpointReferenceExpression(ValueProvider):
    def __init__(self, endpoint: EndpointReference, prop: EndpointProperty):
        self.endpoint = endpoint
        self.property = prop

    @property
    def value_expression(self) -> str:
        return (
            f"{{{self.endpoint.resource.name}.bindings."
            f"{self.endpoint.endpoint_name}.{self.property.value}}}"
        )

    async def get_value(self) -> Optional[str]:
        annotation = self.endpoint._require_annotation()
        if self.property == EndpointProperty.TARGET_PORT:
            return None if annotation.target_port is None else str(annotation.target_port)

        allocated = annotation.allocated_endpoint
        if allocated is None:
            return None
        if self.property == EndpointProperty.HOST:
            return allocated.address
        if self.property == EndpointProperty.PORT:
            return str(allocated.port)
        if self.property == EndpointProperty.SCHEME:
            return allocated.uri_scheme
        if self.property == EndpointProperty.HOST_AND_PORT:
            return allocated.host_and_port
        return allocated.url
