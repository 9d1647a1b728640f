from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Dict, Optional, Union

from .expressions import ExpressionValue

if TYPE_CHECKING:
    from .resources import Resource, ResourceWithConnectionString


class ResourceAnnotation:
    """Marker base for metadata attached to a resource."""


@dataclass
class ContainerImageAnnotation(ResourceAnnotation):
    image: str
    tag: Optional[str] = None
    registry: Optional[str] = None

    @property
    def reference(self) -> str:
        ref = f"{self.registry}/{self.image}" if self.registry else self.image
        return f"{ref}:{self.tag}" if self.tag else ref


@dataclass
class EnvironmentAnnotation(ResourceAnnotation):
    name: str
    value: ExpressionValue


@dataclass
class EnvironmentCallbackContext:
    resource: "Resource"
    environment_variables: Dict[str, ExpressionValue] = field(default_factory=dict)


EnvironmentCallback = Callable[[EnvironmentCallbackContext], Union[None, Awaitable[None]]]


@dataclass
class EnvironmentCallbackAnnotation(ResourceAnnotation):
    callback: EnvironmentCallback


@dataclass
class ConnectionStringRedirectAnnotation(ResourceAnnotation):
    resource: "ResourceWithConnectionString"
