from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from firebird_hosting._logging import get_component_logger
from firebird_hosting.settings import load_configuration
from firebird_hosting.types import ErrorCategory, HostingError

from .annotations import (
    ConnectionStringRedirectAnnotation,
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    EnvironmentCallback,
    EnvironmentCallbackAnnotation,
    ResourceAnnotation,
)
from .endpoints import EndpointAnnotation, EndpointReference, ProtocolType
from .eventing import BeforeStartEvent, ConnectionStringAvailableEvent, Eventing
from .expressions import ExpressionValue
from .parameters import (
    ConstantParameterDefault,
    GeneratedParameterDefault,
    ParameterResource,
    SecretParameterDefault,
)
from .resources import Resource, ResourceWithConnectionString

T = TypeVar("T", bound=Resource)
R = TypeVar("R", bound=Resource)
B = TypeVar("B", bound="ResourceBuilder")


class ResourceBuilder(Generic[T]):
    """
    Handle returned when a resource is added to the application.

    Every ``with_*`` call attaches metadata to the resource and returns the
    same handle, so calls chain.
    """

    def __init__(self, application_builder: "DistributedApplicationBuilder", resource: T):
        self.application_builder = application_builder
        self.resource = resource

    def with_annotation(self: B, annotation: ResourceAnnotation, replace: bool = False) -> B:
        if replace:
            self.resource.annotations = [
                a for a in self.resource.annotations if type(a) is not type(annotation)
            ]
        self.resource.annotations.append(annotation)
        return self

    def with_endpoint(
        self: B,
        name: Optional[str] = None,
        *,
        port: Optional[int] = None,
        target_port: Optional[int] = None,
        scheme: Optional[str] = None,
        protocol: ProtocolType = ProtocolType.TCP,
        is_external: bool = False,
        is_proxied: bool = True,
    ) -> B:
        annotation = EndpointAnnotation(
            name=name or scheme or protocol.value,
            protocol=protocol,
            uri_scheme=scheme,
            port=port,
            target_port=target_port,
            is_external=is_external,
            is_proxied=is_proxied,
        )
        if any(e.name == annotation.name for e in self.resource.annotations_of(EndpointAnnotation)):
            raise HostingError(
                ErrorCategory.DUPLICATE_RESOURCE,
                f"Endpoint with name '{annotation.name}' already exists on the resource '{self.resource.name}'",
                resource=self.resource.name,
            )
        return self.with_annotation(annotation)

    def with_endpoint_callback(
        self: B,
        name: str,
        callback: Callable[[EndpointAnnotation], None],
        create_if_not_exists: bool = True,
    ) -> B:
        """Modify the named endpoint in place, e.g. to record its allocation."""
        for annotation in self.resource.annotations_of(EndpointAnnotation):
            if annotation.name == name:
                callback(annotation)
                return self
        if not create_if_not_exists:
            raise HostingError(
                ErrorCategory.CONFIGURATION,
                f"The endpoint '{name}' does not exist on the resource '{self.resource.name}'",
                resource=self.resource.name,
            )
        annotation = EndpointAnnotation(name=name)
        callback(annotation)
        return self.with_annotation(annotation)

    def get_endpoint(self, name: str) -> EndpointReference:
        return EndpointReference(self.resource, name)

    def with_image(self: B, image: str, tag: Optional[str] = None) -> B:
        existing = self.resource.try_get_last_annotation(ContainerImageAnnotation)
        if existing is not None:
            existing.image = image
            existing.tag = tag or "latest"
            return self
        return self.with_annotation(ContainerImageAnnotation(image=image, tag=tag or "latest"))

    def with_image_tag(self: B, tag: str) -> B:
        self._require_image().tag = tag
        return self

    def with_image_registry(self: B, registry: str) -> B:
        self._require_image().registry = registry
        return self

    def with_environment(self: B, name: str, value: ExpressionValue) -> B:
        return self.with_annotation(EnvironmentAnnotation(name, value))

    def with_environment_callback(self: B, callback: EnvironmentCallback) -> B:
        return self.with_annotation(EnvironmentCallbackAnnotation(callback))

    def with_connection_string_redirection(self: B, target: ResourceWithConnectionString) -> B:
        return self.with_annotation(ConnectionStringRedirectAnnotation(target), replace=True)

    def _require_image(self) -> ContainerImageAnnotation:
        existing = self.resource.try_get_last_annotation(ContainerImageAnnotation)
        if existing is None:
            raise HostingError(
                ErrorCategory.CONFIGURATION,
                f"The resource '{self.resource.name}' does not have a container image specified. "
                "Use with_image to specify the container image and tag.",
                resource=self.resource.name,
            )
        return existing


class DistributedApplicationModel:
    def __init__(self, resources: List[Resource]):
        self.resources: Tuple[Resource, ...] = tuple(resources)

    def resources_of(self, resource_type: Type[R]) -> List[R]:
        return [r for r in self.resources if isinstance(r, resource_type)]

    def children_of(self, parent: Resource) -> List[Resource]:
        return [r for r in self.resources if r.parent is parent]


class DistributedApplication:
    """
    Built application: a frozen resource graph plus the event bus.

    The host drives it by calling start() and, once endpoints are allocated,
    publish_connection_string_available() for each resource.
    """

    def __init__(self, model: DistributedApplicationModel, eventing: Eventing, logger: Any):
        self.model = model
        self.eventing = eventing
        self._logger = logger

    def resources_of(self, resource_type: Type[R]) -> List[R]:
        return self.model.resources_of(resource_type)

    async def start(self) -> None:
        self._logger.info("application_starting", resources=len(self.model.resources))
        await self.eventing.publish(BeforeStartEvent(self.model))

    async def publish_connection_string_available(self, resource: Resource) -> None:
        """Notify subscribers for the resource, then for each of its children."""
        await self.eventing.publish(ConnectionStringAvailableEvent(resource))
        for child in self.model.children_of(resource):
            await self.publish_connection_string_available(child)


class DistributedApplicationBuilder:
    """
    Owns the resource graph while the application is being composed.

    Usage:
        builder = DistributedApplicationBuilder()
        password = builder.add_parameter("db-password", secret=True)
        app = builder.build()
    """

    def __init__(
        self,
        configuration: Optional[Mapping[str, str]] = None,
        logger: Optional[Any] = None,
    ):
        self.configuration: Dict[str, str] = dict(
            load_configuration() if configuration is None else configuration
        )
        self.logger = get_component_logger("DistributedApplicationBuilder", logger)
        self.eventing = Eventing(logger)
        self.resources: List[Resource] = []
        # Generated secrets, keyed by parameter name.
        self.secrets: Dict[str, str] = {}

    def add_resource(
        self,
        resource: T,
        builder_cls: Type[ResourceBuilder] = ResourceBuilder,
    ) -> Any:
        """
        Add a resource to the graph.

        Names are case-sensitive and unique per scope: top-level resources
        share one scope, child resources are scoped to their parent.
        """
        for existing in self.resources:
            if existing.name == resource.name and existing.parent is resource.parent:
                raise HostingError(
                    ErrorCategory.DUPLICATE_RESOURCE,
                    f"Cannot add resource of type '{type(resource).__name__}' with name "
                    f"'{resource.name}' because resource of type '{type(existing).__name__}' "
                    "with that name already exists.",
                    resource=resource.name,
                )
        self.resources.append(resource)
        self.logger.debug(
            "resource_added",
            resource=resource.name,
            kind=type(resource).__name__,
            parent=resource.parent.name if resource.parent else None,
        )
        return builder_cls(self, resource)

    def add_parameter(
        self,
        name: str,
        value: Optional[str] = None,
        secret: bool = False,
    ) -> ResourceBuilder[ParameterResource]:
        default = ConstantParameterDefault(value) if value is not None else None
        return self.add_resource(ParameterResource(name, self.configuration, default, secret))

    def create_default_password_parameter(
        self,
        name: str,
        *,
        lower: bool = True,
        upper: bool = True,
        numeric: bool = True,
        special: bool = True,
        min_lower: int = 0,
        min_upper: int = 0,
        min_numeric: int = 0,
        min_special: int = 0,
    ) -> ParameterResource:
        """Secret parameter whose default is generated once and remembered by name."""
        generated = GeneratedParameterDefault(
            lower=lower,
            upper=upper,
            numeric=numeric,
            special=special,
            min_lower=min_lower,
            min_upper=min_upper,
            min_numeric=min_numeric,
            min_special=min_special,
        )
        default = SecretParameterDefault(name, generated, self.secrets)
        return ParameterResource(name, self.configuration, default, secret=True)

    def build(self) -> DistributedApplication:
        self.logger.debug("application_built", resources=len(self.resources))
        return DistributedApplication(
            DistributedApplicationModel(self.resources),
            self.eventing,
            self.logger,
        )


def create_builder(
    configuration: Optional[Mapping[str, str]] = None,
    logger: Optional[Any] = None,
) -> DistributedApplicationBuilder:
    return DistributedApplicationBuilder(configuration=configuration, logger=logger)
