from .annotations import (
    ConnectionStringRedirectAnnotation,
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    EnvironmentCallbackAnnotation,
    EnvironmentCallbackContext,
    ResourceAnnotation,
)
from .builder import (
    DistributedApplication,
    DistributedApplicationBuilder,
    DistributedApplicationModel,
    ResourceBuilder,
    create_builder,
)
from .endpoints import (
    AllocatedEndpoint,
    EndpointAnnotation,
    EndpointProperty,
    EndpointReference,
    EndpointReferenceExpression,
    ProtocolType,
)
from .eventing import (
    BeforeStartEvent,
    ConnectionStringAvailableEvent,
    Eventing,
    EventSubscription,
    require_connection_string,
)
from .expressions import ReferenceExpression, ValueProvider
from .parameters import (
    ConstantParameterDefault,
    GeneratedParameterDefault,
    ParameterDefault,
    ParameterResource,
    SecretParameterDefault,
)
from .resources import ContainerResource, Resource, ResourceWithConnectionString

__all__ = [
    # Annotations
    "ConnectionStringRedirectAnnotation",
    "ContainerImageAnnotation",
    "EnvironmentAnnotation",
    "EnvironmentCallbackAnnotation",
    "EnvironmentCallbackContext",
    "ResourceAnnotation",
    # Builder
    "DistributedApplication",
    "DistributedApplicationBuilder",
    "DistributedApplicationModel",
    "ResourceBuilder",
    "create_builder",
    # Endpoints
    "AllocatedEndpoint",
    "EndpointAnnotation",
    "EndpointProperty",
    "EndpointReference",
    "EndpointReferenceExpression",
    "ProtocolType",
    # Eventing
    "BeforeStartEvent",
    "ConnectionStringAvailableEvent",
    "Eventing",
    "EventSubscription",
    "require_connection_string",
    # Expressions
    "ReferenceExpression",
    "ValueProvider",
    # Parameters
    "ConstantParameterDefault",
    "GeneratedParameterDefault",
    "ParameterDefault",
    "ParameterResource",
    "SecretParameterDefault",
    # Resources
    "ContainerResource",
    "Resource",
    "ResourceWithConnectionString",
]
