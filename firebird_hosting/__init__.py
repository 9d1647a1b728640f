from .types import ErrorCategory, HostingError
from .hosting import (
    AllocatedEndpoint,
    ConnectionStringAvailableEvent,
    DistributedApplication,
    DistributedApplicationBuilder,
    EndpointProperty,
    ParameterResource,
    ReferenceExpression,
    ResourceBuilder,
    create_builder,
)
from .server import FbServerResource
from .database import FbDatabaseResource
from .extensions import FirebirdServerBuilder, add_firebird

__all__ = [
    # Errors
    "ErrorCategory",
    "HostingError",
    # Host
    "AllocatedEndpoint",
    "ConnectionStringAvailableEvent",
    "DistributedApplication",
    "DistributedApplicationBuilder",
    "EndpointProperty",
    "ParameterResource",
    "ReferenceExpression",
    "ResourceBuilder",
    "create_builder",
    # Firebird
    "FbServerResource",
    "FbDatabaseResource",
    "FirebirdServerBuilder",
    "add_firebird",
]
