"""
Registration entry points for Firebird servers and databases.

Usage:
    builder = create_builder()
    firebird = add_firebird(builder, "firebird").with_time_zone("Europe/Berlin")
    customers = firebird.add_database("customers", "customers.fdb")
"""

from __future__ import annotations

from typing import Optional, Union

from firebird_hosting import container_image
from firebird_hosting._logging import get_component_logger
from firebird_hosting.database import FbDatabaseResource
from firebird_hosting.hosting.builder import DistributedApplicationBuilder, ResourceBuilder
from firebird_hosting.hosting.eventing import require_connection_string
from firebird_hosting.hosting.parameters import ParameterResource
from firebird_hosting.server import PRIMARY_ENDPOINT_NAME, FbServerResource
from firebird_hosting.types import ErrorCategory, HostingError

FIREBIRD_USER = "FIREBIRD_USER"
FIREBIRD_PASSWORD = "FIREBIRD_PASSWORD"
FIREBIRD_ROOT_PASSWORD = "FIREBIRD_ROOT_PASSWORD"
FIREBIRD_DATABASE = "FIREBIRD_DATABASE"
FIREBIRD_USE_LEGACY_AUTH = "FIREBIRD_USE_LEGACY_AUTH"
TZ = "TZ"

ParameterInput = Union[ResourceBuilder[ParameterResource], ParameterResource]


def _parameter(value: Optional[ParameterInput]) -> Optional[ParameterResource]:
    if isinstance(value, ResourceBuilder):
        return value.resource
    return value


class FirebirdServerBuilder(ResourceBuilder[FbServerResource]):
    def with_user(self, user: str) -> "FirebirdServerBuilder":
        return self.with_environment(FIREBIRD_USER, user)

    def with_password(self, password: str) -> "FirebirdServerBuilder":
        return self.with_environment(FIREBIRD_PASSWORD, password)

    def with_root_password(self, password: str) -> "FirebirdServerBuilder":
        return self.with_environment(FIREBIRD_ROOT_PASSWORD, password)

    def with_time_zone(self, time_zone: str) -> "FirebirdServerBuilder":
        return self.with_environment(TZ, time_zone)

    def use_legacy_auth(self) -> "FirebirdServerBuilder":
        return self.with_environment(FIREBIRD_USE_LEGACY_AUTH, "true")

    def add_database(
        self,
        name: str,
        database_name: Optional[str] = None,
    ) -> ResourceBuilder[FbDatabaseResource]:
        """
        Declare a logical database on this server.

        Args:
            name: Resource name, also the short-name tracked by the server
            database_name: Name inside the server; defaults to name

        Raises:
            HostingError: if the server already tracks this short-name
            ValueError: if name is not a valid resource name
        """
        logger = get_component_logger("FirebirdServer", self.application_builder.logger)
        server = self.resource
        if database_name is None:
            database_name = name

        # Validates the name before the server is touched.
        database = FbDatabaseResource(name, database_name, server)

        if not server.add_database(name, database_name):
            logger.error("firebird_database_duplicate", resource=server.name, database=name)
            raise HostingError(
                ErrorCategory.DUPLICATE_RESOURCE,
                f"A database named '{name}' is already registered on the '{server.name}' resource.",
                resource=name,
            )

        # The image creates a single database from FIREBIRD_DATABASE on first start.
        if len(server.databases) > 1:
            logger.warning(
                "firebird_database_env_overridden",
                resource=server.name,
                database=database_name,
                tracked=list(server.databases),
            )
        self.with_environment(FIREBIRD_DATABASE, database_name)

        database_builder = self.application_builder.add_resource(database)
        require_connection_string(
            self.application_builder.eventing,
            database,
            database.connection_string_expression.get_value,
            logger=self.application_builder.logger,
        )
        logger.debug(
            "firebird_database_registered",
            resource=server.name,
            database=name,
            database_name=database_name,
        )
        return database_builder


def add_firebird(
    builder: DistributedApplicationBuilder,
    name: str,
    user: Optional[ParameterInput] = None,
    password: Optional[ParameterInput] = None,
    port: Optional[int] = None,
) -> FirebirdServerBuilder:
    """
    Add a Firebird server container to the application.

    Args:
        builder: Application builder that owns the resource graph
        name: Resource name
        user: Optional user parameter; the connection string uses SYSDBA without it
        password: Optional password parameter; generated as "<name>-password" if omitted
        port: Host port; the host picks one when omitted

    Returns:
        FirebirdServerBuilder for chaining environment helpers and add_database
    """
    password_parameter = _parameter(password)
    if password_parameter is None:
        password_parameter = builder.create_default_password_parameter(f"{name}-password")

    firebird = FbServerResource(name, _parameter(user), password_parameter)
    server_builder: FirebirdServerBuilder = builder.add_resource(
        firebird, builder_cls=FirebirdServerBuilder
    )
    require_connection_string(
        builder.eventing,
        firebird,
        firebird.get_connection_string,
        logger=builder.logger,
    )
    get_component_logger("FirebirdServer", builder.logger).debug(
        "firebird_server_registered", resource=name, port=port
    )
    return (
        server_builder
        .with_endpoint(PRIMARY_ENDPOINT_NAME, port=port, target_port=container_image.FIREBIRD_PORT)
        .with_image(container_image.IMAGE, container_image.TAG)
        .with_image_registry(container_image.REGISTRY)
    )
