from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional, Tuple

from firebird_hosting.hosting.annotations import ConnectionStringRedirectAnnotation
from firebird_hosting.hosting.endpoints import EndpointProperty, EndpointReference
from firebird_hosting.hosting.expressions import ReferenceExpression
from firebird_hosting.hosting.parameters import ParameterResource
from firebird_hosting.hosting.resources import ContainerResource, ResourceWithConnectionString

PRIMARY_ENDPOINT_NAME = "tcp"
DEFAULT_USER_NAME = "SYSDBA"


class DatabaseMap(Mapping[str, str]):
    """Short-name to on-server database name; keys compare case-insensitively."""

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, str]] = {}

    def try_add(self, name: str, database_name: str) -> bool:
        key = name.casefold()
        if key in self._entries:
            return False
        self._entries[key] = (name, database_name)
        return True

    def __getitem__(self, name: str) -> str:
        return self._entries[name.casefold()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


class FbServerResource(ContainerResource, ResourceWithConnectionString):
    """Firebird server container owning a set of logical databases."""

    def __init__(
        self,
        name: str,
        user_name_parameter: Optional[ParameterResource],
        password_parameter: ParameterResource,
    ):
        super().__init__(name)
        self.user_name_parameter = user_name_parameter
        self.password_parameter = password_parameter
        self.primary_endpoint = EndpointReference(self, PRIMARY_ENDPOINT_NAME)
        self._databases = DatabaseMap()

    @property
    def databases(self) -> Mapping[str, str]:
        return self._databases

    @property
    def user_name_reference(self) -> ReferenceExpression:
        if self.user_name_parameter is not None:
            return ReferenceExpression.create("{user}", user=self.user_name_parameter)
        return ReferenceExpression.create("{user}", user=DEFAULT_USER_NAME)

    @property
    def _connection_string(self) -> ReferenceExpression:
        return ReferenceExpression.create(
            "Host={host};Port={port};Username={user};Password={password}",
            host=self.primary_endpoint.property(EndpointProperty.HOST),
            port=self.primary_endpoint.property(EndpointProperty.PORT),
            user=self.user_name_reference,
            password=self.password_parameter,
        )

    @property
    def connection_string_expression(self) -> ReferenceExpression:
        redirect = self.try_get_last_annotation(ConnectionStringRedirectAnnotation)
        if redirect is not None:
            return redirect.resource.connection_string_expression
        return self._connection_string

    def add_database(self, name: str, database_name: str) -> bool:
        """Record a database; returns False (and changes nothing) if the short-name is taken."""
        return self._databases.try_add(name, database_name)

    async def get_connection_string(self) -> Optional[str]:
        redirect = self.try_get_last_annotation(ConnectionStringRedirectAnnotation)
        if redirect is not None:
            return await redirect.resource.get_connection_string()
        return await self.connection_string_expression.get_value()
