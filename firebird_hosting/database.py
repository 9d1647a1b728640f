from __future__ import annotations

from firebird_hosting.hosting.expressions import ReferenceExpression
from firebird_hosting.hosting.resources import Resource, ResourceWithConnectionString
from firebird_hosting.server import FbServerResource


class FbDatabaseResource(Resource, ResourceWithConnectionString):
    def __init__(self, name: str, database_name: str, parent: FbServerResource):
        super().__init__(name, parent=parent)
        self.database_name = database_name

    @property
    def parent(self) -> FbServerResource:
        return self._parent  # type: ignore[return-value]

    @property
    def connection_string_expression(self) -> ReferenceExpression:
        return ReferenceExpression.create(
            "{server};Database={database}",
            server=self.parent,
            database=self.database_name,
        )
