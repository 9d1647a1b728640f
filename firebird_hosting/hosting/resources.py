from __future__ import annotations

import inspect
import re
from abc import abstractmethod
from typing import Dict, List, Optional, Type, TypeVar

from firebird_hosting.types import ErrorCategory, HostingError

from .annotations import (
    ContainerImageAnnotation,
    EnvironmentAnnotation,
    EnvironmentCallbackAnnotation,
    EnvironmentCallbackContext,
    ResourceAnnotation,
)
from .endpoints import EndpointReference
from .expressions import ExpressionValue, ReferenceExpression, ValueProvider

A = TypeVar("A", bound=ResourceAnnotation)

# Letters, digits and single hyphens; starts with a letter, no trailing hyphen.
_NAME_PATTERN = re.compile(r"^[A-Za-z](?:-?[A-Za-z0-9])*$")
_MAX_NAME_LENGTH = 64


def validate_name(name: str) -> None:
    if not name or len(name) > _MAX_NAME_LENGTH or not _NAME_PATTERN.match(name):
        raise ValueError(
            f"Resource name '{name}' is invalid. Names must be 1-{_MAX_NAME_LENGTH} "
            "characters of ASCII letters, digits and single hyphens, and start with a letter."
        )


class Resource:
    def __init__(self, name: str, parent: Optional["Resource"] = None):
        validate_name(name)
        self._name = name
        self._parent = parent
        self.annotations: List[ResourceAnnotation] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional["Resource"]:
        return self._parent

    def annotations_of(self, annotation_type: Type[A]) -> List[A]:
        return [a for a in self.annotations if isinstance(a, annotation_type)]

    def try_get_last_annotation(self, annotation_type: Type[A]) -> Optional[A]:
        matches = self.annotations_of(annotation_type)
        return matches[-1] if matches else None

    async def get_environment_variable_values(self) -> Dict[str, str]:
        """
        Resolve the environment the host would pass to this resource.

        Annotations apply in the order they were added, so a later write to
        the same variable replaces an earlier one.
        """
        context = EnvironmentCallbackContext(resource=self)
        for annotation in self.annotations:
            if isinstance(annotation, EnvironmentAnnotation):
                context.environment_variables[annotation.name] = annotation.value
            elif isinstance(annotation, EnvironmentCallbackAnnotation):
                result = annotation.callback(context)
                if inspect.isawaitable(result):
                    await result

        resolved: Dict[str, str] = {}
        for key, value in context.environment_variables.items():
            resolved[key] = await self._resolve_environment_value(key, value)
        return resolved

    async def _resolve_environment_value(self, key: str, value: ExpressionValue) -> str:
        if isinstance(value, str):
            return value
        result = await value.get_value()
        if result is None:
            raise HostingError(
                ErrorCategory.UNRESOLVED,
                f"Environment variable '{key}' on the resource '{self.name}' could not be resolved",
                resource=self.name,
            )
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class ContainerResource(Resource):
    @property
    def image(self) -> Optional[ContainerImageAnnotation]:
        return self.try_get_last_annotation(ContainerImageAnnotation)

    def get_endpoint(self, name: str) -> EndpointReference:
        return EndpointReference(self, name)


class ResourceWithConnectionString(ValueProvider):
    """
    Mixin for resources that publish a connection string.

    As a value provider the resource renders as ``{name.connectionString}``
    inside other expressions and resolves through get_connection_string().
    """

    name: str

    @property
    @abstractmethod
    def connection_string_expression(self) -> ReferenceExpression:
        ...

    async def get_connection_string(self) -> Optional[str]:
        return await self.connection_string_expression.get_value()

    @property
    def value_expression(self) -> str:
        return f"{{{self.name}.connectionString}}"

    async def get_value(self) -> Optional[str]:
        return await self.get_connection_string()
