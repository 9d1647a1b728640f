from __future__ import annotations

import asyncio
import string
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Union


class ValueProvider(ABC):
    """Something whose string value is only known once the host resolves it."""

    @property
    @abstractmethod
    def value_expression(self) -> str:
        ...

    @abstractmethod
    async def get_value(self) -> Optional[str]:
        ...


ExpressionValue = Union[str, ValueProvider]


def _placeholder_names(template: str) -> List[str]:
    names: List[str] = []
    for _, field_name, format_spec, conversion in string.Formatter().parse(template):
        if field_name is None:
            continue
        if not field_name.isidentifier() or format_spec or conversion:
            raise ValueError(f"Unsupported placeholder '{{{field_name}}}' in {template!r}")
        names.append(field_name)
    return names


class ReferenceExpression(ValueProvider):
    """
    Deferred template over named placeholders.

    Usage:
        expr = ReferenceExpression.create(
            "Host={host};Port={port}",
            host=endpoint.property(EndpointProperty.HOST),
            port=endpoint.property(EndpointProperty.PORT),
        )
        expr.value_expression   # "Host={fb.bindings.tcp.host};Port={fb.bindings.tcp.port}"
        await expr.get_value()  # "Host=localhost;Port=3050", or None if unresolved

    Placeholders may be bound to literal strings, value providers or other
    expressions. Nothing is resolved until get_value() is awaited.
    """

    def __init__(self, template: str, values: Mapping[str, ExpressionValue]):
        names = _placeholder_names(template)
        missing = sorted(set(names) - set(values))
        if missing:
            raise ValueError(f"No value bound for placeholder(s) {missing} in {template!r}")
        self._template = template
        self._values: Dict[str, ExpressionValue] = {name: values[name] for name in names}

    @classmethod
    def create(cls, template: str, **values: ExpressionValue) -> "ReferenceExpression":
        return cls(template, values)

    @property
    def template(self) -> str:
        return self._template

    @property
    def value_providers(self) -> Dict[str, ValueProvider]:
        return {k: v for k, v in self._values.items() if isinstance(v, ValueProvider)}

    @property
    def value_expression(self) -> str:
        rendered = {
            k: v if isinstance(v, str) else v.value_expression
            for k, v in self._values.items()
        }
        return self._template.format_map(rendered)

    async def get_value(self) -> Optional[str]:
        providers = self.value_providers
        resolved = await asyncio.gather(*(p.get_value() for p in providers.values()))
        if any(value is None for value in resolved):
            return None
        rendered = {k: v for k, v in self._values.items() if isinstance(v, str)}
        rendered.update(zip(providers.keys(), resolved))
        return self._template.format_map(rendered)

    def __str__(self) -> str:
        return self.value_expression

    def __repr__(self) -> str:
        return f"ReferenceExpression({self.value_expression!r})"
