from __future__ import annotations

import secrets
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Mapping, MutableMapping, Optional

from firebird_hosting.settings import parameter_key
from firebird_hosting.types import ErrorCategory, HostingError

from .expressions import ValueProvider
from .resources import Resource

# Characters that cannot break a "Key=Value;" connection string.
SPECIAL_CHARACTERS = "-_.~()*+!%"


class ParameterDefault(ABC):
    @abstractmethod
    def get_default_value(self) -> str:
        ...


@dataclass
class ConstantParameterDefault(ParameterDefault):
    value: str

    def get_default_value(self) -> str:
        return self.value


@dataclass
class GeneratedParameterDefault(ParameterDefault):
    """Random value drawn from the enabled character classes using ``secrets``."""

    min_length: int = 22
    lower: bool = True
    upper: bool = True
    numeric: bool = True
    special: bool = True
    min_lower: int = 0
    min_upper: int = 0
    min_numeric: int = 0
    min_special: int = 0

    def __post_init__(self) -> None:
        if self.min_length <= 0:
            raise ValueError("min_length must be positive")
        classes = self._classes()
        if not classes:
            raise ValueError("At least one character class must be enabled")
        for enabled, minimum, label in (
            (self.lower, self.min_lower, "lower"),
            (self.upper, self.min_upper, "upper"),
            (self.numeric, self.min_numeric, "numeric"),
            (self.special, self.min_special, "special"),
        ):
            if minimum < 0:
                raise ValueError(f"min_{label} must not be negative")
            if minimum and not enabled:
                raise ValueError(f"min_{label} is set but {label} characters are disabled")

    def _classes(self) -> Dict[str, int]:
        classes: Dict[str, int] = {}
        if self.lower:
            classes[string.ascii_lowercase] = self.min_lower
        if self.upper:
            classes[string.ascii_uppercase] = self.min_upper
        if self.numeric:
            classes[string.digits] = self.min_numeric
        if self.special:
            classes[SPECIAL_CHARACTERS] = self.min_special
        return classes

    def get_default_value(self) -> str:
        classes = self._classes()
        chars = [secrets.choice(alphabet) for alphabet, minimum in classes.items() for _ in range(minimum)]
        alphabet = "".join(classes)
        while len(chars) < self.min_length:
            chars.append(secrets.choice(alphabet))
        secrets.SystemRandom().shuffle(chars)
        return "".join(chars)


class SecretParameterDefault(ParameterDefault):
    """
    Wraps another default and remembers the value per parameter name.

    The store belongs to the application builder, so every read of the same
    parameter yields the same generated secret.
    """

    def __init__(
        self,
        parameter_name: str,
        inner: ParameterDefault,
        store: MutableMapping[str, str],
    ):
        self.parameter_name = parameter_name
        self.inner = inner
        self._store = store

    def get_default_value(self) -> str:
        value = self._store.get(self.parameter_name)
        if value is None:
            value = self.inner.get_default_value()
            self._store[self.parameter_name] = value
        return value


class ParameterResource(Resource, ValueProvider):
    """Named configuration value, read from ``Parameters:<name>`` or a default."""

    def __init__(
        self,
        name: str,
        configuration: Mapping[str, str],
        default: Optional[ParameterDefault] = None,
        secret: bool = False,
    ):
        super().__init__(name)
        self.default = default
        self.secret = secret
        self._configuration = configuration
        self._value: Optional[str] = None

    @property
    def value(self) -> str:
        if self._value is None:
            configured = self._configuration.get(parameter_key(self.name))
            if configured is not None:
                self._value = configured
            elif self.default is not None:
                self._value = self.default.get_default_value()
            else:
                raise HostingError(
                    ErrorCategory.UNRESOLVED,
                    f"Parameter resource could not be used because configuration key "
                    f"'{parameter_key(self.name)}' is missing and the parameter has no default value.",
                    resource=self.name,
                )
        return self._value

    @property
    def value_expression(self) -> str:
        return f"{{{self.name}.value}}"

    async def get_value(self) -> Optional[str]:
        return self.value
