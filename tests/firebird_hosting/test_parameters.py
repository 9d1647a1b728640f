import string

import pytest

from firebird_hosting.hosting.parameters import (
    SPECIAL_CHARACTERS,
    ConstantParameterDefault,
    GeneratedParameterDefault,
    ParameterResource,
    SecretParameterDefault,
)
from firebird_hosting.types import ErrorCategory, HostingError


def test_generated_default_respects_length_and_minimums():
    default = GeneratedParameterDefault(
        min_length=30, min_lower=3, min_upper=3, min_numeric=3, min_special=3
    )

    value = default.get_default_value()

    assert len(value) == 30
    assert sum(c in string.ascii_lowercase for c in value) >= 3
    assert sum(c in string.ascii_uppercase for c in value) >= 3
    assert sum(c in string.digits for c in value) >= 3
    assert sum(c in SPECIAL_CHARACTERS for c in value) >= 3


def test_generated_default_never_emits_connection_string_delimiters():
    default = GeneratedParameterDefault(min_length=200)

    value = default.get_default_value()

    assert ";" not in value
    assert "=" not in value


def test_generated_default_only_uses_enabled_classes():
    default = GeneratedParameterDefault(upper=False, numeric=False, special=False)

    assert set(default.get_default_value()) <= set(string.ascii_lowercase)


def test_generated_default_values_differ():
    default = GeneratedParameterDefault()

    assert default.get_default_value() != default.get_default_value()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"min_length": 0},
        {"lower": False, "upper": False, "numeric": False, "special": False},
        {"special": False, "min_special": 1},
        {"min_lower": -1},
    ],
)
def test_generated_default_rejects_invalid_settings(kwargs):
    with pytest.raises(ValueError):
        GeneratedParameterDefault(**kwargs)


def test_secret_default_generates_once_per_name():
    store = {}
    default = SecretParameterDefault("db-password", GeneratedParameterDefault(), store)

    first = default.get_default_value()

    assert store == {"db-password": first}
    assert default.get_default_value() == first
    assert SecretParameterDefault("db-password", GeneratedParameterDefault(), store).get_default_value() == first


def test_parameter_reads_configuration_first():
    parameter = ParameterResource(
        "api-key",
        {"Parameters:api-key": "configured"},
        default=ConstantParameterDefault("fallback"),
    )

    assert parameter.value == "configured"


def test_parameter_falls_back_to_default():
    parameter = ParameterResource("api-key", {}, default=ConstantParameterDefault("fallback"))

    assert parameter.value == "fallback"
    assert parameter.value_expression == "{api-key.value}"


@pytest.mark.asyncio
async def test_parameter_without_value_raises_unresolved():
    parameter = ParameterResource("api-key", {})

    with pytest.raises(HostingError) as excinfo:
        await parameter.get_value()

    assert excinfo.value.category == ErrorCategory.UNRESOLVED
    assert "Parameters:api-key" in excinfo.value.message


def test_add_parameter_registers_resource(app_builder):
    parameter = app_builder.add_parameter("region", value="eu")

    assert parameter.resource in app_builder.resources
    assert parameter.resource.value == "eu"
    assert parameter.resource.secret is False
