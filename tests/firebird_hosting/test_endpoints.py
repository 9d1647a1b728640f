import pytest

from firebird_hosting.hosting.endpoints import (
    AllocatedEndpoint,
    EndpointAnnotation,
    EndpointProperty,
    ProtocolType,
)
from firebird_hosting.hosting.resources import ContainerResource
from firebird_hosting.types import ErrorCategory, HostingError


@pytest.fixture
def container(app_builder):
    return app_builder.add_resource(ContainerResource("cache"))


def test_endpoint_annotation_defaults():
    endpoint = EndpointAnnotation(name="tcp")

    assert endpoint.protocol == ProtocolType.TCP
    assert endpoint.uri_scheme == "tcp"
    assert endpoint.transport == "tcp"
    assert endpoint.is_external is False
    assert endpoint.is_proxied is True
    assert endpoint.allocated_endpoint is None


def test_http_scheme_uses_http_transport():
    endpoint = EndpointAnnotation(name="http", uri_scheme="https")

    assert endpoint.transport == "http"


def test_allocated_endpoint_url():
    endpoint = EndpointAnnotation(name="tcp")
    allocated = AllocatedEndpoint(endpoint, "localhost", 3050)

    assert allocated.url == "tcp://localhost:3050"
    assert allocated.host_and_port == "localhost:3050"


def test_duplicate_endpoint_name_rejected(container):
    container.with_endpoint("tcp", target_port=6379)

    with pytest.raises(HostingError) as excinfo:
        container.with_endpoint("tcp", target_port=6380)
    assert excinfo.value.category == ErrorCategory.DUPLICATE_RESOURCE


def test_endpoint_name_defaults_to_scheme(container):
    container.with_endpoint(scheme="redis", target_port=6379)

    assert container.get_endpoint("redis").exists


@pytest.mark.asyncio
async def test_endpoint_properties_resolve_after_allocation(container, allocate):
    container.with_endpoint("tcp", target_port=6379)
    ref = container.get_endpoint("tcp")

    assert ref.is_allocated is False
    assert await ref.property(EndpointProperty.HOST).get_value() is None
    assert await ref.property(EndpointProperty.TARGET_PORT).get_value() == "6379"
    with pytest.raises(HostingError) as excinfo:
        ref.host
    assert excinfo.value.category == ErrorCategory.UNRESOLVED

    allocate(container, address="10.0.0.5", port=16379)

    assert ref.is_allocated is True
    assert ref.host == "10.0.0.5"
    assert ref.port == 16379
    assert await ref.property(EndpointProperty.HOST).get_value() == "10.0.0.5"
    assert await ref.property(EndpointProperty.PORT).get_value() == "16379"
    assert await ref.property(EndpointProperty.URL).get_value() == "tcp://10.0.0.5:16379"
    assert await ref.property(EndpointProperty.SCHEME).get_value() == "tcp"
    assert await ref.property(EndpointProperty.HOST_AND_PORT).get_value() == "10.0.0.5:16379"


def test_endpoint_value_expression(container):
    ref = container.get_endpoint("tcp")

    assert ref.property(EndpointProperty.HOST).value_expression == "{cache.bindings.tcp.host}"
    assert ref.property(EndpointProperty.TARGET_PORT).value_expression == "{cache.bindings.tcp.targetPort}"


@pytest.mark.asyncio
async def test_missing_endpoint_is_configuration_error(container):
    ref = container.get_endpoint("missing")

    assert ref.exists is False
    with pytest.raises(HostingError) as excinfo:
        await ref.property(EndpointProperty.HOST).get_value()
    assert excinfo.value.category == ErrorCategory.CONFIGURATION


def test_endpoint_callback_without_create_raises(container):
    with pytest.raises(HostingError):
        container.with_endpoint_callback("tcp", lambda e: None, create_if_not_exists=False)


def test_endpoint_callback_creates_endpoint(container):
    container.with_endpoint_callback("metrics", lambda e: setattr(e, "target_port", 9090))

    assert container.get_endpoint("metrics").annotation.target_port == 9090
