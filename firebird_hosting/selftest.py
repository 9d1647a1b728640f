from __future__ import annotations

import asyncio
from importlib import metadata


def _version(pkg: str) -> str:
    try:
        return metadata.version(pkg)
    except metadata.PackageNotFoundError:
        return "unknown"


async def _compose_sample() -> str:
    from firebird_hosting.extensions import add_firebird
    from firebird_hosting.hosting.builder import create_builder
    from firebird_hosting.hosting.endpoints import AllocatedEndpoint

    builder = create_builder(configuration={"Parameters:selftest-password": "selftest"})
    server = add_firebird(builder, "selftest")

    def allocate(endpoint):
        endpoint.allocated_endpoint = AllocatedEndpoint(endpoint, "localhost", 3050)

    server.with_endpoint_callback("tcp", allocate)
    database = server.add_database("selftestdb")
    return await database.resource.get_connection_string() or ""


def run_selftest() -> bool:
    """
    Lightweight import/dep check; no network calls.
    """
    try:
        import structlog  # noqa: F401
        print(f"firebird_hosting selftest: structlog {_version('structlog')}")
    except ImportError as exc:
        print(f"firebird_hosting selftest: missing structlog ({exc})")
        return False

    try:
        from firebird_hosting.extensions import add_firebird  # noqa: F401
        from firebird_hosting.hosting.builder import DistributedApplicationBuilder  # noqa: F401
        from firebird_hosting.hosting.expressions import ReferenceExpression  # noqa: F401
        print("firebird_hosting selftest: core imports ok")
    except ImportError as exc:
        print(f"firebird_hosting selftest: import failed ({exc})")
        return False

    expected = "Host=localhost;Port=3050;Username=SYSDBA;Password=selftest;Database=selftestdb"
    actual = asyncio.run(_compose_sample())
    if actual != expected:
        print(f"firebird_hosting selftest: unexpected connection string {actual!r}")
        return False

    print("firebird_hosting selftest: ok")
    return True


if __name__ == "__main__":
    from firebird_hosting._logging import configure_logging

    configure_logging()
    run_selftest()
