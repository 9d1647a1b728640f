"""
Root conftest to ensure proper import paths.

This file exists at the project root so the project directory is on
sys.path before pytest starts collecting tests.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Ensure project root is in Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from firebird_hosting.hosting.builder import DistributedApplicationBuilder  # noqa: E402
from firebird_hosting.hosting.endpoints import AllocatedEndpoint  # noqa: E402


# ============================================================================
# Shared Test Fixtures
# ============================================================================

@pytest.fixture
def mock_logger():
    """Create a mock structlog-style logger.

    The logger supports:
    - bind(**kwargs) -> logger (returns itself with context)
    - debug/info/warning/error/critical methods
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def app_builder():
    """Application builder isolated from the process environment."""
    return DistributedApplicationBuilder(configuration={})


@pytest.fixture
def allocate():
    """Return a helper that allocates an endpoint on a resource builder."""
    def _allocate(resource_builder, address="localhost", port=3050, name="tcp"):
        def callback(endpoint):
            endpoint.allocated_endpoint = AllocatedEndpoint(endpoint, address, port)

        return resource_builder.with_endpoint_callback(name, callback)

    return _allocate
