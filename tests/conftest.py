from __future__ import annotations

import pytest

pytest_plugins = [
    "tests.fixtures.infrastructure.fs_database",
    "tests.fixtures.infrastructure.fs_storage",
    "tests.fixtures.app.namespaces",
]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"
