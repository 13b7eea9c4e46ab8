"""Shared pytest fixtures for errorguard test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def settings():
    """Settings isolated from the process environment."""
    from errorguard.core.config import ErrorGuardSettings

    return ErrorGuardSettings()


@pytest.fixture
def client(settings) -> Generator[TestClient, None, None]:
    """Provide a sample API test client backed by a fresh in-memory database."""
    from errorguard.sample.main import create_app

    with TestClient(create_app(settings=settings)) as test_client:
        yield test_client
