"""
E2E test fixtures and configuration

These tests drive the real FastAPI app through TestClient. Only the
key-value store is swapped for an in-memory one.

Run e2e tests with: pytest tests/e2e -m e2e
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

# Add backend to path for imports
backend_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(backend_dir))


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "e2e: marks tests as end-to-end tests (full pipeline)"
    )


@pytest.fixture
def app_client():
    """
    TestClient around the real app with a fresh MemoryStore per test.
    """
    from fastapi.testclient import TestClient
    from services.cache import MemoryStore

    store = MemoryStore()
    with patch('server.get_store', return_value=store):
        from server import app

        with TestClient(app) as client:
            yield client, store


@pytest.fixture
def may_calendar_payload():
    """Calendar JSON as the fetch layer sends it"""
    return [
        {
            "month": "May'25",
            "days": [
                {"date": "1", "day": "Thu", "dayOrder": "1"},
                {"date": "17", "day": "Sat", "dayOrder": "2", "event": "Last Working Day"}
            ]
        }
    ]
