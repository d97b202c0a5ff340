"""
Integration test fixtures and configuration

These tests talk to a real Redis server and, optionally, Firebase.
They are skipped when the service is not reachable.

Run integration tests with: pytest tests/integration -m integration
Skip integration tests with: pytest -m "not integration"
"""

import pytest
from pathlib import Path

# Add backend to path for imports
import sys
backend_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(backend_dir))


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (requires running services)"
    )
    config.addinivalue_line(
        "markers", "firebase: marks tests that require Firebase connection"
    )


@pytest.fixture
def redis_store():
    """Connected RedisStore, or skip"""
    from services.cache import RedisStore

    store = RedisStore()
    if not store.connect():
        pytest.skip("Redis not reachable")
    return store


@pytest.fixture
def test_student_id():
    """Unique student namespace so runs never touch real keys"""
    import uuid
    return f"itest-{uuid.uuid4().hex[:8]}"
