"""Pytest configuration and shared fixtures."""

import pytest
from unittest.mock import MagicMock, AsyncMock

from apigw_discovery.models import ApiType, DiscoveredApi, build_endpoint


# =============================================================================
# Environment and Configuration Fixtures
# =============================================================================

# Variables read by Settings; cleared so the developer's shell never leaks in
SETTINGS_ENV_VARS = (
    "TREBLLE_SDK_TOKEN",
    "SCAN_REGIONS",
    "DISCOVERY_ENDPOINT_URL",
    "BATCH_SIZE",
    "BATCH_DELAY_MS",
    "PAGE_SIZE",
    "LOG_LEVEL",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable Settings reads from the environment."""
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def test_env(clean_env):
    """Set up a complete, valid collector environment."""
    test_vars = {
        "TREBLLE_SDK_TOKEN": "test-sdk-token",
        "SCAN_REGIONS": "us-east-1,eu-west-1",
        "AWS_REGION": "us-east-1",
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in test_vars.items():
        clean_env.setenv(key, value)
    return test_vars


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so moto never touches a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


# =============================================================================
# AWS Client Mocks
# =============================================================================

@pytest.fixture
def mock_apigw_client():
    """Create a mock ApiGatewayClient with empty responses."""
    client = MagicMock()
    client.region = "us-east-1"
    client.get_rest_apis = AsyncMock(return_value={"items": []})
    client.get_rest_api_stages = AsyncMock(return_value={"item": []})
    client.get_http_apis = AsyncMock(return_value={"Items": []})
    client.get_http_api_stages = AsyncMock(return_value={"Items": []})
    return client


# =============================================================================
# Test Data Fixtures
# =============================================================================

def make_api(
    api_id: str = "abc123",
    region: str = "us-east-1",
    api_type: ApiType = ApiType.REST,
    name: str | None = "orders-api",
    stages: tuple[str, ...] = ("prod",),
    account_id: str = "123456789012",
) -> DiscoveredApi:
    """Build a DiscoveredApi with sensible defaults."""
    return DiscoveredApi(
        account_id=account_id,
        region=region,
        api_id=api_id,
        api_name=name,
        api_type=api_type,
        stages=stages,
        endpoint=build_endpoint(api_id, region),
    )


@pytest.fixture
def api_factory():
    """Provide the DiscoveredApi builder to tests."""
    return make_api


@pytest.fixture
def sample_apis():
    """Provide a small mixed inventory."""
    return [
        make_api("rest001", "us-east-1", ApiType.REST, "orders-api", ("prod", "dev")),
        make_api("http001", "us-east-1", ApiType.HTTP, "payments-api", ("$default",)),
        make_api("rest002", "eu-west-1", ApiType.REST, None, ()),
    ]


# =============================================================================
# Pytest Hooks for Test Reporting
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests by directory
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "property" in str(item.fspath):
            item.add_marker(pytest.mark.property)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def pytest_sessionstart(session):
    """Print test session information."""
    print("\n" + "=" * 70)
    print("API Gateway Discovery Collector - Test Suite")
    print("=" * 70)


def pytest_sessionfinish(session, exitstatus):
    """Print test session summary."""
    print("\n" + "=" * 70)
    if exitstatus == 0:
        print("PASS: All tests passed!")
    else:
        print(f"FAIL: Tests failed with exit status: {exitstatus}")
    print("=" * 70)
