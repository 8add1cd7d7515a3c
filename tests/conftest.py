import pytest
from moto import mock_aws

from aurora_scaler.aws.clients import AWSClientManager
from aurora_scaler.config.settings import get_settings
from tests.consts import TEST_REGION
from tests.fixtures.rds_fixtures import FakeClusterGateway

SCALER_ENV_VARS = [
    "MIN_CAPACITY",
    "MAX_CAPACITY",
    "DRY_RUN",
    "DEPLOYMENT_MODE",
    "SCALING_MODE",
    "LOG_LEVEL",
    "AWS_ENDPOINT_URL",
    "AWS_PROFILE",
]


@pytest.fixture(autouse=True)
def scaler_env(monkeypatch):
    """Isolate every test from the caller's environment and cached singletons."""
    for name in SCALER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)

    get_settings.cache_clear()
    AWSClientManager.reset()
    yield
    get_settings.cache_clear()
    AWSClientManager.reset()


@pytest.fixture
def gateway():
    return FakeClusterGateway()


@pytest.fixture
def mocked_aws():
    with mock_aws():
        yield
