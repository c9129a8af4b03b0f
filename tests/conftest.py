import pytest

from cloudtag.application.tag.service import TagManager
from cloudtag.application.tag.waiter import OperationWaiter
from cloudtag.domain.tag.value_objects import ResourceKind
from cloudtag.infrastructure.registry.provider_registry import ProviderRegistry
from cloudtag.providers.mock import InMemoryCloud, create_mock_registry


class FakeClock:
    """Manual clock; sleeping advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture(autouse=True)
def reset_provider_registry():
    ProviderRegistry.reset_instance()
    yield
    ProviderRegistry.reset_instance()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def waiter(clock):
    return OperationWaiter(poll_interval=2.0, max_attempts=5, clock=clock, sleep=clock.sleep)


@pytest.fixture
def cloud():
    return InMemoryCloud()


@pytest.fixture
def kind_registry(cloud):
    return create_mock_registry(cloud=cloud)


@pytest.fixture
def tag_manager(kind_registry, waiter):
    return TagManager(kind_registry, waiter=waiter)


@pytest.fixture
def vm(cloud):
    """A VM with two tags."""
    return cloud.add_resource(
        ResourceKind.VM, "vm-01", {"env": "prod", "owner": "alice"}, name_id="web-01"
    )
