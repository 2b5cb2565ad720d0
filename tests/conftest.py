import pytest

from fakes import FakeDriver, identity_select
from selenium_waiter.config import TimeoutConfig, WaiterConfig
from selenium_waiter.waiter import Waiter


@pytest.fixture()
def driver():
    return FakeDriver()


@pytest.fixture()
def fast_config():
    return WaiterConfig(timeouts=TimeoutConfig(default_s=2, poll_ms=10))


@pytest.fixture()
def waiter(driver, fast_config):
    return Waiter(driver, config=fast_config, select_factory=identity_select)
