"""Selenium waiter: poll page conditions until they hold or time out."""

__version__ = "0.1.0"

from selenium_waiter.core.errors import ConfigError, WaiterError, WaitTimeoutError
from selenium_waiter.core.locator import Locator
from selenium_waiter.waits.conditions import Verify
from selenium_waiter.waiter import Waiter

__all__ = [
    "ConfigError",
    "Locator",
    "Verify",
    "WaitTimeoutError",
    "Waiter",
    "WaiterError",
    "__version__",
]
