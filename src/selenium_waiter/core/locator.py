"""Element targets: direct handles or selectors re-resolved on every attempt."""

from __future__ import annotations

from typing import Any, Tuple, Union

from pydantic import BaseModel, field_validator
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webelement import WebElement

STRATEGIES = (
    By.ID,
    By.NAME,
    By.XPATH,
    By.CSS_SELECTOR,
    By.CLASS_NAME,
    By.TAG_NAME,
    By.LINK_TEXT,
    By.PARTIAL_LINK_TEXT,
)


class Locator(BaseModel):
    """Identifies a page element via a Selenium locator strategy.

    A Locator is deferred: it is handed to ``driver.find_element`` again on
    every poll attempt, so an element that is replaced in the DOM between
    attempts is picked up naturally. A ``WebElement`` passed directly is
    resolved once and may go stale mid-poll.
    """
    by: str = By.CSS_SELECTOR
    value: str

    @field_validator("by")
    @classmethod
    def known_strategy(cls, v: str) -> str:
        if v not in STRATEGIES:
            raise ValueError(f"Unknown locator strategy {v!r}")
        return v

    @classmethod
    def css(cls, value: str) -> Locator:
        return cls(by=By.CSS_SELECTOR, value=value)

    @classmethod
    def xpath(cls, value: str) -> Locator:
        return cls(by=By.XPATH, value=value)

    @classmethod
    def by_id(cls, value: str) -> Locator:
        return cls(by=By.ID, value=value)

    def describe(self) -> str:
        return f"{self.by}={self.value!r}"

    def to_find_args(self) -> tuple[str, str]:
        """Convert to ``driver.find_element`` positional args."""
        return (self.by, self.value)


Target = Union[WebElement, Locator, Tuple[str, str]]


def as_locator(target: Any) -> Locator | None:
    """Return a Locator for selector-style targets, None for direct handles."""
    if isinstance(target, Locator):
        return target
    if isinstance(target, tuple) and len(target) == 2:
        return Locator(by=target[0], value=target[1])
    return None


def resolve(driver: Any, target: Target) -> WebElement:
    """Resolve *target* to a live element.

    Selectors go through ``driver.find_element`` each call; direct handles
    are returned unchanged.
    """
    locator = as_locator(target)
    if locator is None:
        return target
    return driver.find_element(*locator.to_find_args())


def describe_target(target: Any) -> str:
    """Human-readable subject for failure messages and logs."""
    if isinstance(target, str):
        return target
    locator = as_locator(target)
    if locator is not None:
        return locator.describe()
    return repr(target)
