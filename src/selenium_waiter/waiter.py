"""Waiter: the public face of the polling engine.

Each method builds one condition from :mod:`selenium_waiter.waits.conditions`
and drives it through :func:`wait_until`. A method either returns ``None``
once its condition held or raises :class:`WaitTimeoutError`.

Targets are either a ``WebElement`` (used as-is, may go stale) or a selector
(:class:`Locator` or ``(By.X, "...")`` tuple) resolved again on every attempt.
``timeout`` is seconds, a preset name (``"tiny"``, ``"default"``,
``"medium"``, ``"long"``) or ``None`` for the configured default.
"""

from __future__ import annotations

import pathlib
from typing import Any, Union

from selenium.webdriver.support.select import Select

from selenium_waiter.config import WaiterConfig, load_config
from selenium_waiter.core.errors import WaitTimeoutError
from selenium_waiter.core.locator import Target, describe_target
from selenium_waiter.runner.logging import StepLogger
from selenium_waiter.waits import conditions
from selenium_waiter.waits.conditions import SelectFactory, Verify
from selenium_waiter.waits.polling import Condition, WaitResult, wait_until

Timeout = Union[int, float, str, None]


class Waiter:
    """Synchronisation helpers bound to one WebDriver session.

    The driver is owned by the caller. A Waiter is not safe to share between
    threads, and neither is the driver behind it.
    """

    def __init__(
        self,
        driver: Any,
        config: WaiterConfig | None = None,
        step_logger: StepLogger | None = None,
        select_factory: SelectFactory = Select,
    ):
        self.driver = driver
        self.config = config or WaiterConfig()
        self.step_logger = step_logger
        self.select_factory = select_factory

    @classmethod
    def from_config(
        cls, driver: Any, path: str | pathlib.Path | None = None, **kwargs: Any
    ) -> Waiter:
        """Build a Waiter from a config file, opening its step log if configured."""
        config = load_config(path)
        logger = None
        if config.log.path or config.log.echo:
            logger = StepLogger(config.log.path, echo=config.log.echo)
            logger.open()
        return cls(driver, config=config, step_logger=logger, **kwargs)

    def close(self) -> None:
        if self.step_logger:
            self.step_logger.close()

    def __enter__(self) -> Waiter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Page state
    # ------------------------------------------------------------------

    def wait_for_page_load_complete(self, timeout: Timeout = None) -> None:
        self._page_load_complete(timeout, "current page")

    def wait_for_jquery(self, timeout: Timeout = None) -> None:
        """Wait for jQuery to go idle; returns at once on pages without jQuery."""
        self._jquery_idle(timeout, "current page")

    def get(self, url: str, timeout: Timeout = None) -> None:
        """Open *url*, then wait for page load and jQuery, each up to *timeout*."""
        self.driver.get(url)
        self._page_load_complete(timeout, url)
        self._jquery_idle(timeout, url)

    def _page_load_complete(self, timeout: Timeout, subject: str) -> None:
        self._run(
            conditions.document_ready(self.driver), "Page load", subject, timeout
        )

    def _jquery_idle(self, timeout: Timeout, subject: str) -> None:
        self._run(
            conditions.jquery_idle(self.driver), "jQuery idle check", subject, timeout
        )

    # ------------------------------------------------------------------
    # Element actions
    # ------------------------------------------------------------------

    def click(self, target: Target, timeout: Timeout = None) -> None:
        """Click until one attempt goes through without raising.

        No separate "wait until displayed" is needed: missing, stale,
        obscured or not-yet-clickable elements are simply retried.
        """
        self._run(conditions.click_succeeds(self.driver, target), "Click", target, timeout)

    def clear_and_send_keys(
        self,
        target: Target,
        text: str,
        expected: str | None = None,
        *,
        tab: bool = False,
        verify: Verify | str = Verify.VALUE,
        timeout: Timeout = None,
    ) -> None:
        """Clear the input, type *text* and wait for the read-back to match.

        Args:
            target: input element or selector.
            text: what to type.
            expected: what the page should end up showing; defaults to *text*.
                Use it when scripts on the page reformat the input.
            tab: press TAB after typing so blur handlers run before the check.
            verify: ``Verify.VALUE`` compares the "value" attribute,
                ``Verify.TEXT`` the element's displayed text.
            timeout: seconds or preset name.
        """
        verify = Verify(verify)
        want = text if expected is None else expected
        operation = f"Typing {text!r} (expecting {verify.value} {want!r})"
        condition = conditions.text_entered(
            self.driver, target, text, expected, tab=tab, verify=verify
        )
        self._run(condition, operation, target, timeout)

    # ------------------------------------------------------------------
    # Dropdowns
    # ------------------------------------------------------------------

    def select_by_visible_text(
        self, target: Target, *texts: str, timeout: Timeout = None
    ) -> None:
        """Select one or several options by visible text.

        With one text the option is selected and checked as the first
        selected option. With several, every attempt deselects all, selects
        the texts in the given order and requires the selected options to
        read back in exactly that order. Selenium reports selected options in
        document order, so several texts must be given in the order the
        options appear in the page; any other order never matches and the
        wait times out.
        """
        _require_values(texts)
        if len(texts) == 1:
            condition = conditions.option_selected_by_text(
                self.driver, target, texts[0], self.select_factory
            )
            operation = f"Selecting option with text {texts[0]!r}"
        else:
            condition = conditions.options_selected_by_text(
                self.driver, target, texts, self.select_factory
            )
            operation = f"Selecting options with texts {list(texts)!r}"
        self._run(condition, operation, target, timeout)

    def select_by_value(
        self, target: Target, *values: str, timeout: Timeout = None
    ) -> None:
        """Like :meth:`select_by_visible_text`, matching the value attribute.

        Several values must likewise be given in document order.
        """
        _require_values(values)
        if len(values) == 1:
            condition = conditions.option_selected_by_value(
                self.driver, target, values[0], self.select_factory
            )
            operation = f"Selecting option with value {values[0]!r}"
        else:
            condition = conditions.options_selected_by_value(
                self.driver, target, values, self.select_factory
            )
            operation = f"Selecting options with values {list(values)!r}"
        self._run(condition, operation, target, timeout)

    def select(self, target: Target, text_or_value: str, timeout: Timeout = None) -> None:
        """Select by visible text, or by value when no option has that text."""
        condition = conditions.option_selected_by_text_or_value(
            self.driver, target, text_or_value, self.select_factory
        )
        operation = f"Selecting option with text or value {text_or_value!r}"
        self._run(condition, operation, target, timeout)

    def select_by_index(
        self, target: Target, *positions: int, timeout: Timeout = None
    ) -> None:
        _require_values(positions)
        if len(positions) == 1:
            condition = conditions.option_selected_by_index(
                self.driver, target, positions[0], self.select_factory
            )
            operation = f"Selecting option at index {positions[0]}"
        else:
            condition = conditions.options_selected_by_index(
                self.driver, target, positions, self.select_factory
            )
            operation = f"Selecting options at indexes {list(positions)!r}"
        self._run(condition, operation, target, timeout)

    def deselect_all(self, target: Target, timeout: Timeout = None) -> None:
        condition = conditions.all_deselected(self.driver, target, self.select_factory)
        self._run(condition, "Deselecting all options", target, timeout)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def resolve_timeout(self, timeout: Timeout) -> float:
        if timeout is None:
            return self.config.timeouts.default_s
        if isinstance(timeout, str):
            return self.config.timeouts.preset(timeout)
        if timeout < 0:
            raise ValueError("timeout must be >= 0 seconds")
        return timeout

    def _run(
        self, condition: Condition, operation: str, target: Any, timeout: Timeout
    ) -> WaitResult:
        seconds = self.resolve_timeout(timeout)
        subject = describe_target(target)
        try:
            result = wait_until(
                condition,
                timeout_s=seconds,
                poll_ms=self.config.timeouts.poll_ms,
                operation=operation,
                target=subject,
            )
        except WaitTimeoutError as exc:
            if self.step_logger:
                self.step_logger.log_wait(
                    operation, subject, seconds, error=str(exc), attempts=exc.attempts
                )
            raise
        if self.step_logger:
            self.step_logger.log_wait(operation, subject, seconds, result=result)
        return result


def _require_values(values: tuple) -> None:
    if not values:
        raise ValueError("at least one option to select is required")
