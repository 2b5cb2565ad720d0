"""Condition library: probes and retried actions against a live page.

Every factory returns a :class:`Condition`. Interaction conditions redo their
action on each attempt (click again, clear and type again, deselect and
select again) instead of only observing state; an attempt that raises counts
as not yet satisfied. Only :func:`jquery_idle` reads an exception as success.
"""

from __future__ import annotations

import enum
from typing import Any, Callable, Sequence

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support.select import Select

from selenium_waiter.constants import JQUERY_IDLE_SCRIPT, READY_STATE_SCRIPT
from selenium_waiter.core.locator import Target, resolve
from selenium_waiter.waits.polling import Condition, ErrorPolicy

SelectFactory = Callable[[Any], Any]


class Verify(str, enum.Enum):
    """What is read back after typing."""
    VALUE = "value"  # the control's "value" attribute
    TEXT = "text"  # the element's displayed text


# ------------------------------------------------------------------
# Page state
# ------------------------------------------------------------------


def document_ready(driver: Any) -> Condition:
    """True once ``document.readyState`` is ``complete``.

    Script execution can fail mid-navigation; that is read as not ready.
    """
    def _probe() -> bool:
        return str(driver.execute_script(READY_STATE_SCRIPT)) == "complete"

    return Condition(_probe, ErrorPolicy.NOT_READY)


def jquery_idle(driver: Any) -> Condition:
    """True once jQuery reports no active requests.

    A page without jQuery makes the script throw; that counts as idle.
    """
    def _probe() -> bool:
        return bool(driver.execute_script(JQUERY_IDLE_SCRIPT))

    return Condition(_probe, ErrorPolicy.READY)


# ------------------------------------------------------------------
# Element actions
# ------------------------------------------------------------------


def click_succeeds(driver: Any, target: Target) -> Condition:
    def _probe() -> bool:
        resolve(driver, target).click()
        return True

    return Condition(_probe)


def text_entered(
    driver: Any,
    target: Target,
    text: str,
    expected: str | None = None,
    *,
    tab: bool = False,
    verify: Verify = Verify.VALUE,
) -> Condition:
    """Clear, type *text*, optionally TAB out, then compare the read-back.

    *expected* defaults to *text*; pass a different string when the page
    reformats input (masks, normalisers triggered on blur).
    """
    want = text if expected is None else expected

    def _probe() -> bool:
        elem = resolve(driver, target)
        elem.clear()
        elem.send_keys(text)
        if tab:
            elem.send_keys(Keys.TAB)
        if verify is Verify.TEXT:
            return elem.text == want
        return elem.get_attribute("value") == want

    return Condition(_probe)


# ------------------------------------------------------------------
# Dropdowns
# ------------------------------------------------------------------


def option_selected_by_text(
    driver: Any, target: Target, text: str, select_factory: SelectFactory = Select
) -> Condition:
    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        select.select_by_visible_text(text)
        return select.first_selected_option.text == text

    return Condition(_probe)


def option_selected_by_value(
    driver: Any, target: Target, value: str, select_factory: SelectFactory = Select
) -> Condition:
    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        select.select_by_value(value)
        return select.first_selected_option.get_attribute("value") == value

    return Condition(_probe)


def option_selected_by_text_or_value(
    driver: Any, target: Target, text: str, select_factory: SelectFactory = Select
) -> Condition:
    """Select by visible text, falling back to the value attribute."""
    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        try:
            select.select_by_visible_text(text)
        except NoSuchElementException:
            select.select_by_value(text)
            return select.first_selected_option.get_attribute("value") == text
        return select.first_selected_option.text == text

    return Condition(_probe)


def _cleared(select: Any) -> bool:
    select.deselect_all()
    return len(select.all_selected_options) == 0


def options_selected_by_text(
    driver: Any,
    target: Target,
    texts: Sequence[str],
    select_factory: SelectFactory = Select,
) -> Condition:
    """Multi-select *texts* in order; the read-back must match positionally.

    ``Select.all_selected_options`` lists options in document order, so a
    request in any other order is never satisfied.
    """
    wanted = list(texts)

    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        if not _cleared(select):
            return False
        for text in wanted:
            select.select_by_visible_text(text)
        return [o.text for o in select.all_selected_options] == wanted

    return Condition(_probe)


def options_selected_by_value(
    driver: Any,
    target: Target,
    values: Sequence[str],
    select_factory: SelectFactory = Select,
) -> Condition:
    wanted = list(values)

    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        if not _cleared(select):
            return False
        for value in wanted:
            select.select_by_value(value)
        selected = [o.get_attribute("value") for o in select.all_selected_options]
        return selected == wanted

    return Condition(_probe)


def option_selected_by_index(
    driver: Any, target: Target, position: int, select_factory: SelectFactory = Select
) -> Condition:
    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        select.select_by_index(position)
        return select.options[position].is_selected()

    return Condition(_probe)


def options_selected_by_index(
    driver: Any,
    target: Target,
    positions: Sequence[int],
    select_factory: SelectFactory = Select,
) -> Condition:
    wanted = list(positions)

    def _probe() -> bool:
        select = select_factory(resolve(driver, target))
        if not _cleared(select):
            return False
        for position in wanted:
            select.select_by_index(position)
        options = select.options
        return all(options[position].is_selected() for position in wanted)

    return Condition(_probe)


def all_deselected(
    driver: Any, target: Target, select_factory: SelectFactory = Select
) -> Condition:
    def _probe() -> bool:
        return _cleared(select_factory(resolve(driver, target)))

    return Condition(_probe)
