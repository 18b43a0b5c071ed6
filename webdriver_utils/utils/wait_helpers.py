# webdriver_utils/utils/wait_helpers.py

import logging
from typing import Callable, Sequence, Tuple, Union

from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import StaleElementReferenceException, TimeoutException

from webdriver_utils.config.config import DEFAULT_WAIT_TIMEOUT, POLL_FREQUENCY

logger = logging.getLogger(__name__)

Locator = Tuple[str, str]
ElementsOrLocator = Union[Locator, Sequence[WebElement]]


def _is_locator(mark) -> bool:
    return isinstance(mark, tuple) and len(mark) == 2 and all(isinstance(part, str) for part in mark)


def _candidates(driver: WebDriver, mark: ElementsOrLocator):
    if _is_locator(mark):
        return driver.find_elements(*mark)
    return mark


def _first_matching(driver: WebDriver, mark: ElementsOrLocator, predicate: Callable[[WebElement], bool]):
    for element in _candidates(driver, mark):
        try:
            if predicate(element):
                return element
        except StaleElementReferenceException:
            # A detached element cannot satisfy the condition; keep looking
            continue
    return False


def any_element_visible(mark: ElementsOrLocator):
    """Condition: at least one of the elements (or elements matching a locator) is displayed."""

    def _predicate(driver: WebDriver):
        return _first_matching(driver, mark, lambda element: element.is_displayed())

    return _predicate


def any_element_clickable(mark: ElementsOrLocator):
    """Condition: at least one of the elements is displayed and enabled."""

    def _predicate(driver: WebDriver):
        return _first_matching(driver, mark, lambda element: element.is_displayed() and element.is_enabled())

    return _predicate


def _wait(driver: WebDriver, timeout: float) -> WebDriverWait:
    return WebDriverWait(driver, timeout, poll_frequency=POLL_FREQUENCY)


def wait_for_element_visible(driver: WebDriver, locator: Locator, timeout: float = DEFAULT_WAIT_TIMEOUT):
    """Waits for an element to be visible on the page."""
    try:
        return _wait(driver, timeout).until(EC.visibility_of_element_located(locator))
    except TimeoutException:
        logger.error("Timeout waiting for element located by %s to be visible.", locator)
        raise


def wait_for_element_clickable(driver: WebDriver, locator: Locator, timeout: float = DEFAULT_WAIT_TIMEOUT):
    """Waits for an element to be clickable on the page."""
    try:
        return _wait(driver, timeout).until(EC.element_to_be_clickable(locator))
    except TimeoutException:
        logger.error("Timeout waiting for element located by %s to be clickable.", locator)
        raise


def wait_for_text_in_element(driver: WebDriver, locator: Locator, text: str, timeout: float = DEFAULT_WAIT_TIMEOUT):
    """Waits for specific text to be present in an element."""
    try:
        _wait(driver, timeout).until(EC.text_to_be_present_in_element(locator, text))
    except TimeoutException:
        logger.error("Timeout waiting for text '%s' in element located by %s.", text, locator)
        raise


def wait_for_element_not_present(driver: WebDriver, locator: Locator, timeout: float = DEFAULT_WAIT_TIMEOUT):
    """Waits for an element to no longer be present in the DOM (or to be hidden)."""
    try:
        _wait(driver, timeout).until(EC.invisibility_of_element_located(locator))
    except TimeoutException:
        logger.error("Timeout waiting for element located by %s to disappear or become invisible.", locator)
        raise
