# webdriver_utils/page_objects/base_page.py

import logging
from typing import List, Optional, Union

from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from webdriver_utils.config.config import DEFAULT_WAIT_TIMEOUT, POLL_FREQUENCY, STRICT_FIELDS
from webdriver_utils.page_objects.fields import TaggedField, condition_for, tagged_fields
from webdriver_utils.utils.wait_helpers import (
    Locator,
    wait_for_element_visible,
    wait_for_element_clickable,
    wait_for_text_in_element,
    wait_for_element_not_present
)

logger = logging.getLogger(__name__)

ElementOrLocator = Union[WebElement, Locator]

MASKED_TEXT = "****"


class PageObject:
    """Base class for all Page Objects.

    Wraps a WebDriver session and provides:

    * element lookup pass-throughs (``find_element`` / ``find_elements``),
      optionally scoped beneath another element;
    * ``wait_until_loaded``, which blocks until every tagged field of the
      subclass (see :mod:`webdriver_utils.page_objects.fields`) reaches its
      state. Collection fields need only one matching member;
    * logged actions (``click_button``, ``send_keys``) that wait for the
      element to be clickable first.

    Every method that does not return a value returns the page itself so
    calls can be chained.
    """

    def __init__(self, driver: WebDriver, timeout: float = DEFAULT_WAIT_TIMEOUT,
                 poll_frequency: float = POLL_FREQUENCY, strict_fields: Optional[bool] = None):
        self.driver = driver
        self.timeout = timeout
        self.strict_fields = STRICT_FIELDS if strict_fields is None else strict_fields
        self.wait = WebDriverWait(
            driver,
            timeout,
            poll_frequency=poll_frequency,
            ignored_exceptions=(NoSuchElementException, StaleElementReferenceException),
        )

    @property
    def page_name(self) -> str:
        return type(self).__name__

    # --- Navigation ---

    def open(self, url: str):
        """Navigates to a given URL."""
        self.driver.get(url)
        logger.info("Navigated to %s", url)
        return self

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    # --- Location helpers ---

    def find_element(self, locator: Locator, root: Optional[WebElement] = None) -> WebElement:
        """Finds an element using a locator, beneath ``root`` when given."""
        scope = self.driver if root is None else root
        return scope.find_element(*locator)

    def find_elements(self, locator: Locator, root: Optional[WebElement] = None) -> List[WebElement]:
        """Finds multiple elements using a locator, beneath ``root`` when given."""
        scope = self.driver if root is None else root
        return scope.find_elements(*locator)

    # --- Page loading ---

    def wait_until_loaded(self):
        """Wait for each tagged field to reach its state.

        When all of them have, the page is considered loaded. Raises
        TimeoutException for the first field that does not get there in time.
        """
        fields = tagged_fields(type(self))
        logger.debug("Waiting for %d tagged fields on %s", len(fields), self.page_name)
        for field in fields:
            self._wait_for_field(field)
        logger.info("Page %s loaded", self.page_name)
        return self

    def _wait_for_field(self, field: TaggedField):
        if field.element is not None:
            condition = self._descriptor_condition(field)
        else:
            condition = self._held_value_condition(field)
        if condition is None:
            return

        logger.debug("Waiting for %s.%s to be %s", self.page_name, field.name, field.state.value)
        self.wait.until(condition, f"{self.page_name}.{field.name} was not {field.state.value} "
                                   f"after {self.timeout} seconds")

    def _skip_unreadable(self, field: TaggedField, error: Exception):
        if self.strict_fields:
            raise error
        logger.warning("Could not read field %s on %s, skipping it: %s", field.name, self.page_name, error)

    def _descriptor_condition(self, field: TaggedField):
        try:
            field.element.check_root(self)
        except AttributeError as e:
            self._skip_unreadable(field, e)
            return None
        return field.element.condition(self, field.state)

    def _held_value_condition(self, field: TaggedField):
        try:
            value = getattr(self, field.name)
            if value is None:
                raise AttributeError(f"'{self.page_name}.{field.name}' holds no element")
            return condition_for(value, field.state)
        except (AttributeError, TypeError) as e:
            self._skip_unreadable(field, e)
            return None

    # --- Locator waits ---

    def wait_until_visible(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return wait_for_element_visible(self.driver, locator, self.timeout if timeout is None else timeout)

    def wait_until_clickable(self, locator: Locator, timeout: Optional[float] = None) -> WebElement:
        return wait_for_element_clickable(self.driver, locator, self.timeout if timeout is None else timeout)

    def wait_until_text_in_element(self, locator: Locator, text: str, timeout: Optional[float] = None):
        wait_for_text_in_element(self.driver, locator, text, self.timeout if timeout is None else timeout)
        return self

    def wait_until_not_present(self, locator: Locator, timeout: Optional[float] = None):
        wait_for_element_not_present(self.driver, locator, self.timeout if timeout is None else timeout)
        return self

    # --- Page actions ---

    def _clickable(self, element: ElementOrLocator, name: str) -> WebElement:
        return self.wait.until(EC.element_to_be_clickable(element), f"{name} was not clickable "
                                                                    f"after {self.timeout} seconds")

    def click_button(self, element: ElementOrLocator, name: str):
        logger.info("Clicking element %s", name)
        self._clickable(element, name).click()
        logger.info("Done clicking element %s", name)
        return self

    def send_keys(self, element: ElementOrLocator, keys: str, name: str, clear: bool = True, secret: bool = False):
        shown = MASKED_TEXT if secret else keys
        logger.info('Sending text "%s" to %s', shown, name)
        target = self._clickable(element, name)
        if clear:
            target.clear()
        target.send_keys(keys)
        logger.info('Done sending text "%s" to %s', shown, name)
        return self
