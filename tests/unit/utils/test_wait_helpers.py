# tests/unit/utils/test_wait_helpers.py

import logging

import pytest
from selenium.common.exceptions import NoSuchElementException, StaleElementReferenceException, TimeoutException
from selenium.webdriver.common.by import By

from webdriver_utils.utils import wait_helpers
from webdriver_utils.utils.wait_helpers import (
    any_element_clickable,
    any_element_visible,
    wait_for_element_clickable,
    wait_for_element_not_present,
    wait_for_element_visible,
    wait_for_text_in_element,
)

from conftest import make_element

STATUS = (By.XPATH, '//span[contains(., "Status:")]')
ITEMS = (By.CSS_SELECTOR, ".task-list li")


@pytest.fixture(autouse=True)
def quick_polling(monkeypatch):
    # Keep timeout tests short
    monkeypatch.setattr(wait_helpers, "POLL_FREQUENCY", 0.01)


# --- any_element_visible / any_element_clickable ---

def test_any_element_visible_returns_first_visible(mock_driver):
    hidden = make_element(displayed=False)
    first = make_element(displayed=True)
    second = make_element(displayed=True)

    assert any_element_visible([hidden, first, second])(mock_driver) is first
    second.is_displayed.assert_not_called()


def test_any_element_visible_false_when_all_hidden(mock_driver):
    assert any_element_visible([make_element(displayed=False)])(mock_driver) is False


def test_any_element_visible_skips_stale_elements(mock_driver):
    stale = make_element()
    stale.is_displayed.side_effect = StaleElementReferenceException("detached")
    fresh = make_element(displayed=True)

    assert any_element_visible([stale, fresh])(mock_driver) is fresh


def test_any_element_visible_with_locator_queries_driver(mock_driver):
    visible = make_element(displayed=True)
    mock_driver.find_elements.return_value = [make_element(displayed=False), visible]

    assert any_element_visible(ITEMS)(mock_driver) is visible
    mock_driver.find_elements.assert_called_once_with(By.CSS_SELECTOR, ".task-list li")


def test_any_element_clickable_needs_displayed_and_enabled(mock_driver):
    disabled = make_element(displayed=True, enabled=False)
    hidden = make_element(displayed=False, enabled=True)
    ready = make_element(displayed=True, enabled=True)

    assert any_element_clickable([disabled, hidden])(mock_driver) is False
    assert any_element_clickable([disabled, hidden, ready])(mock_driver) is ready


def test_any_element_clickable_with_locator_and_no_matches(mock_driver):
    mock_driver.find_elements.return_value = []

    assert any_element_clickable(ITEMS)(mock_driver) is False


# --- Locator waits ---

def test_wait_for_element_visible_returns_element(mock_driver):
    element = make_element(displayed=True)
    mock_driver.find_element.return_value = element

    assert wait_for_element_visible(mock_driver, STATUS, timeout=1) is element
    mock_driver.find_element.assert_called_with(*STATUS)


def test_wait_for_element_visible_logs_and_reraises_timeout(mock_driver, caplog):
    mock_driver.find_element.return_value = make_element(displayed=False)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(TimeoutException):
            wait_for_element_visible(mock_driver, STATUS, timeout=0.05)

    assert "to be visible" in caplog.text


def test_wait_for_element_clickable_retries_missing_element(mock_driver):
    button = make_element()
    mock_driver.find_element.side_effect = [NoSuchElementException("not yet"), button]

    assert wait_for_element_clickable(mock_driver, STATUS, timeout=5) is button


def test_wait_for_element_clickable_times_out(mock_driver, caplog):
    mock_driver.find_element.return_value = make_element(enabled=False)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(TimeoutException):
            wait_for_element_clickable(mock_driver, STATUS, timeout=0.05)

    assert "to be clickable" in caplog.text


def test_wait_for_text_in_element(mock_driver):
    mock_driver.find_element.return_value.text = "Status: Completed"

    wait_for_text_in_element(mock_driver, STATUS, "Completed", timeout=1)


def test_wait_for_text_in_element_times_out(mock_driver, caplog):
    mock_driver.find_element.return_value.text = "Status: Processing..."

    with caplog.at_level(logging.ERROR):
        with pytest.raises(TimeoutException):
            wait_for_text_in_element(mock_driver, STATUS, "Completed", timeout=0.05)

    assert "Timeout waiting for text 'Completed'" in caplog.text


def test_wait_for_element_not_present_when_missing(mock_driver):
    mock_driver.find_element.side_effect = NoSuchElementException("gone")

    wait_for_element_not_present(mock_driver, STATUS, timeout=1)


def test_wait_for_element_not_present_times_out_while_visible(mock_driver):
    mock_driver.find_element.return_value = make_element(displayed=True)

    with pytest.raises(TimeoutException):
        wait_for_element_not_present(mock_driver, STATUS, timeout=0.05)
