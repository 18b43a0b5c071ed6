# tests/conftest.py

from unittest.mock import MagicMock

import pytest
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement


def make_element(displayed: bool = True, enabled: bool = True) -> MagicMock:
    """A WebElement stand-in; spec= keeps isinstance(..., WebElement) checks working."""
    element = MagicMock(spec=WebElement)
    element.is_displayed.return_value = displayed
    element.is_enabled.return_value = enabled
    return element


@pytest.fixture
def mock_driver():
    return MagicMock(spec=WebDriver)
