# webdriver_utils/fixtures/plugin.py

# Registered as a pytest plugin (see the pytest11 entry point in pyproject.toml),
# so any suite with webdriver-utils installed gets the `driver` fixture.

import logging
from typing import Optional

import pytest
from selenium import webdriver
from selenium.webdriver.remote.webdriver import WebDriver
# From webdriver_manager for easier driver handling
from selenium.webdriver.chrome.service import Service as ChromeService
from webdriver_manager.chrome import ChromeDriverManager
from selenium.webdriver.firefox.service import Service as FirefoxService
from webdriver_manager.firefox import GeckoDriverManager

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chrome", "firefox")


def create_driver(browser: Optional[str] = None, headless: Optional[bool] = None,
                  implicit_wait: Optional[float] = None) -> WebDriver:
    """Starts a local browser session, downloading its driver binary if needed.

    Unset arguments come from webdriver_utils.config, imported here rather than at
    module level so loading this plugin does not read the project's .env file.
    """
    from webdriver_utils.config import config

    browser = (config.BROWSER if browser is None else browser).lower()
    headless = config.HEADLESS if headless is None else headless
    implicit_wait = config.IMPLICIT_WAIT if implicit_wait is None else implicit_wait
    logger.info("Setting up WebDriver for browser: %s (headless=%s)", browser, headless)

    if browser == "chrome":
        options = webdriver.ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
        service = ChromeService(ChromeDriverManager().install())
        driver = webdriver.Chrome(service=service, options=options)
    elif browser == "firefox":
        options = webdriver.FirefoxOptions()
        if headless:
            options.add_argument("-headless")
        service = FirefoxService(GeckoDriverManager().install())
        driver = webdriver.Firefox(service=service, options=options)
    else:
        raise ValueError(f"Unsupported browser: {browser} (expected one of {', '.join(SUPPORTED_BROWSERS)})")

    driver.implicitly_wait(implicit_wait)

    if not headless:
        driver.maximize_window()

    return driver


def driver_session(**kwargs):
    """Yields a driver from create_driver() and quits it once the caller is done."""
    driver = create_driver(**kwargs)
    try:
        yield driver
    finally:
        logger.info("Quitting WebDriver.")
        driver.quit()


@pytest.fixture(scope="session") # Fixture scope: "session" means driver is created once per test session
def driver():
    """Provides a WebDriver instance for tests."""
    yield from driver_session()
