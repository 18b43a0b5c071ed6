# webdriver_utils/config/config.py

import os

from dotenv import load_dotenv

# Pick up a local .env file if present; real environment variables win
load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# --- Explicit waits ---
# Default explicit wait timeout (seconds)
DEFAULT_WAIT_TIMEOUT = float(os.getenv("WEBDRIVER_WAIT_TIMEOUT", "30"))

# How often WebDriverWait re-evaluates its condition (seconds)
POLL_FREQUENCY = float(os.getenv("WEBDRIVER_POLL_FREQUENCY", "0.5"))

# Raise instead of logging when a tagged field cannot be read during wait_until_loaded
STRICT_FIELDS = _env_bool("WEBDRIVER_STRICT_FIELDS", False)


# --- Browser (used by the pytest driver fixture) ---
# Browser type to use for testing (chrome, firefox)
BROWSER = os.getenv("BROWSER", "chrome").lower()

HEADLESS = _env_bool("HEADLESS", True)

# Implicit wait time (seconds). Kept at 0 so explicit waits are not slowed down.
IMPLICIT_WAIT = float(os.getenv("IMPLICIT_WAIT", "0"))


# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
