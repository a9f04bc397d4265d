import pytest

import collector_editions.config as config
from collector_editions.logging import AppLogger


@pytest.fixture(autouse=True)
def reset_config():
    """Drop any AppConfig a test installed and rebuild the log sink from the default."""
    yield
    config._config = None
    AppLogger()
