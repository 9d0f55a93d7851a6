import logging

import pytest

from tzsource.catalog.local_copy import get_local_copy
from tzsource.config.settings import get_settings


@pytest.fixture(autouse=True)
def reset_process_state(monkeypatch):
    for name in (
        "TZSOURCE_SELECT_LATEST",
        "TZSOURCE_BASE_URL",
        "TZSOURCE_LOG_LEVEL",
        "TZSOURCE_MESSAGE_PANE_CAPACITY",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_local_copy.cache_clear()
    yield
    get_settings.cache_clear()
    get_local_copy.cache_clear()
    logger = logging.getLogger("tzsource")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
