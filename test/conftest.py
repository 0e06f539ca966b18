from os import environ

import pytest
from loguru import logger

from litedsn import parse_dsn


@pytest.fixture(scope="class")
def dsn():
    return environ.get("LITEDSN_DSN", "sqlite://test.db?mode=rw&cache=shared")


@pytest.fixture
def options(dsn):
    return parse_dsn(dsn)


@pytest.fixture
def log_messages(request):
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    logger.enable("litedsn")

    def fin():
        logger.disable("litedsn")
        logger.remove(handler_id)

    request.addfinalizer(fin)
    return messages
