from loguru import logger

from litedsn.core import (
    ConnectOptions,
    LitedsnConfigException,
    LitedsnException,
    Mode,
    next_in_memory_name,
)

__version__ = "0.1.0"

# Applications opt in with logger.enable("litedsn").
logger.disable("litedsn")


def parse_dsn(dsn):
    return ConnectOptions.from_str(dsn)


__all__ = [
    "ConnectOptions",
    "LitedsnConfigException",
    "LitedsnException",
    "Mode",
    "next_in_memory_name",
    "parse_dsn",
]
