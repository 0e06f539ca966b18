import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import urlsplit

from loguru import logger

from litedsn.converters import pack_path, pack_query, unpack_path, unpack_query
from litedsn.pragmas import pragma_name

# https://www.sqlite.org/uri.html

SQLITE_SCHEME = "sqlite"
MEMORY_SENTINEL = ":memory:"
IN_MEMORY_NAME_PREFIX = "file:sqlx-in-memory-"

# Longest first, so "sqlite://a.db" doesn't leave "//a.db" behind.
SCHEME_PREFIXES = (f"{SQLITE_SCHEME}://", f"{SQLITE_SCHEME}:")


class LitedsnException(Exception):
    pass


class LitedsnConfigException(LitedsnException):
    """Raised when a connection descriptor can't be turned into connect
    options: a badly encoded path, an unknown query parameter, or an unknown
    value for a known one. These are always mistakes in the descriptor, so
    retrying won't help.
    """

    pass


class _InMemorySequence:
    def __init__(self):
        self._lock = threading.Lock()
        self._seqno = 0

    def next(self):
        with self._lock:
            seqno = self._seqno
            self._seqno += 1
        return f"{IN_MEMORY_NAME_PREFIX}{seqno}"


_IN_MEMORY_DB_SEQ = _InMemorySequence()


def next_in_memory_name():
    """Returns a name for an anonymous in-memory database that no other call
    in this process has returned, so two ":memory:" descriptors never end up
    sharing a cache.
    """
    name = _IN_MEMORY_DB_SEQ.next()
    logger.debug("Allocated in-memory database name {}", name)
    return name


class Mode(Enum):
    MEMORY = "memory"
    READ_WRITE_CREATE = "rwc"
    READ_ONLY = "ro"
    READ_WRITE = "rw"


@dataclass(frozen=True)
class ConnectOptions:
    filename: str = ""
    in_memory: bool = False
    shared_cache: bool = True
    create_if_missing: bool = False
    read_only: bool = False
    immutable: bool = False
    vfs: Optional[str] = None
    pragmas: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def from_str(cls, url):
        for prefix in SCHEME_PREFIXES:
            if url.startswith(prefix):
                url = url[len(prefix) :]
                break

        database, sep, params = url.partition("?")
        return cls.from_db_and_params(database, params if sep else None)

    @classmethod
    def from_db_and_params(cls, database, params=None):
        if database == MEMORY_SENTINEL:
            options = cls(
                filename=next_in_memory_name(), in_memory=True, shared_cache=True
            )
        else:
            # % decode to allow for "?" or "#" in the filename
            try:
                filename = unpack_path(database)
            except UnicodeDecodeError as e:
                logger.debug("Rejected badly encoded database path {!r}", database)
                raise LitedsnConfigException(
                    f"database path {database!r} is not valid percent-encoded UTF-8"
                ) from e
            options = cls(filename=filename)

        if params is not None:
            for key, value in unpack_query(params):
                options = _apply_param(options, key, value)

        logger.debug("Parsed connect options {!r}", options)
        return options

    def pragma(self, key, value):
        """Returns a copy of these options with one more pragma to run when
        the database is opened. Earlier pragmas, including ones with the same
        key, are kept and run first.
        """
        return replace(self, pragmas=self.pragmas + ((key, value),))

    @property
    def mode(self):
        if self.in_memory:
            return Mode.MEMORY
        elif self.create_if_missing:
            return Mode.READ_WRITE_CREATE
        elif self.read_only:
            return Mode.READ_ONLY
        else:
            return Mode.READ_WRITE

    def build_url(self):
        """Returns the canonical descriptor for these options as a
        urllib.parse.SplitResult. Pragmas aren't part of it.
        """
        url = str(self)
        try:
            return urlsplit(url)
        except ValueError as e:
            raise RuntimeError(f"BUG: generated un-parseable URL {url!r}") from e

    def __str__(self):
        params = [
            ("mode", self.mode.value),
            ("cache", "shared" if self.shared_cache else "private"),
        ]
        if self.immutable:
            params.append(("immutable", "true"))
        if self.vfs is not None:
            params.append(("vfs", self.vfs))

        path = pack_path(self.filename)
        if path == MEMORY_SENTINEL:
            # A file literally named ":memory:" must not read back as the
            # anonymous in-memory sentinel.
            path = path.replace(":", "%3A")

        return f"{SQLITE_SCHEME}://{path}?{pack_query(params)}"


def _apply_mode(options, value):
    # ro, rw, rwc or memory, as for sqlite3_open_v2()
    try:
        changes = MODE_VALUES[value]
    except KeyError:
        raise _unknown_value("mode", value)
    return replace(options, **changes)


def _apply_cache(options, value):
    # A shared cache is what lets several connections see the same in-memory
    # database.
    try:
        shared_cache = CACHE_VALUES[value]
    except KeyError:
        raise _unknown_value("cache", value)
    return replace(options, shared_cache=shared_cache)


def _apply_immutable(options, value):
    try:
        immutable = IMMUTABLE_VALUES[value]
    except KeyError:
        raise _unknown_value("immutable", value)
    return replace(options, immutable=immutable)


def _apply_vfs(options, value):
    return replace(options, vfs=value)


# Each mode sets read_only and create_if_missing outright, so the last mode
# parameter decides them. in_memory is never cleared: a generated in-memory
# name must not become an on-disk path.
MODE_VALUES = {
    "ro": {"read_only": True, "create_if_missing": False},
    "rw": {"read_only": False, "create_if_missing": False},
    "rwc": {"read_only": False, "create_if_missing": True},
    "memory": {
        "read_only": False,
        "create_if_missing": False,
        "in_memory": True,
        "shared_cache": True,
    },
}

CACHE_VALUES = {
    "private": False,
    "shared": True,
}

IMMUTABLE_VALUES = {
    "true": True,
    "1": True,
    "false": False,
    "0": False,
}

PARAM_HANDLERS = {
    "mode": _apply_mode,
    "cache": _apply_cache,
    "immutable": _apply_immutable,
    "vfs": _apply_vfs,
}


def _unknown_value(key, value):
    logger.debug("Rejected value {!r} for query parameter {}", value, key)
    return LitedsnConfigException(f"unknown value {value!r} for `{key}`")


def _apply_param(options, key, value):
    handler = PARAM_HANDLERS.get(key)
    if handler is not None:
        return handler(options, value)

    name = pragma_name(key)
    if name is not None:
        logger.debug("Collected pragma {} = {!r}", name, value)
        return options.pragma(name, value)

    logger.debug("Rejected unknown query parameter {}", key)
    raise LitedsnConfigException(
        f"unknown query parameter `{key}` while parsing connection URL"
    )
