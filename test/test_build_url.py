from dataclasses import FrozenInstanceError
from urllib.parse import parse_qsl, urlsplit

import pytest

from litedsn import ConnectOptions, Mode, parse_dsn


def test_returns_the_parsed_url(dsn, options):
    assert options.build_url() == urlsplit(dsn)


def test_str(dsn, options):
    assert str(options) == dsn


@pytest.mark.parametrize(
    "attrs,mode",
    [
        ({}, Mode.READ_WRITE),
        ({"read_only": True}, Mode.READ_ONLY),
        ({"create_if_missing": True}, Mode.READ_WRITE_CREATE),
        ({"create_if_missing": True, "read_only": True}, Mode.READ_WRITE_CREATE),
        ({"in_memory": True, "create_if_missing": True}, Mode.MEMORY),
        ({"in_memory": True, "read_only": True}, Mode.MEMORY),
    ],
)
def test_mode_priority(attrs, mode):
    options = ConnectOptions(filename="a.db", **attrs)
    assert options.mode is mode
    query = dict(parse_qsl(options.build_url().query))
    assert query["mode"] == mode.value


def test_cache_always_emitted():
    url = ConnectOptions(filename="a.db", shared_cache=False).build_url()
    assert url.query == "mode=rw&cache=private"


def test_immutable_only_when_set():
    assert "immutable" not in str(ConnectOptions(filename="a.db"))
    url = ConnectOptions(filename="a.db", immutable=True).build_url()
    assert url.query == "mode=rw&cache=shared&immutable=true"


def test_vfs():
    url = ConnectOptions(filename="a.db", vfs="unix none").build_url()
    assert url.query == "mode=rw&cache=shared&vfs=unix+none"


def test_pragmas_not_serialized():
    options = parse_dsn("sqlite://a.db?pragma_foreign_keys=on&mode=ro")
    assert str(options) == "sqlite://a.db?mode=ro&cache=shared"


def test_absolute_path():
    url = ConnectOptions(filename="/var/lib/app.db").build_url()
    assert url.scheme == "sqlite"
    assert url.netloc == ""
    assert url.path == "/var/lib/app.db"


@pytest.mark.parametrize(
    "filename,encoded",
    [
        ("my db.sqlite", "my%20db.sqlite"),
        ("what?#.db", "what%3F%23.db"),
        ("100%.db", "100%25.db"),
        ('<"{`}>', "%3C%22%7B%60%7D%3E"),
        ("[a].db", "%5Ba%5D.db"),
        ("tab\t.db", "tab%09.db"),
        ("café.db", "caf%C3%A9.db"),
        ("a+b@c:d=e&f.db", "a+b@c:d=e&f.db"),
        (":memory:", "%3Amemory%3A"),
        (":memory:.db", ":memory:.db"),
    ],
)
def test_path_encoding(filename, encoded):
    options = ConnectOptions(filename=filename)
    assert str(options) == f"sqlite://{encoded}?mode=rw&cache=shared"
    assert parse_dsn(str(options)) == options


def test_in_memory_name_serialized():
    options = parse_dsn("sqlite::memory:")
    assert str(options) == f"sqlite://{options.filename}?mode=memory&cache=shared"


def test_options_are_frozen():
    options = ConnectOptions(filename="a.db")
    with pytest.raises(FrozenInstanceError):
        options.read_only = True


def test_file_named_like_memory_sentinel_stays_on_disk():
    options = parse_dsn("sqlite://%3Amemory%3A?mode=rwc")
    assert options.filename == ":memory:"
    assert not options.in_memory

    reparsed = parse_dsn(str(options))
    assert reparsed == options
