import logging
import os

import pytest

from excuses.config.logging_setup import setup_logging
from excuses.config.settings import (
    CLIENT_CONFIG,
    CLIENT_ENV,
    DEFAULT_BASE_URL,
    SERVER_CONFIG,
    SERVER_ENV,
    ConfigError,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in list(SERVER_ENV.values()) + list(CLIENT_ENV.values()):
        monkeypatch.delenv(var, raising=False)


def test_defaults_when_no_file(tmp_path) -> None:
    cfg, used = load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])
    assert used is None
    assert cfg["port"] == 1234
    assert cfg["debug"] is False
    assert cfg["base_url"] == DEFAULT_BASE_URL


def test_cwd_is_searched_before_home(tmp_path) -> None:
    cwd, home = tmp_path / "cwd", tmp_path / "home"
    cwd.mkdir()
    home.mkdir()
    (cwd / "excuses-client.yml").write_text("server: cwd:1\n")
    (home / "excuses-client.yml").write_text("server: home:1\n")

    cfg, used = load_config("excuses-client", CLIENT_CONFIG, CLIENT_ENV, search_paths=[cwd, home])
    assert cfg["server"] == "cwd:1"
    assert used == cwd / "excuses-client.yml"

    (cwd / "excuses-client.yml").unlink()
    cfg, _ = load_config("excuses-client", CLIENT_CONFIG, CLIENT_ENV, search_paths=[cwd, home])
    assert cfg["server"] == "home:1"


def test_file_keys_and_base_url_alias(tmp_path) -> None:
    (tmp_path / "excuses-server.yml").write_text("port: 4321\ndebug: true\nbaseURL: https://mirror.example/\n")

    cfg, _ = load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])

    assert cfg["port"] == 4321
    assert cfg["debug"] is True
    assert cfg["base_url"] == "https://mirror.example/"


def test_empty_base_url_falls_back(tmp_path) -> None:
    (tmp_path / "excuses-server.yml").write_text("baseURL: ''\n")
    cfg, _ = load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])
    assert cfg["base_url"] == DEFAULT_BASE_URL


def test_env_overrides_file_and_flags_override_env(tmp_path, monkeypatch) -> None:
    (tmp_path / "excuses-server.yml").write_text("port: 4321\n")
    monkeypatch.setenv("EXCUSES_PORT", "5555")
    monkeypatch.setenv("EXCUSES_DEBUG", "yes")

    cfg, _ = load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])
    assert cfg["port"] == 5555
    assert cfg["debug"] is True

    cfg, _ = load_config(
        "excuses-server",
        SERVER_CONFIG,
        SERVER_ENV,
        overrides={"port": 8080, "debug": None},
        search_paths=[tmp_path],
    )
    assert cfg["port"] == 8080
    assert cfg["debug"] is True


def test_explicit_config_file(tmp_path) -> None:
    path = tmp_path / "custom.yml"
    path.write_text("server: remote:9000\n")
    cfg, used = load_config("excuses-client", CLIENT_CONFIG, CLIENT_ENV, config_file=str(path))
    assert cfg["server"] == "remote:9000"
    assert used == path


def test_missing_explicit_file_is_fatal(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config("excuses-client", CLIENT_CONFIG, CLIENT_ENV, config_file=str(tmp_path / "nope.yml"))


def test_malformed_file_is_fatal(tmp_path) -> None:
    (tmp_path / "excuses-server.yml").write_text("port: [1, 2\n")
    with pytest.raises(ConfigError):
        load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])


def test_non_integer_port_is_fatal(tmp_path) -> None:
    (tmp_path / "excuses-server.yml").write_text("port: http\n")
    with pytest.raises(ConfigError):
        load_config("excuses-server", SERVER_CONFIG, SERVER_ENV, search_paths=[tmp_path])


def test_setup_logging_writes_file(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        path = setup_logging(str(tmp_path / "logs"), "server.log", debug=True, console=False)
        logging.getLogger("excuses.test").debug("hello file")
        for handler in root.handlers:
            handler.flush()
        assert os.path.exists(path)
        with open(path, encoding="utf-8") as f:
            assert "hello file" in f.read()
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_setup_logging_fails_when_dir_cannot_be_created(tmp_path) -> None:
    blocker = tmp_path / "logs"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        setup_logging(str(blocker), "server.log", console=False)
