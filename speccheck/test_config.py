import logging
import os

import pytest

from speccheck import config


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    # parse_cli_arguments writes the module globals, monkeypatch restores them afterwards
    for name in ("DEBUG", "OUTPUT_DIR", "CALL_TIMEOUT", "MAX_WORKERS"):
        monkeypatch.setattr(config, name, getattr(config, name))
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


def test_defaults():
    args = config.parse_cli_arguments(["run"])
    assert args.command == "run"
    assert not config.DEBUG
    assert config.CALL_TIMEOUT == 10.0
    assert config.MAX_WORKERS == 8
    assert args.backends is None
    assert not args.no_files


def test_run_options(tmp_path):
    args = config.parse_cli_arguments([
        "--debug", "--output-dir", str(tmp_path), "run",
        "--timeout", "2.5", "--workers", "3", "--backend", "libsodium", "--backend", "OpenSSL", "--no-files",
    ])
    assert config.DEBUG
    assert config.OUTPUT_DIR == os.path.abspath(str(tmp_path))
    assert config.CALL_TIMEOUT == 2.5
    assert config.MAX_WORKERS == 3
    assert args.backends == ["libsodium", "OpenSSL"]
    assert args.no_files
    assert config.output_path(config.REPORT_FILE_NAME) == os.path.join(str(tmp_path), "results.md")
    assert logging.getLogger().level == logging.DEBUG


def test_run_against_vector_file():
    assert config.parse_cli_arguments(["run"]).vectors is None
    args = config.parse_cli_arguments(["run", "--vectors", "cases.json"])
    assert args.vectors == "cases.json"
    with pytest.raises(SystemExit):
        config.parse_cli_arguments(["generate", "--vectors", "cases.json"])


def test_generate_has_no_run_options():
    args = config.parse_cli_arguments(["generate"])
    assert args.command == "generate"
    with pytest.raises(SystemExit):
        config.parse_cli_arguments(["generate", "--timeout", "1"])


@pytest.mark.parametrize("argv", [
    [],
    ["unknown"],
    ["run", "--timeout", "0"],
    ["run", "--timeout", "-1"],
    ["run", "--workers", "0"],
    ["run", "--workers", "many"],
])
def test_invalid_arguments(argv):
    with pytest.raises(SystemExit):
        config.parse_cli_arguments(argv)


def test_log_level_constants():
    assert config.DEFAULT_LOG_LEVEL == logging.WARNING
    assert config.DEBUG_LOG_LEVEL == logging.DEBUG
