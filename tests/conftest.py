import os

import pytest

from log_insight.config import Config
from log_insight.service import LogService


def _write_log(log_dir, filename, lines, trailing_newline=True):
    path = os.path.join(str(log_dir), filename)
    content = "\n".join(lines)
    if lines and trailing_newline:
        content += "\n"
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path


def _read_raw(path):
    with open(path, "rb") as f:
        return f.read()


@pytest.fixture
def write_log():
    """Write raw lines to a category file and return its path."""
    return _write_log


@pytest.fixture
def read_raw():
    return _read_raw


@pytest.fixture
def scenario_lines():
    return [
        '{"time":"2024-01-01T00:00:00Z","level":"info","msg":"a"}',
        "not json",
        '{"time":"2024-02-01T00:00:00Z","level":"error","msg":"b"}',
    ]


@pytest.fixture
def log_dir(tmp_path):
    d = tmp_path / "logs"
    d.mkdir()
    return d


@pytest.fixture
def config(log_dir):
    return Config(log_dir=str(log_dir), audit_requests=False)


@pytest.fixture
def service(config):
    return LogService(config)


@pytest.fixture
def scenario_file(log_dir, scenario_lines):
    return _write_log(log_dir, "general.log", scenario_lines)
