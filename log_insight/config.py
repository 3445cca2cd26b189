"""Configuration module — frozen dataclass from an optional YAML file plus environment variables."""

import logging
import os
from dataclasses import dataclass, fields

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    log_dir: str = "./logs"
    host: str = "0.0.0.0"
    port: int = 3001
    max_page_size: int = 1000
    log_level: str = "INFO"
    audit_requests: bool = True


def load_yaml(path: str) -> dict:
    """Load a YAML mapping from *path*. Missing or invalid files give {}."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError:
        logger.warning("Invalid YAML in %s, using defaults", path)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    return data


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, then the YAML file, then environment variables."""
    path = path or os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)
    known = {f.name for f in fields(Config)}
    values = {k: v for k, v in load_yaml(path).items() if k in known}

    env = os.environ
    if "LOG_DIR" in env:
        values["log_dir"] = env["LOG_DIR"]
    if "SERVER_HOST" in env:
        values["host"] = env["SERVER_HOST"]
    if "SERVER_PORT" in env:
        values["port"] = env["SERVER_PORT"]
    if "MAX_PAGE_SIZE" in env:
        values["max_page_size"] = env["MAX_PAGE_SIZE"]
    if "LOG_LEVEL" in env:
        values["log_level"] = env["LOG_LEVEL"]
    if "AUDIT_REQUESTS" in env:
        values["audit_requests"] = env["AUDIT_REQUESTS"]

    return Config(
        log_dir=str(values.get("log_dir", Config.log_dir)),
        host=str(values.get("host", Config.host)),
        port=int(values.get("port", Config.port)),
        max_page_size=int(values.get("max_page_size", Config.max_page_size)),
        log_level=str(values.get("log_level", Config.log_level)).upper(),
        audit_requests=_parse_bool(values.get("audit_requests", Config.audit_requests)),
    )
