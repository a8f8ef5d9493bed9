"""Application configuration read from a YAML file."""

from dataclasses import dataclass, field
from pathlib import Path

import yaml


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be found or read."""


@dataclass(frozen=True)
class HTTPServer:
    address: str = ""


@dataclass(frozen=True)
class Config:
    env: str = ""
    storage_path: str = ""
    http_server: HTTPServer = field(default_factory=HTTPServer)


def _get(data, key, kind):
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise ConfigError(f"cannot read config: {key} has the wrong type")
    return value


def load_config(path):
    """Read a configuration file at *path*."""
    try:
        with open(path, encoding="utf-8") as handle:
            top = _get({"document": yaml.safe_load(handle)}, "document", dict)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config: {exc}") from exc
    server = _get(top, "http_server", dict)
    return Config(
        env=_get(top, "env", str),
        storage_path=_get(top, "storage_path", str),
        http_server=HTTPServer(_get(server, "address", str)),
    )


def must_config(root=None):
    """Read config/config.yaml under *root*, the working directory by default."""
    config_path = Path(root if root is not None else Path.cwd()) / "config" / "config.yaml"
    if not config_path.exists():
        raise ConfigError(f"config file does not exist: {config_path}")
    return load_config(config_path)