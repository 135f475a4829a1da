"""Credential lookup and runtime configuration for the chat client."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import List, Mapping, Optional, Tuple

DEFAULT_CONFIG_PATH = "~/.clai.env"
API_KEY_ENV_VAR = "OPENAI_API_KEY"
DEFAULT_MODEL = "gpt-4o"
DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"

_VALUE_STRIP_CHARS = " \t\r\n\"'"


class ConfigError(RuntimeError):
    """Raised when no usable API key can be found."""


def resolve_path(path: str, env: Optional[Mapping[str, str]] = None) -> Path:
    """Expand a leading ``~`` against ``HOME`` from ``env``."""

    env = os.environ if env is None else env
    if not path.startswith("~"):
        return Path(path)

    home = env.get("HOME")
    if not home:
        raise ConfigError(f"Cannot expand {path}: HOME is not set")
    return Path(home) / path.lstrip("~").lstrip("/\\")


def read_key_file(path: Path) -> str:
    """Return the API key assigned in ``path``.

    The ``OPENAI_API_KEY=...`` line wins; otherwise the first ``KEY=value``
    line is used. Blank lines and ``#`` comments are skipped. Quotes and
    surrounding whitespace are trimmed from the value, so
    ``OPENAI_API_KEY="sk-..."`` yields ``sk-...``.
    """

    assignments: List[Tuple[str, str]] = []
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue
        assignments.append((key.strip(), value.strip(_VALUE_STRIP_CHARS)))

    if not assignments:
        raise ConfigError(f"{path} does not contain a KEY=value line")

    key, value = next(
        (item for item in assignments if item[0] == API_KEY_ENV_VAR),
        assignments[0],
    )
    if not value:
        raise ConfigError(f"{path} assigns an empty value to {key or 'its key'}")
    return value


def resolve_api_key(
    env: Optional[Mapping[str, str]] = None,
    *,
    config_path: str = DEFAULT_CONFIG_PATH,
) -> str:
    """Find the API key in the config file, falling back to the environment."""

    env = os.environ if env is None else env

    key_file = resolve_path(config_path, env)
    if key_file.exists():
        return read_key_file(key_file)

    api_key = env.get(API_KEY_ENV_VAR)
    if api_key:
        return api_key

    raise ConfigError(f"API key not set in {config_path} or in env var '{API_KEY_ENV_VAR}'")


@dataclass(frozen=True)
class ClaiConfig:
    """Runtime configuration for the completion client."""

    api_key: str
    model: str = DEFAULT_MODEL
    endpoint: str = DEFAULT_ENDPOINT
    timeout: Optional[float] = None

    @classmethod
    def from_env(
        cls,
        *,
        env: Optional[Mapping[str, str]] = None,
        config_path: str = DEFAULT_CONFIG_PATH,
    ) -> "ClaiConfig":
        """Create a configuration with the key found by :func:`resolve_api_key`.

        Parameters
        ----------
        env:
            Environment mapping to read ``HOME`` and ``OPENAI_API_KEY`` from.
            Defaults to ``os.environ``.
        config_path:
            Location of the key file; ``~`` is expanded against ``HOME``.
        """

        return cls(api_key=resolve_api_key(env, config_path=config_path))


__all__ = [
    "API_KEY_ENV_VAR",
    "ClaiConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "read_key_file",
    "resolve_api_key",
    "resolve_path",
]
