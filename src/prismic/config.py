"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles the persistent configuration of the ``prismic`` command
line:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.prismic/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **Global config** -- A single :class:`~prismic.models.GlobalConfig`
  JSON file storing the API endpoint, token source and defaults.
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.
* **Credential resolution** -- :func:`resolve_credential` reads the access
  token from env vars, files, or an interactive prompt.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
import tempfile
from pathlib import Path
from typing import Any, NamedTuple, Optional

from pydantic import ValidationError

from prismic.exceptions import ConfigError
from prismic.models import GlobalConfig

_APP_NAME = "prismic"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "prismic.json"

ENV_API_URL = "PRISMIC_API_URL"
ENV_ACCESS_TOKEN = "PRISMIC_ACCESS_TOKEN"


# --- Directories ---


def _is_xdg_platform() -> bool:
    """Return True on Linux and the BSDs, which follow the XDG Base Directory layout."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _fallback_base_dir() -> Path:
    """``~/.prismic``, used for every directory on macOS and Windows."""
    return Path.home() / f".{_APP_NAME}"


def _app_dir(xdg_var: str, *home_default: str) -> Path:
    """Resolve and create one of the application's directories.

    On XDG platforms this is ``$<xdg_var>/prismic``, with ``$<xdg_var>``
    defaulting to ``~/<home_default...>`` when unset or empty.
    """
    if _is_xdg_platform():
        base = os.environ.get(xdg_var) or Path.home().joinpath(*home_default)
        path = Path(base) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Directory holding ``config.json`` (``~/.config/prismic`` by default)."""
    return _app_dir("XDG_CONFIG_HOME", ".config")


def get_data_dir() -> Path:
    """Directory holding crash logs (``~/.local/share/prismic`` by default)."""
    return _app_dir("XDG_DATA_HOME", ".local", "share")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* so readers never see a partial file.

    The text goes to a temporary sibling first, is flushed to disk and then
    renamed over *path* with ``os.replace``. The temporary file is removed if
    anything fails, including ``KeyboardInterrupt``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise
    try:
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the config directory.

    Returns:
        The deserialised :class:`~prismic.models.GlobalConfig`. If the file
        does not exist, a default instance is returned.

    Raises:
        ConfigError: If the file contains invalid JSON or fails validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local overrides from ``./prismic.json``.

    The file holds a subset of :class:`~prismic.models.GlobalConfig` keys
    (typically ``api_url`` and ``link_pattern``) so that a site's repository
    can pin which API it renders.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


# --- Precedence resolution ---


class ResolvedConfig(NamedTuple):
    """The effective configuration plus the resolved access token."""

    config: GlobalConfig
    access_token: Optional[str]


def resolve_config(
    cli_api_url: Optional[str] = None,
    cli_access_token: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> ResolvedConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_api_url``, ``cli_access_token``, ``cli_format``)
        2. Environment variables (``PRISMIC_API_URL``, ``PRISMIC_ACCESS_TOKEN``)
        3. Project config (``./prismic.json``)
        4. User config (``~/.config/prismic/config.json``)
        5. Defaults

    The access token is only read from ``access_token_source`` when neither
    the CLI nor the environment provides one.

    Raises:
        ConfigError: If a config file is invalid or the token source fails.
    """
    # 5 + 4. Global config fills in defaults automatically
    global_cfg = load_global_config()

    # 3. Project-local overrides
    project = load_project_config()
    if project:
        merged = global_cfg.model_dump(mode="json")
        merged.update(project)
        try:
            global_cfg = GlobalConfig.model_validate(merged)
        except ValidationError as exc:
            raise ConfigError(f"Invalid project config: {exc}") from exc

    # 2. Environment, 1. CLI
    env_url = os.environ.get(ENV_API_URL)
    if cli_api_url is not None:
        global_cfg.api_url = cli_api_url
    elif env_url:
        global_cfg.api_url = env_url

    if cli_format is not None:
        global_cfg.output.format = cli_format

    token = cli_access_token or os.environ.get(ENV_ACCESS_TOKEN) or None
    if token is None and global_cfg.access_token_source:
        token = resolve_credential(global_cfg.access_token_source)

    return ResolvedConfig(global_cfg, token)


# --- Access token sources ---


def resolve_credential(source: str) -> str:
    """Read the access token described by *source*.

    ``env:VAR`` reads an environment variable, ``file:PATH`` reads a file
    (``~`` expanded, surrounding whitespace stripped) and ``prompt`` asks on
    the terminal without echoing.

    Raises:
        ConfigError: If the source is unknown or cannot be read.
    """
    kind, _, target = source.partition(":")

    if kind == "env" and target:
        value = os.environ.get(target)
        if value is None:
            raise ConfigError(f"Environment variable '{target}' is not set (source: {source})")
        return value

    if kind == "file" and target:
        path = Path(target).expanduser()
        if not path.is_file():
            raise ConfigError(f"Token file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read token file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError("Cannot prompt for the access token: stdin is not a TTY")
        return getpass.getpass("Access token: ")

    raise ConfigError(f"Unknown credential source format: {source}")
