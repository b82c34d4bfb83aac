"""``prismic config`` -- inspect and edit the user configuration file.

The file (:class:`~prismic.models.GlobalConfig`) stores the API endpoint,
where the access token comes from, the link pattern used by ``render`` and
the request and cache settings. Keys are addressed with dot notation, e.g.
``request.timeout`` or ``cache.capacity``.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError

from prismic.config import get_config_dir, load_global_config, save_global_config
from prismic.exceptions import ConfigError, InvalidUsageError, PrismicError
from prismic.models import GlobalConfig
from prismic.output import error, format_response, info, success

config_app = typer.Typer(no_args_is_help=True)

# Optional keys that an empty value resets to "not configured".
_CLEARABLE = {"api_url", "access_token_source"}


def _exit(exc: PrismicError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


def _parent_of(data: dict[str, Any], key: str) -> tuple[dict[str, Any], str]:
    """Return the mapping holding the leaf of dotted *key*, and the leaf name."""
    *path, leaf = key.split(".")
    node = data
    for part in path:
        child = node.get(part)
        if not isinstance(child, dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
        node = child
    if leaf not in node or isinstance(node[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")
    return node, leaf


def _coerce(key: str, current: Any, value: str) -> Any:
    """Convert *value* to the type of the *current* setting."""
    if isinstance(current, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(current, int):
        try:
            return int(value)
        except ValueError:
            raise InvalidUsageError(f"Expected integer for {key}, got: {value}") from None
    if value == "" and key in _CLEARABLE:
        return None
    return value


@config_app.command("show")
def config_show() -> None:
    """Show the user configuration.

    Example::

        prismic config show
        prismic --json config show
    """
    try:
        config = load_global_config()
    except ConfigError as exc:
        raise _exit(exc) from None
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key in dot notation, e.g. 'cache.capacity'."),
    value: str = typer.Argument(help="New value. An empty string clears api_url and access_token_source."),
) -> None:
    """Set one configuration value.

    The value takes the type of the current setting (bool, int or str) and
    the whole file is validated before it is saved, so an invalid value
    leaves the file untouched (exit code 2).

    Example::

        prismic config set api_url https://lesbonneschoses.prismic.io/api
        prismic config set access_token_source env:MY_PRISMIC_TOKEN
        prismic config set link_pattern '/{type}/{slug}'
        prismic config set cache.capacity 500
    """
    try:
        data = load_global_config().model_dump(mode="json")
        parent, leaf = _parent_of(data, key)
        parent[leaf] = _coerce(leaf, parent[leaf], value)
        try:
            config = GlobalConfig.model_validate(data)
        except ValidationError as exc:
            raise InvalidUsageError(f"Validation error: {exc}") from exc
    except PrismicError as exc:
        raise _exit(exc) from None

    save_global_config(config)
    success(f"Set {key} = {parent[leaf]}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Restore the default configuration.

    Example::

        prismic config reset --force
    """
    if not force and not typer.confirm("Reset all config to defaults?"):
        info("Cancelled.")
        raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
