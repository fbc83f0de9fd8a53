"""
Main CLI entry point for Strata.

Loads a config file into a Store, applies command-line defaults, overrides
and aliases, and answers lookups:

    strata --config app.yaml get server.port
    strata --path /etc/myapp --name app --set debug=true show --json
"""

import datetime as _datetime
import json as _json
import pathlib as _pathlib
import typing as _typing

import click as _click
import rich.console as _rich_console
import rich.syntax as _rich_syntax
import yaml as _yaml

import strata
import strata.config.settings as settings
import strata.config.sources as sources
import strata.store as store_mod
import strata.utils.cast as cast

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _parse_assignment(text: str, option: str) -> tuple[str, _typing.Any]:
    """Split KEY=VALUE; VALUE is read as a YAML scalar ("8080" -> 8080)."""
    key, sep, raw = text.partition("=")
    if not sep or not key.strip():
        raise _click.BadParameter(f"expected KEY=VALUE, got {text!r}", param_hint=option)
    try:
        value = _yaml.safe_load(raw)
    except _yaml.YAMLError:
        value = raw
    if value is None:
        value = raw
    return key.strip(), value


def _plain(value: _typing.Any) -> _typing.Any:
    """Convert timestamps and durations to strings for JSON/YAML output."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, (_datetime.date, _datetime.timedelta)):
        return cast.to_string(value)
    return value


def _print_yaml(data: _typing.Any, *, color: bool) -> None:
    yaml_text = _yaml.safe_dump(_plain(data), default_flow_style=False, sort_keys=True)
    if color:
        console = _rich_console.Console()
        console.print(_rich_syntax.Syntax(yaml_text, "yaml", background_color="default"))
    else:
        _click.echo(yaml_text, nl=False)


def _build_store(
    config_file: _pathlib.Path | None,
    config_type: str | None,
    config_name: str | None,
    config_paths: tuple[str, ...],
    verbose: bool,
) -> store_mod.Store:
    options = settings.StoreSettings()
    if verbose:
        options = options.with_overrides(verbose=True)
    store = store_mod.Store(options)

    if config_name:
        store.set_config_name(config_name)
    if config_type:
        store.set_config_type(config_type)
    for path in config_paths:
        store.add_config_path(path)
    if config_file is not None:
        store.set_config_file(config_file)
    return store


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(strata.__version__, "-v", "--version", prog_name="strata")
@_click.option(
    "-c",
    "--config",
    "config_file",
    type=_click.Path(dir_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Config file to load",
)
@_click.option(
    "--type",
    "config_type",
    type=_click.Choice(sources.SUPPORTED_EXTENSIONS, case_sensitive=False),
    default=None,
    help="Config format (default: from the file extension)",
)
@_click.option("--name", "config_name", default=None, help="Config file name to search for")
@_click.option(
    "--path",
    "config_paths",
    multiple=True,
    help="Directory to search for the config file (repeatable)",
)
@_click.option("--set", "overrides", multiple=True, metavar="KEY=VALUE", help="Override a value")
@_click.option("--default", "defaults", multiple=True, metavar="KEY=VALUE", help="Default a value")
@_click.option("--alias", "aliases", multiple=True, metavar="ALIAS=KEY", help="Register an alias")
@_click.option("--verbose", is_flag=True, help="Trace lookups on stderr")
@_click.pass_context
def cli(
    ctx: _click.Context,
    config_file: _pathlib.Path | None,
    config_type: str | None,
    config_name: str | None,
    config_paths: tuple[str, ...],
    overrides: tuple[str, ...],
    defaults: tuple[str, ...],
    aliases: tuple[str, ...],
    verbose: bool,
) -> None:
    """Strata - inspect layered configuration."""
    store = _build_store(config_file, config_type, config_name, config_paths, verbose)

    for text in aliases:
        alias, key = text.partition("=")[::2]
        if not alias or not key:
            raise _click.BadParameter(f"expected ALIAS=KEY, got {text!r}", param_hint="--alias")
        if not store.register_alias(alias, key):
            _click.echo(f"Warning: alias {alias} -> {key} not registered", err=True)

    for text in defaults:
        store.set_default(*_parse_assignment(text, "--default"))

    if config_file is not None or config_paths:
        try:
            store.read_in_config()
        except sources.ConfigError as e:
            raise _click.ClickException(str(e)) from e

    for text in overrides:
        store.set(*_parse_assignment(text, "--set"))

    ctx.ensure_object(dict)
    ctx.obj["store"] = store


@cli.command()
@_click.argument("key")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.pass_context
def get(ctx: _click.Context, key: str, as_json: bool) -> None:
    """Print the resolved value of KEY (exit status 1 if unset)."""
    store: store_mod.Store = ctx.obj["store"]
    value = store.get(key)
    if value is None:
        _click.echo(f"{key}: not set", err=True)
        ctx.exit(1)

    if as_json:
        _click.echo(_json.dumps(_plain(value), indent=2))
    elif isinstance(value, (dict, list)):
        _print_yaml(value, color=False)
    else:
        _click.echo(cast.to_string(value))


@cli.command()
@_click.pass_context
def keys(ctx: _click.Context) -> None:
    """List every known key."""
    store: store_mod.Store = ctx.obj["store"]
    for key in sorted(store.all_keys()):
        _click.echo(key)


@cli.command()
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=False,
    help="Enable/disable syntax highlighting",
)
@_click.pass_context
def show(ctx: _click.Context, as_json: bool, use_color: bool) -> None:
    """Show every key with its resolved value."""
    store: store_mod.Store = ctx.obj["store"]
    all_settings = store.all_settings()
    if as_json:
        _click.echo(_json.dumps(_plain(all_settings), indent=2, sort_keys=True))
    else:
        _print_yaml(all_settings, color=use_color)


@cli.command()
@_click.pass_context
def debug(ctx: _click.Context) -> None:
    """Dump aliases and the raw contents of each layer."""
    store: store_mod.Store = ctx.obj["store"]
    store.debug()


if __name__ == "__main__":
    cli()
