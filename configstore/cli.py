import json
from typing import Any, NoReturn

import click
import structlog

from configstore.config import get_settings
from configstore.errors import ConfigError
from configstore.logging import setup_logging
from configstore.models import kind_of
from configstore.store import ConfigStore

logger = structlog.get_logger(__name__)

_TYPES = {"str": str, "int": int, "float": float, "bool": bool, "json": Any}


def _non_empty(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and not value:
        raise click.BadParameter("must not be empty")
    return value


def _open_store(ctx: click.Context) -> ConfigStore:
    return ConfigStore(ctx.obj["path"])


def _fail(ctx: click.Context, exc: ConfigError) -> NoReturn:
    if ctx.obj["json_errors"]:
        click.echo(exc.to_envelope().model_dump_json(), err=True)
    else:
        click.echo(f"Error: {exc}", err=True)
    ctx.exit(1)


def _dump(value: Any) -> str:
    return json.dumps(value, indent=get_settings().indent, ensure_ascii=False)


@click.group()
@click.option("--file", "-f", "path", type=click.Path(dir_okay=False),
              default=None, help="Config file (defaults to $CONFIGSTORE_PATH or config.json)")
@click.option("--json", "json_errors", is_flag=True, help="Report errors as a JSON envelope")
@click.pass_context
def main(ctx: click.Context, path: str | None, json_errors: bool):
    """Read and update a JSON configuration file."""
    settings = get_settings()
    setup_logging(settings)
    ctx.ensure_object(dict)
    ctx.obj["path"] = path or settings.default_path
    ctx.obj["json_errors"] = json_errors


@main.command()
@click.argument("key", callback=_non_empty)
@click.argument("sub_key", required=False, callback=_non_empty)
@click.option("--type", "type_name", type=click.Choice(list(_TYPES)), default="json",
              show_default=True, help="Type the value is read as")
@click.pass_context
def get(ctx: click.Context, key: str, sub_key: str | None, type_name: str):
    """Print the value of KEY, or of SUB_KEY inside the object at KEY."""
    try:
        value = _open_store(ctx).get(key, sub_key, type_=_TYPES[type_name])
    except ConfigError as e:
        _fail(ctx, e)
    if isinstance(value, str) and type_name != "json":
        click.echo(value)
    else:
        click.echo(_dump(value))


@main.command()
@click.argument("key", callback=_non_empty)
@click.argument("value")
@click.option("--string", "as_string", is_flag=True, help="Store VALUE as a string even if it parses as JSON")
@click.pass_context
def set(ctx: click.Context, key: str, value: str, as_string: bool):
    """Set KEY to VALUE. VALUE is parsed as JSON when possible."""
    parsed: Any = value
    if not as_string:
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            logger.debug("Value is not JSON, storing as string", key=key)
    try:
        ConfigStore(ctx.obj["path"], create=True).set(key, parsed)
    except ConfigError as e:
        _fail(ctx, e)
    click.echo(f"Set {key}.")


@main.command()
@click.option("--kinds", is_flag=True, help="List each key with the kind of its value")
@click.pass_context
def show(ctx: click.Context, kinds: bool):
    """Print the whole configuration document."""
    try:
        document = _open_store(ctx).snapshot
    except ConfigError as e:
        _fail(ctx, e)
    if kinds:
        for key, value in document.items():
            click.echo(f"{key}\t{kind_of(value).value}")
    else:
        click.echo(_dump(document))


if __name__ == "__main__":
    main()
