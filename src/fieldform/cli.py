"""CLI main entry point."""

import json
import logging
import sys
from pathlib import Path

import click

from .config import Config
from .errors import FieldFormException
from .generator import SchemaGenerator
from .log import setup as setup_log
from .triggers import check_notifications
from .validation import validate_against_schema

logger = logging.getLogger(__name__)


def _load_config(ctx) -> Config:
    config_path = ctx.obj["config_path"]
    try:
        cfg = Config.load(config_path)
    except FieldFormException as e:
        raise click.ClickException(str(e))
    setup_log(cfg.log_file)
    return cfg


def _read_json(path: str, what: str):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read {what} from {path}: {e}")


@click.group()
@click.option("--config", "-c", default="config.toml", help="Configuration file path")
@click.pass_context
def cli(ctx, config: str):
    """FieldForm - AI form builder with schema validation and threshold alerts."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


@cli.command(name="validate")
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("data_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def validate(ctx, schema_file: str, data_file: str):
    """Validate DATA_FILE against SCHEMA_FILE and print any threshold alerts."""
    _load_config(ctx)
    schema = _read_json(schema_file, "schema")
    data = _read_json(data_file, "data")

    errors = validate_against_schema(data, schema)
    if errors:
        for error in errors:
            click.echo(f"✗ {error}", err=True)
        sys.exit(1)

    notifications = check_notifications(schema, data)
    click.echo(
        json.dumps(
            {
                "valid": True,
                "notifications": [event.model_dump(mode="json") for event in notifications],
            },
            indent=2,
            ensure_ascii=False,
        )
    )


@cli.command(name="generate")
@click.argument("prompt")
@click.option("--title", "-t", default=None, help="Form title")
@click.pass_context
def generate(ctx, prompt: str, title: str | None):
    """Generate a form schema from a natural-language PROMPT."""
    cfg = _load_config(ctx)
    generator = SchemaGenerator(cfg.ai)

    try:
        schema = generator.generate(prompt, title)
    except FieldFormException as e:
        logger.error(f"Schema generation failed: {e}")
        raise click.ClickException(str(e))

    click.echo(
        json.dumps(
            {"title": schema.title, "fields": schema.to_json_fields()},
            indent=2,
            ensure_ascii=False,
        )
    )


@cli.command(name="serve")
@click.option("--host", "-h", default=None, help="Override host from config")
@click.option("--port", "-p", default=None, type=int, help="Override port from config")
@click.pass_context
def serve(ctx, host, port):
    """Start the HTTP API server."""
    import uvicorn

    from .api import create_app

    cfg = _load_config(ctx)
    host = host or cfg.web.host
    port = port or cfg.web.port

    try:
        app = create_app(cfg)
    except FieldFormException as e:
        logger.error(f"Application error: {e}", exc_info=True)
        raise click.ClickException(str(e))

    logger.info(f"Starting web service on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
