"""Command-line interface: ``gemctl generate``, ``config-show``, ``config-set``."""

from __future__ import annotations

import json
import logging
import os
from functools import partial
from pathlib import Path
from typing import NoReturn

import click

from gemctl._version import __version__
from gemctl.config.loader import default_config_path, default_log_file, load_config_file
from gemctl.config.models import DEFAULT_LOG_LEVEL
from gemctl.config.resolver import ResolvedConfig, require_credential, resolve_config
from gemctl.config.store import expand_key, set_config_value, write_default_config
from gemctl.dispatcher import PromptDispatcher
from gemctl.errors import ConfigParseFailure, GemctlError
from gemctl.log import build_logger, close_logger
from gemctl.output import write_response
from gemctl.providers import create_provider


def _make_logger(ctx: click.Context, settings: ResolvedConfig | None) -> logging.Logger:
    if settings is None:
        logger = build_logger(DEFAULT_LOG_LEVEL, default_log_file(), verbose=ctx.obj["verbose"])
    else:
        logger = build_logger(settings.log_level, settings.log_file, verbose=ctx.obj["verbose"])
    ctx.call_on_close(partial(close_logger, logger))
    return logger


def _fail(ctx: click.Context, exc: GemctlError, logger: logging.Logger) -> NoReturn:
    logger.error("%s: %s", type(exc).__name__, exc)
    click.echo(f"Error: {exc}", err=True)
    ctx.exit(1)


def _resolve(ctx: click.Context, **overrides: object) -> tuple[ResolvedConfig, logging.Logger]:
    """Load the config file and resolve settings, exiting on a parse failure."""
    try:
        file_config = load_config_file(ctx.obj["config_path"])
    except ConfigParseFailure as exc:
        _fail(ctx, exc, _make_logger(ctx, None))
    settings = resolve_config(file_config, os.environ, **overrides)  # type: ignore[arg-type]
    return settings, _make_logger(ctx, settings)


def _logger_for_write(ctx: click.Context) -> logging.Logger:
    # Commands that rewrite the file still log where the current file says.
    try:
        settings: ResolvedConfig | None = resolve_config(
            load_config_file(ctx.obj["config_path"]), os.environ
        )
    except ConfigParseFailure:
        settings = None
    return _make_logger(ctx, settings)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file (default: ~/.config/gemctl/config.yaml or $GEMCTL_CONFIG).",
)
@click.option("-v", "--verbose", is_flag=True, help="Also write log records to stderr.")
@click.version_option(__version__, prog_name="gemctl")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Send prompts to Gemini (or OpenAI) from the shell."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path.expanduser() if config_path else default_config_path()
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("prompt")
@click.option("--model", default=None, help="Model to use for the selected provider.")
@click.option(
    "--temperature",
    type=click.FloatRange(0.0, 2.0),
    default=None,
    help="Sampling temperature.",
)
@click.option(
    "--provider",
    type=click.Choice(["gemini", "openai"]),
    default=None,
    help="Provider to call (default: api.provider, then gemini).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the response to this file instead of stdout.",
)
@click.pass_context
def generate(
    ctx: click.Context,
    prompt: str,
    model: str | None,
    temperature: float | None,
    provider: str | None,
    output: Path | None,
) -> None:
    """Generate an AI response for PROMPT ("-" reads the prompt from stdin)."""
    settings, logger = _resolve(ctx, model=model, temperature=temperature, provider=provider)
    if prompt == "-":
        prompt = click.get_text_stream("stdin").read()

    try:
        require_credential(settings)
        backend = create_provider(settings)
        try:
            text = PromptDispatcher(backend, settings, logger).dispatch(prompt)
        finally:
            backend.close()
        saved = write_response(text, output)
    except GemctlError as exc:
        _fail(ctx, exc, logger)

    if saved is not None:
        logger.info("Response saved to %s", saved)
        click.echo(f"Response saved to: {saved}")


@cli.command("config-show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show the resolved configuration as JSON (API keys masked)."""
    settings, _ = _resolve(ctx)
    click.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


@cli.command("config-set")
@click.option("--key", required=True, help="Key path (settings.temperature) or setting name.")
@click.option("--value", required=True, help="Value; parsed as a YAML scalar.")
@click.pass_context
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value and save it to the configuration file."""
    logger = _logger_for_write(ctx)
    path: Path = ctx.obj["config_path"]
    try:
        dotted = ".".join(expand_key(key))
        stored = set_config_value(path, key, value)
    except GemctlError as exc:
        _fail(ctx, exc, logger)

    shown = "**********" if dotted.endswith("api_key") and stored else stored
    logger.info("Set %s in %s", dotted, path)
    click.echo(f"Set {dotted} = {shown}")


@cli.command("config-init")
@click.option("--force", is_flag=True, help="Overwrite an existing configuration file.")
@click.pass_context
def config_init(ctx: click.Context, force: bool) -> None:
    """Write a default configuration file."""
    logger = _logger_for_write(ctx)
    try:
        path = write_default_config(ctx.obj["config_path"], force=force)
    except GemctlError as exc:
        _fail(ctx, exc, logger)
    logger.info("Configuration written to %s", path)
    click.echo(f"Configuration written to: {path}")


@cli.command("config-path")
@click.pass_context
def config_path_cmd(ctx: click.Context) -> None:
    """Print the configuration file path in use."""
    click.echo(str(ctx.obj["config_path"]))


def main() -> None:
    cli(obj={}, prog_name="gemctl")
