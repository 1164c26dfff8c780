import contextlib
import json
import os

import click

from beancount_tui.constants import CONFIG_FILE
from beancount_tui.data_types import EditorConfig
from beancount_tui.engine import ConfigError, EditorEngine
from beancount_tui.environment import (
    LOG_LEVEL_MAP,
    Environment,
    LogLevel,
    pass_env,
)
from beancount_tui.ledger import NoTransactionsError
from beancount_tui.parser import BeancountParseError
from beancount_tui.serializer import format_transactions

FILE_ARGUMENT = click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, readable=True)
)
CONFIG_OPTION = click.option(
    "-c",
    "--config",
    type=click.Path(dir_okay=False),
    default=None,
    help=f"The path to editor config file, {CONFIG_FILE} in the current directory is used if present",
)


@contextlib.contextmanager
def startup_errors(env: Environment):
    try:
        yield
    except (BeancountParseError, NoTransactionsError, ConfigError) as exc:
        env.logger.debug("Startup failed", exc_info=True)
        raise click.ClickException(str(exc))


@click.group()
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(
        list(map(lambda key: key.value, LOG_LEVEL_MAP.keys())), case_sensitive=False
    ),
    default=lambda: os.environ.get("LOG_LEVEL", "INFO"),
)
@pass_env
def cli(env: Environment, log_level: str):
    env.log_level = LogLevel(log_level.lower())


@cli.command(name="edit")
@FILE_ARGUMENT
@CONFIG_OPTION
@click.option(
    "--summary/--no-summary",
    default=False,
    help="Print a table of the handed off transactions to stderr",
)
@pass_env
def edit_cmd(env: Environment, file: str, config: str | None, summary: bool):
    """
    Edit the transactions of a Beancount file interactively:

        > beancount-tui edit books/2024.bean

    Navigate with <tab>/<shift+tab> between fields, <up>/<down> between the
    metadata row and the postings, <ctrl+n>/<ctrl+p> between transactions.
    On confirmed exit (<escape> then <enter>) the edited transactions are
    printed to stdout. The source file is never modified.
    """
    with startup_errors(env):
        engine = EditorEngine(
            file_path=file, config_path=config, log_level=env.log_level.value
        )
        records = engine.run()
    if records is None:
        return
    click.echo(format_transactions(records))
    if summary:
        engine.print_summary(records, title="Edited transactions")


@cli.command(name="list")
@FILE_ARGUMENT
@pass_env
def list_cmd(env: Environment, file: str):
    """List the transactions of a Beancount file"""
    with startup_errors(env):
        engine = EditorEngine(file_path=file, log_level=env.log_level.value)
        engine.list_transactions()


@cli.command(name="format")
@FILE_ARGUMENT
@pass_env
def format_cmd(env: Environment, file: str):
    """Print the transactions of a Beancount file in the editor's output format"""
    with startup_errors(env):
        engine = EditorEngine(file_path=file, log_level=env.log_level.value)
        ledger = engine.load()
    click.echo(format_transactions(ledger.transactions))


@cli.command(name="schema")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default="schema.json",
    help="The path to write the config JSON schema to",
)
def schema_cmd(output: str):
    with open(output, "w") as f:
        f.write(json.dumps(EditorConfig.model_json_schema(), indent=2))


if __name__ == "__main__":
    cli()
