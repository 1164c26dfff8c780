import logging
import pathlib
import typing

import pydantic
import rich
import yaml
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from beancount_tui.app import EditorApp
from beancount_tui.constants import CONFIG_FILE
from beancount_tui.data_types import EditorConfig
from beancount_tui.environment import LOG_LEVEL_MAP, LogLevel
from beancount_tui.keymap import KeyBindingError, KeyMap
from beancount_tui.ledger import LedgerModel
from beancount_tui.parser import parse_file
from beancount_tui.record import TransactionRecord
from beancount_tui.session import EditorSession

TABLE_HEADER_STYLE = "yellow"
TABLE_COLUMN_STYLE = "cyan"


class ConfigError(Exception):
    def __init__(self, path: pathlib.Path, detail: str):
        self.path = path
        self.detail = detail

    def __str__(self):
        return f"Invalid config file {self.path}: {self.detail}"


def load_config(
    config_path: pathlib.Path | None, required: bool = False
) -> EditorConfig:
    if config_path is None or (not required and not config_path.exists()):
        return EditorConfig()
    try:
        with config_path.open("rt") as fo:
            doc_payload = yaml.safe_load(fo)
    except FileNotFoundError:
        raise ConfigError(config_path, "file not found")
    except yaml.YAMLError as exc:
        raise ConfigError(config_path, str(exc))
    try:
        config = EditorConfig.model_validate(doc_payload or {})
        # catch conflicting key bindings at load time
        KeyMap.from_config(config.keymap)
    except pydantic.ValidationError as exc:
        raise ConfigError(config_path, str(exc))
    except KeyBindingError as exc:
        raise ConfigError(config_path, str(exc))
    return config


def make_summary_table(
    records: typing.Sequence[TransactionRecord], title: str = "Transactions"
) -> Table:
    table = Table(
        title=title,
        box=box.SIMPLE,
        header_style=TABLE_HEADER_STYLE,
        expand=True,
    )
    table.add_column("Line", style=TABLE_COLUMN_STYLE, justify="right")
    table.add_column("Date", style=TABLE_COLUMN_STYLE)
    table.add_column("Flag", style=TABLE_COLUMN_STYLE)
    table.add_column("Payee", style=TABLE_COLUMN_STYLE)
    table.add_column("Narration", style=TABLE_COLUMN_STYLE)
    table.add_column("Postings", style=TABLE_COLUMN_STYLE, justify="right")
    table.add_column("Modified", style=TABLE_COLUMN_STYLE)
    for record in records:
        table.add_row(
            str(record.lineno) if record.lineno is not None else "",
            escape(record.date.text),
            escape(record.flag.text),
            escape(record.payee.text),
            escape(record.narration.text),
            str(len(record.postings)),
            "yes" if record.is_modified else "",
        )
    return table


class EditorEngine:
    log_level: LogLevel = LogLevel.INFO
    logger: logging.Logger = logging.getLogger("beancount_tui")
    file_path: pathlib.Path
    config_path: pathlib.Path
    config: EditorConfig

    def __init__(
        self,
        file_path: str,
        config_path: str | None = None,
        log_level: str = LogLevel.INFO.value,
    ):
        self.file_path = pathlib.Path(file_path).resolve()
        # an explicitly given config file has to exist
        config_required = config_path is not None
        self.config_path = pathlib.Path(config_path or CONFIG_FILE).resolve()
        self.log_level = LogLevel(log_level)

        FORMAT = "%(message)s"
        logging.basicConfig(
            level=LOG_LEVEL_MAP[self.log_level],
            format=FORMAT,
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True))],
            force=True,
        )
        self.config = load_config(self.config_path, required=config_required)
        if self.config_path.exists():
            self.logger.info(
                "Loaded config from [green]%s[/]",
                self.config_path,
                extra={"markup": True, "highlighter": None},
            )

    def load(self) -> LedgerModel:
        directives = parse_file(self.file_path)
        ledger = LedgerModel.from_directives(directives, source=str(self.file_path))
        self.logger.info(
            "Loaded %s transactions out of %s directives from [green]%s[/]",
            len(ledger),
            len(directives),
            escape(str(self.file_path)),
            extra={"markup": True, "highlighter": None},
        )
        return ledger

    def make_session(self) -> EditorSession:
        return EditorSession(self.load(), config=self.config)

    def run(self) -> list[TransactionRecord] | None:
        session = self.make_session()
        records = EditorApp(session).run()
        if records is None:
            self.logger.info("Editor aborted, no transactions handed off")
            return None
        self.logger.info(
            "Handing off %s transactions (%s modified)",
            len(records),
            sum(1 for record in records if record.is_modified),
        )
        return records

    def print_summary(
        self, records: typing.Sequence[TransactionRecord], title: str = "Transactions"
    ):
        console = Console(stderr=True)
        console.print(Padding(make_summary_table(records, title=title), (1, 0, 0, 4)))

    def list_transactions(self) -> list[TransactionRecord]:
        ledger = self.load()
        rich.print(Padding(make_summary_table(ledger.transactions), (1, 0, 0, 4)))
        return ledger.transactions
