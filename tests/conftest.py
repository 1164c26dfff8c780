import pathlib
import typing

import pytest

from beancount_tui.ledger import LedgerModel
from beancount_tui.record import Posting, TransactionRecord
from beancount_tui.session import EditorSession

TEST_PACKAGE_FOLDER = pathlib.Path(__file__).parent
FIXTURE_FOLDER = TEST_PACKAGE_FOLDER / "fixtures"


@pytest.fixture
def fixtures_folder() -> pathlib.Path:
    return FIXTURE_FOLDER


@pytest.fixture
def construct_files() -> (
    typing.Callable[[pathlib.Path, typing.Dict[str, typing.Any]], None]
):
    def _construct_files(workdir: pathlib.Path, spec: typing.Dict[str, typing.Any]):
        for name, value in spec.items():
            if isinstance(value, str):
                with open(workdir / name, "wt") as fo:
                    fo.write(value)
            elif isinstance(value, dict):
                sub_dir = workdir / name
                sub_dir.mkdir()
                _construct_files(sub_dir, value)
            else:
                raise ValueError()

    return _construct_files


def make_record(payee: str = "Test", posting_count: int = 2) -> TransactionRecord:
    return TransactionRecord(
        date="2024-01-01",
        flag="*",
        payee=payee,
        narration="Note",
        postings=[
            Posting(account=f"Assets:Cash{index}", amount=f"{index}.00", currency="USD")
            for index in range(posting_count)
        ],
    )


@pytest.fixture
def ledger() -> LedgerModel:
    return LedgerModel(
        [
            make_record("First"),
            make_record("Second", posting_count=3),
            make_record("Third", posting_count=0),
        ]
    )


@pytest.fixture
def session(ledger: LedgerModel) -> EditorSession:
    return EditorSession(ledger)
