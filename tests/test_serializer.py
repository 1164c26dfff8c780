import pathlib
import textwrap

from beancount_tui.ledger import LedgerModel
from beancount_tui.parser import parse_file
from beancount_tui.record import Posting
from beancount_tui.record import TransactionRecord
from beancount_tui.serializer import format_transaction
from beancount_tui.serializer import format_transactions
from beancount_tui.serializer import posting_to_text


def test_format_transaction():
    record = TransactionRecord(
        date="2024-01-01",
        flag="*",
        payee="Test",
        narration="Note",
        postings=[Posting(account="Assets:Cash", amount="10.00", currency="USD")],
    )
    assert (
        format_transaction(record)
        == "2024-01-01 * Test Note\n    Assets:Cash    10.00 USD"
    )


def test_format_transaction_without_postings():
    record = TransactionRecord(date="2024-01-01", narration="Nothing")
    assert format_transaction(record) == "2024-01-01 *  Nothing"


def test_posting_to_text_empty_fields():
    assert posting_to_text(Posting(account="Assets:Cash")) == "    Assets:Cash     "


def test_format_transaction_reflects_edits():
    record = TransactionRecord(
        date="2024-01-01",
        payee="Shop",
        narration="Food",
        postings=[Posting(account="Expenses:Food", amount="1", currency="USD")],
    )
    record.payee.insert(" Inc")
    posting = record.add_posting()
    posting.account.insert("Assets:Cash")
    posting.amount.insert("-1")
    posting.currency.insert("USD")
    assert format_transaction(record) == textwrap.dedent(
        """\
        2024-01-01 * Shop Inc Food
            Expenses:Food    1 USD
            Assets:Cash    -1 USD"""
    )


def test_format_transactions(fixtures_folder: pathlib.Path):
    ledger = LedgerModel.from_directives(parse_file(fixtures_folder / "sample.bean"))
    assert format_transactions(ledger.transactions) == textwrap.dedent(
        """\
        2024-01-05 * Corner Store Groceries
            Expenses:Food    12.50 USD
            Assets:Cash    -12.50 USD

        2024-01-07 !  Rent
            Expenses:Rent    1200.00 USD
            Assets:Bank:Checking     

        2024-01-09 *  Train ticket
            Expenses:Travel    45 EUR
            Assets:Bank:Checking    -49.50 USD"""
    )
