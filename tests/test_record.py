import datetime
import decimal
import textwrap

import pytest
from beancount_parser.data_types import EntryType

from beancount_tui.data_types import Amount
from beancount_tui.data_types import Directive
from beancount_tui.data_types import MetadataField
from beancount_tui.data_types import ParsedPosting
from beancount_tui.data_types import ParsedTransaction
from beancount_tui.data_types import PostingField
from beancount_tui.parser import parse_text
from beancount_tui.record import NotATransactionError
from beancount_tui.record import TransactionRecord
from tests.conftest import make_record


def record_texts(record: TransactionRecord) -> tuple:
    return record.snapshot()


@pytest.mark.parametrize(
    "directive, expected",
    [
        (
            Directive(
                type=EntryType.TXN,
                lineno=3,
                date=datetime.date(2024, 1, 1),
                transaction=ParsedTransaction(
                    flag="!",
                    payee="Shop",
                    narration="Things",
                    postings=(
                        ParsedPosting(
                            account="Expenses:Food",
                            amount=Amount(
                                number=decimal.Decimal("10.00"), currency="USD"
                            ),
                        ),
                        ParsedPosting(account="Assets:Cash"),
                    ),
                ),
            ),
            (
                ("2024-01-01", "!", "Shop", "Things"),
                ("Expenses:Food", "10.00", "USD"),
                ("Assets:Cash", "", ""),
            ),
        ),
        (
            Directive(
                type=EntryType.TXN,
                lineno=1,
                date=datetime.date(2024, 2, 29),
                transaction=ParsedTransaction(),
            ),
            (("2024-02-29", "*", "", ""),),
        ),
        (
            Directive(
                type=EntryType.TXN,
                lineno=1,
                date=datetime.date(2024, 3, 1),
                transaction=ParsedTransaction(
                    narration="Only narration",
                    postings=(
                        ParsedPosting(
                            account="Assets:Cash",
                            amount=Amount(number=decimal.Decimal("-5")),
                        ),
                    ),
                ),
            ),
            (
                ("2024-03-01", "*", "", "Only narration"),
                ("Assets:Cash", "-5", ""),
            ),
        ),
    ],
)
def test_from_parsed(directive: Directive, expected: tuple):
    record = TransactionRecord.from_parsed(directive)
    assert record_texts(record) == expected
    assert record.source is directive
    assert record.lineno == directive.lineno
    assert [field.label for field in record.metadata] == [
        "Date",
        "Flag",
        "Payee",
        "Narration",
    ]
    assert not record.is_modified


def test_from_parsed_text():
    (directive,) = parse_text(
        textwrap.dedent(
            """\
            2024-01-05 * "Corner Store" "Groceries"
              Expenses:Food   1,234.50 USD
              Assets:Cash
            """
        )
    )
    record = TransactionRecord.from_parsed(directive)
    assert record.date.text == "2024-01-05"
    assert record.postings[0].amount.text == "1234.50"
    assert record.postings[1].currency.text == ""


@pytest.mark.parametrize(
    "text",
    [
        "2024-01-01 open Assets:Cash",
        "2024-01-01 balance Assets:Cash 1 USD",
        'option "title" "Books"',
    ],
)
def test_from_parsed_not_a_transaction(text: str):
    (directive,) = parse_text(text)
    with pytest.raises(NotATransactionError) as exc_info:
        TransactionRecord.from_parsed(directive)
    assert exc_info.value.directive is directive


def test_field_access():
    record = make_record()
    assert record.field(MetadataField.PAYEE) is record.payee
    assert record.field(MetadataField.DATE) is record.metadata[0]
    posting = record.postings[1]
    assert posting.field(PostingField.ACCOUNT) is posting.account
    assert posting.field(PostingField.AMOUNT).text == "1.00"
    assert posting.field(PostingField.CURRENCY).label == "Currency"


@pytest.mark.parametrize("posting_count", [0, 1, 3])
def test_add_posting(posting_count: int):
    record = make_record(posting_count=posting_count)
    before = record_texts(record)
    posting = record.add_posting()
    assert len(record.postings) == posting_count + 1
    assert record.postings[posting_count] is posting
    assert (posting.account.text, posting.amount.text, posting.currency.text) == (
        "",
        "",
        "",
    )
    assert record_texts(record)[: posting_count + 1] == before
    assert record.is_modified


def test_remove_posting():
    record = make_record(posting_count=3)
    removed = record.remove_posting(1)
    assert removed.account.text == "Assets:Cash1"
    assert [posting.account.text for posting in record.postings] == [
        "Assets:Cash0",
        "Assets:Cash2",
    ]
    with pytest.raises(IndexError):
        record.remove_posting(2)
    with pytest.raises(IndexError):
        record.remove_posting(-1)


def test_is_modified():
    record = make_record()
    assert not record.is_modified
    record.payee.insert("!")
    assert record.is_modified
    record.payee.delete_backward()
    assert not record.is_modified
