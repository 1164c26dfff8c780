import typing

from beancount_tui.constants import POSTING_COLUMN_SEP, POSTING_INDENT
from beancount_tui.record import Posting, TransactionRecord


def posting_to_text(posting: Posting) -> str:
    return (
        POSTING_INDENT
        + posting.account.text
        + POSTING_COLUMN_SEP
        + posting.amount.text
        + " "
        + posting.currency.text
    )


def format_transaction(record: TransactionRecord) -> str:
    """Canonical ledger text of a record

    Fixed spacing only, the postings are not aligned into columns.
    """
    line = " ".join(field.text for field in record.metadata)
    return "\n".join([line, *map(posting_to_text, record.postings)])


def format_transactions(records: typing.Iterable[TransactionRecord]) -> str:
    return "\n\n".join(map(format_transaction, records))
