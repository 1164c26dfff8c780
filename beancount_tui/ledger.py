import typing

from beancount_tui.data_types import Directive
from beancount_tui.parser import filter_transactions
from beancount_tui.record import TransactionRecord


class NoTransactionsError(Exception):
    def __init__(self, source: str | None = None):
        self.source = source

    def __str__(self):
        if self.source is None:
            return "No transactions to edit"
        return f"No transactions to edit in {self.source}"


class LedgerModel:
    def __init__(self, transactions: list[TransactionRecord]):
        if not transactions:
            raise NoTransactionsError()
        self.transactions = transactions
        self.current_index = 0

    def __len__(self) -> int:
        return len(self.transactions)

    @classmethod
    def from_directives(
        cls, directives: typing.Iterable[Directive], source: str | None = None
    ) -> "LedgerModel":
        records = [
            TransactionRecord.from_parsed(directive)
            for directive in filter_transactions(directives)
        ]
        if not records:
            raise NoTransactionsError(source)
        return cls(records)

    @property
    def current(self) -> TransactionRecord:
        return self.transactions[self.current_index]

    def next_transaction(self) -> bool:
        if self.current_index >= len(self.transactions) - 1:
            return False
        self.current_index += 1
        return True

    def prev_transaction(self) -> bool:
        if self.current_index <= 0:
            return False
        self.current_index -= 1
        return True
