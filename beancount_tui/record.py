from beancount_parser.data_types import EntryType

from beancount_tui.constants import DEFAULT_FLAG, METADATA_LABELS, POSTING_LABELS
from beancount_tui.data_types import (
    Directive,
    MetadataField,
    ParsedPosting,
    PostingField,
)
from beancount_tui.text_field import TextField


class NotATransactionError(Exception):
    def __init__(self, directive: Directive):
        self.directive = directive

    def __str__(self):
        return (
            f"Can only edit transactions, got {self.directive.type.value.lower()} "
            f"directive at line {self.directive.lineno}"
        )


class Posting:
    def __init__(self, account: str = "", amount: str = "", currency: str = ""):
        self.fields = (
            TextField(account, label=POSTING_LABELS[PostingField.ACCOUNT]),
            TextField(amount, label=POSTING_LABELS[PostingField.AMOUNT]),
            TextField(currency, label=POSTING_LABELS[PostingField.CURRENCY]),
        )

    def __repr__(self) -> str:
        return (
            f"Posting(account={self.account.text!r}, amount={self.amount.text!r}, "
            f"currency={self.currency.text!r})"
        )

    @classmethod
    def from_parsed(cls, posting: ParsedPosting) -> "Posting":
        if posting.amount is None:
            return cls(account=posting.account)
        return cls(
            account=posting.account,
            amount=str(posting.amount.number),
            currency=posting.amount.currency or "",
        )

    def field(self, kind: PostingField) -> TextField:
        return self.fields[kind]

    @property
    def account(self) -> TextField:
        return self.fields[PostingField.ACCOUNT]

    @property
    def amount(self) -> TextField:
        return self.fields[PostingField.AMOUNT]

    @property
    def currency(self) -> TextField:
        return self.fields[PostingField.CURRENCY]


class TransactionRecord:
    """Editable copy of one parsed transaction.

    Built once from the parsed directive and never rebuilt from it again, so
    edits made to its fields live as long as the record does.
    """

    def __init__(
        self,
        date: str = "",
        flag: str = DEFAULT_FLAG,
        payee: str = "",
        narration: str = "",
        postings: list[Posting] | None = None,
        source: Directive | None = None,
    ):
        self.metadata = tuple(
            TextField(value, label=label)
            for value, label in zip((date, flag, payee, narration), METADATA_LABELS)
        )
        self.postings: list[Posting] = postings if postings is not None else []
        self.source = source
        self._loaded = self.snapshot()

    def __repr__(self) -> str:
        return (
            f"TransactionRecord(date={self.date.text!r}, payee={self.payee.text!r}, "
            f"narration={self.narration.text!r}, postings={len(self.postings)})"
        )

    @classmethod
    def from_parsed(cls, directive: Directive) -> "TransactionRecord":
        if directive.type != EntryType.TXN or directive.transaction is None:
            raise NotATransactionError(directive)
        txn = directive.transaction
        return cls(
            date=directive.date.isoformat() if directive.date is not None else "",
            flag=txn.flag if txn.flag is not None else DEFAULT_FLAG,
            payee=txn.payee if txn.payee is not None else "",
            narration=txn.narration if txn.narration is not None else "",
            postings=[Posting.from_parsed(posting) for posting in txn.postings],
            source=directive,
        )

    def field(self, kind: MetadataField) -> TextField:
        return self.metadata[kind]

    @property
    def date(self) -> TextField:
        return self.metadata[MetadataField.DATE]

    @property
    def flag(self) -> TextField:
        return self.metadata[MetadataField.FLAG]

    @property
    def payee(self) -> TextField:
        return self.metadata[MetadataField.PAYEE]

    @property
    def narration(self) -> TextField:
        return self.metadata[MetadataField.NARRATION]

    @property
    def lineno(self) -> int | None:
        return self.source.lineno if self.source is not None else None

    def add_posting(self) -> Posting:
        posting = Posting()
        self.postings.append(posting)
        return posting

    def remove_posting(self, index: int) -> Posting:
        if not 0 <= index < len(self.postings):
            raise IndexError(f"Posting index {index} out of range")
        return self.postings.pop(index)

    def snapshot(self) -> tuple[tuple[str, ...], ...]:
        return (
            tuple(field.text for field in self.metadata),
            *(tuple(field.text for field in posting.fields) for posting in self.postings),
        )

    @property
    def is_modified(self) -> bool:
        return self.snapshot() != self._loaded
