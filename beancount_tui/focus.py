import logging

from beancount_tui.data_types import (
    FocusLocation,
    MetadataField,
    MetadataFocus,
    PostingField,
    PostingFocus,
)
from beancount_tui.ledger import LedgerModel
from beancount_tui.record import TransactionRecord
from beancount_tui.text_field import TextField

DEFAULT_FIELD = MetadataField.PAYEE

logger = logging.getLogger("beancount_tui")


def cycle(value: int, step: int, size: int) -> int:
    return (value + step) % size


class FocusController:
    """Tracks which field of the current transaction receives input.

    Transitions only change the location, never the text of any field. The
    metadata field selected before entering the postings is remembered and
    restored when focus leaves the posting list.
    """

    def __init__(self, location: FocusLocation | None = None):
        self.location: FocusLocation = MetadataFocus(DEFAULT_FIELD)
        self.metadata_field = DEFAULT_FIELD
        if location is not None:
            self.location = location
            if isinstance(location, MetadataFocus):
                self.metadata_field = location.field

    def __repr__(self) -> str:
        return f"FocusController(location={self.location!r})"

    @property
    def in_postings(self) -> bool:
        return isinstance(self.location, PostingFocus)

    def _set_metadata(self, field: MetadataField):
        self.metadata_field = field
        self.location = MetadataFocus(field)

    def next_metadata_field(self) -> bool:
        if not isinstance(self.location, MetadataFocus):
            return False
        self._set_metadata(
            MetadataField(cycle(self.location.field, 1, len(MetadataField)))
        )
        return True

    def prev_metadata_field(self) -> bool:
        if not isinstance(self.location, MetadataFocus):
            return False
        self._set_metadata(
            MetadataField(cycle(self.location.field, -1, len(MetadataField)))
        )
        return True

    def next_posting_field(self) -> bool:
        if not isinstance(self.location, PostingFocus):
            return False
        self.location = PostingFocus(
            self.location.index,
            PostingField(cycle(self.location.field, 1, len(PostingField))),
        )
        return True

    def prev_posting_field(self) -> bool:
        if not isinstance(self.location, PostingFocus):
            return False
        self.location = PostingFocus(
            self.location.index,
            PostingField(cycle(self.location.field, -1, len(PostingField))),
        )
        return True

    def enter_postings(self, from_top: bool, posting_count: int) -> bool:
        if not isinstance(self.location, MetadataFocus) or posting_count <= 0:
            return False
        index = 0 if from_top else posting_count - 1
        self.location = PostingFocus(index, PostingField.ACCOUNT)
        return True

    def move_posting(self, forward: bool, posting_count: int) -> bool:
        """Move to the next or previous posting.

        Moving past either end of the posting list leaves the list and puts
        focus back on the metadata field selected before entering it.
        """
        if not isinstance(self.location, PostingFocus):
            return False
        index = self.location.index + (1 if forward else -1)
        if index < 0 or index >= posting_count:
            self.location = MetadataFocus(self.metadata_field)
        else:
            self.location = PostingFocus(index, self.location.field)
        return True

    def focus_posting(self, index: int, posting_count: int):
        if not 0 <= index < posting_count:
            raise IndexError(f"Posting index {index} out of range")
        self.location = PostingFocus(index, PostingField.ACCOUNT)

    def clamp(self, posting_count: int):
        if not isinstance(self.location, PostingFocus):
            return
        if posting_count <= 0:
            self.location = MetadataFocus(self.metadata_field)
        elif self.location.index >= posting_count:
            self.location = PostingFocus(posting_count - 1, self.location.field)

    def reset(self):
        self._set_metadata(DEFAULT_FIELD)

    def switch_transaction(self, ledger: LedgerModel, forward: bool) -> bool:
        if forward:
            moved = ledger.next_transaction()
        else:
            moved = ledger.prev_transaction()
        if moved:
            self.reset()
            logger.debug("Switched to transaction %s", ledger.current_index)
        return moved

    def active_field(self, record: TransactionRecord) -> TextField:
        location = self.location
        if isinstance(location, MetadataFocus):
            return record.field(location.field)
        elif isinstance(location, PostingFocus):
            return record.postings[location.index].field(location.field)
        else:
            raise ValueError(f"Unexpected focus location {location}")

    def is_focused(
        self, field: MetadataField | PostingField, posting_index: int | None = None
    ) -> bool:
        location = self.location
        if posting_index is None:
            return isinstance(location, MetadataFocus) and location.field == field
        return (
            isinstance(location, PostingFocus)
            and location.index == posting_index
            and location.field == field
        )
