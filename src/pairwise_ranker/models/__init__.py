from .item import ITEM_SCORE_FIELDS, Item
from .record import ItemRecord, SessionRecord
from .tables import HistoryRow, ItemRow, SessionRow, VoteRow
from .votes import Vote, VoteMatrix

__all__ = [
    "ITEM_SCORE_FIELDS",
    "HistoryRow",
    "Item",
    "ItemRecord",
    "ItemRow",
    "SessionRecord",
    "SessionRow",
    "Vote",
    "VoteMatrix",
    "VoteRow",
]
