"""View-state enumeration for catalog ordering."""

from enum import Enum


class SortOrder(Enum):
    ADDED_DESC = "ADDED_DESC"
    ADDED_ASC = "ADDED_ASC"
    TITLE_ASC = "TITLE_ASC"
    TITLE_DESC = "TITLE_DESC"
    AUTHOR_ASC = "AUTHOR_ASC"
    AUTHOR_DESC = "AUTHOR_DESC"

    @property
    def descending(self) -> bool:
        return self in (SortOrder.ADDED_DESC, SortOrder.TITLE_DESC, SortOrder.AUTHOR_DESC)


DEFAULT_SORT_ORDER = SortOrder.ADDED_DESC
