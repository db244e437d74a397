"""Read-date bookkeeping for status transitions."""

from typing import Optional

from .book_record import BookStatus


def compute_read_date(
    previous_status: BookStatus,
    previous_read_date: Optional[int],
    new_status: BookStatus,
    now: int,
) -> Optional[int]:
    """Return the read_date a record must carry after a status change.

    - Entering READ from any other status stamps ``now``.
    - Any non-READ status clears the date.
    - Staying in READ keeps the previous date.
    """
    if previous_status is not BookStatus.READ and new_status is BookStatus.READ:
        return now
    if new_status is not BookStatus.READ:
        return None
    return previous_read_date
