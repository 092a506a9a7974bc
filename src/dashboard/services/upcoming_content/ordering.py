"""Content order conflict resolution.

Upcoming content is sorted by a user-assigned ``content_order``. When a record
is created at, or moved to, an order another record already holds, every
record at or above that order moves up by one to make room. The planning step
is a pure function over a snapshot of (id, content_order) pairs so it can be
tested without a store; ``resolve_order_conflict`` reads the snapshot from the
store and applies the writes one record at a time.

The read-then-write sequence is not atomic. Two admins editing at the same
time can still end up with duplicate orders.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .errors import InvalidContentOrderError
from .models import OrderSlot
from .store import UpcomingContentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderWrite:
    """A single record move produced by the shift planner."""
    id: str
    old_order: int
    new_order: int


def parse_content_order(value: Union[str, int]) -> int:
    """Parse a caller-supplied content order.

    Args:
        value: Order as entered, usually text from a form field

    Returns:
        The order as a non-negative integer

    Raises:
        InvalidContentOrderError: If the value is not a whole number >= 0
    """
    if isinstance(value, bool):
        raise InvalidContentOrderError()
    if isinstance(value, int):
        order = value
    else:
        try:
            order = int(str(value).strip())
        except (TypeError, ValueError):
            raise InvalidContentOrderError(
                f"Content order must be a non-negative whole number, got {value!r}"
            )
    if order < 0:
        raise InvalidContentOrderError(
            f"Content order must be a non-negative whole number, got {order}"
        )
    return order


def plan_order_shift(slots: Iterable[OrderSlot], target_order: int,
                     exclude_id: Optional[str] = None) -> List[OrderWrite]:
    """Work out which records must move so ``target_order`` becomes free.

    Args:
        slots: Snapshot of current (id, content_order) pairs
        target_order: Order the caller wants for its own record
        exclude_id: Record being moved; never conflicts and never shifts

    Returns:
        Writes to apply, highest current order first. Empty if nothing
        else holds ``target_order``.
    """
    candidates = [s for s in slots if s.id != exclude_id]
    if not any(s.content_order == target_order for s in candidates):
        return []

    to_shift = [s for s in candidates if s.content_order >= target_order]
    # Highest first, so each record moves into an order nobody holds any more
    to_shift.sort(key=lambda s: s.content_order, reverse=True)
    return [OrderWrite(id=s.id, old_order=s.content_order, new_order=s.content_order + 1)
            for s in to_shift]


async def resolve_order_conflict(store: UpcomingContentStore, target_order: int,
                                 exclude_id: Optional[str] = None) -> List[OrderWrite]:
    """Free ``target_order`` in the store by shifting conflicting records up.

    Args:
        store: UpcomingContentStore to read from and write to
        target_order: Order the caller is about to assign
        exclude_id: Id of the record being repositioned, if any

    Returns:
        The writes that were applied

    Raises:
        StoreFailureError: If any read or write fails. Writes already
            applied are not rolled back.
    """
    conflicts = await store.select_slots(order_eq=target_order, exclude_id=exclude_id)
    if not conflicts:
        return []

    slots = await store.select_slots(order_gte=target_order, exclude_id=exclude_id)
    writes = plan_order_shift(slots, target_order, exclude_id=exclude_id)
    logger.info(f"Order {target_order} is taken, shifting {len(writes)} record(s) up")

    applied = []
    for write in writes:
        try:
            await store.update(write.id, {'content_order': write.new_order})
        except Exception:
            if applied:
                logger.error(
                    f"Order shift stopped after {len(applied)} of {len(writes)} writes; "
                    f"orders >= {target_order} may now be inconsistent"
                )
            raise
        logger.debug(f"Moved {write.id} from {write.old_order} to {write.new_order}")
        applied.append(write)
    return applied
