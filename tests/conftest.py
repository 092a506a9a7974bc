"""Shared fixtures for the upcoming content tests."""

import itertools
from collections import Counter
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import pytest

from src.dashboard.services.upcoming_content import (
    OrderSlot,
    StoreFailureError,
    UpcomingContent,
    UpcomingContentData,
    UpcomingContentStore,
)

TODAY = date(2025, 6, 15)


class InMemoryUpcomingContentStore(UpcomingContentStore):
    """Dict-backed store that records every call.

    ``fail_on`` names a method that should raise StoreFailureError once
    ``fail_after`` calls to it have succeeded. ``history`` holds a copy of
    every id -> order mapping right after each write.
    """

    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.calls: List[str] = []
        self.fail_on: Optional[str] = None
        self.fail_after: int = 0
        self.history: List[Dict[str, int]] = []
        self._ids = itertools.count(1)

    def seed(self, order: int, title: str = None, release_date: date = None) -> str:
        content_id = str(next(self._ids))
        self.rows[content_id] = make_data(
            title or f"Title {content_id}",
            order,
            release_date=release_date,
        ).to_row(order)
        self.rows[content_id]['id'] = content_id
        return content_id

    def orders(self) -> Dict[str, int]:
        return {cid: row['content_order'] for cid, row in self.rows.items()}

    def duplicates(self, ignore: Optional[str] = None) -> List[int]:
        """Orders held by more than one record."""
        counts = Counter(row['content_order'] for cid, row in self.rows.items() if cid != ignore)
        return sorted(order for order, n in counts.items() if n > 1)

    def _check(self, name: str):
        self.calls.append(name)
        if self.fail_on == name:
            if self.fail_after > 0:
                self.fail_after -= 1
                return
            raise StoreFailureError(f"{name} failed")

    def _snapshot(self):
        self.history.append(self.orders())

    async def count(self) -> int:
        self._check('count')
        return len(self.rows)

    async def select_slots(self, order_eq=None, order_gte=None, exclude_id=None) -> List[OrderSlot]:
        self._check('select_slots')
        slots = []
        for cid, row in self.rows.items():
            order = row['content_order']
            if order_eq is not None and order != order_eq:
                continue
            if order_gte is not None and order < order_gte:
                continue
            if exclude_id is not None and cid == exclude_id:
                continue
            slots.append(OrderSlot(id=cid, content_order=order))
        return slots

    async def get_order(self, content_id: str) -> Optional[int]:
        self._check('get_order')
        row = self.rows.get(content_id)
        return row['content_order'] if row else None

    async def list_all(self) -> List[UpcomingContent]:
        self._check('list_all')
        rows = sorted(self.rows.values(), key=lambda r: r['content_order'])
        return [UpcomingContent.model_validate(row) for row in rows]

    async def insert(self, row: Dict[str, Any]) -> UpcomingContent:
        self._check('insert')
        content_id = str(next(self._ids))
        self.rows[content_id] = dict(row, id=content_id)
        self._snapshot()
        return UpcomingContent.model_validate(self.rows[content_id])

    async def update(self, content_id: str, fields: Dict[str, Any]) -> Optional[UpcomingContent]:
        self._check('update')
        if content_id not in self.rows:
            return None
        self.rows[content_id].update(fields)
        self._snapshot()
        return UpcomingContent.model_validate(self.rows[content_id])

    async def delete(self, content_id: str) -> None:
        self._check('delete')
        self.rows.pop(content_id, None)

    async def delete_released_before(self, cutoff: date) -> None:
        self._check('delete_released_before')
        cutoff_iso = cutoff.isoformat()
        for cid in [cid for cid, row in self.rows.items() if row['release_date'] < cutoff_iso]:
            del self.rows[cid]


def make_data(title: str = "New Title", order=0, release_date: date = None, **kwargs) -> UpcomingContentData:
    """Build a valid field set with sensible defaults."""
    return UpcomingContentData(
        title=title,
        content_type=kwargs.pop('content_type', 'movie'),
        release_date=release_date or TODAY + timedelta(days=30),
        content_order=str(order),
        genres=kwargs.pop('genres', ['Drama']),
        directors=kwargs.pop('directors', ['Jane Director']),
        writers=kwargs.pop('writers', ['John Writer']),
        cast=kwargs.pop('cast', ['Lead Actor', 'Supporting Actor']),
        description=kwargs.pop('description', 'Coming soon.'),
        thumbnail_url=kwargs.pop('thumbnail_url', 'https://example.com/thumb.jpg'),
        trailer_url=kwargs.pop('trailer_url', 'https://example.com/trailer'),
        **kwargs
    )


@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemoryUpcomingContentStore()


@pytest.fixture
def seeded_store():
    """Store holding four records at orders 0, 1, 2 and 3."""
    s = InMemoryUpcomingContentStore()
    for order in range(4):
        s.seed(order, title=f"Order {order}")
    return s
