"""Record store access for upcoming content.

``UpcomingContentStore`` is the seam between the registry and whatever holds
the rows. ``SupabaseUpcomingContentStore`` is the production implementation on
top of the async supabase-py client.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from functools import wraps
from typing import Any, Dict, List, Optional

import httpx
from postgrest import APIError
from supabase import AsyncClient

from .errors import StoreFailureError
from .models import OrderSlot, UpcomingContent

logger = logging.getLogger(__name__)


class UpcomingContentStore(ABC):
    """Data store gateway used by the registry."""

    @abstractmethod
    async def count(self) -> int:
        """Number of records currently stored."""

    @abstractmethod
    async def select_slots(self, order_eq: Optional[int] = None,
                           order_gte: Optional[int] = None,
                           exclude_id: Optional[str] = None) -> List[OrderSlot]:
        """Select (id, content_order) pairs matching the given filters."""

    @abstractmethod
    async def get_order(self, content_id: str) -> Optional[int]:
        """Current content_order of a record, or None if it does not exist."""

    @abstractmethod
    async def list_all(self) -> List[UpcomingContent]:
        """All records sorted by content_order."""

    @abstractmethod
    async def insert(self, row: Dict[str, Any]) -> UpcomingContent:
        """Insert a row and return the stored record with its new id."""

    @abstractmethod
    async def update(self, content_id: str, fields: Dict[str, Any]) -> Optional[UpcomingContent]:
        """Update one record; returns None if no row matched."""

    @abstractmethod
    async def delete(self, content_id: str) -> None:
        """Delete one record by id."""

    @abstractmethod
    async def delete_released_before(self, cutoff: date) -> None:
        """Delete every record whose release_date is earlier than cutoff."""


def translate_errors(func):
    """Re-raise PostgREST and transport errors as StoreFailureError, keeping the message."""
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except APIError as e:
            logger.error(f"Store error in {func.__name__}: {e.message}")
            raise StoreFailureError(e.message, code=e.code, details=e.details) from e
        except httpx.HTTPError as e:
            logger.error(f"Store unreachable in {func.__name__}: {str(e)}")
            raise StoreFailureError(str(e)) from e
    return wrapper


class SupabaseUpcomingContentStore(UpcomingContentStore):
    """Upcoming content table accessed through supabase-py."""

    SLOT_COLUMNS = 'id, content_order'

    def __init__(self, client: AsyncClient, table: str = 'upcoming_content'):
        self.client = client
        self.table = table

    def _table(self):
        return self.client.table(self.table)

    @translate_errors
    async def count(self) -> int:
        response = await self._table().select('id', count='exact').execute()
        if response.count is not None:
            return response.count
        return len(response.data or [])

    @translate_errors
    async def select_slots(self, order_eq: Optional[int] = None,
                           order_gte: Optional[int] = None,
                           exclude_id: Optional[str] = None) -> List[OrderSlot]:
        query = self._table().select(self.SLOT_COLUMNS)
        if order_eq is not None:
            query = query.eq('content_order', order_eq)
        if order_gte is not None:
            query = query.gte('content_order', order_gte)
        if exclude_id is not None:
            query = query.neq('id', exclude_id)
        response = await query.execute()
        return [OrderSlot(**row) for row in response.data or []]

    @translate_errors
    async def get_order(self, content_id: str) -> Optional[int]:
        response = await self._table()\
            .select('content_order')\
            .eq('id', content_id)\
            .execute()
        if not response.data:
            return None
        return response.data[0]['content_order']

    @translate_errors
    async def list_all(self) -> List[UpcomingContent]:
        response = await self._table()\
            .select('*')\
            .order('content_order')\
            .execute()
        return [UpcomingContent.model_validate(row) for row in response.data or []]

    @translate_errors
    async def insert(self, row: Dict[str, Any]) -> UpcomingContent:
        response = await self._table().insert(row).execute()
        if not response.data:
            raise StoreFailureError("Insert returned no record")
        return UpcomingContent.model_validate(response.data[0])

    @translate_errors
    async def update(self, content_id: str, fields: Dict[str, Any]) -> Optional[UpcomingContent]:
        response = await self._table()\
            .update(fields)\
            .eq('id', content_id)\
            .execute()
        if not response.data:
            return None
        return UpcomingContent.model_validate(response.data[0])

    @translate_errors
    async def delete(self, content_id: str) -> None:
        await self._table().delete().eq('id', content_id).execute()

    @translate_errors
    async def delete_released_before(self, cutoff: date) -> None:
        await self._table()\
            .delete()\
            .lt('release_date', cutoff.isoformat())\
            .execute()
