"""Service for managing the upcoming content list.

The registry keeps at most ``max_items`` announcements, each with a unique
``content_order``. Creating or moving a record onto an order that is already
taken shifts the records at and above it up by one. Creating a record also
clears out announcements whose release date has passed by more than the
grace period.
"""

import logging
from datetime import date, timedelta
from typing import Callable, List, Optional

from ....config.registry_config import RegistryConfig
from ...utils.messages import MessageType
from .errors import CapacityExceededError, ContentNotFoundError, UpcomingContentError
from .models import UpcomingContent, UpcomingContentData
from .ordering import parse_content_order, resolve_order_conflict
from .store import UpcomingContentStore

logger = logging.getLogger(__name__)

# Cache key shared with every view of the collection
COLLECTION_KEY = 'upcoming-content'

CREATED_MESSAGE = "Upcoming content announced successfully!"
UPDATED_MESSAGE = "Upcoming content updated successfully!"
DELETED_MESSAGE = "Upcoming content deleted successfully!"
CREATE_FAILED_MESSAGE = "Failed to announce content"
UPDATE_FAILED_MESSAGE = "Failed to update content"
DELETE_FAILED_MESSAGE = "Failed to delete content"


class UpcomingContentRegistry:
    """Create, update and delete upcoming content while keeping orders unique."""

    def __init__(self, store: UpcomingContentStore, config: Optional[RegistryConfig] = None,
                 notify: Optional[Callable[[str, MessageType], None]] = None,
                 invalidate: Optional[Callable[[str], None]] = None,
                 today: Callable[[], date] = date.today):
        """Initialize the registry.

        Args:
            store: Gateway to the upcoming_content records
            config: Registry settings, defaults to RegistryConfig()
            notify: Called with a user-facing message after every operation
            invalidate: Called with COLLECTION_KEY after every successful change
            today: Clock used by the expiry sweep
        """
        self.store = store
        self.config = config or RegistryConfig()
        self.notify = notify
        self.invalidate = invalidate
        self.today = today

    def _succeeded(self, message: str):
        if self.notify:
            self.notify(message, MessageType.SUCCESS)
        if self.invalidate:
            self.invalidate(COLLECTION_KEY)

    def _failed(self, action: str, error: Exception, fallback: str):
        logger.error(f"Error {action} upcoming content: {str(error)}")
        if isinstance(error, UpcomingContentError):
            message = error.message
        else:
            message = str(error)
        if self.notify:
            self.notify(message or fallback, MessageType.ERROR)

    async def list_content(self) -> List[UpcomingContent]:
        """Get all upcoming content sorted by content order."""
        return await self.store.list_all()

    async def create(self, data: UpcomingContentData) -> UpcomingContent:
        """Announce new upcoming content.

        Args:
            data: Fields for the new record, including the requested order

        Returns:
            The created record with its store-assigned id

        Raises:
            CapacityExceededError: If the list is already full
            InvalidContentOrderError: If the requested order is not valid
            StoreFailureError: If any store call fails
        """
        logger.info(f"Creating upcoming content: {data.title}")
        try:
            existing = await self.store.count()
            if existing >= self.config.max_items:
                raise CapacityExceededError(self.config.max_items)

            target_order = parse_content_order(data.content_order)
            await resolve_order_conflict(self.store, target_order)
            record = await self.store.insert(data.to_row(target_order))
        except Exception as e:
            self._failed('creating', e, CREATE_FAILED_MESSAGE)
            raise

        await self.sweep_expired()
        self._succeeded(CREATED_MESSAGE)
        return record

    async def update(self, content_id: str, data: UpcomingContentData) -> UpcomingContent:
        """Replace every field of an existing record, moving it if its order changed.

        Raises:
            ContentNotFoundError: If no record has ``content_id``
            InvalidContentOrderError: If the requested order is not valid
            StoreFailureError: If any store call fails
        """
        logger.info(f"Updating upcoming content: {content_id}")
        try:
            target_order = parse_content_order(data.content_order)
            current_order = await self.store.get_order(content_id)
            if current_order is None:
                raise ContentNotFoundError(content_id)

            if current_order != target_order:
                await resolve_order_conflict(self.store, target_order, exclude_id=content_id)

            record = await self.store.update(content_id, data.to_row(target_order))
            if record is None:
                raise ContentNotFoundError(content_id)
        except Exception as e:
            self._failed('updating', e, UPDATE_FAILED_MESSAGE)
            raise

        self._succeeded(UPDATED_MESSAGE)
        return record

    async def delete(self, content_id: str) -> None:
        """Delete a record. Remaining orders are left as they are."""
        logger.info(f"Deleting upcoming content: {content_id}")
        try:
            await self.store.delete(content_id)
        except Exception as e:
            self._failed('deleting', e, DELETE_FAILED_MESSAGE)
            raise

        self._succeeded(DELETED_MESSAGE)

    async def sweep_expired(self) -> None:
        """Remove announcements released more than the grace period ago.

        Best effort: failures are logged and never raised.
        """
        cutoff = self.today() - timedelta(days=self.config.expiry_grace_days)
        try:
            await self.store.delete_released_before(cutoff)
            logger.debug(f"Removed upcoming content released before {cutoff.isoformat()}")
        except Exception as e:
            logger.warning(f"Failed to clean up expired upcoming content: {str(e)}")
