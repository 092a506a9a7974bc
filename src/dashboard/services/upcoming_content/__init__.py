"""Upcoming content announcements for the admin dashboard."""
from .errors import (
    CapacityExceededError,
    ContentNotFoundError,
    InvalidContentOrderError,
    StoreFailureError,
    UpcomingContentError,
)
from .models import ContentType, OrderSlot, RatingType, UpcomingContent, UpcomingContentData
from .ordering import OrderWrite, parse_content_order, plan_order_shift, resolve_order_conflict
from .registry import COLLECTION_KEY, UpcomingContentRegistry
from .store import SupabaseUpcomingContentStore, UpcomingContentStore
