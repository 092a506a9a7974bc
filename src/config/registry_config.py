"""Upcoming content registry configuration."""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a whole number, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {value}")
    return value


@dataclass
class RegistryConfig:
    """Settings for the upcoming content registry."""
    table: str = 'upcoming_content'
    max_items: int = 20
    expiry_grace_days: int = 1
    cache_ttl: int = 3600  # seconds

    @classmethod
    def from_env(cls) -> 'RegistryConfig':
        """Create config from environment variables."""
        return cls(
            table=os.getenv('UPCOMING_CONTENT_TABLE', 'upcoming_content').strip() or 'upcoming_content',
            max_items=_positive_int('UPCOMING_CONTENT_MAX_ITEMS', 20),
            expiry_grace_days=_positive_int('UPCOMING_CONTENT_EXPIRY_DAYS', 1),
            cache_ttl=_positive_int('UPCOMING_CONTENT_CACHE_TTL', 3600),
        )
