"""Supabase Client Configuration.

This module provides a centralized configuration for the async Supabase client
used by the upcoming content services. Credentials come from the environment
(or a local .env file during development).
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv
from supabase import AsyncClient, acreate_client

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


class SupabaseConfig:
    """Supabase configuration singleton."""
    _instance = None
    _client: Optional[AsyncClient] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @staticmethod
    def credentials() -> tuple:
        """Return the (url, key) pair, raising if either is missing."""
        url = os.getenv('SUPABASE_URL')
        key = os.getenv('SUPABASE_SERVICE_KEY')
        if not url or not key:
            logger.error("Missing Supabase configuration. Please check your environment variables.")
            raise ValueError("Missing Supabase credentials")
        return url.strip().rstrip('/'), key.strip()

    async def client(self) -> AsyncClient:
        """Get the Supabase client instance, creating it on first use."""
        if self._client is None:
            url, key = self.credentials()
            logger.info(f"Initializing Supabase client with URL: {url}")
            self._client = await acreate_client(url, key)
        return self._client


# Create a global instance
supabase_config = SupabaseConfig()


async def get_async_client() -> AsyncClient:
    """Get the shared async Supabase client.

    Returns:
        AsyncClient: The Supabase client instance.

    Raises:
        ValueError: If SUPABASE_URL or SUPABASE_SERVICE_KEY is not set.
    """
    return await supabase_config.client()
