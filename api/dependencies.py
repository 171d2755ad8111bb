"""
Dependency injection utilities for FastAPI.

This module provides the process-wide data cache and the per-request
snapshot dependency.
"""

import logging
from fastapi import Depends

from api.config import settings
from backend.models.schema import CapabilityMapSnapshot
from services.data_cache import DataCache

logger = logging.getLogger(__name__)

# Process-wide cache, populated by the application lifespan
data_cache = DataCache(import_options=settings.import_options())


def get_data_cache() -> DataCache:
    """
    Get the process-wide data cache.

    Usage:
        @app.get("/endpoint")
        def endpoint(cache: DataCache = Depends(get_data_cache)):
            pass
    """
    return data_cache


def get_snapshot(cache: DataCache = Depends(get_data_cache)) -> CapabilityMapSnapshot:
    """
    Get the snapshot a request should read from.

    The reference is taken once at request start; a reload that happens
    while the request runs does not affect it.
    """
    return cache.snapshot()
