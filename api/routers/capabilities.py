"""
Capabilities router - Capabilities and the domain/vertical/function hierarchy.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_snapshot
from api.schemas.capability_schema import (
    CapabilityListResponse, DomainListResponse, FunctionsResponse, VerticalsResponse
)
from backend.models.schema import CapabilityMapSnapshot
from services import query_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=['capabilities'])


@router.get('/capabilities', response_model=CapabilityListResponse)
async def list_capabilities(
    domain: Optional[str] = Query(None, description="Exact domain"),
    vertical: Optional[str] = Query(None, description="Exact vertical"),
    snapshot: CapabilityMapSnapshot = Depends(get_snapshot)
):
    """
    List capabilities filtered by domain and/or vertical.

    **Example:**
    ```bash
    curl "http://localhost:8080/api/capabilities?domain=Finance&vertical=AP"
    ```
    """
    return query_service.list_capabilities(snapshot, domain=domain, vertical=vertical)


@router.get('/domains', response_model=DomainListResponse)
async def list_domains(snapshot: CapabilityMapSnapshot = Depends(get_snapshot)):
    """List domains in the order they first appear in the matrix."""
    return query_service.list_domains(snapshot)


@router.get('/verticals', response_model=VerticalsResponse, response_model_exclude_none=True)
async def list_verticals(
    domain: Optional[str] = Query(None, description="Domain to list verticals for"),
    snapshot: CapabilityMapSnapshot = Depends(get_snapshot)
):
    """
    List verticals.

    With `domain`, returns that domain's verticals (empty for an unknown
    domain). Without it, returns the full domain to verticals mapping.
    """
    return query_service.list_verticals(snapshot, domain=domain)


@router.get('/functions', response_model=FunctionsResponse, response_model_exclude_none=True)
async def list_functions(
    vertical: Optional[str] = Query(None, description="Vertical to list functions for"),
    snapshot: CapabilityMapSnapshot = Depends(get_snapshot)
):
    """
    List functions.

    With `vertical`, returns that vertical's functions (empty for an unknown
    vertical). Without it, returns the full vertical to functions mapping.
    """
    return query_service.list_functions(snapshot, vertical=vertical)
