"""
Applications router - Application listing and capability joins.

This module provides endpoints for listing applications and for finding the
applications scored against a given function.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_snapshot
from api.schemas.capability_schema import ApplicationListResponse, CapabilityApplicationsResponse
from backend.models.schema import CapabilityMapSnapshot
from services import query_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix='/applications', tags=['applications'])


@router.get('', response_model=ApplicationListResponse)
async def list_applications(
    lifecycle: Optional[str] = Query(None, description="Exact match on appLifecycleStatus"),
    business_owner: Optional[str] = Query(
        None, alias='businessOwner', description="Exact match on appBusinessOwner"
    ),
    domain: Optional[str] = Query(None, description="Only applications scored in this domain"),
    snapshot: CapabilityMapSnapshot = Depends(get_snapshot)
):
    """
    List applications with optional filters.

    **Query Parameters:**
    - `lifecycle`: Lifecycle status (e.g. `Active`)
    - `businessOwner`: Business owner
    - `domain`: Keep applications referenced by any capability in this domain

    Filters are combined with AND. Without filters all applications are
    returned in sheet order.

    **Example:**
    ```bash
    curl "http://localhost:8080/api/applications?lifecycle=Active&domain=Finance"
    ```
    """
    return query_service.list_applications(
        snapshot, lifecycle=lifecycle, business_owner=business_owner, domain=domain
    )


@router.get('/by-capability', response_model=CapabilityApplicationsResponse)
async def applications_by_capability(
    function: Optional[str] = Query(None, description="Function name (required)"),
    score: Optional[int] = Query(None, description="Exact capability score"),
    min_score: Optional[int] = Query(None, alias='minScore', description="Lowest score to keep"),
    max_score: Optional[int] = Query(None, alias='maxScore', description="Highest score to keep"),
    snapshot: CapabilityMapSnapshot = Depends(get_snapshot)
):
    """
    Get the applications scored against a function.

    The first capability with the given function name is used. Each
    application record is returned with its `capabilityScore`.

    **Query Parameters:**
    - `function`: Function name (required)
    - `score`: Keep only this exact score (bounds are ignored when given)
    - `minScore` / `maxScore`: Inclusive score bounds

    **Errors:**
    - 400 if `function` is missing
    - 404 if no capability has that function name

    **Example:**
    ```bash
    curl "http://localhost:8080/api/applications/by-capability?function=Invoice+Match&minScore=3"
    ```
    """
    return query_service.applications_by_capability(
        snapshot, function, score=score, min_score=min_score, max_score=max_score
    )
