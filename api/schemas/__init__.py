"""
Pydantic schemas for response serialization.

This package contains all Pydantic models used for API responses.
"""

from api.schemas.common import ErrorResponse, HealthCheckResponse
from api.schemas.capability_schema import (
    ApplicationListResponse, CapabilityItem, CapabilityListResponse,
    CapabilityApplicationsResponse, DomainListResponse, FunctionItem,
    VerticalsResponse, FunctionsResponse
)

__all__ = [
    # Common
    'ErrorResponse',
    'HealthCheckResponse',

    # Capability map
    'ApplicationListResponse',
    'CapabilityItem',
    'CapabilityListResponse',
    'CapabilityApplicationsResponse',
    'DomainListResponse',
    'FunctionItem',
    'VerticalsResponse',
    'FunctionsResponse',
]
