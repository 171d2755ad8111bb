"""
Common Pydantic schemas used across the API.

This module contains shared schemas for errors and health checks.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field
from datetime import datetime


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: str = Field(..., description="Error message")
    detail: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")
    path: Optional[str] = Field(None, description="Request path that caused the error")

    class Config:
        json_schema_extra = {
            "example": {
                "error": "Function 'Invoice Match' not found",
                "detail": {"function": "Invoice Match"},
                "timestamp": "2025-10-15T12:00:00Z",
                "path": "/api/applications/by-capability"
            }
        }


class HealthCheckResponse(BaseModel):
    """Health check response. Field names follow the JSON wire format."""

    status: str = Field(..., description="Service status")
    excelLoaded: bool = Field(..., description="Whether a workbook generation is loaded")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Health check timestamp")
    message: str = Field(..., description="Service banner")
    version: str = Field(..., description="API version")
    generation: int = Field(0, description="Generation number of the loaded snapshot")
    loadedAt: Optional[datetime] = Field(None, description="When the loaded snapshot was built")
    source: Optional[str] = Field(None, description="Workbook the snapshot was built from")
    lastError: Optional[str] = Field(None, description="Error from the most recent failed load")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "OK",
                "excelLoaded": True,
                "timestamp": "2025-10-15T12:00:00Z",
                "message": "Capability Map API v1.0.0",
                "version": "1.0.0",
                "generation": 1,
                "loadedAt": "2025-10-15T11:59:58Z",
                "source": "data/capability_map.xlsx",
                "lastError": None
            }
        }
