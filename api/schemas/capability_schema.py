"""
Capability map Pydantic schemas.

Field names follow the JSON wire format (camelCase) served to the
front end.
"""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


class ApplicationListResponse(BaseModel):
    """Filtered list of applications."""

    count: int = Field(..., description="Number of applications returned")
    applications: List[Dict[str, Any]] = Field(..., description="Application records (sheet columns)")

    class Config:
        json_schema_extra = {
            "example": {
                "count": 1,
                "applications": [
                    {"appName": "SAP", "appLifecycleStatus": "Active", "appBusinessOwner": "Finance"}
                ]
            }
        }


class CapabilityItem(BaseModel):
    """One capability (Matrix row)."""

    domain: str = Field("", description="Domain")
    vertical: str = Field("", description="Vertical within the domain")
    functionName: str = Field("", description="Function name")
    functionDescDE: str = Field("", description="German function description")
    functionDescEN: str = Field("", description="English function description")
    applications: Dict[str, int] = Field(default_factory=dict, description="Application name to score")


class CapabilityListResponse(BaseModel):
    """Filtered list of capabilities."""

    count: int = Field(..., description="Number of capabilities returned")
    capabilities: List[CapabilityItem] = Field(..., description="Capabilities in sheet order")

    class Config:
        json_schema_extra = {
            "example": {
                "count": 1,
                "capabilities": [{
                    "domain": "Finance",
                    "vertical": "AP",
                    "functionName": "Invoice Match",
                    "functionDescDE": "Rechnungsabgleich",
                    "functionDescEN": "Match invoices to orders",
                    "applications": {"SAP": 4}
                }]
            }
        }


class CapabilityApplicationsResponse(BaseModel):
    """Applications scored against one function."""

    function: str = Field(..., description="Function name queried")
    filterScore: Optional[int] = Field(None, description="Exact score filter, if any")
    count: int = Field(..., description="Number of applications returned")
    applications: List[Dict[str, Any]] = Field(
        ..., description="Application records with their capabilityScore"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "function": "Invoice Match",
                "filterScore": None,
                "count": 1,
                "applications": [
                    {"appName": "SAP", "appLifecycleStatus": "Active", "capabilityScore": 4}
                ]
            }
        }


class DomainListResponse(BaseModel):
    """All domains in first-seen order."""

    domains: List[str] = Field(..., description="Distinct domains")


class FunctionItem(BaseModel):
    """Function listed under a vertical."""

    name: str = Field("", description="Function name")
    descDE: str = Field("", description="German description")
    descEN: str = Field("", description="English description")


class VerticalsResponse(BaseModel):
    """Verticals of one domain, or the full domain index."""

    domain: Optional[str] = Field(None, description="Domain queried")
    verticals: Union[List[str], Dict[str, List[str]]] = Field(
        ..., description="Verticals of the domain, or domain to verticals"
    )


class FunctionsResponse(BaseModel):
    """Functions of one vertical, or the full vertical index."""

    vertical: Optional[str] = Field(None, description="Vertical queried")
    functions: Union[List[FunctionItem], Dict[str, List[FunctionItem]]] = Field(
        ..., description="Functions of the vertical, or vertical to functions"
    )
