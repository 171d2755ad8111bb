"""
Service layer for the capability map.

This package contains framework-agnostic ingestion and query logic that can
be used by the CLI, the API, or any other interface.
"""

__version__ = "1.0.0"
