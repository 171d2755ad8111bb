"""
FastAPI application for the capability map.

This package contains the read-only REST API serving the capability map
workbook from memory.
"""

__version__ = "1.0.0"
