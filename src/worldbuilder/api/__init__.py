"""FastAPI application and REST API endpoints.

This module contains:
- Main FastAPI application configuration
- Cookie/JWT authentication dependency
- Series and book endpoints
- Generated endpoints for every world-building resource kind
"""
