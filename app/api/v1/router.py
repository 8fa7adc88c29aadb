"""
API v1 router - the relevanssi/v1 namespace.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import search

api_router = APIRouter(prefix="/relevanssi/v1")

api_router.include_router(search.router, prefix="/search", tags=["search"])
