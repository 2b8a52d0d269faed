"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.polls import router as polls_router

router = APIRouter()

router.include_router(polls_router, prefix="/polls", tags=["Polls"])
