"""API v1 routes."""

from fastapi import APIRouter

from codefix.api.v1 import health, tickets

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])
