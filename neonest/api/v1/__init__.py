"""API v1 router aggregation."""

from fastapi import APIRouter

from neonest.api.v1.endpoints import babies, health, milestones

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(babies.router, prefix="/babies", tags=["babies"])
api_router.include_router(milestones.router, prefix="/milestones", tags=["milestones"])
