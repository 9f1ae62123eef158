"""
API routes for the loan planner.
"""

from fastapi import APIRouter

from app.api import calculations, plans

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(plans.router, prefix="/plans", tags=["plans"])
