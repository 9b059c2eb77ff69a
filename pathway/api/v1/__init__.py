"""
API v1 routes.
"""

from fastapi import APIRouter

from pathway.api.v1 import catalog, gates, learner

router = APIRouter()

router.include_router(learner.router, prefix="/learner", tags=["Learner"])
router.include_router(gates.router, prefix="/gates", tags=["Gates"])
router.include_router(catalog.router, prefix="/catalog", tags=["Catalog"])
