from fastapi import APIRouter

from authorcheck.api.routes import analyze, external

router = APIRouter()
router.include_router(external.router, tags=["external"])
router.include_router(analyze.router, tags=["analyze"])
