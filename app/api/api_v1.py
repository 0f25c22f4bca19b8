from fastapi import APIRouter
from app.api.endpoints import github_router, health_router, reviews_router

router = APIRouter()

router.include_router(github_router, tags=["github"])
router.include_router(health_router, prefix="/health", tags=["health"])
router.include_router(reviews_router, prefix="/reviews", tags=["reviews"])
