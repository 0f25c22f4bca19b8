from .github import router as github_router
from .health import router as health_router
from .reviews import router as reviews_router

__all__ = ["github_router", "health_router", "reviews_router"]
