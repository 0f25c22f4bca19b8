from contextlib import asynccontextmanager
from fastapi import FastAPI

from app.core.config import settings
from app.core.llm import build_llm
from app.core.logging import get_logger, setup_logging
from app.db.session import AsyncSessionLocal, engine
from app.integrations.github import GitHubClient
from app.services.pr_review import (
    AIReviewer,
    PRReviewOrchestrator,
    ReviewScheduler,
    ReviewStore,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan function for the FastAPI application.
    Builds the process-wide review collaborators and tears them down on shutdown.
    """
    # 1. Logging
    setup_logging(settings.LOG_LEVEL)

    # 2. Shared clients
    github = GitHubClient(
        token=settings.GITHUB_TOKEN,
        owner=settings.REPOSITORY_OWNER,
        repo=settings.REPOSITORY_NAME,
        base_url=settings.GITHUB_API_URL,
        timeout=settings.GITHUB_TIMEOUT_SECONDS,
    )
    orchestrator = PRReviewOrchestrator(
        github=github,
        reviewer=AIReviewer(build_llm()),
        store=ReviewStore(AsyncSessionLocal),
        allowed_prefixes=settings.ALLOWLISTED_PATHS,
    )

    # 3. Review scheduler used by the webhook route
    app.state.review_scheduler = ReviewScheduler(orchestrator)
    logger.info(
        "%s reviewing %s/%s",
        settings.PROJECT_NAME,
        settings.REPOSITORY_OWNER,
        settings.REPOSITORY_NAME,
    )

    yield

    # 4. Let in-flight review cycles finish
    await app.state.review_scheduler.drain()

    # 5. Close GitHub HTTP client
    await github.aclose()

    # 6. Dispose Database Engine
    await engine.dispose()
