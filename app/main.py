from dotenv import load_dotenv

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

load_dotenv()  # Load .env variables into os.environ for libraries (OpenAI, etc.)

from app.api.api_v1 import router as api_v1  # noqa: E402
from app.core.config import settings  # noqa: E402
from app.core.lifespan import lifespan  # noqa: E402
from app.services.pr_review.errors import AuthError  # noqa: E402


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


@app.exception_handler(AuthError)
async def auth_error_handler(_request: Request, exc: AuthError) -> JSONResponse:
    """Reject unauthenticated webhook deliveries before any review work."""
    return JSONResponse(status_code=401, content={"error": str(exc)})


app.include_router(api_v1)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
