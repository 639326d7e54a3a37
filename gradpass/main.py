import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from gradpass.database import init_db
from gradpass.config import get_settings
from gradpass.exceptions import GradpassError
from gradpass.middleware.rate_limit import limiter
from gradpass.middleware.security import setup_security_middleware
from gradpass.routers import (
    issuers_router,
    tickets_router,
    validation_router
)

settings = get_settings()
logger = logging.getLogger(__name__)


def init_logging():
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_logging()
    init_db()
    logger.info("gradpass started")
    yield


app = FastAPI(
    title="gradpass",
    description="Graduation ticket issuance and door validation",
    version="1.0.0",
    lifespan=lifespan
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

setup_security_middleware(app, allowed_hosts=settings.allowed_hosts)

app.include_router(issuers_router)
app.include_router(tickets_router)
app.include_router(validation_router)


@app.exception_handler(GradpassError)
async def gradpass_error_handler(request: Request, exc: GradpassError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error_code": exc.error_code, "detail": exc.detail}
    )


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
