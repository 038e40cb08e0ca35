"""
PageGrade FastAPI Application — main entry point
Heuristic page and content scoring: SEO, AdSense readiness, static-site
readiness, content quality and a tone rewriter.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .middleware.rate_limit import RateLimitMiddleware
from .routers.content_router import router as content_router
from .routers.site_router import router as site_router
from .utils.exceptions import InputValidationError, RetrievalError

settings = get_settings()
logger = logging.getLogger(__name__)

__version__ = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("PageGrade %s starting (%s)", __version__, settings.environment)
    yield
    logger.info("PageGrade shutting down")


app = FastAPI(
    title="PageGrade API",
    description=(
        "📊 **PageGrade** — heuristic page & content scoring\n\n"
        "Features:\n"
        "- On-page SEO health\n"
        "- AdSense readiness (any page / static hosting)\n"
        "- Low-value content detection\n"
        "- Rule-based tone rewriting\n"
    ),
    version=__version__,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)

# Add EXTRA_ALLOWED_ORIGINS env var (comma-separated) for deployed frontends.
_dev_origins = [
    "http://localhost:5173",
    "http://localhost:3000",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:3000",
]
_extra_origins = [o.strip() for o in settings.extra_allowed_origins.split(",") if o.strip()]

ALLOWED_ORIGINS = _extra_origins + (
    _dev_origins if settings.environment != "production" else []
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InputValidationError)
async def validation_error_handler(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RetrievalError)
async def retrieval_error_handler(request: Request, exc: RetrievalError):
    logger.warning("Retrieval failed for %s after %d attempts", exc.url, exc.attempts)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Unable to analyze the website. {exc.message}"},
    )


# Routers
app.include_router(site_router)
app.include_router(content_router)


@app.get("/", tags=["Health"])
async def root():
    return {"service": "PageGrade API", "version": __version__, "status": "running", "docs": "/docs"}


@app.api_route("/health", methods=["GET", "HEAD"], tags=["Health"])
async def health():
    return {
        "status": "ok",
        "environment": settings.environment,
        "retrieval_sources": len(settings.retrieval_sources),
    }
