"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from econdash.api.routes import briefing, economy, housing, prices, treasury
from econdash.config import settings
from econdash.dashboards.briefing import FALLBACK_BRIEFING, BriefingUnavailable
from econdash.dashboards.pipeline import AssemblyError
from econdash.data.cache import build_cache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.state.cache = build_cache(settings)
    yield
    close = getattr(app.state.cache, "close", None)
    if close is not None:
        await close()


app = FastAPI(
    title="EconDash",
    description="Economic indicators dashboard API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(economy.router)
app.include_router(housing.router)
app.include_router(treasury.router)
app.include_router(prices.router)
app.include_router(briefing.router)


@app.exception_handler(AssemblyError)
async def assembly_error_handler(request: Request, exc: AssemblyError):
    logger.error("Dashboard %s failed: %s", exc.dashboard, exc.cause)
    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to fetch {exc.dashboard} data", "details": str(exc.cause)},
    )


@app.exception_handler(BriefingUnavailable)
async def briefing_unavailable_handler(request: Request, exc: BriefingUnavailable):
    logger.error("Briefing unavailable: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Failed to generate briefing",
            "details": str(exc),
            "fallback": True,
            "briefing": FALLBACK_BRIEFING,
        },
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
