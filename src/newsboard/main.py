"""FastAPI application for newsboard."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from newsboard import __version__
from newsboard.api.routes import router
from newsboard.config import get_settings
from newsboard.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    setup_logging(get_settings().log_level)
    get_logger(__name__).info("newsboard starting", version=__version__)
    yield


app = FastAPI(title="newsboard", version=__version__, lifespan=lifespan)
app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    """Point clients at the API and its docs."""
    return {"name": "newsboard", "version": __version__, "api": router.prefix, "docs": "/docs"}
