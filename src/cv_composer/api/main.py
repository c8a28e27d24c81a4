"""FastAPI application entry point for the CV Composer API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cv_composer.api.routes import (
    cvs,
    educations,
    health,
    profile,
    public,
    share_links,
    work_experiences,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from cv_composer.data.db import init_db

    init_db()
    yield


app = FastAPI(
    title="CV Composer API",
    description="Master profile, tailored CV documents and privacy-aware share links",
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

app.include_router(health.router)
app.include_router(work_experiences.router, prefix="/api")
app.include_router(educations.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(cvs.router, prefix="/api")
app.include_router(share_links.router, prefix="/api")
app.include_router(public.router, prefix="/api")


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "cv_composer.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
