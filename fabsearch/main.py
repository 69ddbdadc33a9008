import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fabsearch.api import health_router, manifest_router
from fabsearch.api.manifest import package_version
from fabsearch.config import settings
from fabsearch.mcp.server import mcp

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Building the streamable HTTP app creates the session manager run by lifespan
_sse_app = mcp.sse_app()
_streamable_http_app = mcp.streamable_http_app()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    async with mcp.session_manager.run():
        yield


app = FastAPI(
    title=settings.app_name,
    version=package_version(),
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(manifest_router)

# MCP transports: /sse, /sse/message/ and /mcp
app.router.routes.extend(_sse_app.routes)
app.router.routes.extend(_streamable_http_app.routes)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Read-only tools
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Mcp-Session-Id"],
)


def run() -> None:
    """CLI entry point for serving the app."""
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
