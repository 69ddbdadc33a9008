"""
MCP discovery manifest.

Serves a static JSON document describing the server and where its
transports live. Only GET and HEAD are allowed; any other method gets a
405 with an Allow header.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version

from fastapi import APIRouter, Request
from pydantic import BaseModel

from fabsearch.config import settings
from fabsearch.mcp.server import SSE_PATH, STREAMABLE_HTTP_PATH
from fabsearch.mcp.tools import TOOL_DEFINITIONS

MANIFEST_PATH = "/.well-known/mcp.json"

router = APIRouter(tags=["discovery"])


class ManifestEndpoints(BaseModel):
    sse: str
    mcp: str


class Manifest(BaseModel):
    """Discovery document for MCP clients."""

    name: str
    version: str
    description: str
    endpoints: ManifestEndpoints
    tools: list[str]


def package_version() -> str:
    try:
        return pkg_version("fabsearch")
    except PackageNotFoundError:
        return "0.0.0"


def build_manifest(base_url: str = "") -> Manifest:
    """Manifest with endpoint URLs rooted at base_url."""
    base_url = base_url.rstrip("/")
    return Manifest(
        name=settings.app_name,
        version=package_version(),
        description=(
            "Search Flesh and Blood cards, list their prints and read localized "
            "card details from cards.fabtcg.com."
        ),
        endpoints=ManifestEndpoints(
            sse=f"{base_url}{SSE_PATH}",
            mcp=f"{base_url}{STREAMABLE_HTTP_PATH}",
        ),
        tools=[tool.name for tool in TOOL_DEFINITIONS],
    )


@router.api_route(MANIFEST_PATH, methods=["GET", "HEAD"], response_model=Manifest)
async def manifest(request: Request) -> Manifest:
    """Static discovery manifest."""
    return build_manifest(str(request.base_url))
