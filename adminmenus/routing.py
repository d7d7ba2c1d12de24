"""Serve registered admin pages over HTTP with Litestar.

Each page the host accepted is mounted at ``<path>/<page slug>``. A request
fires the page's load action and then renders it, the same order the host
uses for its own admin screens.
"""

import logging

from litestar import Litestar, Router, get
from litestar.enums import MediaType
from litestar.handlers import HTTPRouteHandler

from adminmenus.host import InMemoryMenuHost, SubmenuEntry

logger = logging.getLogger(__name__)


def _page_handler(host: InMemoryMenuHost, entry: SubmenuEntry) -> HTTPRouteHandler:
    hook_suffix = entry.hook_suffix

    async def serve_admin_page() -> str:
        body = await host.dispatch(hook_suffix)
        return "" if body is None else str(body)

    return get(f"/{entry.menu_slug}", name=hook_suffix, media_type=MediaType.HTML)(
        serve_admin_page
    )


def create_admin_router(host: InMemoryMenuHost, path: str = "/admin") -> Router:
    """Build a router with one GET handler per registered admin page."""
    handlers = [_page_handler(host, entry) for entry in host.pages()]
    logger.debug("Mounting %d admin page(s) under %s", len(handlers), path)
    return Router(path=path, route_handlers=handlers)


def create_app(host: InMemoryMenuHost, path: str = "/admin", debug: bool = False) -> Litestar:
    return Litestar(route_handlers=[create_admin_router(host, path)], debug=debug)
