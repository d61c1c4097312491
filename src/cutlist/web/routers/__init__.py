"""API routers for the REST API."""

from cutlist.web.routers.cut_lists import router as cut_lists_router
from cutlist.web.routers.validate import router as validate_router

__all__ = ["cut_lists_router", "validate_router"]
