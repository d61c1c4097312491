"""FastAPI REST API for cut list validation and generation.

Usage:
    uvicorn cutlist.web:app --reload
"""

from cutlist.web.app import app, create_app

__all__ = ["app", "create_app"]
