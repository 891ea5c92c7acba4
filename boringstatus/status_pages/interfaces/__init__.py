"""
Status Pages Interfaces Layer
=============================

HTTP routes for status pages.
"""

from boringstatus.status_pages.interfaces.controllers import public_router as status_public_router
from boringstatus.status_pages.interfaces.controllers import router as status_pages_router

__all__ = ["status_pages_router", "status_public_router"]
