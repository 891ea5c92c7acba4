"""
Monitors Interfaces Layer
=========================

FastAPI routes for monitors.
"""

from boringstatus.monitors.interfaces.controllers import router as monitors_router

__all__ = ["monitors_router"]
