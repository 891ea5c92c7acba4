"""
Heartbeats Interfaces Layer
===========================

FastAPI routes for heartbeats and the development tools.
"""

from boringstatus.heartbeats.interfaces.controllers import dev_router as heartbeats_dev_router
from boringstatus.heartbeats.interfaces.controllers import router as heartbeats_router

__all__ = ["heartbeats_router", "heartbeats_dev_router"]
