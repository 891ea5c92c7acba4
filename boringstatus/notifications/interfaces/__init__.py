"""
Notifications Interfaces Layer
==============================

FastAPI routes for channels and the alert dispatch task.
"""

from boringstatus.notifications.interfaces.controllers import router as notifications_router
from boringstatus.notifications.interfaces.tasks import dispatch_alerts

__all__ = ["notifications_router", "dispatch_alerts"]
