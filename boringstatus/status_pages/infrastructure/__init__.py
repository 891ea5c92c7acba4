"""
Status Pages Infrastructure Layer
=================================

ORM models and repository for status pages.
"""

from boringstatus.status_pages.infrastructure.models import StatusPageModel, StatusPageMonitorLinkModel
from boringstatus.status_pages.infrastructure.repositories import SQLAlchemyStatusPageRepository

__all__ = [
    "StatusPageModel",
    "StatusPageMonitorLinkModel",
    "SQLAlchemyStatusPageRepository",
]
