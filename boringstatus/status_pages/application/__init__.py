"""
Status Pages Application Layer
==============================

Use cases and DTOs for status pages.
"""

from boringstatus.status_pages.application.dto import (
    PublicStatusPageResponse,
    StatusPageMutationResponse,
    StatusPageResponse,
    StatusPageWriteDTO,
)
from boringstatus.status_pages.application.services import IStatusPageRepository, StatusPageService

__all__ = [
    "StatusPageWriteDTO",
    "StatusPageResponse",
    "StatusPageMutationResponse",
    "PublicStatusPageResponse",
    "StatusPageService",
    "IStatusPageRepository",
]
