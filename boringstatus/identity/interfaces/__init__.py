"""
Identity Interfaces Layer
=========================

API key routes and the authentication dependencies shared by every router.
"""

from boringstatus.identity.interfaces.controllers import router as identity_router
from boringstatus.identity.interfaces.dependencies import (
    get_session_principal,
    require_active_organization,
    require_api_key,
)

__all__ = [
    "identity_router",
    "get_session_principal",
    "require_active_organization",
    "require_api_key",
]
