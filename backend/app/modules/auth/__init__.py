# Authentication module

from app.modules.auth.dependencies import (
    Identity,
    get_current_identity,
    get_user_project,
)

__all__ = [
    "Identity",
    "get_current_identity",
    "get_user_project",
]
