"""
FastAPI router for user endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from blimari.dependencies import require_auth
from blimari.schemas.user import User

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/sync", response_model=User)
async def sync_user(user: Annotated[dict, Depends(require_auth)]):
    """
    Link the authenticated external identity to a local user.

    require_auth already creates (or relinks) the record, so this only
    returns it.
    """
    return user
