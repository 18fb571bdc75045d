"""Caller identity dependencies.

Authentication is handled in front of this service; the gateway forwards the
authenticated user id in the ``X-User-Id`` header.
"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException

from friendhome.accounts.roles import is_admin


async def current_user(x_user_id: Annotated[str | None, Header()] = None) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    return x_user_id


async def require_admin(user_id: Annotated[str, Depends(current_user)]) -> str:
    if not is_admin(user_id):
        raise HTTPException(status_code=403, detail="Administrator access required")
    return user_id


CurrentUser = Annotated[str, Depends(current_user)]
AdminUser = Annotated[str, Depends(require_admin)]
