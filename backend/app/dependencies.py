from typing import Optional

from fastapi import Header, HTTPException, status

from app.config import settings
from app.services.clock import SystemClock


def get_clock():
    """Time source for request defaults. Tests override this with a FixedClock."""
    return SystemClock(settings.timezone)


async def require_admin(
    x_admin_secret: Optional[str] = Header(None, alias="X-Admin-Secret"),
):
    admin_secret = settings.admin_secret
    if not admin_secret or x_admin_secret != admin_secret:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or missing admin secret.",
        )
