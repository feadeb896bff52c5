"""FastAPI routes for token refresh.

    * POST /auth/refresh – Exchange a valid refresh token for a new token pair.

The refresh guard (``get_refresh_user``) answers 401 with a structured body
when the refresh token is missing or fails verification.
"""

from fastapi import APIRouter, Depends, status

from account_gateway.models.auth import TokenPair, User
from account_gateway.services.auth import create_token, get_refresh_user

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/refresh",
    response_model=TokenPair,
    status_code=status.HTTP_200_OK,
    summary="Rotate the caller's token pair",
)
async def refresh(user: User = Depends(get_refresh_user)) -> TokenPair:
    return TokenPair(
        access_token=create_token(user, kind="access"),
        refresh_token=create_token(user, kind="refresh"),
    )
