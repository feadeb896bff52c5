"""FastAPI routes for the ``/user`` resource.

Exposes:
    * PUT  /user/onboard       – Complete the profile and send the onboard email.
    * GET  /user/is-onboarded  – Whether the caller has finished onboarding.
    * POST /user/resend        – Resend the e‑mail verification message.
    * PUT  /user/              – Partial profile update, incl. favourite addresses.
    * GET  /user/              – Return the caller (verified studio users only).

Store access is blocking file I/O, so it runs in FastAPI's thread‑pool helper.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from account_gateway.models.auth import User
from account_gateway.models.user import OnboardUserRequest, UpdateUserRequest

# Service layer ----------------------------------------------------------------
from account_gateway.services import favorites, mailer, permissions, users
from account_gateway.services.auth import get_current_user
from account_gateway.services.errors import Err

router = APIRouter(prefix="/user", tags=["user"])


# ---------------------------------------------------------------------------
# /user/onboard
# ---------------------------------------------------------------------------

@router.put(
    "/onboard",
    response_model=User,
    status_code=status.HTTP_200_OK,
    summary="Complete onboarding for the caller",
)
async def onboard(req: OnboardUserRequest, user: User = Depends(get_current_user)) -> User:
    try:
        await run_in_threadpool(users.format_and_update, user.id, req)
        await run_in_threadpool(
            mailer.send_email, user.id, str(req.email).lower(), mailer.EmailTemplate.ONBOARD
        )
        return await run_in_threadpool(users.add_permission, user.id, permissions.ONBOARDED)
    except users.UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/is-onboarded", response_model=bool)
async def is_onboarded(user: User = Depends(get_current_user)) -> bool:
    return permissions.is_onboarded(user.permissions)


@router.post("/resend", status_code=status.HTTP_204_NO_CONTENT)
async def resend_email_verification(user: User = Depends(get_current_user)) -> None:
    await run_in_threadpool(mailer.send_email, user.id, user.email, mailer.EmailTemplate.VERIFY)


# ---------------------------------------------------------------------------
# /user/
# ---------------------------------------------------------------------------

@router.put(
    "/",
    response_model=User,
    status_code=status.HTTP_200_OK,
    summary="Update the caller's profile",
    description="Fields omitted from the body are left untouched. A *favoriteWalletAddresses* list "
    "replaces the stored one after every tag is checked against the caller's own tags.",
)
async def update(req: UpdateUserRequest, user: User = Depends(get_current_user)) -> User:
    """HTTP handler for the partial update; rejects the whole body on any favourite violation."""

    try:
        if req.favorite_wallet_addresses is not None:
            owner = await run_in_threadpool(users.get_user_with_tags, user.id)
            outcome = favorites.validate_favorite_addresses(
                (tag.id for tag in owner.tags), req.favorite_wallet_addresses
            )
            if isinstance(outcome, Err):
                raise favorites.as_client_error(outcome)

        return await run_in_threadpool(users.format_and_update, user.id, req)

    except users.UserNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get(
    "/",
    response_model=User,
    status_code=status.HTTP_200_OK,
    summary="Return the caller",
)
async def find_one(
    user: User = Depends(
        permissions.require_permissions(permissions.EMAIL_VERIFIED, permissions.ACCESS_STUDIO)
    ),
) -> User:
    return user
