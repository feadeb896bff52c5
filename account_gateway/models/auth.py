"""User model shared between auth service and route dependencies."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from account_gateway.models.user import FavoriteWalletAddress, Tag


class User(BaseModel):
    """Authenticated caller context injected via Depends()."""

    id: str = Field(..., description="Stable user identifier (token subject)")
    email: Optional[str] = Field(default=None, description="Contact address, unset until onboarding")
    username: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    permissions: list[str] = Field(
        default_factory=list,
        description="Granted permission flags, e.g. 'email:verified'",
    )
    tags: list[Tag] = Field(default_factory=list, description="Tags owned by the user")
    favorite_wallet_addresses: list[FavoriteWalletAddress] = Field(
        default_factory=list,
        alias="favoriteWalletAddresses",
    )

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "populate_by_name": True,
    }


class TokenInfo(BaseModel):
    """Informational object produced by token verification (why it failed)."""

    message: str

    model_config = {"frozen": True}


class TokenPair(BaseModel):
    """Return payload for **POST /auth/refresh**."""

    access_token: str = Field(..., alias="accessToken")
    refresh_token: str = Field(..., alias="refreshToken")
    token_type: str = Field(default="bearer", alias="tokenType")

    model_config = {"populate_by_name": True}
