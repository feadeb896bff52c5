"""Pydantic DTOs for the ``/user`` contract.

Wire names are camelCase (``walletAddress``, ``favoriteWalletAddresses``);
Python attributes are snake_case.  Every model accepts either form on input
and serialises by alias.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def _stringify(value: Any) -> Any:
    # tag ids may arrive as ints or ObjectId‑like objects
    if value is None or isinstance(value, str):
        return value
    return str(value)


# ---------------------------------------------------------------------------
# Tags & favourites
# ---------------------------------------------------------------------------


class Tag(BaseModel):
    """A user‑owned label that can be attached to a favourite address."""

    id: str = Field(..., description="Stable tag identifier")
    name: str = Field(default="", description="Display label")

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        return _stringify(value)


class FavoriteWalletAddress(BaseModel):
    """One entry of the bulk‑replaced favourite list."""

    wallet_address: str = Field(..., alias="walletAddress", min_length=1)
    tags: list[str] = Field(default_factory=list, description="Tag ids, in caller order")

    model_config = {"extra": "forbid", "frozen": True, "populate_by_name": True}

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_as_str(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return [_stringify(v) for v in value]
        return value


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class UpdateUserRequest(BaseModel):
    """Request body for **PUT /user/**.  Only fields present are applied."""

    username: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    favorite_wallet_addresses: Optional[list[FavoriteWalletAddress]] = Field(
        default=None,
        alias="favoriteWalletAddresses",
        description="Replacement list; omitted or null leaves favourites untouched",
    )

    model_config = {"extra": "forbid", "populate_by_name": True}


class OnboardUserRequest(BaseModel):
    """Request body for **PUT /user/onboard**."""

    email: EmailStr
    username: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    model_config = {"extra": "forbid", "populate_by_name": True}
