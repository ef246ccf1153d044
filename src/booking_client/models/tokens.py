"""Pydantic v2 models for the token endpoints' responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TokenPair(BaseModel):
    """Access/refresh pair returned by the login endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    access: str = Field(min_length=1)
    refresh: str = Field(min_length=1)


class RefreshResult(BaseModel):
    """Body returned by the refresh endpoint.

    ``refresh`` is only present when the backend rotates refresh tokens.
    """

    model_config = ConfigDict(populate_by_name=True)

    access: str = Field(min_length=1)
    refresh: str | None = None
