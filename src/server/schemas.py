"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class EntryResponse(BaseModel):
    """Serialized journal entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    date: str
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class EntrySaveRequest(BaseModel):
    """Request body for saving the entry of a day."""

    content: str = Field(..., description="Entry text; replaces the day's content")
    date: str = Field(..., description="YYYY-MM-DD or ISO 8601 datetime")


class TodoResponse(BaseModel):
    """Serialized todo item."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content: str
    completed: bool
    order: int
    owner_id: str = Field(alias="ownerId")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class TodoCreateRequest(BaseModel):
    """Request body for creating todo."""

    content: str = Field(..., min_length=1, max_length=2000)


class TodoUpdateRequest(BaseModel):
    """Request body for updating todo."""

    id: str
    completed: Optional[bool] = Field(default=None)
    order: Optional[int] = Field(default=None, ge=0, description="Target index in the list")


class TodoReorderRequest(BaseModel):
    """Request body for renumbering the whole list."""

    ids: List[str] = Field(..., min_length=1)


class DeleteResponse(BaseModel):
    """Response for delete endpoints."""

    success: bool


class SummaryEntry(BaseModel):
    """Single entry handed to the summarizer."""

    date: str
    content: str


class SummaryRequest(BaseModel):
    """Request body for summary endpoint."""

    entries: List[SummaryEntry] = Field(default_factory=list)
    timeframe: str = Field(..., description='"yesterday" or a multi-day label such as "last week"')


class RecentSummaryRequest(BaseModel):
    """Request body for summarizing stored entries of a timeframe."""

    timeframe: str = Field(..., description='"yesterday" or "last week"')


class SummaryResponse(BaseModel):
    """Response body for summary endpoints."""

    summary: str


class CredentialsRequest(BaseModel):
    """Email/password sign-in or sign-up."""

    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Signed-in user as reported by the identity provider."""

    user: Dict[str, Any]
