"""Tale-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from zcode_stage.models.tale import MediaKind, TaleState

from .common import CamelModel


class TaleCreate(CamelModel):
    """Schema for submitting a new tale."""

    token: str = Field(..., description="Session token of the submitting identity")
    media_payload: str = Field(..., min_length=1, description="Media content or reference")
    media_kind: MediaKind = Field(..., description="image or video")
    caption: str = Field("", description="Optional caption")


class RepostRequest(CamelModel):
    """Schema for reposting an approved tale."""

    token: str


class ApproveRequest(CamelModel):
    """Schema for approving a pending tale."""

    admin_token: str
    tale_id: str


class TaleResponse(CamelModel):
    """Schema for tale information returned by the API."""

    id: str
    owner_id: str
    media_payload: str
    media_kind: MediaKind
    caption: str
    approved: bool
    state: TaleState
    repost_count: int
    order_index: int
    created_at: datetime
    approved_at: datetime | None = None


class TaleEnvelope(CamelModel):
    """Single-tale response body (``{"tale": ...}``)."""

    tale: TaleResponse
