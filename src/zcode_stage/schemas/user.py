"""Identity, authentication and profile schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from zcode_stage.models.identity import Identity

from .common import CamelModel


class RegisterRequest(CamelModel):
    """Schema for registering a new identity."""

    display_name: str = Field(..., min_length=1, max_length=64, description="Login handle")
    avatar: str | None = Field(None, max_length=64, description="Avatar code or emoji")
    credential: str | None = Field(
        None,
        min_length=1,
        description="Optional password; omit for a passwordless account",
    )

    @field_validator("display_name")
    @classmethod
    def strip_display_name(cls, v: str) -> str:
        """Reject names that are only whitespace."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Display name must not be blank")
        return stripped


class LoginRequest(CamelModel):
    """Schema for login submissions."""

    display_name: str = Field(..., min_length=1)
    credential: str | None = None


class LoginResponse(CamelModel):
    """Response returned after successful login."""

    token: str = Field(..., description="Opaque session token")
    is_admin: bool = Field(..., description="True for the operator session")


class AdminLoginRequest(CamelModel):
    """Schema for operator login."""

    credential: str = Field(..., min_length=1)


class AdminLoginResponse(CamelModel):
    """Response carrying the operator session token."""

    admin_token: str


class ProfileUpdateRequest(CamelModel):
    """Schema for partial profile updates. Omitted fields are left unchanged."""

    bio: str | None = Field(None, max_length=500)
    avatar: str | None = Field(None, min_length=1, max_length=64)
    display_name: str | None = Field(None, min_length=1, max_length=64)


class IdentitySummary(CamelModel):
    """Public view of an identity as shown in presence lists and directories."""

    id: str
    display_name: str
    avatar: str
    bio: str
    points: int
    online: bool = False
    tale_count: int = 0
    following_count: int = 0
    follower_count: int = 0

    @classmethod
    def from_identity(cls, identity: Identity, *, online: bool = False) -> "IdentitySummary":
        """Build a summary from an identity record."""
        return cls(
            id=identity.id,
            display_name=identity.display_name,
            avatar=identity.avatar,
            bio=identity.bio,
            points=identity.points,
            online=online,
            tale_count=len(identity.owned_tale_ids),
            following_count=len(identity.following_ids),
            follower_count=len(identity.follower_ids),
        )


class IdentityResponse(CamelModel):
    """Full profile returned to the identity itself and to operators."""

    id: str
    display_name: str
    avatar: str
    bio: str
    points: int
    owned_tale_ids: list[str]
    following_ids: list[str]
    follower_ids: list[str]
    created_at: datetime

    @field_validator("following_ids", "follower_ids", mode="before")
    @classmethod
    def sort_id_sets(cls, v: object) -> object:
        """Render id sets as sorted lists so responses are stable."""
        if isinstance(v, set | frozenset):
            return sorted(v)
        return v


class RegisterResponse(CamelModel):
    """Registration response wrapping the new identity."""

    identity: IdentityResponse
