"""Request schemas for profile completion and GitHub linking."""

from __future__ import annotations

from pydantic import EmailStr, Field, field_validator

from dapp0.schemas import ApiModel


class ProfileUpdateRequest(ApiModel):
    """Partial profile update; omitted fields are left alone."""

    email: EmailStr | None = None
    username: str | None = Field(None, min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    avatar_url: str | None = Field(None, max_length=2048)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        """Normalize email to lowercase."""
        return v.lower().strip() if v else v


class GitHubLinkRequest(ApiModel):
    github_username: str = Field(..., min_length=1, max_length=128)
    access_token: str = Field(..., min_length=1)
