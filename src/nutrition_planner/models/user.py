"""Registered user record."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from nutrition_planner.models.profile import Profile


class UserRecord(BaseModel):
    """User keyed by registration email."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str = Field(..., description="Registration address, the user key")
    profile: Profile | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def public_view(self) -> dict:
        return {
            "email": self.email,
            "profile": self.profile.model_dump(mode="json", by_alias=True) if self.profile else None,
        }
