"""
User profile model.

Sign-in is mocked, so a profile is all the app knows about a user.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """The signed-in user, persisted under the auth key."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="User identifier"
    )
    email: str = Field(
        ...,
        min_length=1,
        description="Email the user signed in with"
    )
    name: Optional[str] = Field(
        default=None,
        description="Display name"
    )
    avatar: Optional[str] = Field(
        default=None,
        description="URL of the profile picture"
    )

    @property
    def display_name(self) -> str:
        return self.name or self.email.split("@")[0]
