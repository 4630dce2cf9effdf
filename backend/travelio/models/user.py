"""
User models for the users collection
"""

from typing import Literal

from pydantic import Field

from travelio.models.common import CamelModel

UserRole = Literal["user", "admin"]
DEFAULT_ROLE: UserRole = "user"


class UserProfile(CamelModel):
    """
    Profile fields a user may edit about themselves
    """

    name: str | None = Field(None, description="Display name")
    avatar: str | None = Field(None, description="URL to profile picture")
    phone: str | None = None
    country: str | None = None
    travel_style: str | None = Field(None, description="e.g. backpacker, luxury, family")
    bio: str | None = None


class UserUpsert(UserProfile):
    """
    Payload for POST /users (registration and login share this path).

    There is no role field: the server assigns it when the user is first
    inserted.
    """

    email: str | None = Field(None, description="User email address (unique)")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "traveler@example.com",
                "name": "Nusrat Jahan",
                "avatar": "https://example.com/photo.jpg",
                "country": "Bangladesh",
                "travelStyle": "adventure",
            }
        }


class UserProfileUpdate(UserProfile):
    """
    Payload for PATCH /users/profile/{email}.
    Unknown keys, including email and role, are dropped on parsing.
    """


class RoleUpdate(CamelModel):
    role: UserRole
